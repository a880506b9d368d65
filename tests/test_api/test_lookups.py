"""Tests API des recherches annexes : utilisateurs, livres, statuts."""


def test_user_search_min_length(client, make_user):
    make_user(name="Jean Dupont")
    assert client.get("/api/users/search?q=J").json() == []
    assert client.get("/api/users/search?q=").json() == []


def test_user_search_by_name_and_email(client, make_user):
    jean = make_user(name="Jean Dupont", email="jdupont@mediatheque.fr")
    make_user(name="Marie Martin")
    assert [u["id"] for u in client.get("/api/users/search?q=dupont").json()] == [jean["id"]]
    assert [u["id"] for u in client.get("/api/users/search?q=jdup").json()] == [jean["id"]]


def test_user_search_role_filter(client, make_user):
    make_user(name="Martin Reader", role="reader")
    listener = make_user(name="Martin Listener", role="aveugle")
    res = client.get("/api/users/search?q=Martin&role=aveugle").json()
    assert [u["id"] for u in res] == [listener["id"]]
    assert res[0]["role"] == "aveugle"


def test_user_search_ordered_and_limited(client, make_user):
    for name in ("Zoé Lecteur", "Alain Lecteur", "Marc Lecteur"):
        make_user(name=name)
    names = [u["name"] for u in client.get("/api/users/search?q=Lecteur").json()]
    assert names == ["Alain Lecteur", "Marc Lecteur", "Zoé Lecteur"]

    for i in range(25):
        make_user(name=f"Bénévole {i:02d}")
    assert len(client.get("/api/users/search?q=Bénévole").json()) == 20


def test_create_user_duplicate_email(client, make_user):
    make_user(email="jean@mediatheque.fr")
    res = client.post("/api/users", json={
        "email": "JEAN@mediatheque.fr", "name": "Autre", "password": "motdepasse123",
    })
    assert res.status_code == 409


def test_create_user_invalid(client):
    assert client.post("/api/users", json={"email": "pas-un-email", "name": "X", "password": "motdepasse123"}).status_code == 422
    assert client.post("/api/users", json={"email": "a@mediatheque.fr", "name": "X", "password": "court"}).status_code == 422
    res = client.post("/api/users", json={
        "email": "a@mediatheque.fr", "name": "X", "password": "motdepasse123", "role": "superuser",
    })
    assert res.status_code == 422


def test_get_user(client, make_user):
    user = make_user(name="Jean Dupont")
    res = client.get(f"/api/users/{user['id']}")
    assert res.status_code == 200
    assert res.json()["name"] == "Jean Dupont"
    assert "hashed_password" not in res.json()
    assert client.get("/api/users/99999").status_code == 404


def test_statuses_ordered(client):
    res = client.get("/api/statuses")
    assert res.status_code == 200
    data = res.json()
    assert len(data) == 14
    assert data[0]["name"] == "En attente de validation"
    assert data[2] == {"id": 3, "name": "Commande terminée", "description": "Commande livrée et clôturée", "sort_order": 30}


def test_create_status(client):
    res = client.post("/api/statuses", json={"name": "En relecture", "sort_order": 145})
    assert res.status_code == 201
    assert client.get("/api/statuses").json()[-1]["name"] == "En relecture"
    assert client.post("/api/statuses", json={"name": "En relecture"}).status_code == 409


def test_books(client, make_book):
    book = make_book(title="Germinal", author="Émile Zola", isbn="978-2253004226")
    make_book(title="Madame Bovary", author="Gustave Flaubert")

    assert client.get(f"/api/books/{book['id']}").json()["isbn"] == "978-2253004226"
    assert client.get("/api/books/99999").status_code == 404
    assert client.get("/api/books").json()["total"] == 2
    res = client.get("/api/books?search=2253004226").json()
    assert [b["id"] for b in res["items"]] == [book["id"]]
    assert client.get("/api/books?search=flaubert").json()["total"] == 1


def test_book_requires_title(client):
    assert client.post("/api/books", json={"title": "", "author": "Anonyme"}).status_code == 422


def test_search_wildcards_are_literal_in_lookups(client, make_user, make_book):
    make_user(name="Jean Dupont")
    make_book(title="100% Bio", author="Collectif")
    make_book(title="Germinal", author="Émile Zola")
    assert client.get("/api/users/search?q=__").json() == []
    assert client.get("/api/books", params={"search": "_"}).json()["total"] == 0
    assert client.get("/api/books", params={"search": "0%"}).json()["total"] == 1
    assert client.get("/api/books", params={"search": "ÉMILE"}).json()["total"] == 1
