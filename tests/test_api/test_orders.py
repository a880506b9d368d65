"""Tests API pour /api/orders : type de demande, statut automatique, retard."""
from datetime import datetime, timedelta, timezone


def _days_ago(days):
    return (datetime.now(timezone.utc) - timedelta(days=days)).isoformat()


def test_create_order(client, make_order):
    order = make_order(notes="Urgent")
    assert order["status"]["name"] == "En attente de validation"
    assert order["aveugle"]["name"] == "Lucie Moreau"
    assert order["catalogue"]["title"] == "Le Petit Prince"
    assert order["billing_status"] == "UNBILLED"
    assert order["notes"] == "Urgent"


def test_processed_by_defaults_to_actor(client, make_order):
    assert make_order()["processed_by_staff_id"] == 1


def test_both_request_types_rejected(client, make_order, make_user, make_book):
    res = client.post("/api/orders", json={
        "aveugle_id": make_user(role="aveugle")["id"],
        "catalogue_id": make_book()["id"],
        "request_received_date": "2026-01-10T09:30:00Z",
        "is_duplication": True,
        "lent_physical_book": True,
    })
    assert res.status_code == 400


def test_physical_loan_selects_recording_status(client, make_order):
    order = make_order(status_id=None, lent_physical_book=True)
    assert order["status"]["name"] == "En attente d'enregistrement"
    assert order["is_duplication"] is False


def test_duplication_selects_duplication_status(client, make_order):
    order = make_order(status_id=None, is_duplication=True)
    assert order["status"]["name"] == "En attente de duplication"
    assert order["lent_physical_book"] is False


def test_explicit_status_kept(client, make_order):
    order = make_order(status_id=2, is_duplication=True)
    assert order["status_id"] == 2


def test_status_required_without_request_type(client, make_user, make_book):
    res = client.post("/api/orders", json={
        "aveugle_id": make_user(role="aveugle")["id"],
        "catalogue_id": make_book()["id"],
        "request_received_date": "2026-01-10T09:30:00Z",
    })
    assert res.status_code == 400
    assert res.json()["detail"] == "Le statut est requis"


def test_switching_request_type_on_update(client, make_order):
    order = make_order(status_id=None, is_duplication=True)
    res = client.put(f"/api/orders/{order['id']}", json={"lent_physical_book": True})
    assert res.status_code == 200
    data = res.json()
    assert data["lent_physical_book"] is True
    assert data["is_duplication"] is False
    assert data["status"]["name"] == "En attente d'enregistrement"


def test_update_cannot_clear_required_field(client, make_order):
    order = make_order()
    res = client.put(f"/api/orders/{order['id']}", json={"status_id": None})
    assert res.status_code == 400


def test_unknown_references(client, make_book):
    res = client.post("/api/orders", json={
        "aveugle_id": 999,
        "catalogue_id": make_book()["id"],
        "request_received_date": "2026-01-10T09:30:00Z",
        "status_id": 1,
    })
    assert res.status_code == 404
    assert client.get("/api/orders/99999").status_code == 404


def test_is_overdue_flag(client, make_order):
    old = make_order(request_received_date=_days_ago(120))
    old_done = make_order(request_received_date=_days_ago(120), status_id=3)
    recent = make_order(request_received_date=_days_ago(30))
    assert old["is_overdue"] is True
    assert old_done["is_overdue"] is False
    assert recent["is_overdue"] is False
    assert client.get(f"/api/orders/{old['id']}").json()["is_overdue"] is True


def test_overdue_filter(client, make_order):
    old = make_order(request_received_date=_days_ago(120))
    make_order(request_received_date=_days_ago(120), status_id=3)
    make_order(request_received_date=_days_ago(30))
    res = client.get("/api/orders?filter=overdue").json()
    assert [o["id"] for o in res["items"]] == [old["id"]]
    assert client.get("/api/orders").json()["total"] == 3


def test_needs_return_filter(client, make_order):
    loan = make_order(status_id=None, lent_physical_book=True)
    make_order(status_id=None, lent_physical_book=True, closure_date="2026-02-01T10:00:00Z")
    make_order(status_id=None, is_duplication=True)
    res = client.get("/api/orders?filter=needs_return").json()
    assert [o["id"] for o in res["items"]] == [loan["id"]]


def test_late_filter(client, make_order):
    late = make_order(request_received_date=_days_ago(45))
    late_done = make_order(request_received_date=_days_ago(45), status_id=3)
    make_order(request_received_date=_days_ago(45), closure_date=_days_ago(5))
    make_order(request_received_date=_days_ago(10))
    res = client.get("/api/orders?filter=late").json()
    assert sorted(o["id"] for o in res["items"]) == sorted([late["id"], late_done["id"]])


def test_invalid_filter(client):
    assert client.get("/api/orders?filter=late").status_code == 422


def test_billing_status_filter(client, make_order):
    paid = make_order(billing_status="PAID", cost="12.50")
    make_order()
    res = client.get("/api/orders?billing_status=PAID").json()
    assert [o["id"] for o in res["items"]] == [paid["id"]]


def test_orders_newest_request_first(client, make_order):
    older = make_order(request_received_date="2026-01-05T09:00:00Z")
    newer = make_order(request_received_date="2026-02-05T09:00:00Z")
    items = client.get("/api/orders").json()["items"]
    assert [o["id"] for o in items] == [newer["id"], older["id"]]


def test_search_orders(client, make_order, make_user, make_book):
    andre = make_user(name="André Leroy", role="aveugle")
    mine = make_order(aveugle_id=andre["id"], catalogue_id=make_book(title="Germinal", author="Émile Zola")["id"])
    make_order()
    assert [o["id"] for o in client.get("/api/orders?search=Leroy").json()["items"]] == [mine["id"]]
    assert [o["id"] for o in client.get("/api/orders?search=Zola").json()["items"]] == [mine["id"]]


def test_delete_order(client, make_order):
    order = make_order()
    res = client.delete(f"/api/orders/{order['id']}")
    assert res.status_code == 200
    assert client.get(f"/api/orders/{order['id']}").status_code == 404
