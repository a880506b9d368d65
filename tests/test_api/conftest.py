import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.main import app
from app.database import Base, get_db
from app.models.user import User
from app.routers import auth
from app.services.status_service import ensure_default_statuses
from app.services.user_service import hash_password

TEST_DB_URL = "sqlite:///:memory:"

ADMIN_EMAIL = "admin@mediatheque.fr"
ADMIN_PASSWORD = "admin12345"
USER_PASSWORD = "motdepasse123"


@pytest.fixture(scope="function")
def client():
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,  # Ensure all connections share same in-memory DB
    )
    Base.metadata.create_all(engine)
    TestSession = sessionmaker(bind=engine)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    # Default statuses (id 3 = Commande terminée) and the admin (id=1)
    db = TestSession()
    ensure_default_statuses(db)
    db.add(User(
        email=ADMIN_EMAIL,
        name="Administrateur",
        hashed_password=hash_password(ADMIN_PASSWORD),
        role="admin",
    ))
    db.commit()
    db.close()

    with TestClient(app) as c:
        c.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
        yield c

    app.dependency_overrides.clear()
    auth._login_attempts.clear()
    Base.metadata.drop_all(engine)


@pytest.fixture
def login_as(client):
    """Switch the client session to another account."""

    def _login_as(email, password=USER_PASSWORD):
        client.post("/api/auth/logout")
        res = client.post("/api/auth/login", json={"email": email, "password": password})
        assert res.status_code == 200, res.text
        return res.json()

    return _login_as


@pytest.fixture
def make_user(client):
    counter = iter(range(1, 1000))

    def _make_user(name="Jean Dupont", role="reader", email=None, **extra):
        email = email or f"user{next(counter)}@mediatheque.fr"
        payload = {"email": email, "name": name, "role": role, "password": USER_PASSWORD, **extra}
        res = client.post("/api/users", json=payload)
        assert res.status_code == 201, res.text
        return res.json()

    return _make_user


@pytest.fixture
def make_book(client):
    def _make_book(title="Le Petit Prince", author="Antoine de Saint-Exupéry", **extra):
        res = client.post("/api/books", json={"title": title, "author": author, **extra})
        assert res.status_code == 201, res.text
        return res.json()

    return _make_book


@pytest.fixture
def make_order(client, make_user, make_book):
    def _make_order(**fields):
        if "aveugle_id" not in fields:
            fields["aveugle_id"] = make_user(name="Lucie Moreau", role="aveugle")["id"]
        if "catalogue_id" not in fields:
            fields["catalogue_id"] = make_book()["id"]
        fields.setdefault("request_received_date", "2026-01-10T09:30:00Z")
        fields.setdefault("status_id", 1)
        res = client.post("/api/orders", json=fields)
        assert res.status_code == 201, res.text
        return res.json()

    return _make_order


@pytest.fixture
def make_assignment(client, make_book):
    def _make_assignment(**fields):
        if "catalogue_id" not in fields and "order_id" not in fields:
            fields["catalogue_id"] = make_book()["id"]
        fields.setdefault("status_id", 9)
        res = client.post("/api/assignments", json=fields)
        assert res.status_code == 201, res.text
        return res.json()

    return _make_assignment
