"""Tests unitaires des modèles SQLAlchemy."""
import pytest
from datetime import date, datetime, timedelta, timezone
from sqlalchemy.exc import IntegrityError

from app.models.user import User
from app.models.book import Book
from app.models.status import Status
from app.models.order import Order, BillingStatus
from app.models.assignment import Assignment, AssignmentReader


def _user(db, email="jean.dupont@mediatheque.fr", name="Jean Dupont", role="reader"):
    user = User(email=email, name=name, hashed_password="x", role=role)
    db.add(user)
    db.commit()
    return user


def _book(db, title="Germinal", author="Émile Zola"):
    book = Book(title=title, author=author)
    db.add(book)
    db.commit()
    return book


# ─── User ────────────────────────────────────────────────────────────────────

def test_user_create(db):
    user = User(email="lucie@mediatheque.fr", name="Lucie Moreau", hashed_password="hashedpw")
    db.add(user)
    db.commit()
    db.refresh(user)

    assert user.id is not None
    assert user.role == "aveugle"
    assert user.is_active is True
    assert isinstance(user.created_at, datetime)


def test_user_unique_email(db):
    db.add(User(email="same@mediatheque.fr", name="A", hashed_password="x"))
    db.commit()
    db.add(User(email="same@mediatheque.fr", name="B", hashed_password="x"))
    with pytest.raises(IntegrityError):
        db.commit()


# ─── Status ──────────────────────────────────────────────────────────────────

def test_status_unique_name(db):
    db.add(Status(name="Chez le lecteur"))
    db.commit()
    db.add(Status(name="Chez le lecteur"))
    with pytest.raises(IntegrityError):
        db.commit()


def test_default_statuses_seeded_in_order(db, statuses):
    rows = db.query(Status).order_by(Status.id).all()
    assert len(rows) == 14
    assert rows[2].id == 3
    assert rows[2].name == "Commande terminée"
    assert [s.sort_order for s in rows] == sorted(s.sort_order for s in rows)


# ─── Order ───────────────────────────────────────────────────────────────────

def test_order_defaults(db, statuses):
    listener = _user(db, email="andre@mediatheque.fr", name="André Leroy", role="aveugle")
    book = _book(db)
    order = Order(
        aveugle_id=listener.id,
        catalogue_id=book.id,
        request_received_date=datetime(2026, 1, 10, tzinfo=timezone.utc),
        status_id=1,
    )
    db.add(order)
    db.commit()
    db.refresh(order)

    assert order.is_duplication is False
    assert order.lent_physical_book is False
    assert order.billing_status == BillingStatus.UNBILLED
    assert order.aveugle.name == "André Leroy"
    assert listener.orders == [order]


# ─── Assignment / AssignmentReader ───────────────────────────────────────────

def test_assignment_create_without_reader(db, statuses):
    book = _book(db)
    a = Assignment(catalogue_id=book.id, status_id=9, reception_date=date(2026, 1, 10))
    db.add(a)
    db.commit()
    db.refresh(a)

    assert a.id is not None
    assert a.order_id is None
    assert a.reader_history == []
    assert book.assignments == [a]


def test_reader_history_newest_first(db, statuses):
    jean = _user(db)
    marie = _user(db, email="marie.martin@mediatheque.fr", name="Marie Martin")
    a = Assignment(catalogue_id=_book(db).id, status_id=9)
    db.add(a)
    db.flush()
    now = datetime.now(timezone.utc)
    db.add(AssignmentReader(assignment_id=a.id, reader_id=jean.id, assigned_at=now - timedelta(days=2)))
    db.add(AssignmentReader(assignment_id=a.id, reader_id=marie.id, assigned_at=now))
    db.commit()
    db.refresh(a)

    assert [e.reader.name for e in a.reader_history] == ["Marie Martin", "Jean Dupont"]
    assert [e.assignment_id for e in jean.reader_assignments] == [a.id]


def test_assignment_delete_removes_history(db, statuses):
    reader = _user(db)
    a = Assignment(catalogue_id=_book(db).id, status_id=9)
    db.add(a)
    db.flush()
    db.add(AssignmentReader(assignment_id=a.id, reader_id=reader.id))
    db.commit()

    db.delete(a)
    db.commit()
    assert db.query(AssignmentReader).count() == 0
    assert db.get(User, reader.id) is not None
