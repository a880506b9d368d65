"""Seed script — remplit la base de développement avec des données de test."""
import os
import sys

# Ensure we're in the project root
sys.path.insert(0, os.path.dirname(__file__))

from app.database import Base, engine, SessionLocal
import app.models  # noqa: F401
from app.models.user import User
from app.models.book import Book
from app.models.order import Order, DeliveryMethod, BillingStatus
from app.models.assignment import Assignment, AssignmentReader
from app.services.status_service import ensure_default_statuses, find_status_by_name
from app.services.user_service import hash_password
from datetime import date, datetime, timedelta, timezone


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    ensure_default_statuses(db)

    # Accounts: staff, readers (lecteurs bénévoles), listeners (aveugles)
    people = [
        ("admin@mediatheque.fr", "Administrateur", None, None, "admin"),
        ("claire.petit@mediatheque.fr", "Claire Petit", "Claire", "Petit", "staff"),
        ("jean.dupont@mediatheque.fr", "Jean Dupont", "Jean", "Dupont", "reader"),
        ("marie.martin@mediatheque.fr", "Marie Martin", "Marie", "Martin", "reader"),
        ("paul.bernard@mediatheque.fr", "Paul Bernard", "Paul", "Bernard", "reader"),
        ("lucie.moreau@exemple.fr", "Lucie Moreau", "Lucie", "Moreau", "aveugle"),
        ("andre.leroy@exemple.fr", "André Leroy", "André", "Leroy", "aveugle"),
    ]
    existing_emails = {u.email for u in db.query(User).all()}
    for email, name, first, last, role in people:
        if email not in existing_emails:
            db.add(User(
                email=email, name=name, first_name=first, last_name=last, role=role,
                hashed_password=hash_password("motdepasse123"),
            ))
    db.commit()
    users = {u.email: u for u in db.query(User).all()}

    # Catalogue
    books_data = [
        ("Les Misérables", "Victor Hugo", "978-2070409228", "Gallimard", 3600),
        ("L'Étranger", "Albert Camus", "978-2070360024", "Gallimard", 300),
        ("Le Petit Prince", "Antoine de Saint-Exupéry", "978-2070612758", "Gallimard", 110),
        ("Madame Bovary", "Gustave Flaubert", "978-2253004868", "Le Livre de Poche", 780),
        ("Germinal", "Émile Zola", "978-2253004226", "Le Livre de Poche", 1200),
    ]
    existing_titles = {b.title for b in db.query(Book).all()}
    for title, author, isbn, publisher, minutes in books_data:
        if title not in existing_titles:
            db.add(Book(title=title, author=author, isbn=isbn, publisher=publisher,
                        reading_duration_minutes=minutes))
    db.commit()
    books = {b.title: b for b in db.query(Book).all()}

    if db.query(Order).first():
        db.close()
        print("Base déjà remplie, commandes et affectations ignorées.")
        return

    now = datetime.now(timezone.utc)
    staff = users["claire.petit@mediatheque.fr"]
    status_dup = find_status_by_name(db, "duplication")
    status_rec = find_status_by_name(db, "enregistrement")
    status_done = find_status_by_name(db, "terminée")

    # Orders: one recent duplication, one old open loan (overdue), one completed
    orders = [
        Order(
            aveugle_id=users["lucie.moreau@exemple.fr"].id, catalogue_id=books["Le Petit Prince"].id,
            request_received_date=now - timedelta(days=10), status_id=status_dup.id,
            is_duplication=True, delivery_method=DeliveryMethod.ENVOI,
            processed_by_staff_id=staff.id,
        ),
        Order(
            aveugle_id=users["andre.leroy@exemple.fr"].id, catalogue_id=books["Germinal"].id,
            request_received_date=now - timedelta(days=150), status_id=status_rec.id,
            lent_physical_book=True, delivery_method=DeliveryMethod.RETRAIT,
            processed_by_staff_id=staff.id, notes="Livre physique prêté par l'auditeur",
        ),
        Order(
            aveugle_id=users["lucie.moreau@exemple.fr"].id, catalogue_id=books["L'Étranger"].id,
            request_received_date=now - timedelta(days=200), status_id=status_done.id,
            is_duplication=True, billing_status=BillingStatus.PAID, cost=12,
            processed_by_staff_id=staff.id, closure_date=now - timedelta(days=120),
        ),
    ]
    db.add_all(orders)
    db.flush()

    # Assignments with their reader history (oldest first)
    assignments = [
        (
            Assignment(
                catalogue_id=books["Germinal"].id, order_id=orders[1].id,
                status_id=find_status_by_name(db, "Chez le lecteur").id,
                reception_date=orders[1].request_received_date.date(),
                sent_to_reader_date=date.today() - timedelta(days=100),
            ),
            [
                ("jean.dupont@mediatheque.fr", 140, "Affectation initiale"),
                ("marie.martin@mediatheque.fr", 90, "Jean Dupont indisponible"),
                ("paul.bernard@mediatheque.fr", 30, "Réassignation"),
            ],
        ),
        (
            Assignment(
                catalogue_id=books["Les Misérables"].id,
                status_id=find_status_by_name(db, "Attente envoi").id,
            ),
            [("marie.martin@mediatheque.fr", 5, "Affectation initiale")],
        ),
        (
            Assignment(
                catalogue_id=books["Madame Bovary"].id,
                status_id=find_status_by_name(db, "En attente de réception").id,
                notes="Lecteur à trouver",
            ),
            [],
        ),
    ]
    for assignment, history in assignments:
        db.add(assignment)
        db.flush()
        for email, days_ago, note in history:
            db.add(AssignmentReader(
                assignment_id=assignment.id,
                reader_id=users[email].id,
                assigned_at=now - timedelta(days=days_ago),
                notes=note,
            ))

    db.commit()
    db.close()
    print("Seed terminé !")


if __name__ == "__main__":
    seed()
