import logging

from sqlalchemy.orm import Session, aliased
from sqlalchemy import select, func
from fastapi import HTTPException
from app.models.assignment import Assignment, AssignmentReader
from app.models.book import Book
from app.models.user import User
from app.schemas.assignment import AssignmentCreate, AssignmentUpdate, AssignmentReaderResponse
from app.schemas.auth import AuthContext
from app.schemas.book import BookSummary
from app.schemas.order import OrderSummary
from app.schemas.pagination import Page
from app.schemas.status import StatusSummary
from app.schemas.user import UserSummary
from app.services.book_service import get_book
from app.services.order_service import get_order
from app.services.status_service import get_status
from app.services.user_service import get_active_reader
from app.services import reader_history_service as history

logger = logging.getLogger(__name__)


def get_assignments(
    db: Session,
    page: int = 1,
    size: int = 10,
    search: str = "",
    status_id: int | None = None,
) -> Page:
    # Same current-reader resolution as the detail view: join through the newest history row
    current = aliased(AssignmentReader)
    reader = aliased(User)
    query = (
        select(Assignment)
        .select_from(Assignment)
        .join(Book, Book.id == Assignment.catalogue_id)
        .outerjoin(current, current.id == history.current_entry_id())
        .outerjoin(reader, reader.id == current.reader_id)
    )
    if search:
        query = query.where(
            reader.name.icontains(search, autoescape=True)
            | reader.email.icontains(search, autoescape=True)
            | Book.title.icontains(search, autoescape=True)
            | Book.author.icontains(search, autoescape=True)
        )
    if status_id is not None:
        query = query.where(Assignment.status_id == status_id)

    query = query.order_by(Assignment.id.desc())

    total = db.scalar(select(func.count()).select_from(query.subquery()))
    rows = db.scalars(query.offset((page - 1) * size).limit(size)).all()
    readers = history.get_current_readers(db, [a.id for a in rows])
    return Page.build([_to_response_dict(a, readers.get(a.id)) for a in rows], total, page, size)


def get_assignment(db: Session, assignment_id: int) -> Assignment:
    assignment = db.get(Assignment, assignment_id)
    if not assignment:
        raise HTTPException(status_code=404, detail="Affectation non trouvée")
    return assignment


def get_assignment_detail(db: Session, assignment_id: int) -> dict:
    assignment = get_assignment(db, assignment_id)
    entries = history.get_reader_history(db, assignment_id)
    result = _to_response_dict(assignment, entries[0].reader if entries else None)
    result["order"] = OrderSummary.model_validate(assignment.order) if assignment.order else None
    result["reader_history"] = [AssignmentReaderResponse.model_validate(e) for e in entries]
    return result


def create_assignment(db: Session, data: AssignmentCreate, actor: AuthContext) -> dict:
    values = data.model_dump(exclude={"reader_id"})

    # One-time copy from the order; later edits to the order do not propagate
    if values["order_id"] is not None:
        order = get_order(db, values["order_id"])
        if values["catalogue_id"] is None:
            values["catalogue_id"] = order.catalogue_id
        if values["reception_date"] is None:
            values["reception_date"] = order.request_received_date.date()

    if values["catalogue_id"] is None:
        raise HTTPException(status_code=400, detail="Le livre du catalogue est requis")
    if values["status_id"] is None:
        raise HTTPException(status_code=400, detail="Le statut est requis")
    get_book(db, values["catalogue_id"])
    get_status(db, values["status_id"])
    if data.reader_id is not None:
        get_active_reader(db, data.reader_id)

    assignment = Assignment(**values)
    db.add(assignment)
    db.flush()
    if data.reader_id is not None:
        history.record_reader(db, assignment.id, data.reader_id, history.INITIAL_ASSIGNMENT_NOTE)
    db.commit()
    db.refresh(assignment)
    logger.info(
        "AUDIT: utilisateur #%s a créé l'affectation #%s (livre #%s, commande #%s, lecteur #%s)",
        actor.user_id, assignment.id, assignment.catalogue_id, assignment.order_id, data.reader_id,
    )
    return get_assignment_detail(db, assignment.id)


def update_assignment(db: Session, assignment_id: int, data: AssignmentUpdate, actor: AuthContext) -> dict:
    assignment = get_assignment(db, assignment_id)
    values = data.model_dump(exclude_unset=True)
    if "catalogue_id" in values and values["catalogue_id"] is None:
        raise HTTPException(status_code=400, detail="Le livre du catalogue est requis")
    if "status_id" in values and values["status_id"] is None:
        raise HTTPException(status_code=400, detail="Le statut est requis")

    new_order_id = values.get("order_id")
    if new_order_id is not None and new_order_id != assignment.order_id:
        order = get_order(db, new_order_id)
        values.setdefault("catalogue_id", order.catalogue_id)
        values.setdefault("reception_date", order.request_received_date.date())

    if "catalogue_id" in values:
        get_book(db, values["catalogue_id"])
    if "status_id" in values:
        get_status(db, values["status_id"])

    for field, value in values.items():
        setattr(assignment, field, value)
    db.commit()
    logger.info(
        "AUDIT: utilisateur #%s a modifié l'affectation #%s (%s)",
        actor.user_id, assignment_id, ", ".join(sorted(values)),
    )
    return get_assignment_detail(db, assignment_id)


def delete_assignment(db: Session, assignment_id: int, actor: AuthContext) -> None:
    """Hard delete; the reader history goes with it."""
    assignment = get_assignment(db, assignment_id)
    history_count = len(assignment.reader_history)
    db.delete(assignment)
    db.commit()
    logger.info(
        "AUDIT: utilisateur #%s a supprimé l'affectation #%s (%d entrées d'historique)",
        actor.user_id, assignment_id, history_count,
    )


def _to_response_dict(assignment: Assignment, reader: User | None) -> dict:
    return {
        "id": assignment.id,
        "catalogue_id": assignment.catalogue_id,
        "order_id": assignment.order_id,
        "status_id": assignment.status_id,
        "reception_date": assignment.reception_date,
        "sent_to_reader_date": assignment.sent_to_reader_date,
        "returned_to_eca_date": assignment.returned_to_eca_date,
        "notes": assignment.notes,
        "catalogue": BookSummary.model_validate(assignment.catalogue) if assignment.catalogue else None,
        "status": StatusSummary.model_validate(assignment.status) if assignment.status else None,
        "current_reader": UserSummary.model_validate(reader) if reader else None,
    }
