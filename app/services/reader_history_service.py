import logging

from sqlalchemy.orm import Session, aliased
from sqlalchemy import select
from fastapi import HTTPException
from app.models.assignment import Assignment, AssignmentReader
from app.models.user import User
from app.schemas.auth import AuthContext
from app.services.user_service import get_active_reader

logger = logging.getLogger(__name__)

INITIAL_ASSIGNMENT_NOTE = "Affectation initiale"
REASSIGNMENT_NOTE = "Réassignation"


def current_entry_id():
    """Correlated subquery: id of the current history row of the enclosing Assignment.

    Current means newest assigned_at; the higher id wins a timestamp tie.
    """
    return (
        select(AssignmentReader.id)
        .where(AssignmentReader.assignment_id == Assignment.id)
        .order_by(AssignmentReader.assigned_at.desc(), AssignmentReader.id.desc())
        .limit(1)
        .correlate(Assignment)
        .scalar_subquery()
    )


def _require_assignment(db: Session, assignment_id: int) -> Assignment:
    assignment = db.get(Assignment, assignment_id)
    if not assignment:
        raise HTTPException(status_code=404, detail="Affectation non trouvée")
    return assignment


def get_reader_history(db: Session, assignment_id: int) -> list[AssignmentReader]:
    _require_assignment(db, assignment_id)
    return db.scalars(
        select(AssignmentReader)
        .where(AssignmentReader.assignment_id == assignment_id)
        .order_by(AssignmentReader.assigned_at.desc(), AssignmentReader.id.desc())
    ).all()


def get_current_entry(db: Session, assignment_id: int) -> AssignmentReader | None:
    return db.scalar(
        select(AssignmentReader)
        .where(AssignmentReader.assignment_id == assignment_id)
        .order_by(AssignmentReader.assigned_at.desc(), AssignmentReader.id.desc())
        .limit(1)
    )


def get_current_reader(db: Session, assignment_id: int) -> User | None:
    entry = get_current_entry(db, assignment_id)
    return entry.reader if entry else None


def get_current_readers(db: Session, assignment_ids: list[int]) -> dict[int, User]:
    """Current reader per assignment, for list pages and exports. Assignments without history are absent."""
    if not assignment_ids:
        return {}
    current = aliased(AssignmentReader)
    rows = db.execute(
        select(Assignment.id, User)
        .select_from(Assignment)
        .join(current, current.id == current_entry_id())
        .join(User, User.id == current.reader_id)
        .where(Assignment.id.in_(assignment_ids))
    ).all()
    return {assignment_id: reader for assignment_id, reader in rows}


def record_reader(db: Session, assignment_id: int, reader_id: int, notes: str | None) -> AssignmentReader:
    """Append one history row. The caller commits."""
    entry = AssignmentReader(assignment_id=assignment_id, reader_id=reader_id, notes=notes)
    db.add(entry)
    return entry


def reassign_reader(
    db: Session,
    assignment_id: int,
    reader_id: int,
    notes: str | None,
    actor: AuthContext,
) -> list[AssignmentReader]:
    _require_assignment(db, assignment_id)
    get_active_reader(db, reader_id)

    current = get_current_entry(db, assignment_id)
    if current and current.reader_id == reader_id:
        raise HTTPException(status_code=400, detail="Ce lecteur est déjà assigné à cette affectation")

    record_reader(db, assignment_id, reader_id, notes or REASSIGNMENT_NOTE)
    db.commit()
    logger.info(
        "AUDIT: utilisateur #%s a assigné le lecteur #%s à l'affectation #%s (précédent: %s)",
        actor.user_id, reader_id, assignment_id, current.reader_id if current else None,
    )
    return get_reader_history(db, assignment_id)
