import logging

from sqlalchemy.orm import Session
from sqlalchemy import select, func
from fastapi import HTTPException
from app.models.status import Status
from app.schemas.status import StatusCreate

logger = logging.getLogger(__name__)

# Seed order matters: ids are assigned in this order and id 3 is the completed-order status.
DEFAULT_STATUSES = [
    ("En attente de validation", "Commande reçue, à valider"),
    ("En cours de traitement", "Commande prise en charge"),
    ("Commande terminée", "Commande livrée et clôturée"),
    ("Commande annulée", None),
    ("En attente de duplication", "Copie d'un enregistrement existant"),
    ("En attente d'enregistrement", "Livre physique prêté pour enregistrement"),
    ("Attente envoi vers lecteur", None),
    ("En attente de réception", None),
    ("Réceptionné", None),
    ("Envoyé au lecteur", None),
    ("Chez le lecteur", None),
    ("Retourné à l'ECA", None),
    ("Assignation terminée", None),
    ("Assignation annulée", None),
]


def get_statuses(db: Session) -> list[Status]:
    return db.scalars(select(Status).order_by(Status.sort_order, Status.name)).all()


def get_status(db: Session, status_id: int) -> Status:
    status = db.get(Status, status_id)
    if not status:
        raise HTTPException(status_code=404, detail="Statut non trouvé")
    return status


def find_status_by_name(db: Session, fragment: str) -> Status | None:
    """First status (by sort order) whose name contains the fragment, case-insensitive."""
    return db.scalar(
        select(Status)
        .where(Status.name.icontains(fragment, autoescape=True))
        .order_by(Status.sort_order, Status.id)
        .limit(1)
    )


def create_status(db: Session, data: StatusCreate) -> Status:
    if db.scalar(select(Status).where(Status.name == data.name)):
        raise HTTPException(status_code=409, detail="Ce statut existe déjà")
    status = Status(**data.model_dump())
    db.add(status)
    db.commit()
    db.refresh(status)
    return status


def ensure_default_statuses(db: Session) -> None:
    if db.scalar(select(func.count()).select_from(Status)):
        return
    for position, (name, description) in enumerate(DEFAULT_STATUSES, 1):
        db.add(Status(id=position, name=name, description=description, sort_order=position * 10))
    db.commit()
    logger.info("Statuts par défaut créés (%d)", len(DEFAULT_STATUSES))
