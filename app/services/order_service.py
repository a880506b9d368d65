import calendar
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session
from sqlalchemy import select, func
from fastapi import HTTPException
from app.config import settings
from app.models.book import Book
from app.models.order import Order
from app.models.status import Status
from app.models.user import User
from app.schemas.auth import AuthContext
from app.schemas.book import BookSummary
from app.schemas.order import OrderCreate, OrderUpdate
from app.schemas.pagination import Page
from app.schemas.status import StatusSummary
from app.schemas.user import UserSummary
from app.services.status_service import find_status_by_name

logger = logging.getLogger(__name__)

ORDER_FILTERS = ("all", "overdue", "late", "needs_return")

_REQUIRED_ON_UPDATE = (
    "aveugle_id", "catalogue_id", "request_received_date", "status_id",
    "is_duplication", "lent_physical_book", "billing_status",
)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def months_ago(moment: datetime, months: int) -> datetime:
    """Same wall-clock time `months` calendar months earlier, day clamped to the month length."""
    month_index = moment.month - 1 - months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def overdue_cutoff(now: datetime | None = None) -> datetime:
    return months_ago(_as_utc(now or datetime.now(timezone.utc)), settings.OVERDUE_MONTHS)


def is_order_overdue(order: Order, now: datetime | None = None) -> bool:
    """Not completed and received strictly before the cutoff. Never persisted."""
    if order.status_id == settings.COMPLETED_STATUS_ID:
        return False
    return _as_utc(order.request_received_date) < overdue_cutoff(now)


def get_orders(
    db: Session,
    page: int = 1,
    size: int = 10,
    search: str = "",
    status_id: int | None = None,
    billing_status: str | None = None,
    order_filter: str = "all",
) -> Page:
    query = (
        select(Order)
        .join(User, User.id == Order.aveugle_id)
        .join(Book, Book.id == Order.catalogue_id)
    )
    if search:
        query = query.where(
            User.name.icontains(search, autoescape=True)
            | User.email.icontains(search, autoescape=True)
            | Book.title.icontains(search, autoescape=True)
            | Book.author.icontains(search, autoescape=True)
        )
    if order_filter == "overdue":
        query = query.where(
            Order.status_id != settings.COMPLETED_STATUS_ID,
            Order.request_received_date < overdue_cutoff(),
        )
    elif order_filter == "late":
        # Still open after LATE_DAYS, whatever the status
        query = query.where(
            Order.request_received_date < datetime.now(timezone.utc) - timedelta(days=settings.LATE_DAYS),
            Order.closure_date.is_(None),
        )
    elif order_filter == "needs_return":
        query = query.where(Order.lent_physical_book == True, Order.closure_date.is_(None))
    if status_id is not None:
        query = query.where(Order.status_id == status_id)
    if billing_status is not None:
        query = query.where(Order.billing_status == billing_status)

    query = query.order_by(Order.request_received_date.desc(), Order.id.desc())

    total = db.scalar(select(func.count()).select_from(query.subquery()))
    rows = db.scalars(query.offset((page - 1) * size).limit(size)).all()
    now = datetime.now(timezone.utc)
    return Page.build([_to_response_dict(o, now) for o in rows], total, page, size)


def get_order(db: Session, order_id: int) -> Order:
    order = db.get(Order, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Commande non trouvée")
    return order


def get_order_response(db: Session, order_id: int) -> dict:
    return _to_response_dict(get_order(db, order_id))


def create_order(db: Session, data: OrderCreate, actor: AuthContext) -> dict:
    values = data.model_dump()
    _apply_request_type(db, values, status_given=data.status_id is not None)
    if values["status_id"] is None:
        raise HTTPException(status_code=400, detail="Le statut est requis")
    if values["processed_by_staff_id"] is None:
        values["processed_by_staff_id"] = actor.user_id
    _check_references(db, values)
    values["request_received_date"] = _as_utc(values["request_received_date"])
    if values["closure_date"] is not None:
        values["closure_date"] = _as_utc(values["closure_date"])

    order = Order(**values)
    db.add(order)
    db.commit()
    db.refresh(order)
    logger.info("AUDIT: utilisateur #%s a créé la commande #%s", actor.user_id, order.id)
    return _to_response_dict(order)


def update_order(db: Session, order_id: int, data: OrderUpdate, actor: AuthContext) -> dict:
    order = get_order(db, order_id)
    values = data.model_dump(exclude_unset=True)
    for field in _REQUIRED_ON_UPDATE:
        if field in values and values[field] is None:
            raise HTTPException(status_code=400, detail=f"Champ obligatoire : {field}")
    _apply_request_type(db, values, status_given="status_id" in values)
    _check_references(db, values)
    for field in ("request_received_date", "closure_date"):
        if values.get(field) is not None:
            values[field] = _as_utc(values[field])

    for field, value in values.items():
        setattr(order, field, value)
    db.commit()
    db.refresh(order)
    logger.info(
        "AUDIT: utilisateur #%s a modifié la commande #%s (%s)",
        actor.user_id, order.id, ", ".join(sorted(values)),
    )
    return _to_response_dict(order)


def delete_order(db: Session, order_id: int, actor: AuthContext) -> None:
    """Hard delete. Linked assignments keep their copied book and date, only the link goes."""
    order = get_order(db, order_id)
    db.delete(order)
    db.commit()
    logger.info("AUDIT: utilisateur #%s a supprimé la commande #%s", actor.user_id, order_id)


def _apply_request_type(db: Session, values: dict, status_given: bool) -> None:
    """Duplication and physical loan exclude each other; picking one selects its default status."""
    duplication = values.get("is_duplication")
    lent = values.get("lent_physical_book")
    if duplication and lent:
        raise HTTPException(
            status_code=400,
            detail="Une commande est soit une duplication, soit un prêt du livre physique",
        )
    if lent:
        values["is_duplication"] = False
        fragment = "enregistrement"
    elif duplication:
        values["lent_physical_book"] = False
        fragment = "duplication"
    else:
        return
    if not status_given:
        status = find_status_by_name(db, fragment)
        if status:
            values["status_id"] = status.id


def _check_references(db: Session, values: dict) -> None:
    if values.get("aveugle_id") is not None and not db.get(User, values["aveugle_id"]):
        raise HTTPException(status_code=404, detail="Utilisateur non trouvé")
    if values.get("catalogue_id") is not None and not db.get(Book, values["catalogue_id"]):
        raise HTTPException(status_code=404, detail="Livre non trouvé")
    if values.get("status_id") is not None and not db.get(Status, values["status_id"]):
        raise HTTPException(status_code=404, detail="Statut non trouvé")
    if values.get("processed_by_staff_id") is not None and not db.get(User, values["processed_by_staff_id"]):
        raise HTTPException(status_code=404, detail="Membre de l'équipe non trouvé")


def _to_response_dict(order: Order, now: datetime | None = None) -> dict:
    return {
        "id": order.id,
        "aveugle_id": order.aveugle_id,
        "catalogue_id": order.catalogue_id,
        "request_received_date": order.request_received_date,
        "status_id": order.status_id,
        "is_duplication": order.is_duplication,
        "lent_physical_book": order.lent_physical_book,
        "delivery_method": order.delivery_method,
        "billing_status": order.billing_status,
        "cost": order.cost,
        "processed_by_staff_id": order.processed_by_staff_id,
        "closure_date": order.closure_date,
        "notes": order.notes,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
        "aveugle": UserSummary.model_validate(order.aveugle) if order.aveugle else None,
        "catalogue": BookSummary.model_validate(order.catalogue) if order.catalogue else None,
        "status": StatusSummary.model_validate(order.status) if order.status else None,
        "is_overdue": is_order_overdue(order, now),
    }
