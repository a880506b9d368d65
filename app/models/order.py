import enum
from datetime import datetime, timezone
from decimal import Decimal
from sqlalchemy import ForeignKey, String, Boolean, DateTime, Numeric, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base


class DeliveryMethod(str, enum.Enum):
    RETRAIT = "RETRAIT"                 # Retrait sur place
    ENVOI = "ENVOI"                     # Envoi postal
    NON_APPLICABLE = "NON_APPLICABLE"


class BillingStatus(str, enum.Enum):
    UNBILLED = "UNBILLED"   # Non facturé
    BILLED = "BILLED"       # Facturé
    PAID = "PAID"           # Payé


class Order(Base):
    """Demande d'un auditeur : duplication d'un enregistrement ou prêt du livre physique."""

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    aveugle_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    catalogue_id: Mapped[int] = mapped_column(ForeignKey("books.id"), nullable=False, index=True)
    request_received_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status_id: Mapped[int] = mapped_column(ForeignKey("statuses.id"), nullable=False, index=True)
    is_duplication: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    lent_physical_book: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    delivery_method: Mapped[str | None] = mapped_column(
        SAEnum(DeliveryMethod, values_callable=lambda e: [x.value for x in e]),
        nullable=True,
    )
    billing_status: Mapped[str] = mapped_column(
        SAEnum(BillingStatus, values_callable=lambda e: [x.value for x in e]),
        default=BillingStatus.UNBILLED,
        nullable=False,
    )
    cost: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    processed_by_staff_id: Mapped[int | None] = mapped_column(ForeignKey("users.id"), nullable=True)
    closure_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    notes: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    aveugle: Mapped["User"] = relationship(foreign_keys=[aveugle_id], back_populates="orders")
    processed_by_staff: Mapped["User | None"] = relationship(foreign_keys=[processed_by_staff_id])
    catalogue: Mapped["Book"] = relationship(back_populates="orders")
    status: Mapped["Status"] = relationship()
    assignments: Mapped[list["Assignment"]] = relationship(back_populates="order")
