from datetime import date, datetime, timezone
from sqlalchemy import ForeignKey, String, Date, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base


class Assignment(Base):
    """A book handed to a reader for recording. The reader lives in AssignmentReader, not here."""

    __tablename__ = "assignments"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    catalogue_id: Mapped[int] = mapped_column(ForeignKey("books.id"), nullable=False, index=True)
    order_id: Mapped[int | None] = mapped_column(
        ForeignKey("orders.id", ondelete="SET NULL"), nullable=True, index=True
    )
    status_id: Mapped[int] = mapped_column(ForeignKey("statuses.id"), nullable=False, index=True)
    reception_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    sent_to_reader_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    returned_to_eca_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(String(2000), nullable=True)

    catalogue: Mapped["Book"] = relationship(back_populates="assignments")
    order: Mapped["Order | None"] = relationship(back_populates="assignments")
    status: Mapped["Status"] = relationship()
    reader_history: Mapped[list["AssignmentReader"]] = relationship(
        back_populates="assignment",
        order_by=lambda: (AssignmentReader.assigned_at.desc(), AssignmentReader.id.desc()),
        cascade="all, delete-orphan",
    )


class AssignmentReader(Base):
    """Append-only: rows are never updated and only go away with their assignment."""

    __tablename__ = "assignment_readers"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    assignment_id: Mapped[int] = mapped_column(
        ForeignKey("assignments.id", ondelete="CASCADE"), nullable=False, index=True
    )
    reader_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    assigned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    notes: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    assignment: Mapped["Assignment"] = relationship(back_populates="reader_history")
    reader: Mapped["User"] = relationship(back_populates="reader_assignments")
