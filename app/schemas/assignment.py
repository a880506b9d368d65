from datetime import date, datetime
from pydantic import BaseModel, Field
from app.schemas.book import BookSummary
from app.schemas.order import OrderSummary
from app.schemas.status import StatusSummary
from app.schemas.user import UserSummary


class AssignmentCreate(BaseModel):
    # catalogue_id and status_id are required; catalogue_id may come from the linked order
    catalogue_id: int | None = None
    order_id: int | None = None
    reader_id: int | None = None
    status_id: int | None = None
    reception_date: date | None = None
    sent_to_reader_date: date | None = None
    returned_to_eca_date: date | None = None
    notes: str | None = Field(None, max_length=2000)


class AssignmentUpdate(BaseModel):
    """Reader changes go through POST /api/assignments/{id}/readers, never through here."""

    catalogue_id: int | None = None
    order_id: int | None = None
    status_id: int | None = None
    reception_date: date | None = None
    sent_to_reader_date: date | None = None
    returned_to_eca_date: date | None = None
    notes: str | None = Field(None, max_length=2000)

    model_config = {"extra": "forbid"}


class ReassignRequest(BaseModel):
    reader_id: int
    notes: str | None = Field(None, max_length=1000)


class AssignmentReaderResponse(BaseModel):
    id: int
    assignment_id: int
    reader_id: int
    assigned_at: datetime
    notes: str | None
    reader: UserSummary | None = None

    model_config = {"from_attributes": True}


class AssignmentResponse(BaseModel):
    id: int
    catalogue_id: int
    order_id: int | None
    status_id: int
    reception_date: date | None
    sent_to_reader_date: date | None
    returned_to_eca_date: date | None
    notes: str | None
    catalogue: BookSummary | None = None
    status: StatusSummary | None = None
    current_reader: UserSummary | None = None

    model_config = {"from_attributes": True}


class AssignmentDetailResponse(AssignmentResponse):
    order: OrderSummary | None = None
    reader_history: list[AssignmentReaderResponse] = []
