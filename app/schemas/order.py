from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field
from app.models.order import DeliveryMethod, BillingStatus
from app.schemas.book import BookSummary
from app.schemas.status import StatusSummary
from app.schemas.user import UserSummary


class OrderCreate(BaseModel):
    aveugle_id: int
    catalogue_id: int
    request_received_date: datetime
    status_id: int | None = None  # may be picked from the request type in the service
    is_duplication: bool = False
    lent_physical_book: bool = False
    delivery_method: DeliveryMethod | None = None
    billing_status: BillingStatus = BillingStatus.UNBILLED
    cost: Decimal | None = Field(None, ge=0)
    processed_by_staff_id: int | None = None
    closure_date: datetime | None = None
    notes: str | None = None


class OrderUpdate(BaseModel):
    aveugle_id: int | None = None
    catalogue_id: int | None = None
    request_received_date: datetime | None = None
    status_id: int | None = None
    is_duplication: bool | None = None
    lent_physical_book: bool | None = None
    delivery_method: DeliveryMethod | None = None
    billing_status: BillingStatus | None = None
    cost: Decimal | None = Field(None, ge=0)
    processed_by_staff_id: int | None = None
    closure_date: datetime | None = None
    notes: str | None = None


class OrderResponse(BaseModel):
    id: int
    aveugle_id: int
    catalogue_id: int
    request_received_date: datetime
    status_id: int
    is_duplication: bool
    lent_physical_book: bool
    delivery_method: DeliveryMethod | None
    billing_status: BillingStatus
    cost: Decimal | None
    processed_by_staff_id: int | None
    closure_date: datetime | None
    notes: str | None
    created_at: datetime
    updated_at: datetime
    # Nested summaries and the derived flag are filled in by the service
    aveugle: UserSummary | None = None
    catalogue: BookSummary | None = None
    status: StatusSummary | None = None
    is_overdue: bool = False


class OrderSummary(BaseModel):
    id: int
    catalogue_id: int
    request_received_date: datetime
    status_id: int

    model_config = {"from_attributes": True}
