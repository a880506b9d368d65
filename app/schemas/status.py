from pydantic import BaseModel, Field


class StatusCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    description: str | None = None
    sort_order: int = 0


class StatusResponse(StatusCreate):
    id: int

    model_config = {"from_attributes": True}


class StatusSummary(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}
