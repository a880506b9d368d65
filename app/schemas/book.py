from datetime import datetime
from pydantic import BaseModel, Field


class BookBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    author: str = Field(..., min_length=1, max_length=255)
    isbn: str | None = None
    publisher: str | None = None
    reading_duration_minutes: int | None = Field(None, ge=0)
    description: str | None = None
    available: bool = True


class BookCreate(BookBase):
    pass


class BookResponse(BookBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BookSummary(BaseModel):
    id: int
    title: str
    author: str

    model_config = {"from_attributes": True}
