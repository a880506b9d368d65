from datetime import datetime
from typing import Literal
from pydantic import BaseModel, EmailStr, Field

Role = Literal["aveugle", "reader", "staff", "admin"]


class UserCreate(BaseModel):
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=255)
    first_name: str | None = None
    last_name: str | None = None
    role: Role = "aveugle"
    is_active: bool = True
    password: str = Field(..., min_length=8)


class UserResponse(BaseModel):
    # Plain str on output: seeded accounts may use reserved domains such as .local
    id: int
    email: str
    name: str
    first_name: str | None
    last_name: str | None
    role: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserSummary(BaseModel):
    id: int
    name: str
    email: str
    first_name: str | None = None
    last_name: str | None = None

    model_config = {"from_attributes": True}


class UserSearchResult(UserSummary):
    role: str
