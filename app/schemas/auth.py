from pydantic import BaseModel


class LoginRequest(BaseModel):
    email: str
    password: str


class AuthContext(BaseModel):
    """Who is acting: passed explicitly into every handler that needs it."""

    user_id: int
    role: str
