from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str
    id: int | None = None
