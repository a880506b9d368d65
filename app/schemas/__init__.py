from app.schemas.user import UserCreate, UserResponse, UserSummary, UserSearchResult
from app.schemas.book import BookCreate, BookResponse, BookSummary
from app.schemas.status import StatusCreate, StatusResponse, StatusSummary
from app.schemas.order import OrderCreate, OrderUpdate, OrderResponse, OrderSummary
from app.schemas.assignment import (
    AssignmentCreate, AssignmentUpdate, ReassignRequest,
    AssignmentReaderResponse, AssignmentResponse, AssignmentDetailResponse,
)
from app.schemas.auth import LoginRequest, AuthContext
from app.schemas.common import MessageResponse
from app.schemas.pagination import Page

__all__ = [
    "UserCreate", "UserResponse", "UserSummary", "UserSearchResult",
    "BookCreate", "BookResponse", "BookSummary",
    "StatusCreate", "StatusResponse", "StatusSummary",
    "OrderCreate", "OrderUpdate", "OrderResponse", "OrderSummary",
    "AssignmentCreate", "AssignmentUpdate", "ReassignRequest",
    "AssignmentReaderResponse", "AssignmentResponse", "AssignmentDetailResponse",
    "LoginRequest", "AuthContext",
    "MessageResponse",
    "Page",
]
