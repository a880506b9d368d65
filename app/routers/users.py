from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.auth import AuthContext
from app.schemas.user import UserCreate, UserResponse, UserSearchResult
from app.routers.auth import require_session_user, require_session_admin
import app.services.user_service as svc

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/search", response_model=list[UserSearchResult])
def search_users(
    q: str = Query(""),
    role: str | None = Query(None, description="aveugle, reader, staff, admin"),
    db: Session = Depends(get_db),
    _=Depends(require_session_user),
):
    return svc.search_users(db, q, role=role)


@router.post("", response_model=UserResponse, status_code=201)
def create_user(data: UserCreate, db: Session = Depends(get_db), ctx: AuthContext = Depends(require_session_admin)):
    return svc.create_user(db, data, actor_id=ctx.user_id)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return svc.get_user(db, user_id)
