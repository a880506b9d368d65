from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.config import settings
from app.database import get_db
from app.schemas.book import BookCreate, BookResponse
from app.schemas.pagination import Page
from app.routers.auth import require_session_user, require_session_manager
import app.services.book_service as svc

router = APIRouter(prefix="/api/books", tags=["books"])


@router.get("", response_model=Page[BookResponse])
def list_books(
    page: int = Query(1, ge=1),
    size: int = Query(settings.PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    search: str = Query(""),
    db: Session = Depends(get_db),
    _=Depends(require_session_user),
):
    return svc.get_books(db, page=page, size=size, search=search.strip())


@router.post("", response_model=BookResponse, status_code=201)
def create_book(data: BookCreate, db: Session = Depends(get_db), _=Depends(require_session_manager)):
    return svc.create_book(db, data)


@router.get("/{book_id}", response_model=BookResponse)
def get_book(book_id: int, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return svc.get_book(db, book_id)
