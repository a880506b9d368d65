from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.config import settings
from app.database import get_db
from app.schemas.assignment import (
    AssignmentCreate, AssignmentUpdate, ReassignRequest,
    AssignmentResponse, AssignmentDetailResponse, AssignmentReaderResponse,
)
from app.schemas.auth import AuthContext
from app.schemas.common import MessageResponse
from app.schemas.pagination import Page
from app.routers.auth import require_session_user, require_session_manager
import app.services.assignment_service as svc
import app.services.reader_history_service as history_svc

router = APIRouter(prefix="/api/assignments", tags=["assignments"])


@router.get("", response_model=Page[AssignmentResponse])
def list_assignments(
    page: int = Query(1, ge=1),
    size: int = Query(settings.PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    search: str = Query(""),
    status_id: int | None = Query(None, description="Filtrer par statut"),
    db: Session = Depends(get_db),
    _=Depends(require_session_user),
):
    return svc.get_assignments(db, page=page, size=size, search=search.strip(), status_id=status_id)


@router.post("", response_model=AssignmentDetailResponse, status_code=201)
def create_assignment(
    data: AssignmentCreate,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_session_manager),
):
    return svc.create_assignment(db, data, ctx)


@router.get("/{assignment_id}", response_model=AssignmentDetailResponse)
def get_assignment(assignment_id: int, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return svc.get_assignment_detail(db, assignment_id)


@router.put("/{assignment_id}", response_model=AssignmentDetailResponse)
def update_assignment(
    assignment_id: int,
    data: AssignmentUpdate,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_session_manager),
):
    return svc.update_assignment(db, assignment_id, data, ctx)


@router.delete("/{assignment_id}", response_model=MessageResponse)
def delete_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_session_manager),
):
    svc.delete_assignment(db, assignment_id, ctx)
    return {"message": "Affectation supprimée", "id": assignment_id}


@router.get("/{assignment_id}/readers", response_model=list[AssignmentReaderResponse])
def reader_history(assignment_id: int, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return history_svc.get_reader_history(db, assignment_id)


@router.post("/{assignment_id}/readers", response_model=list[AssignmentReaderResponse], status_code=201)
def reassign_reader(
    assignment_id: int,
    data: ReassignRequest,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_session_manager),
):
    return history_svc.reassign_reader(db, assignment_id, data.reader_id, data.notes, ctx)
