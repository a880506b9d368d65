from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.status import StatusCreate, StatusResponse
from app.routers.auth import require_session_user, require_session_admin
import app.services.status_service as svc

router = APIRouter(prefix="/api/statuses", tags=["statuses"])


@router.get("", response_model=list[StatusResponse])
def list_statuses(db: Session = Depends(get_db), _=Depends(require_session_user)):
    return svc.get_statuses(db)


@router.post("", response_model=StatusResponse, status_code=201)
def create_status(data: StatusCreate, db: Session = Depends(get_db), _=Depends(require_session_admin)):
    return svc.create_status(db, data)
