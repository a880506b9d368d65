from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session
from app.database import get_db
from app.routers.auth import require_session_manager
import app.services.export_service as svc

router = APIRouter(prefix="/api", tags=["export"])


@router.get("/export/assignments.xlsx")
def export_assignments_excel(db: Session = Depends(get_db), _=Depends(require_session_manager)):
    xlsx_bytes = svc.export_assignments_excel(db)
    return Response(
        content=xlsx_bytes,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": "attachment; filename=affectations.xlsx"},
    )
