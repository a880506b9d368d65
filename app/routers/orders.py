from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.config import settings
from app.database import get_db
from app.models.order import BillingStatus
from app.schemas.auth import AuthContext
from app.schemas.common import MessageResponse
from app.schemas.order import OrderCreate, OrderUpdate, OrderResponse
from app.schemas.pagination import Page
from app.routers.auth import require_session_user, require_session_manager
import app.services.order_service as svc

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("", response_model=Page[OrderResponse])
def list_orders(
    page: int = Query(1, ge=1),
    size: int = Query(settings.PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    search: str = Query(""),
    status_id: int | None = Query(None),
    billing_status: BillingStatus | None = Query(None),
    filter: str = Query("all", pattern="^(all|overdue|late|needs_return)$", description="all, overdue, late, needs_return"),
    db: Session = Depends(get_db),
    _=Depends(require_session_user),
):
    return svc.get_orders(
        db,
        page=page,
        size=size,
        search=search.strip(),
        status_id=status_id,
        billing_status=billing_status,
        order_filter=filter,
    )


@router.post("", response_model=OrderResponse, status_code=201)
def create_order(data: OrderCreate, db: Session = Depends(get_db), ctx: AuthContext = Depends(require_session_manager)):
    return svc.create_order(db, data, ctx)


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(order_id: int, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return svc.get_order_response(db, order_id)


@router.put("/{order_id}", response_model=OrderResponse)
def update_order(
    order_id: int,
    data: OrderUpdate,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_session_manager),
):
    return svc.update_order(db, order_id, data, ctx)


@router.delete("/{order_id}", response_model=MessageResponse)
def delete_order(order_id: int, db: Session = Depends(get_db), ctx: AuthContext = Depends(require_session_manager)):
    svc.delete_order(db, order_id, ctx)
    return {"message": "Commande supprimée", "id": order_id}
