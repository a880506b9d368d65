import logging
import time
from collections import defaultdict

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.auth import AuthContext, LoginRequest
from app.schemas.common import MessageResponse
from app.schemas.user import UserResponse
from app.services.user_service import verify_password, get_user_by_email, get_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

MANAGER_ROLES = {"staff", "admin"}

# ── Rate limiting (in-memory, per IP) ──────────────────────────────────────
_login_attempts: dict[str, list[float]] = defaultdict(list)
_RATE_LIMIT_WINDOW = 60   # seconds
_RATE_LIMIT_MAX = 10      # max attempts per window


def _check_rate_limit(ip: str) -> bool:
    now = time.time()
    _login_attempts[ip] = [t for t in _login_attempts[ip] if now - t < _RATE_LIMIT_WINDOW]
    if len(_login_attempts[ip]) >= _RATE_LIMIT_MAX:
        return False
    _login_attempts[ip].append(now)
    return True


def _reset_rate_limit(ip: str) -> None:
    """Clear failed attempts after successful login."""
    _login_attempts.pop(ip, None)


# ── Authorization context ──────────────────────────────────────────────────
def require_session_user(request: Request) -> AuthContext:
    """Any authenticated user."""
    user_id = request.session.get("user_id")
    if not user_id:
        raise HTTPException(status_code=401, detail="Authentification requise")
    return AuthContext(user_id=user_id, role=request.session.get("role", ""))


def require_session_manager(ctx: AuthContext = Depends(require_session_user)) -> AuthContext:
    """Staff or admin: every mutation route."""
    if ctx.role not in MANAGER_ROLES:
        raise HTTPException(status_code=403, detail="Droits insuffisants")
    return ctx


def require_session_admin(ctx: AuthContext = Depends(require_session_user)) -> AuthContext:
    if ctx.role != "admin":
        raise HTTPException(status_code=403, detail="Réservé aux administrateurs")
    return ctx


@router.post("/login", response_model=UserResponse)
def login(data: LoginRequest, request: Request, db: Session = Depends(get_db)):
    ip = request.client.host if request.client else "unknown"
    if not _check_rate_limit(ip):
        raise HTTPException(status_code=429, detail="Trop de tentatives. Réessayez dans un instant.")
    user = get_user_by_email(db, data.email)
    if not user or not verify_password(data.password, user.hashed_password):
        logger.warning("AUDIT: échec de connexion pour '%s' depuis %s", data.email, ip)
        raise HTTPException(status_code=401, detail="E-mail ou mot de passe incorrect")
    if not user.is_active:
        logger.warning("AUDIT: tentative de connexion d'un compte désactivé '%s' depuis %s", data.email, ip)
        raise HTTPException(status_code=403, detail="Compte désactivé")
    _reset_rate_limit(ip)
    logger.info("AUDIT: connexion de '%s' (role=%s) depuis %s", user.email, user.role, ip)
    request.session["user_id"] = user.id
    request.session["role"] = user.role
    return user


@router.post("/logout", response_model=MessageResponse)
def logout(request: Request):
    request.session.clear()
    return {"message": "Déconnecté"}


@router.get("/me", response_model=UserResponse)
def me(ctx: AuthContext = Depends(require_session_user), db: Session = Depends(get_db)):
    return get_user(db, ctx.user_id)
