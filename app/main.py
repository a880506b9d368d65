from fastapi import FastAPI, Request
from fastapi.responses import Response
from starlette.middleware.sessions import SessionMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from contextlib import asynccontextmanager
import os

from app.database import engine, SessionLocal
from app.database import Base
import app.models  # noqa: F401  register all models
from app.models.user import User
from app.config import settings
from app.errors import register_exception_handlers
from app.services.status_service import ensure_default_statuses
from app.services.user_service import hash_password
from app.routers import health, auth, assignments, orders, books, users, statuses, export
import logging

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI):
    # Ensure DB exists and tables are created (for dev mode without alembic)
    os.makedirs("data", exist_ok=True)
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        ensure_default_statuses(db)

        # Create first admin user if no users exist yet
        if not db.query(User).first():
            admin = User(
                email=settings.FIRST_ADMIN_EMAIL.lower(),
                name="Administrateur",
                hashed_password=hash_password(settings.FIRST_ADMIN_PASS),
                role="admin",
                is_active=True,
            )
            db.add(admin)
            db.commit()
            logger.info("Premier administrateur créé : %s", admin.email)
    finally:
        db.close()

    yield


app = FastAPI(
    title="Médiathèque ECA",
    description="Back-office des commandes, affectations et lecteurs",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SECRET_KEY,
    https_only=settings.APP_ENV == "production",
    same_site="lax",
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if settings.APP_ENV == "production":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


app.add_middleware(SecurityHeadersMiddleware)
register_exception_handlers(app)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(assignments.router)
app.include_router(orders.router)
app.include_router(books.router)
app.include_router(users.router)
app.include_router(statuses.router)
app.include_router(export.router)
