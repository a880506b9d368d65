import logging

from sqlalchemy.orm import Session
from sqlalchemy import select
from fastapi import HTTPException
from passlib.context import CryptContext
from app.config import settings
from app.models.user import User
from app.schemas.user import UserCreate

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="Utilisateur non trouvé")
    return user


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.scalar(select(User).where(User.email == email.lower()))


def get_active_reader(db: Session, reader_id: int) -> User:
    reader = db.get(User, reader_id)
    if not reader or not reader.is_active:
        raise HTTPException(status_code=404, detail="Lecteur non trouvé")
    return reader


def create_user(db: Session, data: UserCreate, actor_id: int | None = None) -> User:
    if get_user_by_email(db, data.email):
        raise HTTPException(status_code=409, detail="Cet e-mail est déjà utilisé")
    user = User(
        email=data.email.lower(),
        name=data.name,
        first_name=data.first_name,
        last_name=data.last_name,
        role=data.role,
        is_active=data.is_active,
        hashed_password=hash_password(data.password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("AUDIT: utilisateur #%s a créé le compte '%s' (role=%s)", actor_id, user.email, user.role)
    return user


def search_users(db: Session, query: str, role: str | None = None) -> list[User]:
    """Name/e-mail lookup for the reader and listener pickers."""
    query = query.strip()
    if len(query) < settings.USER_SEARCH_MIN_LENGTH:
        return []
    stmt = select(User).where(
        User.name.icontains(query, autoescape=True)
        | User.email.icontains(query, autoescape=True)
    )
    if role:
        stmt = stmt.where(User.role == role)
    stmt = stmt.order_by(User.name, User.email).limit(settings.USER_SEARCH_LIMIT)
    return db.scalars(stmt).all()
