import logging
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

_DEFAULT_SECRET = "change-me-in-production"
_DEFAULT_ADMIN_PASS = "admin12345"


class Settings(BaseSettings):
    APP_ENV: str = "development"
    BASE_URL: str = "http://localhost:8000"
    SECRET_KEY: str = _DEFAULT_SECRET
    DATABASE_URL: str = "sqlite:///./data/mediatheque.db"
    LOG_LEVEL: str = "INFO"
    FIRST_ADMIN_EMAIL: str = "admin@mediatheque.local"
    FIRST_ADMIN_PASS: str = _DEFAULT_ADMIN_PASS

    PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    # Order considered done once it reaches this status; never overdue.
    COMPLETED_STATUS_ID: int = 3
    OVERDUE_MONTHS: int = 3
    # Open orders older than this show up in the "late" list filter.
    LATE_DAYS: int = 30

    USER_SEARCH_MIN_LENGTH: int = 2
    USER_SEARCH_LIMIT: int = 20

    class Config:
        env_file = ".env"


settings = Settings()

if settings.SECRET_KEY == _DEFAULT_SECRET:
    if settings.APP_ENV == "production":
        raise RuntimeError("SECRET_KEY doit être défini en production ! Vérifiez le fichier .env.")
    else:
        logger.warning("SECRET_KEY a sa valeur par défaut, définissez-la dans .env pour la production")

if settings.FIRST_ADMIN_PASS == _DEFAULT_ADMIN_PASS:
    logger.warning("FIRST_ADMIN_PASS a sa valeur par défaut, changez-la dans .env")
