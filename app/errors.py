import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the JSON handlers for errors that services do not turn into HTTPException."""

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        logger.warning(
            "IntegrityError %s %s -> 409 | %s",
            request.method,
            request.url.path,
            exc.orig,
        )
        return JSONResponse(
            status_code=409,
            content={"detail": "Conflit avec des données existantes"},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        # Full traceback stays in the server log, the client gets a generic message
        logger.exception("Unhandled exception %s %s -> 500", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"detail": "Erreur interne du serveur"},
        )
