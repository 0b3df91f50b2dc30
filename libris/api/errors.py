"""Exception handlers rendering Libris errors as JSON responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from libris.api.schemas import ErrorResponse
from libris.core.errors import LibrisError, Unauthenticated
from libris.core.logger import get_logger

logger = get_logger(__name__)


def add_error_handlers(app: FastAPI) -> None:
    """Register the Libris exception handlers on ``app``."""

    @app.exception_handler(LibrisError)
    async def libris_error_handler(request: Request, exc: LibrisError) -> JSONResponse:
        logger.info(
            "%s %s rejected: %s (%s)",
            request.method, request.url.path, exc.code, exc.message,
        )
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
        body = ErrorResponse(error=exc.code, detail=exc.message, details=exc.details)
        return JSONResponse(status_code=exc.status_code, content=body.model_dump(), headers=headers)

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
        body = ErrorResponse(error="DATABASE_ERROR", detail="A database error occurred")
        return JSONResponse(status_code=500, content=body.model_dump())
