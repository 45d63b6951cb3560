"""Global exception handlers for consistent error responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from libs.common.errors import AppError, StorageError
from libs.common.logging import get_logger, get_request_id

logger = get_logger(__name__)


def _error_response(exc: AppError) -> JSONResponse:
    headers = {}
    request_id = get_request_id()
    if request_id:
        headers["X-Request-ID"] = request_id
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
        headers=headers,
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s: %s", exc.code, exc.message)
    return _error_response(exc)


async def sqlalchemy_error_handler(
    request: Request, exc: SQLAlchemyError
) -> JSONResponse:
    logger.error("Unhandled database error", exc_info=exc)
    return _error_response(StorageError("Database operation failed"))


def add_exception_handlers(app: FastAPI) -> None:
    """Register the application's exception handlers on ``app``."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)
