"""Application error hierarchy.

Service code raises these; ``libs.common.error_handler`` renders them as
``{"detail": ..., "code": ...}`` JSON responses with the matching status.
"""

from typing import Optional


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
    ):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        super().__init__(message)


class ValidationFailedError(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"


class ConflictError(AppError):
    status_code = 409
    code = "CONFLICT"


class StorageError(AppError):
    """Database read/write failure. Nothing from the failed call is persisted."""

    status_code = 500
    code = "STORAGE_ERROR"
