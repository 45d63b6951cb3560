"""Shared helpers for registrations service routers."""

import math
import uuid
from typing import Optional

from services.registrations_service.errors import (
    RegistrationNotFoundError,
    RegistrationValidationError,
)
from services.registrations_service.models import RegistrationStatus
from services.registrations_service.schemas import PaginationMeta


def pagination_meta(page: int, limit: int, total: int) -> PaginationMeta:
    return PaginationMeta(
        page=page, limit=limit, total=total, pages=math.ceil(total / limit)
    )


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit


def parse_registration_status_filter(
    value: Optional[str],
) -> Optional[RegistrationStatus]:
    """``None`` and ``"all"`` mean no filter."""
    if not value or value.lower() == "all":
        return None
    try:
        return RegistrationStatus(value.upper())
    except ValueError:
        raise RegistrationValidationError(f"Unknown registration status {value!r}")


def parse_registration_id(value: str) -> uuid.UUID:
    """Malformed ids cannot reference a registration, so they are 404 too."""
    try:
        return uuid.UUID(value)
    except ValueError:
        raise RegistrationNotFoundError(value)
