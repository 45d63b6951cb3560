"""Registration request/response schemas."""

import re
import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from services.registrations_service.models.enums import RegistrationStatus

WHATSAPP_PATTERN = re.compile(r"^08[0-9]{8,12}$")
REQUIRED_FIELDS = (
    "full_name",
    "whatsapp",
    "address",
    "gender",
    "experience",
    "work_area",
    "availability",
)


def normalize_whatsapp(raw: str) -> str:
    """Strip everything but digits, e.g. ``0812-3456-7890`` -> ``081234567890``."""
    return re.sub(r"[^0-9]", "", raw)


class RegistrationCreate(BaseModel):
    """Public registration form.

    Fields are optional at the schema level; ``submit_registration`` reports
    missing ones as a 400 with a single message, as the form expects.
    """

    full_name: Optional[str] = Field(default=None, max_length=200)
    whatsapp: Optional[str] = None
    address: Optional[str] = None
    gender: Optional[str] = None
    experience: Optional[str] = None
    work_area: Optional[str] = None
    availability: Optional[str] = None
    message: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def strip_blank(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    def missing_fields(self) -> list[str]:
        return [name for name in REQUIRED_FIELDS if getattr(self, name) is None]


class RegistrationSubmitted(BaseModel):
    id: uuid.UUID
    status: RegistrationStatus
    message: str


class RegistrationResponse(BaseModel):
    id: uuid.UUID
    full_name: str
    whatsapp: str
    address: str
    gender: str
    experience: str
    work_area: str
    availability: str
    message: Optional[str] = None
    status: RegistrationStatus
    notes: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    submitted_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RegistrationSummary(BaseModel):
    """Compact view used in dashboard listings."""

    id: uuid.UUID
    full_name: str
    whatsapp: str
    status: RegistrationStatus
    submitted_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PaginationMeta(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class RegistrationListResponse(BaseModel):
    items: list[RegistrationResponse]
    pagination: PaginationMeta


class RegistrationTransitionRequest(BaseModel):
    """Admin decision on a registration.

    ``action`` is validated by the workflow so that unknown values surface as
    400 rather than a schema error.
    """

    action: Optional[Any] = None
    notes: Optional[str] = None


class RegistrationTransitionResponse(BaseModel):
    id: uuid.UUID
    status: RegistrationStatus
    notes: Optional[str] = None
    therapist_id: Optional[uuid.UUID] = None
    therapist_created: bool = False
