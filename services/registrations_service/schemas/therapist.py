"""Therapist request/response schemas."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from services.registrations_service.schemas.registration import PaginationMeta
from services.registrations_service.models.enums import TherapistStatus


class TherapistRegistrationInfo(BaseModel):
    submitted_at: datetime
    message: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class TherapistResponse(BaseModel):
    id: uuid.UUID
    registration_id: uuid.UUID
    full_name: str
    whatsapp: str
    address: str
    gender: str
    experience: str
    work_area: str
    availability: str
    message: Optional[str] = None
    status: TherapistStatus
    joined_at: datetime
    updated_at: datetime
    registration: Optional[TherapistRegistrationInfo] = None

    model_config = ConfigDict(from_attributes=True)


class TherapistSummary(BaseModel):
    id: uuid.UUID
    full_name: str
    whatsapp: str
    status: TherapistStatus
    joined_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TherapistUpdate(BaseModel):
    """Partial update; only fields present in the payload are written.

    ``status`` is a plain string so that unknown values are reported as 400.
    """

    full_name: Optional[str] = None
    whatsapp: Optional[str] = None
    address: Optional[str] = None
    gender: Optional[str] = None
    experience: Optional[str] = None
    work_area: Optional[str] = None
    availability: Optional[str] = None
    message: Optional[str] = None
    status: Optional[str] = None


class TherapistListResponse(BaseModel):
    items: list[TherapistResponse]
    pagination: PaginationMeta
