"""Registrations Service models package.

Re-exports every model and enum so that Alembic and SQLAlchemy's mapper
registry see all tables on import.
"""

from services.registrations_service.models.enums import (  # noqa: F401
    ACTION_TARGET_STATUS,
    RegistrationAction,
    RegistrationStatus,
    TherapistStatus,
)
from services.registrations_service.models.registration import (  # noqa: F401
    TherapistRegistration,
)
from services.registrations_service.models.therapist import Therapist  # noqa: F401

__all__ = [
    "ACTION_TARGET_STATUS",
    "RegistrationAction",
    "RegistrationStatus",
    "TherapistStatus",
    "TherapistRegistration",
    "Therapist",
]
