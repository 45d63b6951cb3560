"""
Model factories for creating valid test data.

Every factory produces a valid, insertable SQLAlchemy model instance.
Override any field via kwargs.

Usage:
    registration = RegistrationFactory.create(full_name="Siti Aminah")
    db_session.add(registration)
    await db_session.commit()
"""

import uuid
from datetime import datetime, timezone

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _uuid() -> uuid.UUID:
    return uuid.uuid4()


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _unique_whatsapp() -> str:
    return "0812" + str(uuid.uuid4().int)[:8]


# ---------------------------------------------------------------------------
# Registrations Service
# ---------------------------------------------------------------------------


class RegistrationFactory:
    @staticmethod
    def create(**overrides):
        from services.registrations_service.models import (
            RegistrationStatus,
            TherapistRegistration,
        )

        defaults = {
            "id": _uuid(),
            "full_name": "Test Terapis",
            "whatsapp": _unique_whatsapp(),
            "address": "Jl. Kaliurang Km 5, Sleman",
            "gender": "FEMALE",
            "experience": "3 tahun",
            "work_area": "Sleman",
            "availability": "Senin-Jumat, 09:00-17:00",
            "message": None,
            "status": RegistrationStatus.PENDING,
            "submitted_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return TherapistRegistration(**defaults)


class TherapistFactory:
    @staticmethod
    def create(registration=None, **overrides):
        from services.registrations_service.models import Therapist, TherapistStatus

        registration_id = overrides.pop(
            "registration_id", registration.id if registration else _uuid()
        )
        defaults = {
            "id": _uuid(),
            "registration_id": registration_id,
            "full_name": registration.full_name if registration else "Test Terapis",
            "whatsapp": registration.whatsapp if registration else _unique_whatsapp(),
            "address": "Jl. Kaliurang Km 5, Sleman",
            "gender": "FEMALE",
            "experience": "3 tahun",
            "work_area": "Sleman",
            "availability": "Senin-Jumat, 09:00-17:00",
            "message": None,
            "status": TherapistStatus.ACTIVE,
            "joined_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return Therapist(**defaults)


async def persist(db, *instances):
    """Add and commit instances, returning the first (or all when several)."""
    for instance in instances:
        db.add(instance)
    await db.commit()
    return instances[0] if len(instances) == 1 else instances


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


def make_token(**claims) -> str:
    """Sign a Supabase-style access token with the configured JWT secret."""
    from jose import jwt

    from libs.common.config import get_settings

    payload = {
        "sub": "auth-user-1",
        "email": "admin@pijatjogja.id",
        "role": "authenticated",
        "aud": "authenticated",
    }
    payload.update(claims)
    return jwt.encode(payload, get_settings().SUPABASE_JWT_SECRET, algorithm="HS256")
