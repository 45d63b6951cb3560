"""Admin management of the therapist roster."""

import uuid
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.common.logging import get_logger
from services.registrations_service.errors import (
    InvalidTherapistStatusError,
    TherapistNotFoundError,
)
from services.registrations_service.models import Therapist, TherapistStatus
from services.registrations_service.schemas.therapist import TherapistUpdate
from services.registrations_service.services.intake import validate_whatsapp
from services.registrations_service.services.stores import TherapistStore
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


def parse_therapist_status(value: Optional[str]) -> Optional[TherapistStatus]:
    if value is None:
        return None
    try:
        return TherapistStatus(value)
    except ValueError:
        raise InvalidTherapistStatusError(
            f"Invalid status {value!r}; expected one of "
            + ", ".join(s.value for s in TherapistStatus)
        )


async def get_therapist(db: AsyncSession, therapist_id: uuid.UUID) -> Therapist:
    therapist = await TherapistStore(db).get(therapist_id)
    if therapist is None:
        raise TherapistNotFoundError(therapist_id)
    await db.refresh(therapist, attribute_names=["registration"])
    return therapist


async def update_therapist(
    db: AsyncSession,
    therapist_id: uuid.UUID,
    changes: TherapistUpdate,
) -> Therapist:
    """Apply a partial update. Only fields present in the payload are written."""
    # message is the only nullable column; null elsewhere means "unchanged"
    fields = {
        name: value
        for name, value in changes.model_dump(exclude_unset=True).items()
        if value is not None or name == "message"
    }
    if "status" in fields:
        fields["status"] = parse_therapist_status(fields["status"])
    if "whatsapp" in fields:
        fields["whatsapp"] = validate_whatsapp(fields["whatsapp"])

    store = TherapistStore(db)
    therapist = await store.get(therapist_id)
    if therapist is None:
        raise TherapistNotFoundError(therapist_id)

    previous_status = therapist.status
    fields["updated_at"] = utc_now()
    await store.update(therapist, fields)
    await db.commit()
    await db.refresh(therapist, attribute_names=["registration"])

    if therapist.status != previous_status:
        logger.info(
            "Therapist %s status %s -> %s",
            therapist_id,
            previous_status.value,
            therapist.status.value,
        )
    return therapist


async def delete_therapist(db: AsyncSession, therapist_id: uuid.UUID) -> None:
    store = TherapistStore(db)
    therapist = await store.get(therapist_id)
    if therapist is None:
        raise TherapistNotFoundError(therapist_id)
    await store.delete(therapist)
    await db.commit()
    logger.info("Therapist %s deleted", therapist_id)
