"""Public registration intake."""

from libs.common.datetime_utils import utc_now
from libs.common.logging import get_logger
from services.registrations_service.errors import RegistrationValidationError
from services.registrations_service.models import (
    RegistrationStatus,
    TherapistRegistration,
)
from services.registrations_service.schemas.registration import (
    WHATSAPP_PATTERN,
    RegistrationCreate,
    normalize_whatsapp,
)
from services.registrations_service.services.stores import RegistrationStore
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


def validate_whatsapp(raw: str) -> str:
    """Normalise a WhatsApp number to digits and check it is an 08xx mobile."""
    cleaned = normalize_whatsapp(raw)
    if not WHATSAPP_PATTERN.match(cleaned):
        raise RegistrationValidationError(
            "Invalid WhatsApp number. Use the format 08xx-xxxx-xxxx"
        )
    return cleaned


async def submit_registration(
    db: AsyncSession, registration_in: RegistrationCreate
) -> TherapistRegistration:
    """Store a new registration in PENDING status."""
    missing = registration_in.missing_fields()
    if missing:
        raise RegistrationValidationError(
            "All fields except message are required (missing: "
            + ", ".join(missing)
            + ")"
        )

    data = registration_in.model_dump()
    data["whatsapp"] = validate_whatsapp(data["whatsapp"])

    now = utc_now()
    registration = await RegistrationStore(db).create(
        **data,
        status=RegistrationStatus.PENDING,
        submitted_at=now,
        updated_at=now,
    )
    await db.commit()

    logger.info("New therapist registration %s submitted", registration.id)
    return registration
