"""Registration review workflow: status transitions and therapist provisioning.

Applying APPROVE to a registration guarantees that exactly one therapist
exists for it. The status write and the therapist insert commit together, and
the unique index on ``therapists.registration_id`` absorbs concurrent approvals
of the same registration, so retries (sequential or parallel) never produce a
second therapist.
"""

import uuid
from dataclasses import dataclass
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.common.errors import AppError
from libs.common.logging import get_logger
from services.registrations_service.errors import (
    InvalidActionError,
    RegistrationNotFoundError,
    StorageError,
    TherapistProvisioningConflict,
)
from services.registrations_service.models import (
    ACTION_TARGET_STATUS,
    RegistrationAction,
    RegistrationStatus,
    Therapist,
    TherapistRegistration,
    TherapistStatus,
)
from services.registrations_service.services.stores import (
    PROFILE_FIELDS,
    RegistrationStore,
    TherapistStore,
)
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


@dataclass
class TransitionResult:
    """Outcome of a transition, for the HTTP layer and any notifier."""

    registration: TherapistRegistration
    previous_status: RegistrationStatus
    therapist: Optional[Therapist] = None
    therapist_created: bool = False

    @property
    def status(self) -> RegistrationStatus:
        return self.registration.status


def parse_action(action) -> RegistrationAction:
    """Validate an action value coming from a request body."""
    if isinstance(action, str) and action in {a.value for a in RegistrationAction}:
        return RegistrationAction(action)
    raise InvalidActionError(
        f"Invalid action {action!r}; expected one of "
        + ", ".join(a.value for a in RegistrationAction)
    )


async def ensure_therapist(
    therapists: TherapistStore, registration: TherapistRegistration
) -> tuple[Therapist, bool]:
    """Return the registration's therapist, creating it if missing.

    Returns ``(therapist, created)``.
    """
    existing = await therapists.get_for_registration(registration.id)
    if existing is not None:
        return existing, False

    now = utc_now()
    fields = {name: getattr(registration, name) for name in PROFILE_FIELDS}
    fields.update(
        registration_id=registration.id,
        status=TherapistStatus.ACTIVE,
        joined_at=now,
        updated_at=now,
    )
    therapist = await therapists.insert(fields)
    if therapist is not None:
        return therapist, True

    # Lost the race: another request inserted it between our check and insert
    existing = await therapists.get_for_registration(registration.id)
    if existing is None:
        raise TherapistProvisioningConflict(
            f"Could not provision therapist for registration {registration.id}"
        )
    return existing, False


async def transition_registration(
    db: AsyncSession,
    registration_id: uuid.UUID,
    action,
    *,
    notes: Optional[str] = None,
    actor: Optional[str] = None,
) -> TransitionResult:
    """Apply an admin decision (APPROVE / REJECT / PENDING) to a registration.

    Raises ``InvalidActionError`` before any I/O for unknown actions,
    ``RegistrationNotFoundError`` for unknown ids, and ``StorageError`` when
    the database fails (nothing is persisted in that case).
    """
    registration_action = parse_action(action)
    target_status = ACTION_TARGET_STATUS[registration_action]

    registrations = RegistrationStore(db)
    therapists = TherapistStore(db)

    try:
        registration = await registrations.get(registration_id, for_update=True)
        if registration is None:
            raise RegistrationNotFoundError(registration_id)

        previous_status = registration.status
        if (
            previous_status != RegistrationStatus.PENDING
            and previous_status != target_status
        ):
            logger.warning(
                "Registration %s moving from decided status %s to %s",
                registration_id,
                previous_status.value,
                target_status.value,
            )

        now = utc_now()
        fields = {"status": target_status, "updated_at": now}
        if notes:
            fields["notes"] = notes
        if actor:
            fields["reviewed_by"] = actor
            fields["reviewed_at"] = now
        await registrations.update(registration_id, fields)

        result = TransitionResult(
            registration=registration, previous_status=previous_status
        )
        if registration_action == RegistrationAction.APPROVE:
            result.therapist, result.therapist_created = await ensure_therapist(
                therapists, registration
            )

        await db.commit()
    except AppError:
        await db.rollback()
        raise
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception(
            "Storage failure transitioning registration %s to %s",
            registration_id,
            target_status.value,
        )
        raise StorageError("Failed to update registration status") from exc

    logger.info(
        "Registration %s: %s -> %s%s",
        registration_id,
        previous_status.value,
        target_status.value,
        " (therapist created)" if result.therapist_created else "",
    )
    return result
