"""Unit tests for the registration review workflow.

Tests call the workflow directly with the db_session fixture.
No HTTP layer involved.
"""

import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from libs.common.errors import StorageError
from services.registrations_service.errors import (
    InvalidActionError,
    RegistrationNotFoundError,
)
from services.registrations_service.models import (
    RegistrationStatus,
    Therapist,
    TherapistRegistration,
    TherapistStatus,
)
from services.registrations_service.services.stores import TherapistStore
from services.registrations_service.services.workflow import (
    ensure_therapist,
    transition_registration,
)
from tests.factories import RegistrationFactory, TherapistFactory, persist


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _therapist_count(db, registration_id=None) -> int:
    query = select(func.count()).select_from(Therapist)
    if registration_id is not None:
        query = query.where(Therapist.registration_id == registration_id)
    return await db.scalar(query)


async def _registration_count(db) -> int:
    return await db.scalar(select(func.count()).select_from(TherapistRegistration))


# ---------------------------------------------------------------------------
# APPROVE
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.unit
async def test_approve_creates_active_therapist(db_session):
    """Approving a pending registration provisions one ACTIVE therapist."""
    r1 = await persist(
        db_session,
        RegistrationFactory.create(
            full_name="Siti Aminah", message="Siap kerja akhir pekan"
        ),
    )

    result = await transition_registration(db_session, r1.id, "APPROVE")

    assert result.status == RegistrationStatus.APPROVED
    assert result.previous_status == RegistrationStatus.PENDING
    assert result.therapist_created is True

    t1 = result.therapist
    assert t1.registration_id == r1.id
    assert t1.status == TherapistStatus.ACTIVE
    assert t1.full_name == "Siti Aminah"
    assert t1.whatsapp == r1.whatsapp
    assert t1.work_area == r1.work_area
    assert t1.message == "Siap kerja akhir pekan"
    assert await _therapist_count(db_session, r1.id) == 1

    stored = await db_session.get(TherapistRegistration, r1.id)
    assert stored.status == RegistrationStatus.APPROVED


@pytest.mark.asyncio
@pytest.mark.unit
async def test_approve_twice_keeps_single_therapist(db_session):
    """Repeated approval is idempotent."""
    r1 = await persist(db_session, RegistrationFactory.create(full_name="Siti Aminah"))

    first = await transition_registration(db_session, r1.id, "APPROVE")
    second = await transition_registration(db_session, r1.id, "APPROVE")

    assert second.status == RegistrationStatus.APPROVED
    assert second.therapist_created is False
    assert second.therapist.id == first.therapist.id
    assert await _therapist_count(db_session, r1.id) == 1


@pytest.mark.asyncio
@pytest.mark.unit
async def test_approve_reuses_therapist_provisioned_earlier(db_session):
    """An existing therapist for the registration is returned, not duplicated."""
    registration = RegistrationFactory.create(status=RegistrationStatus.APPROVED)
    therapist = TherapistFactory.create(registration)
    await persist(db_session, registration, therapist)

    result = await transition_registration(db_session, registration.id, "APPROVE")

    assert result.therapist.id == therapist.id
    assert result.therapist_created is False
    assert await _therapist_count(db_session) == 1


@pytest.mark.asyncio
@pytest.mark.unit
async def test_approve_repairs_approved_registration_without_therapist(db_session):
    """Re-approving an APPROVED registration that lacks a therapist creates it."""
    registration = await persist(
        db_session, RegistrationFactory.create(status=RegistrationStatus.APPROVED)
    )

    result = await transition_registration(db_session, registration.id, "APPROVE")

    assert result.therapist_created is True
    assert await _therapist_count(db_session, registration.id) == 1


# ---------------------------------------------------------------------------
# REJECT / PENDING
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.unit
async def test_reject_stores_notes_and_creates_no_therapist(db_session):
    r2 = await persist(db_session, RegistrationFactory.create())

    result = await transition_registration(
        db_session, r2.id, "REJECT", notes="Incomplete documents"
    )

    assert result.status == RegistrationStatus.REJECTED
    assert result.therapist is None
    assert await _therapist_count(db_session, r2.id) == 0

    stored = await db_session.get(TherapistRegistration, r2.id)
    assert stored.status == RegistrationStatus.REJECTED
    assert stored.notes == "Incomplete documents"


@pytest.mark.asyncio
@pytest.mark.unit
async def test_notes_left_unchanged_when_not_supplied(db_session):
    registration = await persist(
        db_session, RegistrationFactory.create(notes="Called on Monday")
    )

    await transition_registration(db_session, registration.id, "REJECT")

    stored = await db_session.get(TherapistRegistration, registration.id)
    assert stored.notes == "Called on Monday"


@pytest.mark.asyncio
@pytest.mark.unit
async def test_pending_on_pending_registration_is_noop_status(db_session):
    registration = await persist(db_session, RegistrationFactory.create())

    result = await transition_registration(db_session, registration.id, "PENDING")

    assert result.status == RegistrationStatus.PENDING
    assert result.therapist is None
    assert await _therapist_count(db_session) == 0


@pytest.mark.asyncio
@pytest.mark.unit
async def test_actor_recorded_as_reviewer(db_session):
    registration = await persist(db_session, RegistrationFactory.create())

    await transition_registration(
        db_session, registration.id, "REJECT", actor="admin@pijatjogja.id"
    )

    stored = await db_session.get(TherapistRegistration, registration.id)
    assert stored.reviewed_by == "admin@pijatjogja.id"
    assert stored.reviewed_at is not None


@pytest.mark.asyncio
@pytest.mark.unit
async def test_leaving_decided_status_logs_warning(db_session, caplog):
    registration = await persist(
        db_session, RegistrationFactory.create(status=RegistrationStatus.APPROVED)
    )

    with caplog.at_level("WARNING"):
        result = await transition_registration(db_session, registration.id, "REJECT")

    assert result.status == RegistrationStatus.REJECTED
    assert any(
        "decided status APPROVED" in record.getMessage() for record in caplog.records
    )


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.unit
async def test_unknown_registration_raises_not_found(db_session):
    with pytest.raises(RegistrationNotFoundError):
        await transition_registration(db_session, uuid.uuid4(), "APPROVE")

    assert await _registration_count(db_session) == 0
    assert await _therapist_count(db_session) == 0


@pytest.mark.asyncio
@pytest.mark.unit
async def test_invalid_action_rejected_without_touching_storage(db_session):
    registration = await persist(db_session, RegistrationFactory.create())

    with pytest.raises(InvalidActionError) as exc_info:
        await transition_registration(db_session, registration.id, "FOO")

    assert exc_info.value.status_code == 400
    stored = await db_session.get(TherapistRegistration, registration.id)
    assert stored.status == RegistrationStatus.PENDING


@pytest.mark.asyncio
@pytest.mark.unit
async def test_action_values_are_case_sensitive(db_session):
    registration = await persist(db_session, RegistrationFactory.create())

    with pytest.raises(InvalidActionError):
        await transition_registration(db_session, registration.id, "approve")


@pytest.mark.asyncio
@pytest.mark.unit
async def test_therapist_insert_failure_rolls_back_status(db_session, monkeypatch):
    """A failed therapist insert leaves the registration PENDING."""
    registration = await persist(db_session, RegistrationFactory.create())
    registration_id = registration.id

    async def failing_insert(self, fields):
        raise OperationalError("INSERT INTO therapists", {}, Exception("disk I/O"))

    monkeypatch.setattr(TherapistStore, "insert", failing_insert)

    with pytest.raises(StorageError):
        await transition_registration(db_session, registration_id, "APPROVE")

    stored = (
        await db_session.execute(
            select(TherapistRegistration).where(
                TherapistRegistration.id == registration_id
            )
        )
    ).scalar_one()
    assert stored.status == RegistrationStatus.PENDING
    assert await _therapist_count(db_session) == 0


# ---------------------------------------------------------------------------
# Provisioning under contention
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.unit
async def test_store_insert_ignores_duplicate_registration(db_session):
    """The unique registration_id index turns a second insert into a no-op."""
    registration = await persist(db_session, RegistrationFactory.create())
    store = TherapistStore(db_session)
    fields = {
        "registration_id": registration.id,
        "full_name": registration.full_name,
        "whatsapp": registration.whatsapp,
        "address": registration.address,
        "gender": registration.gender,
        "experience": registration.experience,
        "work_area": registration.work_area,
        "availability": registration.availability,
    }

    first = await store.insert(dict(fields))
    second = await store.insert(dict(fields))
    await db_session.commit()

    assert first is not None
    assert second is None
    assert await _therapist_count(db_session, registration.id) == 1
    assert await store.exists_for_registration(registration.id) is True
    assert await store.exists_for_registration(uuid.uuid4()) is False


@pytest.mark.asyncio
@pytest.mark.unit
async def test_ensure_therapist_absorbs_lost_race(db_session):
    """If another request inserts between the check and the insert, the
    existing therapist is returned and nothing is duplicated."""
    registration = RegistrationFactory.create()
    racing = TherapistFactory.create(registration)
    await persist(db_session, registration, racing)

    class StaleCheckStore(TherapistStore):
        """Misses the existing row on the first lookup, like a concurrent check."""

        def __init__(self, db):
            super().__init__(db)
            self.lookups = 0

        async def get_for_registration(self, registration_id):
            self.lookups += 1
            if self.lookups == 1:
                return None
            return await super().get_for_registration(registration_id)

    therapist, created = await ensure_therapist(
        StaleCheckStore(db_session), registration
    )

    assert created is False
    assert therapist.id == racing.id
    assert await _therapist_count(db_session, registration.id) == 1
