"""Data access for registrations and therapists.

One interface over SQLAlchemy; the concrete database (PostgreSQL on Supabase,
SQLite locally) is chosen by ``DATABASE_URL``.
"""

import uuid
from typing import Any, Optional

from libs.common.logging import get_logger
from services.registrations_service.models import (
    RegistrationStatus,
    Therapist,
    TherapistRegistration,
    TherapistStatus,
)
from sqlalchemy import exists, func, or_, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)

# Profile columns copied from a registration onto its therapist
PROFILE_FIELDS = (
    "full_name",
    "whatsapp",
    "address",
    "gender",
    "experience",
    "work_area",
    "availability",
    "message",
)


def _search_clause(model, search: str):
    pattern = f"%{search}%"
    return or_(
        model.full_name.ilike(pattern),
        model.whatsapp.ilike(pattern),
        model.address.ilike(pattern),
    )


class RegistrationStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(
        self, registration_id: uuid.UUID, *, for_update: bool = False
    ) -> Optional[TherapistRegistration]:
        """Fetch one registration; ``for_update`` takes a row lock where supported."""
        query = select(TherapistRegistration).where(
            TherapistRegistration.id == registration_id
        )
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def update(self, registration_id: uuid.UUID, fields: dict[str, Any]) -> None:
        await self.db.execute(
            update(TherapistRegistration)
            .where(TherapistRegistration.id == registration_id)
            .values(**fields)
        )

    async def create(self, **fields) -> TherapistRegistration:
        registration = TherapistRegistration(**fields)
        self.db.add(registration)
        await self.db.flush()
        return registration

    async def list(
        self,
        *,
        status: Optional[RegistrationStatus] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[TherapistRegistration], int]:
        """Newest first. Returns ``(page_items, total_matching)``."""
        filters = []
        if status is not None:
            filters.append(TherapistRegistration.status == status)
        if search:
            filters.append(_search_clause(TherapistRegistration, search))

        total = await self.db.scalar(
            select(func.count()).select_from(TherapistRegistration).where(*filters)
        )
        result = await self.db.execute(
            select(TherapistRegistration)
            .where(*filters)
            .order_by(TherapistRegistration.submitted_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all()), total or 0


class TherapistStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, therapist_id: uuid.UUID) -> Optional[Therapist]:
        return await self.db.get(Therapist, therapist_id)

    async def get_for_registration(
        self, registration_id: uuid.UUID
    ) -> Optional[Therapist]:
        result = await self.db.execute(
            select(Therapist).where(Therapist.registration_id == registration_id)
        )
        return result.scalar_one_or_none()

    async def exists_for_registration(self, registration_id: uuid.UUID) -> bool:
        result = await self.db.execute(
            select(exists().where(Therapist.registration_id == registration_id))
        )
        return bool(result.scalar())

    async def insert(self, fields: dict[str, Any]) -> Optional[Therapist]:
        """Insert a therapist unless one already exists for the registration.

        Returns the new row, or ``None`` when the unique ``registration_id``
        index rejected it (another request provisioned it first).
        """
        therapist_id = fields.setdefault("id", uuid.uuid4())
        dialect = self.db.get_bind().dialect.name

        if dialect in ("postgresql", "sqlite"):
            insert = postgresql.insert if dialect == "postgresql" else sqlite.insert
            stmt = (
                insert(Therapist)
                .values(**fields)
                .on_conflict_do_nothing(index_elements=[Therapist.registration_id])
                .returning(Therapist.id)
            )
            inserted_id = (await self.db.execute(stmt)).scalar_one_or_none()
        else:
            try:
                async with self.db.begin_nested():
                    self.db.add(Therapist(**fields))
                inserted_id = therapist_id
            except IntegrityError:
                logger.info(
                    "Therapist insert for registration %s hit unique constraint",
                    fields.get("registration_id"),
                )
                inserted_id = None

        if inserted_id is None:
            return None
        return await self.db.get(Therapist, inserted_id)

    async def update(self, therapist: Therapist, fields: dict[str, Any]) -> Therapist:
        for name, value in fields.items():
            setattr(therapist, name, value)
        self.db.add(therapist)
        await self.db.flush()
        return therapist

    async def delete(self, therapist: Therapist) -> None:
        await self.db.delete(therapist)
        await self.db.flush()

    async def list(
        self,
        *,
        status: Optional[TherapistStatus] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[Therapist], int]:
        """Most recently joined first. Returns ``(page_items, total_matching)``."""
        filters = []
        if status is not None:
            filters.append(Therapist.status == status)
        if search:
            filters.append(_search_clause(Therapist, search))

        total = await self.db.scalar(
            select(func.count()).select_from(Therapist).where(*filters)
        )
        result = await self.db.execute(
            select(Therapist)
            .where(*filters)
            .order_by(Therapist.joined_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all()), total or 0
