"""Active therapist roster, provisioned from approved registrations."""

import uuid
from datetime import datetime
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from services.registrations_service.models.enums import TherapistStatus, enum_values
from sqlalchemy import DateTime
from sqlalchemy import Enum as SAEnum
from sqlalchemy import ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship


class Therapist(Base):
    """A therapist provisioned from exactly one approved registration.

    ``registration_id`` is unique: a registration converts to at most one
    therapist, which the approval workflow relies on for idempotency.
    """

    __tablename__ = "therapists"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    registration_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("therapist_registrations.id", ondelete="RESTRICT"),
        unique=True,
        nullable=False,
    )

    # Profile, copied from the registration at approval time
    full_name: Mapped[str] = mapped_column(String, nullable=False)
    whatsapp: Mapped[str] = mapped_column(String, index=True, nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    gender: Mapped[str] = mapped_column(String, nullable=False)
    experience: Mapped[str] = mapped_column(String, nullable=False)
    work_area: Mapped[str] = mapped_column(String, nullable=False)
    availability: Mapped[str] = mapped_column(String, nullable=False)
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[TherapistStatus] = mapped_column(
        SAEnum(
            TherapistStatus,
            name="therapist_status_enum",
            values_callable=enum_values,
            validate_strings=True,
        ),
        default=TherapistStatus.ACTIVE,
        nullable=False,
        index=True,
    )

    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )

    registration: Mapped["TherapistRegistration"] = relationship(  # noqa: F821
        "TherapistRegistration", lazy="selectin"
    )

    def __repr__(self):
        return f"<Therapist {self.full_name} ({self.status.value})>"
