"""Enums for the registrations service models."""

import enum


def enum_values(enum_cls):
    """Return persistent DB values for SAEnum mappings."""
    return [member.value for member in enum_cls]


class RegistrationStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class RegistrationAction(str, enum.Enum):
    """Admin decisions that can be applied to a registration."""

    APPROVE = "APPROVE"
    REJECT = "REJECT"
    PENDING = "PENDING"


class TherapistStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"


ACTION_TARGET_STATUS = {
    RegistrationAction.APPROVE: RegistrationStatus.APPROVED,
    RegistrationAction.REJECT: RegistrationStatus.REJECTED,
    RegistrationAction.PENDING: RegistrationStatus.PENDING,
}
