"""Errors raised by the registrations service."""

from libs.common.errors import (
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationFailedError,
)


class InvalidActionError(ValidationFailedError):
    code = "INVALID_ACTION"


class RegistrationValidationError(ValidationFailedError):
    pass


class InvalidTherapistStatusError(ValidationFailedError):
    code = "INVALID_STATUS"


class RegistrationNotFoundError(NotFoundError):
    code = "REGISTRATION_NOT_FOUND"

    def __init__(self, registration_id):
        self.registration_id = registration_id
        super().__init__(f"Registration {registration_id} not found")


class TherapistNotFoundError(NotFoundError):
    code = "THERAPIST_NOT_FOUND"

    def __init__(self, therapist_id):
        self.therapist_id = therapist_id
        super().__init__(f"Therapist {therapist_id} not found")


class TherapistProvisioningConflict(ConflictError):
    code = "THERAPIST_CONFLICT"


__all__ = [
    "InvalidActionError",
    "InvalidTherapistStatusError",
    "RegistrationNotFoundError",
    "RegistrationValidationError",
    "StorageError",
    "TherapistNotFoundError",
    "TherapistProvisioningConflict",
]
