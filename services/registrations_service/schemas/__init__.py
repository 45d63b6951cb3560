"""Registrations service schemas package."""

from services.registrations_service.schemas.dashboard import (  # noqa: F401
    DashboardOverview,
    DashboardRecent,
    DashboardResponse,
    MonthlyStat,
)
from services.registrations_service.schemas.registration import (  # noqa: F401
    PaginationMeta,
    RegistrationCreate,
    RegistrationListResponse,
    RegistrationResponse,
    RegistrationSubmitted,
    RegistrationSummary,
    RegistrationTransitionRequest,
    RegistrationTransitionResponse,
)
from services.registrations_service.schemas.therapist import (  # noqa: F401
    TherapistListResponse,
    TherapistResponse,
    TherapistSummary,
    TherapistUpdate,
)
