"""Dashboard statistics schemas."""

from pydantic import BaseModel
from services.registrations_service.schemas.registration import RegistrationSummary
from services.registrations_service.schemas.therapist import TherapistSummary


class DashboardOverview(BaseModel):
    total_registrations: int = 0
    pending_registrations: int = 0
    approved_registrations: int = 0
    rejected_registrations: int = 0
    total_therapists: int = 0
    active_therapists: int = 0
    inactive_therapists: int = 0
    suspended_therapists: int = 0


class DashboardRecent(BaseModel):
    registrations: list[RegistrationSummary]
    therapists: list[TherapistSummary]


class MonthlyStat(BaseModel):
    month: str
    registrations: int
    approved: int
    rejected: int


class DashboardResponse(BaseModel):
    overview: DashboardOverview
    recent: DashboardRecent
    monthly_stats: list[MonthlyStat]
