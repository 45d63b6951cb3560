"""Registrations service routers package."""

from services.registrations_service.routers.admin import router as admin_router
from services.registrations_service.routers.dashboard import (
    router as dashboard_router,
)
from services.registrations_service.routers.registration import (
    router as registration_router,
)
from services.registrations_service.routers.therapists import (
    router as therapists_router,
)

__all__ = [
    "admin_router",
    "dashboard_router",
    "registration_router",
    "therapists_router",
]
