"""Admin dashboard router."""

from fastapi import APIRouter, Depends
from libs.auth.dependencies import require_admin
from libs.auth.models import AuthUser
from libs.db.session import get_async_db
from services.registrations_service.schemas import DashboardResponse
from services.registrations_service.services.dashboard import build_dashboard
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/admin/dashboard", tags=["admin-dashboard"])


@router.get("/", response_model=DashboardResponse)
async def get_dashboard(
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Registration and therapist statistics (admin only)."""
    return await build_dashboard(db)
