"""Admin registrations router - review queue and approval decisions."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from libs.auth.dependencies import require_admin
from libs.auth.models import AuthUser
from libs.db.session import get_async_db
from services.registrations_service.errors import RegistrationNotFoundError
from services.registrations_service.routers._helpers import (
    page_offset,
    pagination_meta,
    parse_registration_id,
    parse_registration_status_filter,
)
from services.registrations_service.schemas import (
    RegistrationListResponse,
    RegistrationResponse,
    RegistrationTransitionRequest,
    RegistrationTransitionResponse,
)
from services.registrations_service.services.stores import RegistrationStore
from services.registrations_service.services.workflow import transition_registration
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/admin/registrations", tags=["admin-registrations"])


@router.get("/", response_model=RegistrationListResponse)
async def list_registrations(
    status: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """List registrations, newest first (admin only)."""
    items, total = await RegistrationStore(db).list(
        status=parse_registration_status_filter(status),
        search=search.strip() if search else None,
        offset=page_offset(page, limit),
        limit=limit,
    )
    return RegistrationListResponse(
        items=[RegistrationResponse.model_validate(r) for r in items],
        pagination=pagination_meta(page, limit, total),
    )


@router.get("/{registration_id}", response_model=RegistrationResponse)
async def get_registration(
    registration_id: str,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Get a single registration (admin only)."""
    registration = await RegistrationStore(db).get(
        parse_registration_id(registration_id)
    )
    if registration is None:
        raise RegistrationNotFoundError(registration_id)
    return registration


@router.patch("/{registration_id}", response_model=RegistrationTransitionResponse)
async def update_registration_status(
    registration_id: str,
    body: RegistrationTransitionRequest,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """
    Approve, reject or re-open a registration (admin only).
    Approving provisions the therapist record if it does not exist yet.
    """
    result = await transition_registration(
        db,
        parse_registration_id(registration_id),
        body.action,
        notes=body.notes,
        actor=current_user.display_id,
    )
    return RegistrationTransitionResponse(
        id=result.registration.id,
        status=result.status,
        notes=result.registration.notes,
        therapist_id=result.therapist.id if result.therapist else None,
        therapist_created=result.therapist_created,
    )
