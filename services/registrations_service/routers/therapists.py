"""Admin therapists router - roster listing and status management."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from libs.auth.dependencies import require_admin
from libs.auth.models import AuthUser
from libs.db.session import get_async_db
from services.registrations_service.routers._helpers import (
    page_offset,
    pagination_meta,
)
from services.registrations_service.schemas import (
    TherapistListResponse,
    TherapistResponse,
    TherapistUpdate,
)
from services.registrations_service.services import therapists as therapist_service
from services.registrations_service.services.stores import TherapistStore
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/admin/therapists", tags=["admin-therapists"])


@router.get("/", response_model=TherapistListResponse)
async def list_therapists(
    status_filter: Optional[str] = Query(default=None, alias="status"),
    search: Optional[str] = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """List therapists, most recently joined first (admin only)."""
    therapist_status = None
    if status_filter and status_filter.lower() != "all":
        therapist_status = therapist_service.parse_therapist_status(
            status_filter.upper()
        )

    items, total = await TherapistStore(db).list(
        status=therapist_status,
        search=search.strip() if search else None,
        offset=page_offset(page, limit),
        limit=limit,
    )
    return TherapistListResponse(
        items=[TherapistResponse.model_validate(t) for t in items],
        pagination=pagination_meta(page, limit, total),
    )


@router.get("/{therapist_id}", response_model=TherapistResponse)
async def get_therapist(
    therapist_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    return await therapist_service.get_therapist(db, therapist_id)


@router.patch("/{therapist_id}", response_model=TherapistResponse)
async def update_therapist(
    therapist_id: uuid.UUID,
    changes: TherapistUpdate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Update profile fields and/or status (ACTIVE, INACTIVE, SUSPENDED)."""
    return await therapist_service.update_therapist(db, therapist_id, changes)


@router.delete("/{therapist_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_therapist(
    therapist_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    await therapist_service.delete_therapist(db, therapist_id)
