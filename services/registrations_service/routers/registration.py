"""Public registration router - therapist applications from the website form."""

from fastapi import APIRouter, Depends, Request, status
from libs.common.rate_limit import registration_limit
from libs.db.session import get_async_db
from services.registrations_service.schemas import (
    RegistrationCreate,
    RegistrationSubmitted,
)
from services.registrations_service.services.intake import submit_registration
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/registrations", tags=["registrations"])

SUBMITTED_MESSAGE = (
    "Registration received. Our team will contact you via WhatsApp within 24 hours."
)


@router.post(
    "/", response_model=RegistrationSubmitted, status_code=status.HTTP_201_CREATED
)
@registration_limit
async def create_registration(
    request: Request,
    registration_in: RegistrationCreate,
    db: AsyncSession = Depends(get_async_db),
):
    """Submit a therapist application. It enters review as PENDING."""
    registration = await submit_registration(db, registration_in)
    return RegistrationSubmitted(
        id=registration.id,
        status=registration.status,
        message=SUBMITTED_MESSAGE,
    )
