"""Dashboard statistics for the admin panel."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from libs.common.datetime_utils import ensure_utc, local_tz, to_local, utc_now
from services.registrations_service.models import (
    RegistrationStatus,
    Therapist,
    TherapistRegistration,
    TherapistStatus,
)
from services.registrations_service.schemas.dashboard import (
    DashboardOverview,
    DashboardRecent,
    DashboardResponse,
    MonthlyStat,
)
from services.registrations_service.schemas.registration import RegistrationSummary
from services.registrations_service.schemas.therapist import TherapistSummary
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "Mei", "Jun",
    "Jul", "Agu", "Sep", "Okt", "Nov", "Des",
)
MONTHS_SHOWN = 6
RECENT_DAYS = 7
RECENT_LIMIT = 5


def month_windows(now: datetime, count: int = MONTHS_SHOWN) -> list[tuple[int, int]]:
    """``(year, month)`` pairs for the last ``count`` months, oldest first,
    ending with the month containing ``now`` in the business timezone."""
    local_now = to_local(now)
    windows = []
    for back in range(count - 1, -1, -1):
        index = local_now.year * 12 + (local_now.month - 1) - back
        windows.append((index // 12, index % 12 + 1))
    return windows


def month_label(year: int, month: int) -> str:
    return f"{MONTH_LABELS[month - 1]} {year}"


async def _status_counts(db: AsyncSession, model) -> dict:
    result = await db.execute(
        select(model.status, func.count()).group_by(model.status)
    )
    return {status: count for status, count in result.all()}


async def build_overview(db: AsyncSession) -> DashboardOverview:
    registrations = await _status_counts(db, TherapistRegistration)
    therapists = await _status_counts(db, Therapist)
    return DashboardOverview(
        total_registrations=sum(registrations.values()),
        pending_registrations=registrations.get(RegistrationStatus.PENDING, 0),
        approved_registrations=registrations.get(RegistrationStatus.APPROVED, 0),
        rejected_registrations=registrations.get(RegistrationStatus.REJECTED, 0),
        total_therapists=sum(therapists.values()),
        active_therapists=therapists.get(TherapistStatus.ACTIVE, 0),
        inactive_therapists=therapists.get(TherapistStatus.INACTIVE, 0),
        suspended_therapists=therapists.get(TherapistStatus.SUSPENDED, 0),
    )


async def build_recent(db: AsyncSession, now: datetime) -> DashboardRecent:
    since = now - timedelta(days=RECENT_DAYS)
    registrations = await db.execute(
        select(TherapistRegistration)
        .where(TherapistRegistration.submitted_at >= since)
        .order_by(TherapistRegistration.submitted_at.desc())
        .limit(RECENT_LIMIT)
    )
    therapists = await db.execute(
        select(Therapist)
        .where(Therapist.joined_at >= since)
        .order_by(Therapist.joined_at.desc())
        .limit(RECENT_LIMIT)
    )
    return DashboardRecent(
        registrations=[
            RegistrationSummary.model_validate(r) for r in registrations.scalars()
        ],
        therapists=[TherapistSummary.model_validate(t) for t in therapists.scalars()],
    )


async def build_monthly_stats(db: AsyncSession, now: datetime) -> list[MonthlyStat]:
    """Registrations per month (with approved/rejected breakdown) for the
    last six months, bucketed by local submission date."""
    windows = month_windows(now)
    first_year, first_month = windows[0]
    start = datetime(first_year, first_month, 1, tzinfo=local_tz()).astimezone(
        timezone.utc
    )

    result = await db.execute(
        select(TherapistRegistration.submitted_at, TherapistRegistration.status).where(
            TherapistRegistration.submitted_at >= start
        )
    )

    buckets = {
        window: {"registrations": 0, "approved": 0, "rejected": 0}
        for window in windows
    }
    for submitted_at, status in result.all():
        local = to_local(submitted_at)
        bucket = buckets.get((local.year, local.month))
        if bucket is None:
            continue
        bucket["registrations"] += 1
        if status == RegistrationStatus.APPROVED:
            bucket["approved"] += 1
        elif status == RegistrationStatus.REJECTED:
            bucket["rejected"] += 1

    return [
        MonthlyStat(month=month_label(year, month), **buckets[(year, month)])
        for year, month in windows
    ]


async def build_dashboard(
    db: AsyncSession, now: Optional[datetime] = None
) -> DashboardResponse:
    now = ensure_utc(now) if now else utc_now()
    return DashboardResponse(
        overview=await build_overview(db),
        recent=await build_recent(db, now),
        monthly_stats=await build_monthly_stats(db, now),
    )
