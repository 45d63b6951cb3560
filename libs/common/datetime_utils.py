"""Datetime utilities for timezone-aware timestamps.

Usage:
    from libs.common.datetime_utils import utc_now

    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from libs.common.config import get_settings


def utc_now() -> datetime:
    """Return timezone-aware UTC datetime.

    Always use this for timestamps in the database.
    """
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes (as SQLite returns them) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def local_tz() -> ZoneInfo:
    return ZoneInfo(get_settings().TIMEZONE)


def to_local(value: datetime) -> datetime:
    """Convert a stored timestamp to the business timezone."""
    return ensure_utc(value).astimezone(local_tz())
