"""
Timezone-aware datetime utilities.

The engine compares instants coming from several collaborators (task
deadlines, synced calendar events, the wall clock). Everything is converted
to timezone-aware datetimes in the scheduling timezone before comparison.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

# UTC timezone constant
UTC = timezone.utc


def now_utc() -> datetime:
    """
    Get current UTC datetime (timezone-aware).

    Returns:
        datetime: Current UTC time with tzinfo set to UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure datetime is timezone-aware and in UTC.

    Args:
        dt: datetime to convert (can be None, naive, or timezone-aware)

    Returns:
        Optional[datetime]: UTC timezone-aware datetime, or None if input is None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Naive datetime - assume UTC
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def to_local_datetime(value: datetime, tz_name: str) -> datetime:
    """
    Express a datetime in the given IANA timezone.

    Naive values are taken to already be wall-clock time in that timezone.
    """
    tz = ZoneInfo(tz_name)
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def normalize_local(value: datetime) -> datetime:
    """
    Resolve a local wall-clock time that a DST jump skipped.

    A round trip through UTC moves e.g. 02:30 on a spring-forward day to
    03:30. Existing times come back unchanged.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).astimezone(value.tzinfo)


def at_hour(day: date, hour: int, tz_name: str) -> datetime:
    """Return ``hour:00`` of ``day`` in the given timezone (hour 24 is next midnight)."""
    tz = ZoneInfo(tz_name)
    if hour >= 24:
        return normalize_local(datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz))
    return normalize_local(datetime.combine(day, time(hour=hour), tzinfo=tz))


def ceil_to_slot(value: datetime, slot_minutes: int = 15, strict: bool = False) -> datetime:
    """
    Round a datetime up to the next slot boundary.

    Args:
        value: datetime to round
        slot_minutes: Grid size in minutes (must divide an hour)
        strict: When True an already aligned value moves to the following
            boundary, matching how "now" is rounded for a fresh run

    Returns:
        datetime: Rounded value with seconds and microseconds cleared
    """
    floored = value.replace(
        minute=value.minute - value.minute % slot_minutes,
        second=0,
        microsecond=0,
    )
    if floored == value and not strict:
        return normalize_local(floored)
    return normalize_local(floored + timedelta(minutes=slot_minutes))
