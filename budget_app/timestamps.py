"""
Audit timestamp helpers.

SQLite hands back naive datetimes even for timezone-aware columns, so every
value read from the database is normalized to UTC before it is compared or
rendered.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def next_update_stamp(previous: Optional[datetime]) -> datetime:
    """Current instant, bumped past `previous` so updatedAt always moves forward.

    The rendered form has millisecond precision, so the bump is one millisecond.
    """
    now = utc_now()
    if previous is None:
        return now
    floor = as_utc(previous).replace(microsecond=(as_utc(previous).microsecond // 1000) * 1000)
    if now < floor + timedelta(milliseconds=1):
        return floor + timedelta(milliseconds=1)
    return now


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """Render as `2024-01-15T00:00:00.000Z`."""
    if value is None:
        return None
    return as_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")
