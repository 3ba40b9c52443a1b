"""Time utilities for timestamps. All datetimes in UTC."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return current UTC datetime. Use for created_at/updated_at."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (as returned by MongoDB) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def age_in_days(created_at: datetime, now: datetime | None = None) -> float:
    """Days elapsed since created_at; never negative."""
    now = now or utc_now()
    delta = as_utc(now) - as_utc(created_at)
    return max(0.0, delta.total_seconds() / 86400.0)
