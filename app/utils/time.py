"""Time helpers shared by lifecycle engines and reports."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """Return the current UTC time as an aware datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from SQLite."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def trailing_window_start(now: datetime, days: int) -> datetime:
    """Return the UTC start of day `days - 1` days before `now`.

    A one-day window therefore covers today only; stored timestamps are UTC so
    the boundary is computed in UTC as well.
    """
    start = as_utc(now).replace(hour=0, minute=0, second=0, microsecond=0)
    return start - timedelta(days=days - 1)
