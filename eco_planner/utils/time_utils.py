"""
Time helpers for plan cooldown and expiry bookkeeping.

All timestamps are timezone-aware UTC. SQLite stores them as ISO-8601 strings.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone


def utcnow() -> datetime:
    """Return the current UTC datetime with timezone info.

    Prefer this over ``datetime.utcnow()`` (which returns naive datetimes).
    """
    return datetime.now(tz=timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def whole_days_between(earlier: datetime, later: datetime) -> int:
    """Number of complete 24h periods from ``earlier`` to ``later`` (floored)."""
    delta = ensure_utc(later) - ensure_utc(earlier)
    return delta // timedelta(days=1)


def add_days(value: datetime, days: int) -> datetime:
    return ensure_utc(value) + timedelta(days=days)


def to_iso(value: datetime | None) -> str | None:
    """Serialize a datetime for SQLite storage (``None`` passes through)."""
    return ensure_utc(value).isoformat() if value is not None else None


def from_iso(value: str | None) -> datetime | None:
    """Parse an ISO-8601 string written by ``to_iso`` (``None`` passes through)."""
    return ensure_utc(datetime.fromisoformat(value)) if value else None
