"""
Domain time utilities (pure).

Centralized timestamp validation and day arithmetic shared by the scoring rules
and the customer entities.

Behavior and error messages must remain consistent across the domain model.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone


def require_utc_timestamp(name: str, value: datetime) -> None:
    """
    Enforce that timestamps are UTC.

    Invariants:
    - Timestamps must be timezone-aware.
    - Timestamps must have UTC offset 0.
    """

    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"{name} must be timezone-aware (UTC)")
    if value.utcoffset() != timedelta(0):
        raise ValueError(f"{name} must be a UTC timestamp (offset 0)")


def whole_days_between(earlier: datetime, later: datetime) -> int:
    """
    Whole 24-hour days from `earlier` to `later`:

    days = floor((later - earlier) / 24 hours)

    Partial days are floored, never rounded. The result is negative when
    `earlier` is actually in the future relative to `later`.
    """

    require_utc_timestamp("earlier", earlier)
    require_utc_timestamp("later", later)
    return int((later - earlier) // timedelta(days=1))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
