"""
Timestamp coercion and formatting.

Responsibility: Turn setter input into timezone-aware datetimes and render
them in the date layout each dialect expects
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any, Optional

from feedgen.util import formatRFC2822


def ensure_aware(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def coerce_timestamp(value: Any) -> Optional[datetime]:
    """
    Convert a timestamp argument to a timezone-aware datetime.

    Accepts a datetime (naive values are taken as UTC), a date (midnight
    UTC) or an integer number of seconds since the epoch. None is passed
    through so that callers can decide what an absent value means.

    Raises:
        TypeError: For any other input
    """
    if value is None:
        return None

    # bool is an int subclass but never a timestamp
    if isinstance(value, bool):
        raise TypeError("Invalid DateTime object or UNIX Timestamp passed as parameter")

    if isinstance(value, int):
        return datetime.fromtimestamp(value, tz=timezone.utc)

    if isinstance(value, datetime):
        return ensure_aware(value)

    if isinstance(value, date):
        return datetime.combine(value, time(), tzinfo=timezone.utc)

    raise TypeError("Invalid DateTime object or UNIX Timestamp passed as parameter")


def now() -> datetime:
    """Current moment in UTC"""
    return datetime.now(timezone.utc)


def format_rfc3339(value: datetime) -> str:
    """Format a datetime for Atom (RFC 3339, whole seconds)."""
    return ensure_aware(value).replace(microsecond=0).isoformat()


def format_rfc822(value: datetime) -> str:
    """Format a datetime for RSS (RFC 822, locale independent)."""
    return formatRFC2822(ensure_aware(value))
