"""
RFC 4151 tag URI validation.

A tag URI has the form ``tag:<authority>,<date>:<specific>`` where the
authority is an email address or a domain name and the date is one of
``YYYY``, ``YYYY-MM`` or ``YYYY-MM-DD``.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Optional

from pydantic.networks import validate_email

from .dates import ensure_aware
from .dates import now as utc_now

TAG_URI_PATTERN = re.compile(
    r"^tag:(?P<name>.*),(?P<date>\d{4}-?\d{0,2}-?\d{0,2}):(?P<specific>.*)(.*:)*$"
)

# Date layouts keyed by the length of the date component
_DATE_FORMATS = {
    7: "%Y-%m",
    10: "%Y-%m-%d",
}


def _is_valid_email(candidate: str) -> bool:
    try:
        validate_email(candidate)
    except ValueError:
        return False
    return True


def _is_valid_tag_date(date: str, now: datetime) -> bool:
    if len(date) == 4:
        return int(date) <= now.year

    date_format = _DATE_FORMATS.get(len(date))
    if date_format is None:
        return False

    try:
        parsed = datetime.strptime(date, date_format).replace(tzinfo=now.tzinfo)
    except ValueError:
        return False

    return parsed < now


def _is_valid_tag_authority(name: str) -> bool:
    # Bare domain names are accepted by checking them as the domain part of
    # a mailbox.
    if not name:
        return False
    return _is_valid_email(name) or _is_valid_email(f"info@{name}")


def is_valid_tag_uri(value: Any, now: Optional[datetime] = None) -> bool:
    """
    Validate a URI using the tag scheme (RFC 4151).

    Args:
        value: Candidate identifier
        now: Reference moment for the date check (defaults to the current
            time; naive values are taken as UTC)

    Returns:
        True if both the authority and the date are acceptable
    """
    if not isinstance(value, str):
        return False

    match = TAG_URI_PATTERN.match(value)
    if match is None:
        return False

    now = ensure_aware(now) if now is not None else utc_now()
    date_valid = _is_valid_tag_date(match.group("date"), now)
    name_valid = _is_valid_tag_authority(match.group("name"))

    return date_valid and name_valid
