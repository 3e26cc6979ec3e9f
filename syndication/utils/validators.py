"""
Field-level validation rules shared by feeds and entries.

Each helper returns the accepted (possibly normalised) value or raises
InvalidArgumentError. Model field validators call these so that the same
rules apply to fluent setters and to direct attribute assignment.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Iterable, Optional

from ..exceptions import InvalidArgumentError
from .dates import coerce_timestamp
from .uri import is_valid_identifier, is_valid_uri

FEED_TYPES = ("rss", "rdf", "atom")

# Characters outside the XML 1.0 Char production
_XML_ILLEGAL = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def ensure_xml_text(value: Any, name: str = "parameter") -> Any:
    """Reject strings holding characters that cannot be written to XML."""
    if isinstance(value, str) and _XML_ILLEGAL.search(value):
        raise InvalidArgumentError(
            f'Invalid parameter: "{name}" contains characters not allowed in XML'
        )
    return value


def ensure_non_empty_string(value: Any, name: str = "parameter") -> str:
    """Require a non-empty string."""
    if not isinstance(value, str) or not value:
        raise InvalidArgumentError(
            f'Invalid parameter: "{name}" must be a non-empty string'
        )
    return ensure_xml_text(value, name)


def ensure_uri(value: Any, name: str = "parameter") -> str:
    """Require a non-empty string holding a valid URI/IRI."""
    if not isinstance(value, str) or not value or not is_valid_uri(value):
        raise InvalidArgumentError(
            f'Invalid parameter: "{name}" must be a non-empty string and valid URI/IRI'
        )
    return ensure_xml_text(value, name)


def ensure_identifier(value: Any, name: str = "id") -> str:
    """Require a URI/IRI, a URN or an RFC 4151 tag URI."""
    if not is_valid_identifier(value):
        raise InvalidArgumentError(
            f'Invalid parameter: "{name}" must be a non-empty string and valid URI/IRI'
        )
    return ensure_xml_text(value, name)


def ensure_timestamp(value: Any, name: str = "date") -> Optional[datetime]:
    """Require a datetime, a date or an integer UNIX timestamp."""
    try:
        return coerce_timestamp(value)
    except (TypeError, ValueError, OverflowError, OSError) as exc:
        raise InvalidArgumentError(
            f'Invalid parameter: "{name}" must be a DateTime object or UNIX timestamp'
        ) from exc


def ensure_non_negative_int(value: Any, name: str = "count") -> int:
    """
    Require an integer (or integral numeric string) greater than or equal to zero.
    """
    number: Optional[int] = None

    if isinstance(value, bool):
        number = None
    elif isinstance(value, int):
        number = value
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    elif isinstance(value, str) and value.strip().isdecimal():
        number = int(value.strip())

    if number is None or number < 0:
        raise InvalidArgumentError(
            f'Invalid parameter: "{name}" must be a positive integer number or zero'
        )
    return number


def ensure_feed_type(value: Any, allowed: Iterable[str] = FEED_TYPES) -> str:
    """Require one of the recognised feed dialect names (case-insensitive)."""
    allowed = tuple(allowed)
    if not isinstance(value, str) or value.lower() not in allowed:
        raise InvalidArgumentError(
            f'Invalid parameter: "type" must be one of {", ".join(allowed)}'
        )
    return value.lower()
