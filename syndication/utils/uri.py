"""
URI and identifier predicates.

Responsibility: Decide whether a string is an acceptable URI/IRI, URN or
feed identifier
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import AnyUrl, TypeAdapter, ValidationError

from .tag_uri import is_valid_tag_uri

_URI_ADAPTER = TypeAdapter(AnyUrl)

URN_PATTERN = re.compile(
    r"^urn:[a-zA-Z0-9][a-zA-Z0-9\-]{1,31}:"
    r"([a-zA-Z0-9()+,.:=@;$_!*\-]|%[0-9a-fA-F]{2})*"
)


def is_valid_uri(value: Any) -> bool:
    """Return True when value is a syntactically valid absolute URI/IRI."""
    if not isinstance(value, str) or not value or value != value.strip():
        return False
    try:
        _URI_ADAPTER.validate_python(value)
    except ValidationError:
        return False
    return True


def is_valid_urn(value: Any) -> bool:
    """Return True when value starts with a well-formed ``urn:<nid>:`` prefix."""
    return isinstance(value, str) and URN_PATTERN.match(value) is not None


def is_valid_identifier(value: Any) -> bool:
    """
    Check a feed or entry identifier.

    Identifiers are accepted when they are a valid URI/IRI, match the URN
    pattern, or satisfy the RFC 4151 tag grammar.
    """
    if not isinstance(value, str) or not value:
        return False
    return is_valid_uri(value) or is_valid_urn(value) or is_valid_tag_uri(value)
