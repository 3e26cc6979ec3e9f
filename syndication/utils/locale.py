"""
Language tag normalisation.

Feeds declare a bare primary language subtag (``fr`` rather than ``fr-FR``).
"""

from __future__ import annotations

import re
from typing import Optional

# Primary language subtag followed by optional region/script/variant subtags
_LANGUAGE_TAG = re.compile(
    r"^(?P<language>[A-Za-z]{2,3}|[A-Za-z]{5,8})(?:[-_][A-Za-z0-9]{1,8})*$"
)


def normalize_language_tag(tag: str) -> Optional[str]:
    """
    Reduce a locale tag to its lower-cased primary language subtag.

    Tags of two characters or fewer are kept as given (lower-cased).

    Returns:
        The primary language, or None when the tag cannot be parsed
    """
    if len(tag) <= 2:
        return tag.lower()

    match = _LANGUAGE_TAG.match(tag.strip())
    if match is None:
        return None

    return match.group("language").lower()
