"""
Utilities package for syndication.

This package contains the collaborators and validation rules used by the
entity model and the writers:
- URI, URN and RFC 4151 tag URI predicates
- Language tag normalisation
- HTML to XHTML content normalisation
- Timestamp coercion and formatting
- Field-level validators
"""

from .tag_uri import is_valid_tag_uri
from .uri import is_valid_uri, is_valid_urn, is_valid_identifier
from .locale import normalize_language_tag
from .xhtml import sanitize_html_to_xhtml, namespace_xhtml, load_xhtml
from .dates import coerce_timestamp, format_rfc3339, format_rfc822
from .validators import (
    FEED_TYPES,
    ensure_non_empty_string,
    ensure_uri,
    ensure_identifier,
    ensure_timestamp,
    ensure_non_negative_int,
    ensure_feed_type,
    ensure_xml_text,
)

__all__ = [
    "is_valid_tag_uri",
    "is_valid_uri",
    "is_valid_urn",
    "is_valid_identifier",
    "normalize_language_tag",
    "sanitize_html_to_xhtml",
    "namespace_xhtml",
    "load_xhtml",
    "coerce_timestamp",
    "format_rfc3339",
    "format_rfc822",
    "FEED_TYPES",
    "ensure_non_empty_string",
    "ensure_uri",
    "ensure_identifier",
    "ensure_timestamp",
    "ensure_non_negative_int",
    "ensure_feed_type",
    "ensure_xml_text",
]
