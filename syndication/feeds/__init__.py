"""
Feeds Module
============
RSS 2.0 and Atom 1.0 writers for syndication feeds.

Exports:
    - FeedFormat: RSS/Atom format enum
    - FeedWriter, EntryWriter: Writer base classes
    - AtomFeedWriter, AtomEntryWriter: Atom 1.0 writers
    - RssFeedWriter, RssEntryWriter: RSS 2.0 writers
    - DEFAULT_GENERATOR: Generator written when a feed sets none
    - get_writer_class: Writer lookup by dialect name
"""

from typing import Type, Union

from ..exceptions import InvalidArgumentError
from .base import (
    DEFAULT_GENERATOR,
    WRITERS,
    EntryWriter,
    FeedFormat,
    FeedWriter,
)
from .atom import AtomEntryWriter, AtomFeedWriter
from .rss import RssEntryWriter, RssFeedWriter


def get_writer_class(dialect: Union[str, FeedFormat]) -> Type[FeedWriter]:
    """
    Get the feed writer for a dialect.

    Args:
        dialect: "rss", "atom" (case-insensitive) or a FeedFormat

    Raises:
        InvalidArgumentError: For an unsupported dialect
    """
    name = dialect.value if isinstance(dialect, FeedFormat) else str(dialect).lower()
    try:
        return WRITERS[FeedFormat(name)]
    except (ValueError, KeyError) as exc:
        raise InvalidArgumentError(f"Unsupported feed format: {dialect!r}") from exc


__all__ = [
    # Base classes
    'FeedFormat',
    'FeedWriter',
    'EntryWriter',
    'DEFAULT_GENERATOR',
    'get_writer_class',

    # Atom 1.0
    'AtomFeedWriter',
    'AtomEntryWriter',

    # RSS 2.0
    'RssFeedWriter',
    'RssEntryWriter',
]
