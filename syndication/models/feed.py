"""
Feed domain model.

Channel level metadata plus the ordered collection of entries it owns.
The feed is exported to RSS 2.0 or Atom 1.0 through the writers in
``syndication.feeds``.

Responsibility: Feed container with validated, chainable setters and export
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Tuple, Union

from pydantic import Field, PrivateAttr, field_validator

from ..config import settings
from ..exceptions import InvalidArgumentError
from ..utils.dates import now
from ..utils.locale import normalize_language_tag
from ..utils.validators import (
    ensure_feed_type,
    ensure_identifier,
    ensure_non_empty_string,
    ensure_timestamp,
    ensure_uri,
)
from .common import Author, Category, Generator, Image, SyndicationModel
from .entry import Entry

if TYPE_CHECKING:
    from ..feeds import FeedFormat

logger = logging.getLogger(__name__)


def _default_encoding() -> str:
    return settings.default_encoding


class Feed(SyndicationModel):
    """
    Syndication feed.

    Setters validate eagerly and return the feed so that calls can be
    chained; a rejected value raises InvalidArgumentError and leaves the
    feed unchanged.

    Example:
        feed = (
            Feed()
            .set_title("Test")
            .set_link("http://www.domain.com/")
            .set_feed_link("http://www.domain.com/atom", "atom")
            .set_description("bla bla bla")
            .set_date_created()
        )
        feed.add_entry(Entry().set_title("Item 1").set_link("http://www.domain.com/1"))
        xml = feed.export("atom")
    """

    # MARK: - Text
    title: Optional[str] = Field(default=None, description="Feed title")
    description: Optional[str] = Field(
        default=None,
        description="RSS description, Atom subtitle"
    )
    copyright: Optional[str] = Field(default=None)
    language: Optional[str] = Field(
        default=None,
        description="Primary language subtag (e.g. 'fr')"
    )
    encoding: str = Field(default_factory=_default_encoding)

    # MARK: - Links and identity
    base_url: Optional[str] = Field(default=None)
    link: Optional[str] = Field(default=None, description="Human readable page")
    feed_links: Dict[str, str] = Field(
        default_factory=dict,
        description="Self-referencing feed URIs keyed by dialect (rss, rdf, atom)"
    )
    id: Optional[str] = Field(
        default=None,
        description="URI, URN or RFC 4151 tag URI; derived from link when unset"
    )
    hubs: List[str] = Field(default_factory=list, description="PubSubHubbub hubs")

    # MARK: - People, classification and branding
    authors: List[Author] = Field(default_factory=list)
    categories: List[Category] = Field(default_factory=list)
    generator: Optional[Generator] = Field(default=None)
    image: Optional[Image] = Field(default=None)

    # MARK: - Dates
    date_created: Optional[datetime] = Field(default=None)
    date_modified: Optional[datetime] = Field(default=None)
    last_build_date: Optional[datetime] = Field(
        default=None,
        description="RSS lastBuildDate, ignored by Atom"
    )

    _entries: List[Entry] = PrivateAttr(default_factory=list)
    _type: Optional[str] = PrivateAttr(default=None)

    @field_validator("title", "description", "copyright", "language", "encoding", mode="before")
    @classmethod
    def validate_text(cls, v, info):
        if v is None and info.field_name != "encoding":
            return v
        return ensure_non_empty_string(v, info.field_name)

    @field_validator("base_url", "link", mode="before")
    @classmethod
    def validate_link(cls, v, info):
        return v if v is None else ensure_uri(v, info.field_name)

    @field_validator("id", mode="before")
    @classmethod
    def validate_id(cls, v):
        return v if v is None else ensure_identifier(v)

    @field_validator("feed_links", mode="before")
    @classmethod
    def validate_feed_links(cls, v):
        if not isinstance(v, dict):
            raise InvalidArgumentError('Invalid parameter: "feed_links" must be a mapping')
        return {ensure_feed_type(kind): ensure_uri(href, "link") for kind, href in v.items()}

    @field_validator("hubs", mode="before")
    @classmethod
    def validate_hubs(cls, v):
        return [ensure_uri(url, "url") for url in v]

    @field_validator("date_created", "date_modified", "last_build_date", mode="before")
    @classmethod
    def validate_date(cls, v, info):
        return ensure_timestamp(v, info.field_name)

    # MARK: - Setters

    def set_title(self, title: str) -> "Feed":
        self.title = title
        return self

    def set_description(self, description: str) -> "Feed":
        self.description = description
        return self

    def set_copyright(self, copyright: str) -> "Feed":
        self.copyright = copyright
        return self

    def set_encoding(self, encoding: str) -> "Feed":
        self.encoding = encoding
        return self

    def set_language(self, language: str) -> "Feed":
        """
        Set the feed language.

        Tags longer than two characters are reduced to their primary
        language subtag ("fr-FR" becomes "fr"). A tag that cannot be parsed
        leaves the language unchanged.
        """
        ensure_non_empty_string(language, "language")

        normalized = normalize_language_tag(language)
        if normalized is None:
            logger.debug("Ignoring unparseable language tag %r", language)
            return self

        self.language = normalized
        return self

    def set_base_url(self, url: str) -> "Feed":
        self.base_url = url
        return self

    def set_link(self, link: str) -> "Feed":
        self.link = link
        return self

    def set_feed_link(self, link: str, type: str) -> "Feed":
        """
        Set the self-referencing URI of the feed for one dialect.

        Args:
            link: Feed URI
            type: Dialect the link points to: "rss", "rdf" or "atom"
        """
        ensure_uri(link, "link")
        kind = ensure_feed_type(type)
        self.feed_links[kind] = link
        return self

    def set_id(self, id: str) -> "Feed":
        """Set the feed identifier: a URI/IRI, a URN or an RFC 4151 tag URI."""
        self.id = id
        return self

    def add_hub(self, url: str) -> "Feed":
        self.hubs.append(ensure_uri(url, "url"))
        return self

    def add_hubs(self, urls: Iterable[str]) -> "Feed":
        self.hubs.extend([ensure_uri(url, "url") for url in urls])
        return self

    def add_author(self, author: Any) -> "Feed":
        """
        Add an author.

        Args:
            author: Author or mapping with a required ``name`` and optional
                ``email`` and ``uri`` keys
        """
        self.authors.append(Author.coerce(author))
        return self

    def add_authors(self, authors: Iterable[Any]) -> "Feed":
        self.authors.extend([Author.coerce(author) for author in authors])
        return self

    def add_category(self, category: Any) -> "Feed":
        self.categories.append(Category.coerce(category))
        return self

    def add_categories(self, categories: Iterable[Any]) -> "Feed":
        self.categories.extend([Category.coerce(category) for category in categories])
        return self

    def set_generator(
        self,
        name: Any,
        version: Optional[str] = None,
        uri: Optional[str] = None
    ) -> "Feed":
        """
        Set the feed generator.

        Args:
            name: Generator name, or a Generator / mapping holding all fields
            version: Optional version string
            uri: Optional home page URI
        """
        if isinstance(name, (Generator, dict)):
            self.generator = Generator.coerce(name)
            return self

        data: Dict[str, Any] = {"name": name}
        if version is not None:
            data["version"] = version
        if uri is not None:
            data["uri"] = uri

        self.generator = Generator(**data)
        return self

    def set_image(self, image: Any) -> "Feed":
        """
        Set the feed image.

        Args:
            image: Image or mapping with a required ``uri``; RSS also needs
                ``title`` and ``link`` and accepts ``width``, ``height`` and
                ``description``
        """
        self.image = Image.coerce(image)
        return self

    def set_date_created(self, date: Any = None) -> "Feed":
        """Set the creation date (datetime, date or UNIX timestamp; None means now)."""
        self.date_created = now() if date is None else date
        return self

    def set_date_modified(self, date: Any = None) -> "Feed":
        """Set the modification date (datetime, date or UNIX timestamp; None means now)."""
        self.date_modified = now() if date is None else date
        return self

    def set_last_build_date(self, date: Any = None) -> "Feed":
        """Set the RSS last build date (datetime, date or UNIX timestamp; None means now)."""
        self.last_build_date = now() if date is None else date
        return self

    def remove(self, name: str) -> "Feed":
        """Unset a single field, restoring its default."""
        field = type(self).model_fields.get(name)
        if field is None:
            raise InvalidArgumentError(f"Unknown feed field: {name}")

        setattr(self, name, field.get_default(call_default_factory=True))
        return self

    def reset(self) -> None:
        """Clear all feed level data. Entries are kept."""
        for name in type(self).model_fields:
            self.remove(name)

    # MARK: - Entries

    @property
    def entries(self) -> Tuple[Entry, ...]:
        """Read-only view of the entries in their current order"""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> Entry:
        return self.get_entry(index)

    def create_entry(self) -> Entry:
        """Return a new entry using this feed's encoding (not yet added)."""
        return Entry(encoding=self.encoding)

    def add_entry(self, entry: Entry) -> "Feed":
        """
        Append an entry. The feed takes ownership and the entry's encoding is
        synchronised with the feed's.
        """
        if not isinstance(entry, Entry):
            raise InvalidArgumentError("Invalid parameter: entry must be an Entry instance")

        entry.set_encoding(self.encoding)
        self._entries.append(entry)
        return self

    def _check_index(self, index: int) -> int:
        # Only positions 0..len-1 exist; negative indexes are not wrapped
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._entries):
            raise InvalidArgumentError(f"Undefined index: {index}. Entry does not exist.")
        return index

    def get_entry(self, index: int = 0) -> Entry:
        return self._entries[self._check_index(index)]

    def remove_entry(self, index: int) -> "Feed":
        del self._entries[self._check_index(index)]
        return self

    def order_by_date(self, keep_duplicates: bool = False) -> "Feed":
        """
        Order entries newest first by modification date, falling back to the
        creation date and then to the current time.

        By default entries are keyed by their whole-second timestamp, so
        entries sharing a timestamp collapse to the last one added. Pass
        ``keep_duplicates=True`` for a stable sort that keeps every entry.
        """
        fallback = now()

        def timestamp(entry: Entry) -> int:
            return int((entry.effective_date or fallback).timestamp())

        if keep_duplicates:
            self._entries.sort(key=timestamp, reverse=True)
            return self

        by_timestamp: Dict[int, Entry] = {}
        for entry in self._entries:
            by_timestamp[timestamp(entry)] = entry

        dropped = len(self._entries) - len(by_timestamp)
        if dropped:
            logger.warning(
                "order_by_date dropped %d entries sharing a timestamp with another entry",
                dropped
            )

        self._entries[:] = [by_timestamp[key] for key in sorted(by_timestamp, reverse=True)]
        return self

    # MARK: - Export

    @property
    def type(self) -> Optional[str]:
        """Dialect of the current or last export ("rss" or "atom")"""
        return self._type

    def export(self, type: Union[str, FeedFormat], **options: Any) -> str:
        """
        Render the feed.

        Args:
            type: "rss" or "atom"
            **options: Writer options (pretty_print, sanitize_content,
                default_generator)

        Returns:
            XML document

        Raises:
            InvalidArgumentError: For an unsupported dialect
            FeedExportError: When a required element cannot be produced
        """
        from ..feeds import get_writer_class

        writer_class = get_writer_class(type)
        self._type = writer_class.dialect.value
        return writer_class(self, **options).render()
