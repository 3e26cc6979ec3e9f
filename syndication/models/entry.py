"""
Entry domain model.

Represents one syndication item, rendered as an RSS ``<item>`` or an Atom
``<entry>``. Every field is optional at assignment time; each dialect's
writer decides which ones are required.

Responsibility: Single feed item with validated, chainable setters
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, List, Optional

from pydantic import Field, field_validator

from ..exceptions import InvalidArgumentError
from ..utils.dates import now
from ..utils.validators import (
    ensure_non_empty_string,
    ensure_non_negative_int,
    ensure_timestamp,
    ensure_uri,
)
from .common import Author, Category, CommentFeedLink, Enclosure, SyndicationModel


class Entry(SyndicationModel):
    """
    Feed entry.

    Setters validate eagerly and return the entry so that calls can be
    chained; a rejected value raises InvalidArgumentError and leaves the
    entry unchanged.

    Example:
        entry = (
            Entry()
            .set_title("Item 1")
            .set_link("http://www.domain.com/blog/post/123")
            .set_date_created(1700000000)
        )
    """

    # MARK: - Text
    title: Optional[str] = Field(default=None, description="Entry title")
    description: Optional[str] = Field(
        default=None,
        description="Short summary (RSS description, Atom summary)"
    )
    content: Optional[str] = Field(
        default=None,
        description="Full HTML content, embedded as XHTML in Atom"
    )
    copyright: Optional[str] = Field(default=None)
    id: Optional[str] = Field(
        default=None,
        description="Identifier; derived from link at export when unset"
    )
    link: Optional[str] = Field(default=None, description="HTML page of the entry")
    encoding: str = Field(
        default="UTF-8",
        description="Character encoding, synchronised from the owning feed"
    )

    # MARK: - People and classification
    authors: List[Author] = Field(default_factory=list)
    categories: List[Category] = Field(default_factory=list)

    # MARK: - Dates
    date_created: Optional[datetime] = Field(default=None)
    date_modified: Optional[datetime] = Field(default=None)

    # MARK: - Comments and media
    comment_count: Optional[int] = Field(default=None, ge=0)
    comment_link: Optional[str] = Field(default=None)
    comment_feed_links: List[CommentFeedLink] = Field(default_factory=list)
    enclosure: Optional[Enclosure] = Field(default=None)

    @field_validator(
        "title", "description", "content", "copyright", "id", "encoding",
        mode="before"
    )
    @classmethod
    def validate_text(cls, v, info):
        if v is None and info.field_name != "encoding":
            return v
        return ensure_non_empty_string(v, info.field_name)

    @field_validator("link", "comment_link", mode="before")
    @classmethod
    def validate_link(cls, v, info):
        return v if v is None else ensure_uri(v, info.field_name)

    @field_validator("date_created", "date_modified", mode="before")
    @classmethod
    def validate_date(cls, v, info):
        return ensure_timestamp(v, info.field_name)

    @field_validator("comment_count", mode="before")
    @classmethod
    def validate_comment_count(cls, v):
        return v if v is None else ensure_non_negative_int(v, "count")

    # MARK: - Setters

    def set_encoding(self, encoding: str) -> "Entry":
        self.encoding = encoding
        return self

    def set_title(self, title: str) -> "Entry":
        self.title = title
        return self

    def set_description(self, description: str) -> "Entry":
        self.description = description
        return self

    def set_content(self, content: str) -> "Entry":
        self.content = content
        return self

    def set_copyright(self, copyright: str) -> "Entry":
        self.copyright = copyright
        return self

    def set_id(self, id: str) -> "Entry":
        """Set the entry identifier (any non-empty string; Atom checks it at export)."""
        self.id = id
        return self

    def set_link(self, link: str) -> "Entry":
        self.link = link
        return self

    def set_date_created(self, date: Any = None) -> "Entry":
        """
        Set the creation date.

        Args:
            date: datetime, date or UNIX timestamp; None means now
        """
        self.date_created = now() if date is None else date
        return self

    def set_date_modified(self, date: Any = None) -> "Entry":
        """
        Set the modification date.

        Args:
            date: datetime, date or UNIX timestamp; None means now
        """
        self.date_modified = now() if date is None else date
        return self

    def add_author(self, author: Any) -> "Entry":
        """
        Add an author.

        Args:
            author: Author or mapping with a required ``name`` and optional
                ``email`` and ``uri`` keys
        """
        self.authors.append(Author.coerce(author))
        return self

    def add_authors(self, authors: Iterable[Any]) -> "Entry":
        # Validate everything first so a bad author adds nothing
        self.authors.extend([Author.coerce(author) for author in authors])
        return self

    def add_category(self, category: Any) -> "Entry":
        """
        Add a category.

        Args:
            category: Category or mapping with a required ``term`` and optional
                ``scheme`` and ``label`` keys
        """
        self.categories.append(Category.coerce(category))
        return self

    def add_categories(self, categories: Iterable[Any]) -> "Entry":
        self.categories.extend([Category.coerce(category) for category in categories])
        return self

    def set_comment_count(self, count: Any) -> "Entry":
        self.comment_count = count
        return self

    def set_comment_link(self, link: str) -> "Entry":
        self.comment_link = link
        return self

    def set_comment_feed_link(self, link: Any) -> "Entry":
        """
        Add a link to a feed of comments on this entry.

        Args:
            link: CommentFeedLink or mapping with ``uri`` and ``type`` keys,
                type being one of "atom", "rss" or "rdf"
        """
        self.comment_feed_links.append(CommentFeedLink.coerce(link))
        return self

    def set_comment_feed_links(self, links: Iterable[Any]) -> "Entry":
        self.comment_feed_links.extend([CommentFeedLink.coerce(link) for link in links])
        return self

    def set_enclosure(self, enclosure: Any) -> "Entry":
        """
        Attach an enclosure.

        Args:
            enclosure: Enclosure or mapping with a required ``uri`` and the
                ``type`` and ``length`` keys RSS requires
        """
        self.enclosure = Enclosure.coerce(enclosure)
        return self

    def remove(self, name: str) -> "Entry":
        """Unset a single field, restoring its default."""
        field = type(self).model_fields.get(name)
        if field is None:
            raise InvalidArgumentError(f"Unknown entry field: {name}")

        setattr(self, name, field.get_default(call_default_factory=True))
        return self

    # MARK: - Derived values

    @property
    def effective_date(self) -> Optional[datetime]:
        """Modification date, falling back to the creation date"""
        return self.date_modified or self.date_created
