"""
Feed Writer Infrastructure
==========================
Base classes shared by the RSS 2.0 and Atom 1.0 writers.

A feed writer validates the feed level required elements, applies the
documented derivations, builds an lxml element tree and delegates each entry
to its entry writer. The tree is serialised only once rendering succeeded,
so a failed export never exposes a partial document.

Responsibility: Common rendering workflow and element helpers
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Dict, Optional, Type

from feedgen.util import xml_elem
from lxml import etree

from ..config import settings
from ..exceptions import FeedExportError
from ..models.common import Generator
from ..utils.xhtml import Sanitizer, sanitize_html_to_xhtml
from ..version import NAME, URI, VERSION

if TYPE_CHECKING:
    from ..models.entry import Entry
    from ..models.feed import Feed

logger = logging.getLogger(__name__)

ATOM_NAMESPACE = "http://www.w3.org/2005/Atom"
XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
THREAD_NAMESPACE = "http://purl.org/syndication/thread/1.0"

DEFAULT_GENERATOR = Generator(name=NAME, version=VERSION, uri=URI)


class FeedFormat(str, Enum):
    """Supported feed formats"""
    RSS = "rss"
    ATOM = "atom"


def feed_mime_type(kind: str) -> str:
    """Media type of a feed dialect, e.g. application/atom+xml"""
    return f"application/{kind.lower()}+xml"


def text_elem(parent: etree._Element, name: str, text: Optional[str] = None, **attrs: str) -> etree._Element:
    """Append a child element with optional text content and attributes."""
    element = xml_elem(name, parent)
    for key, value in attrs.items():
        element.set(key, value)
    if text is not None:
        element.text = text
    return element


class EntryWriter:
    """
    Renders one entry into its dialect's element.

    Subclasses implement ``render`` and set ``dialect``.
    """

    dialect: FeedFormat

    def __init__(self, entry: "Entry", sanitizer: Optional[Sanitizer] = sanitize_html_to_xhtml):
        self.entry = entry
        self.encoding = entry.encoding
        self.sanitizer = sanitizer

    def render(self, parent: etree._Element) -> etree._Element:
        raise NotImplementedError

    def fail(self, message: str, element: str) -> FeedExportError:
        """Build the error raised for an unmet entry requirement"""
        return FeedExportError(message, dialect=self.dialect.value, element=element)


class FeedWriter:
    """
    Renders a feed document.

    Subclasses implement ``build`` (returning the root element) and set
    ``dialect`` and ``entry_writer_class``.
    """

    dialect: FeedFormat
    entry_writer_class: Type[EntryWriter]

    def __init__(
        self,
        feed: "Feed",
        pretty_print: Optional[bool] = None,
        sanitize_content: Optional[bool] = None,
        default_generator: Generator = DEFAULT_GENERATOR
    ):
        """
        Initialize feed writer.

        Args:
            feed: Feed to render
            pretty_print: Indent output (defaults to settings.pretty_print)
            sanitize_content: Normalise entry HTML to XHTML (defaults to
                settings.sanitize_content)
            default_generator: Generator written when the feed has none
        """
        self.feed = feed
        self.pretty_print = settings.pretty_print if pretty_print is None else pretty_print
        if sanitize_content is None:
            sanitize_content = settings.sanitize_content
        self.sanitizer: Optional[Sanitizer] = sanitize_html_to_xhtml if sanitize_content else None
        self.default_generator = default_generator

    @property
    def encoding(self) -> str:
        return self.feed.encoding

    def build(self) -> etree._Element:
        raise NotImplementedError

    def render(self) -> str:
        """
        Render the feed.

        Returns:
            XML document with declaration

        Raises:
            FeedExportError: If a required element cannot be produced
        """
        logger.debug(
            "Rendering %s feed with %d entries",
            self.dialect.value, len(self.feed)
        )
        root = self.build()
        document = self.serialize(root)
        logger.info(
            "Rendered %s feed %r (%d entries, %d characters)",
            self.dialect.value, self.feed.title, len(self.feed), len(document)
        )
        return document

    def serialize(self, root: etree._Element) -> str:
        try:
            data = etree.tostring(
                root,
                pretty_print=self.pretty_print,
                xml_declaration=True,
                encoding=self.encoding,
            )
            return data.decode(self.encoding)
        except (LookupError, ValueError) as exc:
            raise FeedExportError(
                f"Cannot serialise feed using encoding {self.encoding!r}",
                dialect=self.dialect.value,
                element="encoding",
            ) from exc

    def render_entries(self, parent: etree._Element) -> None:
        for entry in self.feed.entries:
            self.entry_writer_class(entry, sanitizer=self.sanitizer).render(parent)

    def fail(self, message: str, element: str) -> FeedExportError:
        """Build the error raised for an unmet feed requirement"""
        return FeedExportError(message, dialect=self.dialect.value, element=element)

    # MARK: - Derivations shared by both dialects

    def resolve_date_modified(self) -> None:
        """Use the creation date as modification date when none is set."""
        if self.feed.date_created is not None and self.feed.date_modified is None:
            logger.debug("Deriving feed modification date from creation date")
            self.feed.date_modified = self.feed.date_created

    def resolve_generator(self) -> Generator:
        """Default the feed generator to the library itself."""
        if self.feed.generator is None:
            logger.debug("Defaulting feed generator to %s", self.default_generator.name)
            self.feed.generator = self.default_generator
        return self.feed.generator

    def self_link(self) -> str:
        """Self-referencing URI for the current dialect."""
        href = self.feed.feed_links.get(self.dialect.value)
        if not href:
            raise self.fail(
                f"{self.dialect.value.upper()} feeds must contain a link with a rel"
                ' attribute value of "self" pointing at the feed document,'
                f' but no "{self.dialect.value}" feed link has been set',
                "feed_links",
            )
        return href

    def __str__(self) -> str:
        return self.render()


WRITERS: Dict[FeedFormat, Type[FeedWriter]] = {}


def register_writer(writer_class: Type[FeedWriter]) -> Type[FeedWriter]:
    """Class decorator registering a feed writer for its dialect"""
    WRITERS[writer_class.dialect] = writer_class
    return writer_class
