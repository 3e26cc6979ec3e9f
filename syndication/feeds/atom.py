"""
Atom 1.0 Writers
================
Render a Feed as an Atom 1.0 ``<feed>`` document.

Required at feed level: title, updated (derived from the creation date when
unset), a self link and an id (derived from the link when unset).
Required per entry: title, updated, id (derived from the link) and either
content or an alternate link.
"""

from __future__ import annotations

import logging

from feedgen.util import xml_elem
from lxml import etree

from ..utils.dates import format_rfc3339
from ..utils.uri import is_valid_identifier
from ..utils.xhtml import load_xhtml
from .base import (
    ATOM_NAMESPACE,
    THREAD_NAMESPACE,
    XML_NAMESPACE,
    EntryWriter,
    FeedFormat,
    FeedWriter,
    feed_mime_type,
    register_writer,
    text_elem,
)

logger = logging.getLogger(__name__)


def _atom(tag: str) -> str:
    return f"{{{ATOM_NAMESPACE}}}{tag}"


def _render_author(parent: etree._Element, author) -> None:
    element = text_elem(parent, _atom("author"))
    text_elem(element, _atom("name"), author.name)
    if author.email:
        text_elem(element, _atom("email"), author.email)
    if author.uri:
        text_elem(element, _atom("uri"), author.uri)


def _render_category(parent: etree._Element, category) -> None:
    element = text_elem(
        parent,
        _atom("category"),
        term=category.term,
        label=category.label or category.term,
    )
    if category.scheme:
        element.set("scheme", category.scheme)


class AtomEntryWriter(EntryWriter):
    """Renders an Entry as an Atom ``<entry>``"""

    dialect = FeedFormat.ATOM

    def render(self, parent: etree._Element) -> etree._Element:
        element = text_elem(parent, _atom("entry"))

        self._set_title(element)
        self._set_description(element)
        self._set_date_created(element)
        self._set_date_modified(element)
        self._set_link(element)
        self._set_id(element)
        self._set_authors(element)
        self._set_enclosure(element)
        self._set_comments(element)
        self._set_content(element)
        self._set_categories(element)

        return element

    def _set_title(self, element: etree._Element) -> None:
        if not self.entry.title:
            raise self.fail(
                "Atom 1.0 entry elements MUST contain exactly one atom:title"
                " element but a title has not been set",
                "title",
            )
        text_elem(element, _atom("title"), self.entry.title, type="html")

    def _set_description(self, element: etree._Element) -> None:
        if not self.entry.description:
            return
        text_elem(element, _atom("summary"), self.entry.description, type="html")

    def _set_date_created(self, element: etree._Element) -> None:
        if self.entry.date_created is None:
            return
        text_elem(element, _atom("published"), format_rfc3339(self.entry.date_created))

    def _set_date_modified(self, element: etree._Element) -> None:
        if self.entry.date_modified is None and self.entry.date_created is not None:
            logger.debug("Deriving entry modification date from creation date")
            self.entry.date_modified = self.entry.date_created

        if self.entry.date_modified is None:
            raise self.fail(
                "Atom 1.0 entry elements MUST contain exactly one atom:updated"
                " element but a modification date has not been set",
                "date_modified",
            )
        text_elem(element, _atom("updated"), format_rfc3339(self.entry.date_modified))

    def _set_link(self, element: etree._Element) -> None:
        if not self.entry.link:
            return
        text_elem(
            element,
            _atom("link"),
            rel="alternate",
            type="text/html",
            href=self.entry.link,
        )

    def _set_id(self, element: etree._Element) -> None:
        if not self.entry.id and not self.entry.link:
            raise self.fail(
                "Atom 1.0 entry elements MUST contain exactly one atom:id element,"
                " or as an alternative, we can use the same value as atom:link"
                " however neither a suitable link nor an id have been set",
                "id",
            )

        if not self.entry.id:
            logger.debug("Deriving entry id from link %s", self.entry.link)
            self.entry.id = self.entry.link

        if not is_valid_identifier(self.entry.id):
            raise self.fail("Atom 1.0 IDs must be a valid URI/IRI", "id")

        text_elem(element, _atom("id"), self.entry.id)

    def _set_authors(self, element: etree._Element) -> None:
        # A missing entry author is not checked against the feed authors
        for author in self.entry.authors:
            _render_author(element, author)

    def _set_enclosure(self, element: etree._Element) -> None:
        enclosure = self.entry.enclosure
        if enclosure is None:
            return

        link = text_elem(element, _atom("link"), rel="enclosure")
        if enclosure.type:
            link.set("type", enclosure.type)
        if enclosure.length is not None:
            link.set("length", str(enclosure.length))
        link.set("href", enclosure.uri)

    def _set_comments(self, element: etree._Element) -> None:
        count = self.entry.comment_count

        if self.entry.comment_link:
            link = xml_elem(_atom("link"), element, nsmap={"thr": THREAD_NAMESPACE})
            link.set("rel", "replies")
            link.set("type", "text/html")
            link.set("href", self.entry.comment_link)
            if count is not None:
                link.set(f"{{{THREAD_NAMESPACE}}}count", str(count))
        elif count is not None:
            total = xml_elem(
                f"{{{THREAD_NAMESPACE}}}total",
                element,
                nsmap={"thr": THREAD_NAMESPACE},
            )
            total.text = str(count)

        for feed_link in self.entry.comment_feed_links:
            text_elem(
                element,
                _atom("link"),
                rel="replies",
                type=feed_mime_type(feed_link.type),
                href=feed_link.uri,
            )

    def _set_content(self, element: etree._Element) -> None:
        content = self.entry.content

        if not content and not self.entry.link:
            raise self.fail(
                "Atom 1.0 entry elements MUST contain exactly one atom:content"
                " element, or as an alternative, at least one link with a rel"
                ' attribute of "alternate" to indicate an alternate method to'
                " consume the content.",
                "content",
            )

        if not content:
            return

        try:
            xhtml = load_xhtml(content, self.encoding, self.sanitizer)
        except etree.XMLSyntaxError as exc:
            raise self.fail(
                f"Entry content could not be normalised to XHTML: {exc}",
                "content",
            ) from exc

        text_elem(element, _atom("content"), type="xhtml").append(xhtml)

    def _set_categories(self, element: etree._Element) -> None:
        for category in self.entry.categories:
            _render_category(element, category)


@register_writer
class AtomFeedWriter(FeedWriter):
    """Renders a Feed as an Atom 1.0 document"""

    dialect = FeedFormat.ATOM
    entry_writer_class = AtomEntryWriter

    def build(self) -> etree._Element:
        root = etree.Element(_atom("feed"), nsmap={None: ATOM_NAMESPACE})

        self._set_language(root)
        self._set_base_url(root)
        self._set_title(root)
        self._set_description(root)
        self._set_image(root)
        self._set_date_modified(root)
        self._set_generator(root)
        self._set_link(root)
        self._set_feed_links(root)
        self._set_id(root)
        self._set_authors(root)
        self._set_copyright(root)
        self._set_categories(root)
        self._set_hubs(root)

        self.render_entries(root)

        return root

    def _set_language(self, root: etree._Element) -> None:
        if self.feed.language:
            root.set(f"{{{XML_NAMESPACE}}}lang", self.feed.language)

    def _set_base_url(self, root: etree._Element) -> None:
        if self.feed.base_url:
            root.set(f"{{{XML_NAMESPACE}}}base", self.feed.base_url)

    def _set_title(self, root: etree._Element) -> None:
        if not self.feed.title:
            raise self.fail(
                "Atom 1.0 feed elements MUST contain exactly one atom:title"
                " element but a title has not been set",
                "title",
            )
        text_elem(root, _atom("title"), self.feed.title, type="text")

    def _set_description(self, root: etree._Element) -> None:
        if not self.feed.description:
            return
        text_elem(root, _atom("subtitle"), self.feed.description, type="text")

    def _set_image(self, root: etree._Element) -> None:
        if self.feed.image is None:
            return
        text_elem(root, _atom("logo"), self.feed.image.uri)

    def _set_date_modified(self, root: etree._Element) -> None:
        self.resolve_date_modified()

        if self.feed.date_modified is None:
            raise self.fail(
                "Atom 1.0 feed elements MUST contain exactly one atom:updated"
                " element but a modification date has not been set",
                "date_modified",
            )
        text_elem(root, _atom("updated"), format_rfc3339(self.feed.date_modified))

    def _set_generator(self, root: etree._Element) -> None:
        generator = self.resolve_generator()

        element = text_elem(root, _atom("generator"), generator.name)
        if generator.uri:
            element.set("uri", generator.uri)
        if generator.version:
            element.set("version", generator.version)

    def _set_link(self, root: etree._Element) -> None:
        if not self.feed.link:
            return
        text_elem(
            root,
            _atom("link"),
            rel="alternate",
            type="text/html",
            href=self.feed.link,
        )

    def _set_feed_links(self, root: etree._Element) -> None:
        href = self.self_link()
        text_elem(
            root,
            _atom("link"),
            rel="self",
            type=feed_mime_type(self.dialect.value),
            href=href,
        )

        # Other dialects are alternate representations of this feed
        for kind, other in self.feed.feed_links.items():
            if kind == self.dialect.value:
                continue
            text_elem(
                root,
                _atom("link"),
                rel="alternate",
                type=feed_mime_type(kind),
                href=other,
            )

    def _set_id(self, root: etree._Element) -> None:
        if not self.feed.id and not self.feed.link:
            raise self.fail(
                "Atom 1.0 feed elements MUST contain exactly one atom:id element,"
                " or as an alternative, we can use the same value as atom:link"
                " however neither a suitable link nor an id have been set",
                "id",
            )

        if not self.feed.id:
            logger.debug("Deriving feed id from link %s", self.feed.link)
            self.feed.id = self.feed.link

        if not is_valid_identifier(self.feed.id):
            raise self.fail("Atom 1.0 IDs must be a valid URI/IRI", "id")

        text_elem(root, _atom("id"), self.feed.id)

    def _set_authors(self, root: etree._Element) -> None:
        # Entries without an author are not cross-checked against these
        for author in self.feed.authors:
            _render_author(root, author)

    def _set_copyright(self, root: etree._Element) -> None:
        if not self.feed.copyright:
            return
        text_elem(root, _atom("rights"), self.feed.copyright)

    def _set_categories(self, root: etree._Element) -> None:
        for category in self.feed.categories:
            _render_category(root, category)

    def _set_hubs(self, root: etree._Element) -> None:
        for hub in self.feed.hubs:
            text_elem(root, _atom("link"), rel="hub", href=hub)
