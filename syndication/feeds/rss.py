"""
RSS 2.0 Writers
===============
Render a Feed as an RSS 2.0 ``<rss>`` document.

Required at channel level: title, description, link and a self link.
Required per item: a title or a description; enclosures need a type and a
positive length.
"""

from __future__ import annotations

import logging

from feedgen.util import xml_elem
from lxml import etree

from ..exceptions import InvalidArgumentError
from ..utils.dates import format_rfc822
from ..utils.uri import is_valid_uri
from ..utils.validators import ensure_non_negative_int
from .base import (
    ATOM_NAMESPACE,
    XML_NAMESPACE,
    EntryWriter,
    FeedFormat,
    FeedWriter,
    feed_mime_type,
    register_writer,
    text_elem,
)

logger = logging.getLogger(__name__)

RSS_DOCS = "http://www.rssboard.org/rss-specification"
SLASH_NAMESPACE = "http://purl.org/rss/1.0/modules/slash/"
WFW_NAMESPACE = "http://wellformedweb.org/CommentAPI/"

# Upper bounds for channel image dimensions
MAX_IMAGE_HEIGHT = 400
MAX_IMAGE_WIDTH = 144


def _render_category(parent: etree._Element, category) -> None:
    element = text_elem(parent, "category", category.term)
    if category.scheme:
        element.set("domain", category.scheme)


class RssEntryWriter(EntryWriter):
    """Renders an Entry as an RSS ``<item>``"""

    dialect = FeedFormat.RSS

    def render(self, parent: etree._Element) -> etree._Element:
        element = text_elem(parent, "item")

        self._set_title(element)
        self._set_description(element)
        self._set_date_modified(element)
        self._set_link(element)
        self._set_id(element)
        self._set_authors(element)
        self._set_enclosure(element)
        self._set_comment_link(element)
        self._set_comment_count(element)
        self._set_comment_feed_links(element)
        self._set_categories(element)

        return element

    def _require_title_or_description(self, element_name: str) -> None:
        if not self.entry.title and not self.entry.description:
            raise self.fail(
                "RSS 2.0 entry elements SHOULD contain exactly one title element"
                " or one description element, but neither a title nor a"
                " description has been set",
                element_name,
            )

    def _set_title(self, element: etree._Element) -> None:
        self._require_title_or_description("title")
        if self.entry.title:
            text_elem(element, "title", self.entry.title)

    def _set_description(self, element: etree._Element) -> None:
        self._require_title_or_description("description")
        if self.entry.description:
            text_elem(element, "description", self.entry.description)

    def _set_date_modified(self, element: etree._Element) -> None:
        if self.entry.date_modified is None and self.entry.date_created is not None:
            logger.debug("Deriving item modification date from creation date")
            self.entry.date_modified = self.entry.date_created

        if self.entry.date_modified is None:
            return
        text_elem(element, "pubDate", format_rfc822(self.entry.date_modified))

    def _set_link(self, element: etree._Element) -> None:
        if self.entry.link:
            text_elem(element, "link", self.entry.link)

    def _set_id(self, element: etree._Element) -> None:
        if not self.entry.id and not self.entry.link:
            return

        if not self.entry.id:
            logger.debug("Deriving item guid from link %s", self.entry.link)
            self.entry.id = self.entry.link

        guid = text_elem(element, "guid", self.entry.id)
        if not is_valid_uri(self.entry.id):
            guid.set("isPermaLink", "false")

    def _set_authors(self, element: etree._Element) -> None:
        for author in self.entry.authors:
            text_elem(element, "author", author.rss_value())

    def _set_enclosure(self, element: etree._Element) -> None:
        enclosure = self.entry.enclosure
        if enclosure is None:
            return

        if not enclosure.type:
            raise self.fail('Enclosure "type" is not set', "enclosure")

        if enclosure.length is None:
            raise self.fail('Enclosure "length" is not set', "enclosure")

        try:
            length = ensure_non_negative_int(enclosure.length, "length")
        except InvalidArgumentError:
            length = 0

        if length <= 0:
            raise self.fail(
                'Enclosure "length" must be an integer indicating the'
                " content's length in bytes",
                "enclosure",
            )

        text_elem(
            element,
            "enclosure",
            type=enclosure.type,
            length=str(length),
            url=enclosure.uri,
        )

    def _set_comment_link(self, element: etree._Element) -> None:
        if self.entry.comment_link:
            text_elem(element, "comments", self.entry.comment_link)

    def _set_comment_count(self, element: etree._Element) -> None:
        if self.entry.comment_count is None:
            return
        count = xml_elem(
            f"{{{SLASH_NAMESPACE}}}comments",
            element,
            nsmap={"slash": SLASH_NAMESPACE},
        )
        count.text = str(self.entry.comment_count)

    def _set_comment_feed_links(self, element: etree._Element) -> None:
        # wfw:commentRss only carries RSS comment feeds
        for feed_link in self.entry.comment_feed_links:
            if feed_link.type != FeedFormat.RSS.value:
                continue
            link = xml_elem(
                f"{{{WFW_NAMESPACE}}}commentRss",
                element,
                nsmap={"wfw": WFW_NAMESPACE},
            )
            link.text = feed_link.uri

    def _set_categories(self, element: etree._Element) -> None:
        for category in self.entry.categories:
            _render_category(element, category)


@register_writer
class RssFeedWriter(FeedWriter):
    """Renders a Feed as an RSS 2.0 document"""

    dialect = FeedFormat.RSS
    entry_writer_class = RssEntryWriter

    def build(self) -> etree._Element:
        root = etree.Element("rss", nsmap={"atom": ATOM_NAMESPACE})
        root.set("version", "2.0")
        channel = text_elem(root, "channel")

        self._set_base_url(channel)
        self._set_title(channel)
        self._set_description(channel)
        self._set_language(channel)
        self._set_image(channel)
        self._set_date_modified(channel)
        self._set_last_build_date(channel)
        self._set_generator(channel)
        text_elem(channel, "docs", RSS_DOCS)
        self._set_link(channel)
        self._set_feed_links(channel)
        self._set_authors(channel)
        self._set_copyright(channel)
        self._set_categories(channel)

        self.render_entries(channel)

        return root

    def _set_base_url(self, channel: etree._Element) -> None:
        if self.feed.base_url:
            channel.set(f"{{{XML_NAMESPACE}}}base", self.feed.base_url)

    def _set_title(self, channel: etree._Element) -> None:
        if not self.feed.title:
            raise self.fail(
                "RSS 2.0 feed elements MUST contain exactly one title element"
                " but a title has not been set",
                "title",
            )
        text_elem(channel, "title", self.feed.title)

    def _set_description(self, channel: etree._Element) -> None:
        if not self.feed.description:
            raise self.fail(
                "RSS 2.0 feed elements MUST contain exactly one description"
                " element but one has not been set",
                "description",
            )
        text_elem(channel, "description", self.feed.description)

    def _set_language(self, channel: etree._Element) -> None:
        if self.feed.language:
            text_elem(channel, "language", self.feed.language)

    def _set_image(self, channel: etree._Element) -> None:
        image = self.feed.image
        if image is None:
            return

        if not isinstance(image.title, str) or not image.title:
            raise self.fail("RSS 2.0 feed images must include a title", "image")

        if not image.link or not is_valid_uri(image.link):
            raise self.fail(
                "Invalid parameter: parameter 'link' must be a non-empty string"
                " and valid URI/IRI",
                "image",
            )

        element = text_elem(channel, "image")
        text_elem(element, "url", image.uri)
        text_elem(element, "title", image.title)
        text_elem(element, "link", image.link)

        if image.height is not None:
            height = self._image_dimension(image.height, "height", MAX_IMAGE_HEIGHT)
            text_elem(element, "height", str(height))

        if image.width is not None:
            width = self._image_dimension(image.width, "width", MAX_IMAGE_WIDTH)
            text_elem(element, "width", str(width))

        if image.description is not None:
            if not image.description:
                raise self.fail(
                    "Invalid parameter: parameter 'description' must be a"
                    " non-empty string",
                    "image",
                )
            text_elem(element, "description", image.description)

    def _image_dimension(self, value, name: str, maximum: int) -> int:
        try:
            number = ensure_non_negative_int(value, name)
        except InvalidArgumentError as exc:
            raise self.fail(
                f"Invalid parameter: parameter '{name}' must be an integer not"
                f" exceeding {maximum}",
                "image",
            ) from exc

        if number > maximum:
            raise self.fail(
                f"Invalid parameter: parameter '{name}' must be an integer not"
                f" exceeding {maximum}",
                "image",
            )
        return number

    def _set_date_modified(self, channel: etree._Element) -> None:
        self.resolve_date_modified()

        if self.feed.date_modified is None:
            return
        text_elem(channel, "pubDate", format_rfc822(self.feed.date_modified))

    def _set_last_build_date(self, channel: etree._Element) -> None:
        if self.feed.last_build_date is None:
            return
        text_elem(channel, "lastBuildDate", format_rfc822(self.feed.last_build_date))

    def _set_generator(self, channel: etree._Element) -> None:
        generator = self.resolve_generator()
        text_elem(channel, "generator", generator.rss_value())

    def _set_link(self, channel: etree._Element) -> None:
        if not self.feed.link:
            raise self.fail(
                "RSS 2.0 feed elements MUST contain exactly one link element but"
                " one has not been set",
                "link",
            )

        link = text_elem(channel, "link", self.feed.link)
        if not is_valid_uri(self.feed.link):
            link.set("isPermaLink", "false")

    def _set_feed_links(self, channel: etree._Element) -> None:
        href = self.self_link()
        text_elem(
            channel,
            f"{{{ATOM_NAMESPACE}}}link",
            rel="self",
            type=feed_mime_type(self.dialect.value),
            href=href,
        )

        for kind, other in self.feed.feed_links.items():
            if kind == self.dialect.value:
                continue
            text_elem(
                channel,
                f"{{{ATOM_NAMESPACE}}}link",
                rel="alternate",
                type=feed_mime_type(kind),
                href=other,
            )

    def _set_authors(self, channel: etree._Element) -> None:
        # RSS channels carry a single managingEditor, which must be an email
        for author in self.feed.authors:
            if author.email:
                text_elem(channel, "managingEditor", author.rss_value())
                return
        if self.feed.authors:
            logger.debug("No feed author has an email; managingEditor omitted")

    def _set_copyright(self, channel: etree._Element) -> None:
        if self.feed.copyright:
            text_elem(channel, "copyright", self.feed.copyright)

    def _set_categories(self, channel: etree._Element) -> None:
        for category in self.feed.categories:
            _render_category(channel, category)
