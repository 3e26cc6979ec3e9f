"""
Syndication
===========
Build an in-memory feed and export it as RSS 2.0 or Atom 1.0.

Example:
    from syndication import Entry, Feed

    feed = (
        Feed()
        .set_title("Test")
        .set_link("http://www.domain.com/")
        .set_feed_link("http://www.domain.com/atom", "atom")
        .set_feed_link("http://www.domain.com/rss", "rss")
        .set_description("bla bla bla")
        .set_date_created()
    )
    feed.add_entry(
        Entry()
        .set_title("Item 1")
        .set_content("<p>bla bla</p>")
        .set_link("http://www.domain.com/blog/post/123")
        .set_date_created()
    )
    atom_xml = feed.export("atom")
    rss_xml = feed.export("rss")
"""

from .exceptions import FeedExportError, InvalidArgumentError, SyndicationError
from .models import (
    Author,
    Category,
    CommentFeedLink,
    Enclosure,
    Entry,
    Feed,
    Generator,
    Image,
)
from .feeds import (
    AtomEntryWriter,
    AtomFeedWriter,
    FeedFormat,
    RssEntryWriter,
    RssFeedWriter,
)
from .utils.tag_uri import is_valid_tag_uri
from .version import NAME, VERSION

__version__ = VERSION

__all__ = [
    'Feed',
    'Entry',
    'Author',
    'Category',
    'CommentFeedLink',
    'Enclosure',
    'Generator',
    'Image',
    'FeedFormat',
    'AtomFeedWriter',
    'AtomEntryWriter',
    'RssFeedWriter',
    'RssEntryWriter',
    'is_valid_tag_uri',
    'SyndicationError',
    'InvalidArgumentError',
    'FeedExportError',
    'NAME',
    'VERSION',
]
