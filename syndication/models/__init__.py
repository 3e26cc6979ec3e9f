"""
Models Module
=============
Entity model for syndication feeds.

Exports:
    - Feed: Channel metadata plus owned entries
    - Entry: One syndication item
    - Author, Category, Generator, Image, Enclosure, CommentFeedLink: value types
"""

from .common import (
    Author,
    Category,
    CommentFeedLink,
    Enclosure,
    Generator,
    Image,
)
from .entry import Entry
from .feed import Feed

__all__ = [
    'Feed',
    'Entry',
    'Author',
    'Category',
    'CommentFeedLink',
    'Enclosure',
    'Generator',
    'Image',
]
