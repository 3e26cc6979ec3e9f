"""
HTML to XHTML normalisation for Atom content.

Atom entries embed their content as inline XHTML. Content is cleaned into
well-formed markup with BeautifulSoup, every element is moved into the
``xhtml:`` prefix and the result is wrapped in a namespaced ``div``.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Optional

from bs4 import BeautifulSoup, Doctype
from lxml import etree

logger = logging.getLogger(__name__)

XHTML_NAMESPACE = "http://www.w3.org/1999/xhtml"

Sanitizer = Callable[[str, str], str]

# Opening or closing tag names that do not already carry a prefix
_TAG_NAME = re.compile(r"(</?)(?![a-zA-Z][\w.-]*:)([a-zA-Z]+)")

# Elements whose raw text cannot be carried through as XML character data
_DROPPED_ELEMENTS = ("script", "style")

_PARSER = etree.XMLParser(resolve_entities=False, no_network=True)


def sanitize_html_to_xhtml(content: str, encoding: str = "UTF-8") -> str:
    """
    Repair an HTML fragment into well-formed XHTML markup.

    Unclosed elements are closed, void elements are self-closed, named
    entities are decoded and bare ampersands escaped. When a complete
    document is given only the body is kept.

    Args:
        content: HTML fragment or document
        encoding: Character encoding of the owning feed

    Returns:
        Body-only XHTML markup
    """
    logger.debug("Sanitizing %d characters of %s content", len(content), encoding)
    soup = BeautifulSoup(content, "html.parser")

    for node in soup.find_all(string=lambda text: isinstance(text, Doctype)):
        node.extract()

    for name in _DROPPED_ELEMENTS:
        for element in soup.find_all(name):
            element.decompose()

    root = soup.body if soup.body is not None else soup
    return root.decode_contents(formatter="minimal")


def namespace_xhtml(markup: str) -> str:
    """Rewrite every unprefixed tag into the ``xhtml:`` prefix."""
    return _TAG_NAME.sub(r"\1xhtml:\2", markup)


def load_xhtml(
    content: str,
    encoding: str = "UTF-8",
    sanitizer: Optional[Sanitizer] = sanitize_html_to_xhtml
) -> etree._Element:
    """
    Build the ``xhtml:div`` element embedded in Atom content.

    Args:
        content: Entry content, treated as HTML
        encoding: Character encoding of the owning feed
        sanitizer: HTML repair step; None passes the content through as is

    Returns:
        Parsed ``xhtml:div`` element

    Raises:
        lxml.etree.XMLSyntaxError: If the markup is not well-formed
    """
    xhtml = sanitizer(content, encoding) if sanitizer is not None else content
    xhtml = namespace_xhtml(xhtml)

    wrapped = f'<xhtml:div xmlns:xhtml="{XHTML_NAMESPACE}">{xhtml.rstrip()}</xhtml:div>'
    return etree.fromstring(wrapped, _PARSER)
