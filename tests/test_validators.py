from datetime import date, datetime, timezone

import pytest
from lxml import etree

from syndication.exceptions import InvalidArgumentError
from syndication.utils.dates import coerce_timestamp, format_rfc3339, format_rfc822
from syndication.utils.locale import normalize_language_tag
from syndication.utils.uri import is_valid_identifier, is_valid_uri, is_valid_urn
from syndication.utils.validators import (
    ensure_feed_type,
    ensure_non_empty_string,
    ensure_non_negative_int,
    ensure_timestamp,
    ensure_uri,
)
from syndication.utils.xhtml import XHTML_NAMESPACE, load_xhtml, namespace_xhtml, sanitize_html_to_xhtml

T = 1700000000


def test_is_valid_uri() -> None:
    assert is_valid_uri("http://www.domain.com/")
    assert is_valid_uri("https://www.domain.com/blog/post/123?ref=feed")
    assert not is_valid_uri("not a uri")
    assert not is_valid_uri("")
    assert not is_valid_uri(" http://www.domain.com/")
    assert not is_valid_uri(None)


def test_identifier_accepts_uri_urn_and_tag() -> None:
    assert is_valid_urn("urn:uuid:60a76c80-d399-11d9-b93C-0003939e0af6")
    assert is_valid_identifier("http://www.domain.com/")
    assert is_valid_identifier("urn:uuid:60a76c80-d399-11d9-b93C-0003939e0af6")
    assert is_valid_identifier("tag:example.com,2001:abc")
    assert not is_valid_identifier("not an id")
    assert not is_valid_identifier("")


def test_ensure_non_empty_string() -> None:
    assert ensure_non_empty_string("abc", "title") == "abc"

    with pytest.raises(InvalidArgumentError, match='"title" must be a non-empty string'):
        ensure_non_empty_string("", "title")

    with pytest.raises(InvalidArgumentError):
        ensure_non_empty_string(42, "title")


def test_ensure_uri() -> None:
    assert ensure_uri("http://www.domain.com/", "link") == "http://www.domain.com/"

    with pytest.raises(InvalidArgumentError, match="valid URI/IRI"):
        ensure_uri("www domain com", "link")


def test_ensure_timestamp() -> None:
    expected = datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)

    assert ensure_timestamp(T) == expected
    assert ensure_timestamp(expected.replace(tzinfo=None)) == expected
    assert ensure_timestamp(date(2023, 11, 14)) == datetime(2023, 11, 14, tzinfo=timezone.utc)
    assert ensure_timestamp(None) is None

    for value in ("2023-11-14", 1.5, True):
        with pytest.raises(InvalidArgumentError, match="DateTime object or UNIX timestamp"):
            ensure_timestamp(value, "date_created")


def test_coerce_timestamp_keeps_timezone() -> None:
    value = datetime(2023, 1, 1, tzinfo=timezone.utc)

    assert coerce_timestamp(value) is value


def test_ensure_non_negative_int() -> None:
    assert ensure_non_negative_int(0) == 0
    assert ensure_non_negative_int(12) == 12
    assert ensure_non_negative_int("12") == 12
    assert ensure_non_negative_int(3.0) == 3

    for value in (-1, "-1", "abc", 2.5, True, None):
        with pytest.raises(InvalidArgumentError):
            ensure_non_negative_int(value)


def test_ensure_feed_type() -> None:
    assert ensure_feed_type("ATOM") == "atom"
    assert ensure_feed_type("rdf") == "rdf"

    with pytest.raises(InvalidArgumentError, match="rss, rdf, atom"):
        ensure_feed_type("json")


def test_normalize_language_tag() -> None:
    assert normalize_language_tag("fr-FR") == "fr"
    assert normalize_language_tag("en_US") == "en"
    assert normalize_language_tag("DE") == "de"
    assert normalize_language_tag("zh-Hant-TW") == "zh"
    assert normalize_language_tag("1234") is None


def test_date_formats() -> None:
    value = coerce_timestamp(T)

    assert format_rfc3339(value) == "2023-11-14T22:13:20+00:00"
    assert format_rfc3339(value.replace(microsecond=123456)) == "2023-11-14T22:13:20+00:00"
    assert format_rfc822(value) == "Tue, 14 Nov 2023 22:13:20 +0000"


def test_sanitize_html_closes_and_strips() -> None:
    markup = sanitize_html_to_xhtml("<p>bla<br>bla<script>alert(1)</script>")

    assert "<br/>" in markup
    assert "script" not in markup
    assert markup.endswith("</p>")


def test_sanitize_html_keeps_only_body() -> None:
    document = "<!DOCTYPE html><html><head><title>x</title></head><body><p>Body</p></body></html>"

    assert sanitize_html_to_xhtml(document) == "<p>Body</p>"


def test_namespace_xhtml_rewrites_unprefixed_tags() -> None:
    assert namespace_xhtml("<p>a<br/></p>") == "<xhtml:p>a<xhtml:br/></xhtml:p>"
    assert namespace_xhtml("<svg:rect/>") == "<svg:rect/>"


def test_load_xhtml_wraps_content_in_div() -> None:
    div = load_xhtml("<p>One &amp; <b>two</b></p>")

    assert div.tag == f"{{{XHTML_NAMESPACE}}}div"
    paragraph = div.find(f"{{{XHTML_NAMESPACE}}}p")
    assert paragraph is not None
    assert paragraph.find(f"{{{XHTML_NAMESPACE}}}b").text == "two"


def test_load_xhtml_without_sanitizer_rejects_broken_markup() -> None:
    with pytest.raises(etree.XMLSyntaxError):
        load_xhtml("<p>unclosed", sanitizer=None)


def test_strings_must_be_xml_compatible() -> None:
    assert ensure_non_empty_string("tab\tand newline\n", "title") == "tab\tand newline\n"

    for value in ("a\x0bb", "null\x00byte", "escape\x1b"):
        with pytest.raises(InvalidArgumentError, match="not allowed in XML"):
            ensure_non_empty_string(value, "title")
