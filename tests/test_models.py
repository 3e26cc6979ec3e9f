from datetime import datetime, timezone

import pytest

from syndication import Author, Category, Entry, Feed, Generator, InvalidArgumentError

T = 1700000000


def _make_entry(title: str, timestamp: int) -> Entry:
    """Helper to create a dated entry for ordering tests."""
    return Entry().set_title(title).set_date_modified(timestamp)


def test_entry_setters_chain_and_validate() -> None:
    entry = (
        Entry()
        .set_title("Item 1")
        .set_description("bla bla")
        .set_content("<p>bla bla</p>")
        .set_link("http://www.domain.com/blog/post/123")
        .set_date_created(T)
    )

    assert entry.title == "Item 1"
    assert entry.link == "http://www.domain.com/blog/post/123"
    assert entry.date_created == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)


def test_rejected_value_leaves_entry_unchanged() -> None:
    entry = Entry().set_title("Item 1").set_link("http://www.domain.com/")

    with pytest.raises(InvalidArgumentError):
        entry.set_title("")
    with pytest.raises(InvalidArgumentError):
        entry.set_link("not a uri")
    with pytest.raises(InvalidArgumentError):
        entry.set_date_created("yesterday")

    assert entry.title == "Item 1"
    assert entry.link == "http://www.domain.com/"
    assert entry.date_created is None


def test_direct_assignment_is_validated() -> None:
    entry = Entry()

    with pytest.raises(InvalidArgumentError):
        entry.comment_link = "not a uri"


def test_set_date_defaults_to_now() -> None:
    before = datetime.now(timezone.utc)
    entry = Entry().set_date_created()

    assert entry.date_created >= before.replace(microsecond=0)
    assert entry.date_created.tzinfo is not None


def test_entry_comment_count() -> None:
    entry = Entry().set_comment_count("3")

    assert entry.comment_count == 3

    with pytest.raises(InvalidArgumentError):
        entry.set_comment_count(-1)
    assert entry.comment_count == 3


def test_entry_authors() -> None:
    entry = Entry().add_author({"name": "Jane", "email": "jane@example.com"})
    entry.add_author(Author(name="John", uri="http://john.example.com/"))

    assert [author.name for author in entry.authors] == ["Jane", "John"]

    with pytest.raises(InvalidArgumentError):
        entry.add_author({"email": "nobody@example.com"})
    with pytest.raises(InvalidArgumentError):
        entry.add_author({"name": "Bad", "uri": "not a uri"})


def test_add_authors_is_all_or_nothing() -> None:
    entry = Entry()

    with pytest.raises(InvalidArgumentError):
        entry.add_authors([{"name": "Jane"}, {"name": ""}])

    assert entry.authors == []


def test_category_requires_term_and_uri_scheme() -> None:
    entry = Entry().add_category({"term": "python", "scheme": "http://www.domain.com/tags"})

    assert entry.categories[0].term == "python"

    with pytest.raises(InvalidArgumentError, match="at least a \"term\""):
        entry.add_category({"term": None})
    with pytest.raises(InvalidArgumentError, match="must be a valid URI"):
        entry.add_category({"term": "python", "scheme": "not a uri"})


def test_comment_feed_links_normalise_type() -> None:
    entry = Entry().set_comment_feed_links([
        {"uri": "http://www.domain.com/comments/atom", "type": "ATOM"},
        {"uri": "http://www.domain.com/comments/rss", "type": "rss"},
    ])

    assert [link.type for link in entry.comment_feed_links] == ["atom", "rss"]

    with pytest.raises(InvalidArgumentError):
        entry.set_comment_feed_link({"uri": "http://www.domain.com/comments", "type": "json"})
    assert len(entry.comment_feed_links) == 2


def test_enclosure_requires_valid_uri() -> None:
    entry = Entry().set_enclosure({"uri": "http://www.domain.com/a.mp3", "type": "audio/mpeg", "length": 1024})

    assert entry.enclosure.length == 1024

    with pytest.raises(InvalidArgumentError, match='Enclosure "uri" is not set'):
        entry.set_enclosure({"uri": None})
    with pytest.raises(InvalidArgumentError, match="not a valid URI"):
        entry.set_enclosure({"uri": "a.mp3"})


def test_entry_remove_restores_default() -> None:
    entry = Entry().set_title("Item 1").add_category({"term": "python"})

    entry.remove("title").remove("categories")

    assert entry.title is None
    assert entry.categories == []

    with pytest.raises(InvalidArgumentError):
        entry.remove("bogus")


def test_feed_language_is_normalised() -> None:
    feed = Feed().set_language("fr-FR")

    assert feed.language == "fr"

    feed.set_language("!!!")
    assert feed.language == "fr"


def test_feed_links_are_keyed_by_dialect() -> None:
    feed = (
        Feed()
        .set_feed_link("http://www.domain.com/atom", "ATOM")
        .set_feed_link("http://www.domain.com/rss", "rss")
    )

    assert feed.feed_links == {
        "atom": "http://www.domain.com/atom",
        "rss": "http://www.domain.com/rss",
    }

    with pytest.raises(InvalidArgumentError):
        feed.set_feed_link("http://www.domain.com/json", "json")
    with pytest.raises(InvalidArgumentError):
        feed.set_feed_link("not a uri", "rdf")
    assert "rdf" not in feed.feed_links


def test_feed_id_accepts_uri_urn_and_tag() -> None:
    feed = Feed()

    for value in (
        "http://www.domain.com/",
        "urn:uuid:60a76c80-d399-11d9-b93C-0003939e0af6",
        "tag:example.com,2001:feed",
    ):
        assert feed.set_id(value).id == value

    with pytest.raises(InvalidArgumentError):
        feed.set_id("not an id")
    assert feed.id == "tag:example.com,2001:feed"


def test_feed_generator_and_hubs() -> None:
    feed = (
        Feed()
        .set_generator("Gen", "1.0", "http://gen.example.com/")
        .add_hubs(["http://hub.example.com/", "http://hub2.example.com/"])
    )

    assert feed.generator == Generator(name="Gen", version="1.0", uri="http://gen.example.com/")
    assert len(feed.hubs) == 2

    feed.set_generator({"name": "Other"})
    assert feed.generator.version is None

    with pytest.raises(InvalidArgumentError):
        feed.add_hubs(["http://hub3.example.com/", "bad hub"])
    assert len(feed.hubs) == 2


def test_feed_categories_accept_instances() -> None:
    feed = Feed().add_categories([Category(term="news"), {"term": "tech", "label": "Technology"}])

    assert [category.label for category in feed.categories] == [None, "Technology"]


def test_add_entry_synchronises_encoding() -> None:
    feed = Feed().set_encoding("ISO-8859-1")
    entry = Entry().set_title("Item 1")

    feed.add_entry(entry)

    assert entry.encoding == "ISO-8859-1"
    assert feed.create_entry().encoding == "ISO-8859-1"
    assert len(feed) == 1


def test_add_entry_requires_entry() -> None:
    with pytest.raises(InvalidArgumentError):
        Feed().add_entry({"title": "Item 1"})


def test_entries_view_and_positional_access() -> None:
    feed = Feed()
    first = Entry().set_title("First")
    second = Entry().set_title("Second")
    feed.add_entry(first).add_entry(second)

    assert feed.entries == (first, second)
    assert feed[1] is second
    assert feed.get_entry() is first

    with pytest.raises(InvalidArgumentError, match="Undefined index"):
        feed.get_entry(5)

    feed.remove_entry(0)
    assert feed.entries == (second,)

    with pytest.raises(InvalidArgumentError):
        feed.remove_entry(3)


def test_order_by_date_sorts_newest_first() -> None:
    feed = Feed()
    oldest = _make_entry("t3", T)
    newest = _make_entry("t1", T + 200)
    middle = _make_entry("t2", T + 100)
    for entry in (oldest, newest, middle):
        feed.add_entry(entry)

    feed.order_by_date()

    assert [entry.title for entry in feed.entries] == ["t1", "t2", "t3"]


def test_order_by_date_falls_back_to_creation_date() -> None:
    feed = Feed()
    feed.add_entry(Entry().set_title("created").set_date_created(T + 100))
    feed.add_entry(_make_entry("modified", T))

    feed.order_by_date()

    assert [entry.title for entry in feed.entries] == ["created", "modified"]


def test_order_by_date_collapses_identical_timestamps() -> None:
    feed = Feed()
    feed.add_entry(_make_entry("first", T))
    feed.add_entry(_make_entry("second", T))
    feed.add_entry(_make_entry("older", T - 10))

    feed.order_by_date()

    assert [entry.title for entry in feed.entries] == ["second", "older"]


def test_order_by_date_can_keep_duplicates() -> None:
    feed = Feed()
    feed.add_entry(_make_entry("first", T))
    feed.add_entry(_make_entry("older", T - 10))
    feed.add_entry(_make_entry("second", T))

    feed.order_by_date(keep_duplicates=True)

    assert [entry.title for entry in feed.entries] == ["first", "second", "older"]


def test_reset_clears_metadata_but_keeps_entries() -> None:
    feed = (
        Feed()
        .set_title("Test")
        .set_link("http://www.domain.com/")
        .set_feed_link("http://www.domain.com/atom", "atom")
        .set_encoding("ISO-8859-1")
    )
    feed.add_entry(Entry().set_title("Item 1"))

    feed.reset()

    assert feed.title is None
    assert feed.link is None
    assert feed.feed_links == {}
    assert feed.encoding == "UTF-8"
    assert len(feed) == 1


def test_export_rejects_unknown_dialect() -> None:
    with pytest.raises(InvalidArgumentError, match="Unsupported feed format"):
        Feed().set_title("Test").export("json")


def test_order_by_date_warns_about_dropped_entries(caplog: pytest.LogCaptureFixture) -> None:
    feed = Feed()
    feed.add_entry(_make_entry("first", T))
    feed.add_entry(_make_entry("second", T))

    with caplog.at_level("WARNING", logger="syndication.models.feed"):
        feed.order_by_date()

    assert "dropped 1 entries" in caplog.text


def test_control_characters_are_rejected_at_assignment() -> None:
    entry = Entry().set_title("Item 1")

    with pytest.raises(InvalidArgumentError, match="not allowed in XML"):
        entry.set_title("a\x0bb")
    assert entry.title == "Item 1"

    with pytest.raises(InvalidArgumentError):
        entry.set_enclosure({"uri": "http://www.domain.com/a.mp3", "type": "audio/\x0bmpeg"})
    with pytest.raises(InvalidArgumentError):
        Feed().set_image({"uri": "http://www.domain.com/logo.png", "title": "Lo\x0bgo"})


def test_negative_entry_index_is_undefined() -> None:
    feed = Feed().add_entry(Entry().set_title("Only"))

    with pytest.raises(InvalidArgumentError, match="Undefined index: -1"):
        feed.get_entry(-1)
    with pytest.raises(InvalidArgumentError, match="Undefined index: -1"):
        feed.remove_entry(-1)
    with pytest.raises(InvalidArgumentError):
        feed[-1]
    assert len(feed) == 1
