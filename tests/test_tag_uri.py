from datetime import datetime, timezone

from syndication.utils.tag_uri import is_valid_tag_uri

REFERENCE = datetime(2024, 6, 15, 12, 0, 0)


def test_year_only_date_up_to_current_year_is_valid() -> None:
    assert is_valid_tag_uri("tag:example.com,2001:abc")
    assert is_valid_tag_uri("tag:example.com,2024:abc", now=REFERENCE)


def test_future_year_is_invalid() -> None:
    assert not is_valid_tag_uri("tag:example.com,9999:abc")
    assert not is_valid_tag_uri("tag:example.com,2025:abc", now=REFERENCE)


def test_month_and_full_dates_must_be_in_the_past() -> None:
    assert is_valid_tag_uri("tag:example.com,2004-05:abc", now=REFERENCE)
    assert is_valid_tag_uri("tag:example.com,2024-06-14:abc", now=REFERENCE)
    assert not is_valid_tag_uri("tag:example.com,2024-07:abc", now=REFERENCE)
    assert not is_valid_tag_uri("tag:example.com,2030-01-01:abc", now=REFERENCE)


def test_malformed_dates_are_invalid() -> None:
    assert not is_valid_tag_uri("tag:example.com,2004-5:abc", now=REFERENCE)
    assert not is_valid_tag_uri("tag:example.com,2004-13:abc", now=REFERENCE)
    assert not is_valid_tag_uri("tag:example.com,2004-02-30:abc", now=REFERENCE)


def test_email_authority_is_accepted() -> None:
    assert is_valid_tag_uri("tag:jane@example.com,2001-01-01:post-1", now=REFERENCE)


def test_invalid_authority_is_rejected() -> None:
    assert not is_valid_tag_uri("tag:not a domain,2001:abc", now=REFERENCE)
    assert not is_valid_tag_uri("tag:,2001:abc", now=REFERENCE)


def test_non_tag_values_are_rejected() -> None:
    assert not is_valid_tag_uri("http://example.com/")
    assert not is_valid_tag_uri("tag:example.com:abc")
    assert not is_valid_tag_uri(None)
    assert not is_valid_tag_uri(2001)


def test_timezone_aware_reference_is_supported() -> None:
    aware = REFERENCE.replace(tzinfo=timezone.utc)

    assert is_valid_tag_uri("tag:example.com,2001-01:abc", now=aware)
    assert is_valid_tag_uri("tag:example.com,2024-06-14:abc", now=aware)
    assert not is_valid_tag_uri("tag:example.com,2024-07-01:abc", now=aware)
    assert is_valid_tag_uri("tag:example.com,2001-01:abc", now=datetime.now(timezone.utc))
