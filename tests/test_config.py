import logging

import pytest
from pydantic import ValidationError

from syndication import Feed
from syndication.config import SyndicationSettings, configure_logging, settings


def test_defaults() -> None:
    config = SyndicationSettings()

    assert config.default_encoding == "UTF-8"
    assert config.pretty_print is True
    assert config.sanitize_content is True
    assert config.log_level == "WARNING"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SYNDICATION_PRETTY_PRINT", "false")
    monkeypatch.setenv("SYNDICATION_DEFAULT_ENCODING", "ISO-8859-1")
    monkeypatch.setenv("SYNDICATION_LOG_LEVEL", "debug")

    config = SyndicationSettings()

    assert config.pretty_print is False
    assert config.default_encoding == "ISO-8859-1"
    assert config.log_level == "DEBUG"


def test_invalid_values_are_rejected() -> None:
    with pytest.raises(ValidationError):
        SyndicationSettings(log_level="LOUD")
    with pytest.raises(ValidationError):
        SyndicationSettings(log_format="json")
    with pytest.raises(ValidationError):
        SyndicationSettings(default_encoding="  ")


def test_feeds_default_to_configured_encoding(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "default_encoding", "ISO-8859-1")

    assert Feed().encoding == "ISO-8859-1"


def test_writers_default_to_configured_pretty_print(monkeypatch: pytest.MonkeyPatch) -> None:
    feed = (
        Feed()
        .set_title("Test")
        .set_description("bla bla bla")
        .set_link("http://www.domain.com/")
        .set_feed_link("http://www.domain.com/rss", "rss")
    )
    monkeypatch.setattr(settings, "pretty_print", False)

    assert "\n  <channel>" not in feed.export("rss")


def test_configure_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    configure_logging(SyndicationSettings(log_level="info", log_format="short"))

    assert calls == [{"level": logging.INFO, "format": "%(levelname)s %(name)s: %(message)s"}]
