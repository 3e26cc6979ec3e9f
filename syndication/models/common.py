"""
Shared value types for feeds and entries.

Authors, categories, generators, images, enclosures and comment feed links
are small immutable records validated on construction. Setters accept either
an instance or a plain mapping with the same keys.

Responsibility: Field-level validation contracts for nested feed metadata
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..exceptions import InvalidArgumentError, SyndicationError
from ..utils.validators import ensure_feed_type, ensure_non_empty_string, ensure_uri, ensure_xml_text


def validation_message(exc: ValidationError) -> str:
    """
    Extract a readable message from a pydantic ValidationError.

    Errors raised by the syndication validators keep their own message.
    """
    error = exc.errors()[0]
    original = (error.get("ctx") or {}).get("error")
    if isinstance(original, SyndicationError):
        return str(original)

    message = error.get("msg", "is invalid")
    if message.startswith("Value error, "):
        return message[len("Value error, "):]

    field = ".".join(str(part) for part in error.get("loc", ())) or "parameter"
    return f'Invalid parameter: "{field}" {message[:1].lower()}{message[1:]}'


class SyndicationModel(BaseModel):
    """
    Base model translating pydantic validation failures into
    InvalidArgumentError, both on construction and on assignment.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="ignore",
    )

    def __init__(self, **data: Any):
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise InvalidArgumentError(validation_message(exc)) from exc

    def __setattr__(self, name: str, value: Any) -> None:
        try:
            super().__setattr__(name, value)
        except ValidationError as exc:
            raise InvalidArgumentError(validation_message(exc)) from exc

    @classmethod
    def coerce(cls, value: Any):
        """Return value as an instance of this model, validating mappings."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, dict):
            try:
                value = dict(value)
            except (TypeError, ValueError) as exc:
                raise InvalidArgumentError(
                    f"Invalid parameter: {cls.__name__.lower()} must be a mapping"
                ) from exc
        return cls(**value)


class ValueModel(SyndicationModel):
    """Immutable value record"""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
    )


class Author(ValueModel):
    """Feed or entry author"""

    name: str = Field(description="Author display name")
    email: Optional[str] = Field(default=None, description="Author email address")
    uri: Optional[str] = Field(default=None, description="Author home page")

    @field_validator("name", "email", mode="before")
    @classmethod
    def validate_text(cls, v, info):
        if v is None and info.field_name != "name":
            return v
        return ensure_non_empty_string(v, info.field_name)

    @field_validator("uri", mode="before")
    @classmethod
    def validate_uri(cls, v):
        return v if v is None else ensure_uri(v, "uri")

    def rss_value(self) -> str:
        """Author as written in RSS: ``email (name)`` or the bare name."""
        if self.email:
            return f"{self.email} ({self.name})"
        return self.name


class Category(ValueModel):
    """
    Feed or entry category.

    ``scheme`` is rendered as the Atom scheme or the RSS domain.
    """

    term: str = Field(description="Machine readable category name")
    scheme: Optional[str] = Field(default=None, description="Categorisation scheme URI")
    label: Optional[str] = Field(default=None, description="Human readable label")

    @field_validator("term", mode="before")
    @classmethod
    def validate_term(cls, v):
        if v is None:
            raise InvalidArgumentError(
                'Each category must contain at least a "term" element containing'
                " the machine readable category name"
            )
        return ensure_non_empty_string(v, "term")

    @field_validator("scheme", mode="before")
    @classmethod
    def validate_scheme(cls, v):
        if v is None:
            return v
        try:
            return ensure_uri(v, "scheme")
        except InvalidArgumentError as exc:
            raise InvalidArgumentError(
                "The Atom scheme or RSS domain of a category must be a valid URI"
            ) from exc

    @field_validator("label", mode="before")
    @classmethod
    def validate_label(cls, v):
        return v if v is None else ensure_non_empty_string(v, "label")


class Generator(ValueModel):
    """Software that produced the feed"""

    name: str
    version: Optional[str] = None
    uri: Optional[str] = None

    @field_validator("name", "version", mode="before")
    @classmethod
    def validate_text(cls, v, info):
        if v is None and info.field_name != "name":
            return v
        return ensure_non_empty_string(v, info.field_name)

    @field_validator("uri", mode="before")
    @classmethod
    def validate_uri(cls, v):
        return v if v is None else ensure_uri(v, "uri")

    def rss_value(self) -> str:
        """Generator as a single RSS string: ``name version (uri)``."""
        value = self.name
        if self.version:
            value = f"{value} {self.version}"
        if self.uri:
            value = f"{value} ({self.uri})"
        return value


class Image(ValueModel):
    """
    Feed image.

    Only ``uri`` is checked on assignment; RSS additionally requires ``title``
    and ``link`` and bounds ``width``/``height`` when the feed is rendered.
    """

    uri: str = Field(description="Image location")
    title: Optional[str] = None
    link: Optional[str] = None
    width: Optional[Union[int, str]] = None
    height: Optional[Union[int, str]] = None
    description: Optional[str] = None

    @field_validator("uri", mode="before")
    @classmethod
    def validate_uri(cls, v):
        return ensure_uri(v, "uri")

    @field_validator("title", "link", "width", "height", "description", mode="before")
    @classmethod
    def validate_text(cls, v, info):
        return ensure_xml_text(v, info.field_name)


class Enclosure(ValueModel):
    """
    Media attached to an entry.

    Only ``uri`` is required for Atom; RSS also requires ``type`` and a
    positive ``length`` when the entry is rendered.
    """

    uri: str
    type: Optional[str] = None
    length: Optional[Union[int, str]] = None

    @field_validator("uri", mode="before")
    @classmethod
    def validate_uri(cls, v):
        if v is None:
            raise InvalidArgumentError('Enclosure "uri" is not set')
        try:
            return ensure_uri(v, "uri")
        except InvalidArgumentError as exc:
            raise InvalidArgumentError('Enclosure "uri" is not a valid URI/IRI') from exc

    @field_validator("type", "length", mode="before")
    @classmethod
    def validate_text(cls, v, info):
        return ensure_xml_text(v, info.field_name)


class CommentFeedLink(ValueModel):
    """Link to a feed of comments on an entry"""

    uri: str
    type: str

    @field_validator("uri", mode="before")
    @classmethod
    def validate_uri(cls, v):
        return ensure_uri(v, "uri")

    @field_validator("type", mode="before")
    @classmethod
    def validate_type(cls, v):
        return ensure_feed_type(v)
