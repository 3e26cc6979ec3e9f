"""
Configuration management for syndication.

Rendering options are read from environment variables prefixed with
``SYNDICATION_`` (or a local .env file) and fall back to the defaults below.

Responsibility: Centralized rendering and logging configuration
"""

import logging
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_FORMATS = {
    "plain": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    "short": "%(levelname)s %(name)s: %(message)s",
}


class SyndicationSettings(BaseSettings):
    """
    Global rendering settings.

    Example:
        settings = SyndicationSettings(pretty_print=False)
    """

    # Rendering
    default_encoding: str = Field(
        default="UTF-8",
        description="Encoding declared by feeds that do not set one"
    )
    pretty_print: bool = Field(
        default=True,
        description="Indent rendered documents with two spaces"
    )
    sanitize_content: bool = Field(
        default=True,
        description="Normalise Atom entry content from HTML to XHTML"
    )

    # Logging
    log_level: str = Field(default="WARNING")
    log_format: str = Field(default="plain")

    model_config = SettingsConfigDict(
        env_prefix="SYNDICATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("default_encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Reject blank encodings"""
        if not v or not v.strip():
            raise ValueError("default_encoding must be a non-empty string")
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise and check the logging level name"""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v not in LOG_FORMATS:
            raise ValueError(
                f"log_format must be one of {', '.join(sorted(LOG_FORMATS))}"
            )
        return v


def configure_logging(config: Optional[SyndicationSettings] = None) -> None:
    """
    Configure root logging from settings.

    The library itself only emits records through module loggers; this is a
    convenience for scripts that want the configured level and format.

    Args:
        config: Settings to apply (defaults to the global settings)
    """
    config = config or settings
    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format=LOG_FORMATS[config.log_format],
    )


# Global settings instance
settings = SyndicationSettings()
