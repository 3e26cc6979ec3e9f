"""
Syndication errors.

Two kinds of failure are raised by the library:

- InvalidArgumentError: a value was rejected at assignment time, the entity
  is left unchanged.
- FeedExportError: a dialect's mandatory element could not be satisfied
  during export, even after derivation.
"""

from typing import Optional


class SyndicationError(ValueError):
    """Base class for all syndication errors"""


class InvalidArgumentError(SyndicationError):
    """Raised when a setter or lookup receives an unacceptable value"""


class FeedExportError(SyndicationError):
    """Raised when a feed or entry cannot be rendered in the requested dialect"""

    def __init__(
        self,
        message: str,
        dialect: Optional[str] = None,
        element: Optional[str] = None
    ):
        super().__init__(message)
        self.dialect = dialect
        self.element = element
