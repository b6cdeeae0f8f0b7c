"""Errors raised while fetching and reading RSS or Atom feeds.

Every failure surfaces as a :class:`FeedError`. The first four kinds wrap an
exception from a lower layer (socket/file I/O, HTTP, XML, dates) and render
as that exception does; the rest describe problems with the feed itself.
"""

import xml.etree.ElementTree as ET

import requests

from .dates import InvalidDateError


class FeedError(Exception):
    """Base class for all feed errors."""

    kind = "Feed"

    @classmethod
    def from_exception(cls, error: BaseException) -> "FeedError":
        """Convert a lower-level exception into the matching feed error.

        Raises:
            TypeError: If the exception has no feed error counterpart
        """
        if isinstance(error, FeedError):
            return error
        for source, target in _CONVERSIONS:
            if isinstance(error, source):
                return target(error)
        raise TypeError(f"No feed error for {type(error).__name__}: {error}")

    @classmethod
    def from_read_exception(cls, error: BaseException) -> "FeedError":
        """Convert an exception raised while reading a response body.

        The HTTP exchange is already over, so request errors are I/O here.
        """
        if isinstance(error, OSError):
            return FeedIoError(error)
        return cls.from_exception(error)


class WrappedFeedError(FeedError):
    """A feed error carrying the lower-level exception that caused it."""

    def __init__(self, error: BaseException):
        super().__init__(error)
        self.error = error

    def __str__(self) -> str:
        return str(self.error)


class FeedIoError(WrappedFeedError):
    """Error detected at the I/O level."""

    kind = "Io"


class FeedHttpError(WrappedFeedError):
    """Error detected at the HTTP level."""

    kind = "Http"


class FeedXMLParseError(WrappedFeedError):
    """Error detected at the XML parsing level."""

    kind = "XMLParse"


class FeedDateParseError(WrappedFeedError):
    """Error detected at the date parsing level."""

    kind = "DateParse"


class UnknownFeedTypeError(FeedError):
    """XML, but not a feed type we can read.

    Nothing raises this yet: every document is read as RSS.
    """

    kind = "UnknownFeedType"

    def __str__(self) -> str:
        return "Unknown feed type."


class FieldError(FeedError):
    """Required feed field missing or invalid."""

    kind = "Field"

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f'Required field "{self.name}" missing from RSS/Atom feed.'


class WasHTMLError(FeedError):
    """Got an HTML page instead of a feed."""

    kind = "WasHTML"

    def __init__(self, snippet: str):
        super().__init__(snippet)
        self.snippet = snippet

    def __str__(self) -> str:
        return f'Expected an RSS/ATOM feed but received a web page "{self.snippet}".'


# Checked in order. requests.RequestException subclasses OSError, so HTTP
# errors must be matched before plain I/O errors.
_CONVERSIONS: tuple[tuple[type[BaseException], type[FeedError]], ...] = (
    (requests.RequestException, FeedHttpError),
    (ET.ParseError, FeedXMLParseError),
    (InvalidDateError, FeedDateParseError),
    (OSError, FeedIoError),
)
