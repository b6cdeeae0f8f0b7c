"""feedread: fetch an RSS feed and read its items."""

from .errors import (
    FeedDateParseError,
    FeedError,
    FeedHttpError,
    FeedIoError,
    FeedXMLParseError,
    FieldError,
    UnknownFeedTypeError,
    WasHTMLError,
)
from .fetch import FeedFetcher, read_feed
from .models import FeedChannel, FeedItem, FeedReply

__all__ = [
    "FeedChannel",
    "FeedDateParseError",
    "FeedError",
    "FeedFetcher",
    "FeedHttpError",
    "FeedIoError",
    "FeedItem",
    "FeedReply",
    "FeedXMLParseError",
    "FieldError",
    "UnknownFeedTypeError",
    "WasHTMLError",
    "read_feed",
]
