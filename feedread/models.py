"""Data models for feedread."""

import sys
from dataclasses import dataclass, field
from datetime import datetime
from typing import TextIO

from .wordwrap import wordwrap


def format_pubdate(value: datetime) -> str:
    """Format a publication date as ``2003-06-03 09:39:21 +00:00``."""
    offset = value.strftime("%z")
    return f"{value:%Y-%m-%d %H:%M:%S} {offset[:3]}:{offset[3:]}"


@dataclass
class FeedChannel:
    """Channel-level metadata of an RSS or Atom feed."""

    title: str = ""
    link: str = ""
    description: str = ""

    def render(self) -> str:
        """Render the channel for debug output."""
        return (
            "Feed Channel\n"
            f" Title: {self.title}\n"
            f" Link: {self.link}\n"
            f" Description: {self.description}\n"
        )


@dataclass
class FeedItem:
    """Represents a single RSS/Atom feed item."""

    title: str
    description: str  # raw markup, as found in the feed
    author: str
    pubdate: datetime

    def render(self, wrap_width: int = 72, max_word: int = 20) -> str:
        """Render the item for debug output."""
        return (
            "Feed Item\n"
            f" Title: {self.title}\n"
            f" Author: {self.author}\n"
            f" Publication date: {format_pubdate(self.pubdate)}\n"
            f" Description:\n{wordwrap(self.description, wrap_width, max_word)}\n"
        )


@dataclass
class FeedReply:
    """Everything read from one feed: its channel and items in document order."""

    channel: FeedChannel = field(default_factory=FeedChannel)
    items: list[FeedItem] = field(default_factory=list)

    def render(self, wrap_width: int = 72, max_word: int = 20) -> str:
        """Render the channel and every item, separated by blank lines."""
        records = [self.channel.render()]
        records.extend(item.render(wrap_width, max_word) for item in self.items)
        return "\n".join(records) + "\n"

    def dump(
        self, file: TextIO | None = None, wrap_width: int = 72, max_word: int = 20
    ) -> None:
        """Print the rendered reply, to stdout by default."""
        (file or sys.stdout).write(self.render(wrap_width, max_word))
