"""RSS feed extraction for feedread."""

import xml.etree.ElementTree as ET
from enum import Enum

from .dates import InvalidDateError, parse_rfc2822
from .errors import FeedError
from .logging_config import create_execution_logger
from .models import FeedItem, FeedReply
from .xmltree import find_all, find_tag_text, local_name, named

is_item = named("item")
is_author = named("author")
is_pubdate = named("pubDate")
is_title = named("title")
is_description = named("description")


class FeedFormat(Enum):
    """Feed formats distinguished by their root element."""

    RSS = "rss"
    ATOM = "atom"
    UNKNOWN = "unknown"


ROOT_FORMATS = {
    "rss": FeedFormat.RSS,
    "RDF": FeedFormat.RSS,
    "feed": FeedFormat.ATOM,
}


def detect_format(root: ET.Element) -> FeedFormat:
    """Classify a document by the local name of its root element."""
    return ROOT_FORMATS.get(local_name(root.tag), FeedFormat.UNKNOWN)


class FeedExtractor:
    """Populates a FeedReply from parsed feed documents."""

    def __init__(self, execution_id: str | None = None):
        """Initialize FeedExtractor.

        Args:
            execution_id: Execution ID for logging context
        """
        self.logger = create_execution_logger("extractor", execution_id)
        # Atom and unrecognised documents are read as RSS for now; other
        # readers plug in here.
        self.handlers = {
            FeedFormat.RSS: self.handle_rss_tree,
            FeedFormat.ATOM: self.handle_rss_tree,
            FeedFormat.UNKNOWN: self.handle_rss_tree,
        }

    def handle_tree(self, tree: ET.Element, reply: FeedReply) -> None:
        """Handle one document tree produced by the XML parser.

        Args:
            tree: Root element of the document
            reply: Reply to append extracted items to

        Raises:
            FeedError: If a required field is missing or malformed
        """
        feed_format = detect_format(tree)
        self.logger.debug(
            "Dispatching feed tree",
            feed_format=feed_format.value,
            root=local_name(tree.tag),
        )
        self.handlers[feed_format](tree, reply)

    def handle_rss_tree(self, tree: ET.Element, reply: FeedReply) -> None:
        """Extract every RSS item in the tree into ``reply.items``.

        Extraction stops at the first item whose pubDate does not parse;
        items already appended stay in the reply. Channel metadata is not
        read, so ``reply.channel`` is left as it is.

        Raises:
            FeedDateParseError: If an item has no single, valid pubDate
        """
        items = find_all(tree, is_item, recurse=False)
        self.logger.debug(f"Found {len(items)} item elements", items_count=len(items))

        for item in items:
            author = find_tag_text(item, is_author)
            pubdate_text = find_tag_text(item, is_pubdate)
            try:
                pubdate = parse_rfc2822(pubdate_text)
            except InvalidDateError as e:
                self.logger.warning(
                    f"Rejecting item with bad pubDate: {e}",
                    error_kind="DateParse",
                    items_count=len(reply.items),
                )
                raise FeedError.from_exception(e) from e

            reply.items.append(
                FeedItem(
                    title=find_tag_text(item, is_title),
                    description=find_tag_text(item, is_description),
                    author=author,
                    pubdate=pubdate,
                )
            )
