"""Feed fetching: HTTP download, streaming XML parse and extraction."""

import warnings
import xml.etree.ElementTree as ET

import requests
from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning

from .config import Config, FetchConfig
from .errors import FeedError, WasHTMLError
from .logging_config import create_execution_logger
from .models import FeedReply
from .rss import FeedExtractor
from .xmltree import TreeBuilder

SNIPPET_LENGTH = 80


class FeedFetcher:
    """Downloads a feed and reads it into a FeedReply."""

    def __init__(
        self,
        config: FetchConfig | None = None,
        execution_id: str | None = None,
        session: requests.Session | None = None,
    ):
        """Initialize FeedFetcher with configuration.

        Args:
            config: Fetch settings, defaults to FetchConfig()
            execution_id: Execution ID for logging context
            session: HTTP session to use instead of a new one
        """
        self.config = config or FetchConfig()
        self.timeout = self.config.timeout
        self.logger = create_execution_logger("fetcher", execution_id)
        self.extractor = FeedExtractor(execution_id=self.logger.execution_id)
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": self.config.user_agent})

        self.logger.debug("FeedFetcher initialized", timeout=self.timeout)

    def read_feed(self, url: str, reply: FeedReply, verbose: bool = False) -> None:
        """Read an RSS or Atom feed into ``reply``.

        Items are appended as they are extracted, so after a failure the
        reply holds whatever was read before it.

        Args:
            url: Feed URL
            reply: Reply to populate
            verbose: Print the response status and headers

        Raises:
            FeedError: On any HTTP, I/O, XML or feed content failure
        """
        self.logger.log_execution_start(feed_url=url)
        try:
            body = self._download(url, verbose)
            self._parse(body, reply)
        except FeedError as e:
            self.logger.error(
                f"Failed to read feed {url}: {e}",
                feed_url=url,
                error_kind=e.kind,
                error=str(e),
            )
            self.logger.log_execution_end(success=False, items_count=len(reply.items))
            raise

        self.logger.log_feed_processing(url, len(reply.items))
        self.logger.log_execution_end(success=True, items_count=len(reply.items))

    def _download(self, url: str, verbose: bool) -> bytes:
        try:
            self.logger.info("Downloading feed content", feed_url=url)
            response = self.session.get(url, timeout=self.timeout, stream=True)
        except requests.RequestException as e:
            raise FeedError.from_exception(e) from e

        with response:
            if verbose:
                print(f"Response: {response.status_code} {response.reason or ''}".rstrip())
                print("Headers:")
                for name, value in response.headers.items():
                    print(f"{name}: {value}")

            if not response.ok:
                self.logger.warning(
                    f"Feed server answered {response.status_code}",
                    feed_url=url,
                    status_code=response.status_code,
                )

            try:
                body = response.content
            except (requests.RequestException, OSError) as e:
                raise FeedError.from_read_exception(e) from e

        self.logger.info(
            "Feed downloaded successfully",
            feed_url=url,
            status_code=response.status_code,
            content_length=len(body),
        )
        return body

    def _parse(self, body: bytes, reply: FeedReply) -> None:
        builder = TreeBuilder()
        chunk_size = self.config.chunk_size
        try:
            for start in range(0, len(body), chunk_size):
                for tree in builder.feed(body[start : start + chunk_size]):
                    self.extractor.handle_tree(tree, reply)
            for tree in builder.close():
                self.extractor.handle_tree(tree, reply)
        except ET.ParseError as e:
            snippet = html_snippet(body)
            if snippet is not None:
                raise WasHTMLError(snippet) from e
            raise FeedError.from_exception(e) from e


def html_snippet(body: bytes | str) -> str | None:
    """Describe ``body`` if it is an HTML page, else return None.

    The description is the page title, or the start of its text when the
    page has no title, cut to SNIPPET_LENGTH characters.
    """
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", XMLParsedAsHTMLWarning)
        soup = BeautifulSoup(body, "html.parser")
    page = soup.find("html")
    if page is None:
        return None

    title = " ".join(soup.title.get_text(" ").split()) if soup.title else ""
    if not title:
        title = " ".join(page.get_text(" ").split())
    return title[:SNIPPET_LENGTH]


def read_feed(
    url: str, reply: FeedReply, verbose: bool = False, timeout: float | None = None
) -> None:
    """Read a feed into ``reply`` using settings from the environment.

    Raises:
        FeedError: On any failure; see FeedFetcher.read_feed
    """
    fetch_config = Config().get_fetch_config()
    if timeout is not None:
        fetch_config.timeout = timeout
    FeedFetcher(fetch_config).read_feed(url, reply, verbose)
