"""Command-line entry point: read one feed and dump what was found."""

import argparse
import sys

from .config import Config
from .errors import FeedError
from .fetch import FeedFetcher
from .logging_config import create_execution_logger, setup_structured_logging
from .models import FeedReply


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="feedread", description="Read an RSS feed and print its items."
    )
    parser.add_argument("url", help="URL of the RSS or Atom feed")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="HTTP timeout in seconds (default: $FEEDREAD_TIMEOUT or 30)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="do not print the HTTP response status and headers",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command line tool.

    Returns:
        0 when the feed was read, 1 when the settings or the read failed
    """
    args = build_parser().parse_args(argv)
    try:
        config = Config()
        setup_structured_logging(config.log_level)
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    main_logger = create_execution_logger("main")

    fetch_config = config.get_fetch_config()
    if args.timeout is not None:
        fetch_config.timeout = args.timeout
    display = config.get_display_config()

    print(f'Reading "{args.url}"')
    reply = FeedReply()
    fetcher = FeedFetcher(fetch_config, execution_id=main_logger.execution_id)
    status = 0
    try:
        fetcher.read_feed(args.url, reply, verbose=not args.quiet)
        print("OK.")
    except FeedError as e:
        print(f"Error: {e}")
        status = 1

    main_logger.log_metrics({"items": len(reply.items), "success": status == 0})
    reply.dump(wrap_width=display.wrap_width, max_word=display.max_word)
    return status


if __name__ == "__main__":
    sys.exit(main())
