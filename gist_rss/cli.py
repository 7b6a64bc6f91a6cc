"""Command line entry point: print a gist's comments as an RSS feed."""

import argparse
import sys
from datetime import UTC, datetime
from typing import TextIO

import requests

from .config import Config
from .errors import GistRssError
from .feed import build_feed
from .github import GistClient
from .logging_config import create_execution_logger, setup_structured_logging
from .models import Feed
from .pagination import fetch_all_comments
from .rss import write_feed


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gist-rss",
        description="Write an RSS feed of a gist's comments to standard output.",
    )
    parser.add_argument("gist_id", nargs="?", help="gist id")
    parser.add_argument(
        "--id", dest="flag_id", metavar="GIST_ID", help="gist id (same as GIST_ID)"
    )
    args = parser.parse_args(argv)

    if bool(args.gist_id) == bool(args.flag_id):
        parser.error("exactly one gist id is required")
    args.gist_id = args.gist_id or args.flag_id
    return args


def run(
    gist_id: str,
    config: Config,
    execution_id: str | None = None,
    session: requests.Session | None = None,
    stream: TextIO | None = None,
) -> Feed:
    """Fetch, assemble and emit the feed for one gist.

    Any failure propagates before a single byte reaches the stream.
    """
    github_config = config.get_github_config()

    with GistClient(
        github_config, session=session, execution_id=execution_id
    ) as client:
        gist = client.fetch_gist(gist_id)
        comments = fetch_all_comments(
            client,
            gist_id,
            max_pages=github_config.max_pages,
            execution_id=execution_id,
        )

    feed = build_feed(
        gist_id,
        gist,
        comments,
        web_url=github_config.web_url,
        execution_id=execution_id,
    )
    write_feed(feed, stream, execution_id=execution_id)
    return feed


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    args = parse_args(argv)

    try:
        config = Config()
        setup_structured_logging(config.log_level)
    except ValueError as e:
        # LOG_LEVEL itself may be the bad setting
        setup_structured_logging()
        create_execution_logger("main").error(
            f"Invalid configuration: {e}", error=str(e)
        )
        print(f"gist-rss: {e}", file=sys.stderr)
        return 1

    execution_id = f"cli_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S_%f')}"
    main_logger = create_execution_logger("main", execution_id)
    main_logger.log_execution_start(gist_id=args.gist_id)

    try:
        feed = run(args.gist_id, config, execution_id=execution_id)
    except GistRssError as e:
        main_logger.error(
            f"Failed to build feed for gist {args.gist_id}: {e}",
            gist_id=args.gist_id,
            error=str(e),
        )
        main_logger.log_execution_end(success=False, error=str(e))
        print(f"gist-rss: {e}", file=sys.stderr)
        return 1

    main_logger.log_metrics({"items": len(feed.items)})
    main_logger.log_execution_end(success=True, gist_id=args.gist_id)
    return 0
