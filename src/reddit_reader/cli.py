#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Optional

import requests

from . import __version__
from .auth import require_access_token
from .config import DEFAULT_ENV_FILE, DEFAULT_TIMEOUT, load_config, load_env
from .errors import ConfigError, RedditReaderError
from .listing import DEFAULT_PAGE_LIMIT, fetch_comments, fetch_threads
from .models import Comment, Thread

logger = logging.getLogger("reddit_reader")

DEFAULT_SUBREDDIT = "Home"
SEPARATOR = "------"


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )
    logger.setLevel(level)


def ensure_positive_limit(limit: int) -> int:
    if limit <= 0:
        raise ConfigError("--limit must be > 0")
    return limit


def ensure_non_negative_timeout(timeout: float) -> float:
    if timeout < 0:
        raise ConfigError("--timeout must be >= 0")
    return timeout


def print_thread(thread: Thread, comments: list[Comment]) -> None:
    print(f"Thread: {thread.title} (ID: {thread.id})")
    for comment in comments:
        print(f"Comment by {comment.author}: {comment.body}")
    print(SEPARATOR)


def emit(result: Any) -> None:
    print(json.dumps(result, indent=2, ensure_ascii=False, default=str))


def cmd_read(args: argparse.Namespace) -> None:
    limit = ensure_positive_limit(args.limit)
    timeout = ensure_non_negative_timeout(args.timeout)
    load_env(args.env_file)
    cfg = load_config(timeout=timeout)

    with requests.Session() as session:
        session.headers["User-Agent"] = cfg.user_agent
        token = require_access_token(session, cfg)

        threads = fetch_threads(session, token, args.subreddit, limit, cfg.timeout)
        logger.debug("Fetched %d threads from r/%s", len(threads), args.subreddit)

        collected: list[dict[str, Any]] = []
        for thread in threads:
            comments = fetch_comments(session, token, args.subreddit, thread.id, limit, cfg.timeout)
            if args.json:
                item = thread.to_dict()
                item["comments"] = [comment.to_dict() for comment in comments]
                collected.append(item)
            else:
                print_thread(thread, comments)

    if args.json:
        emit({"subreddit": args.subreddit, "threads": collected})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reddit-reader",
        description="Print the hot threads of a subreddit together with their comments",
    )
    parser.add_argument("--version", action="version", version=f"reddit-reader {__version__}")
    parser.add_argument("subreddit", nargs="?", default=DEFAULT_SUBREDDIT)
    parser.add_argument("--limit", type=int, default=DEFAULT_PAGE_LIMIT, help="Page size for listings.")
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="HTTP timeout in seconds (0 disables it).",
    )
    parser.add_argument("--env-file", default=DEFAULT_ENV_FILE, help="Path to the .env file.")
    parser.add_argument("--json", action="store_true", help="Output JSON.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        cmd_read(args)
        return 0
    except RedditReaderError as exc:
        logger.error("%s", exc)
        return 2
    except requests.RequestException as exc:
        logger.error("HTTP error: %s", exc)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
