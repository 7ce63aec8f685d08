from __future__ import annotations

import logging
from typing import Any, Callable, Optional, TypeVar
from urllib.parse import quote

import requests

from .config import DEFAULT_TIMEOUT
from .errors import ApiError, MalformedResponseError
from .models import Comment, Thread

logger = logging.getLogger(__name__)

API_BASE = "https://oauth.reddit.com"
DEFAULT_PAGE_LIMIT = 10

T = TypeVar("T")


def _with_query(base: str, after: str, limit: int) -> str:
    params = {"raw_json": 1, "limit": limit, "after": after}
    return requests.Request("GET", base, params=params).prepare().url


def subreddit_url(subreddit: str, after: str = "", limit: int = DEFAULT_PAGE_LIMIT) -> str:
    return _with_query(f"{API_BASE}/r/{quote(subreddit, safe='')}/hot", after, limit)


def comments_url(
    subreddit: str, thread_id: str, after: str = "", limit: int = DEFAULT_PAGE_LIMIT
) -> str:
    base = f"{API_BASE}/r/{quote(subreddit, safe='')}/comments/{quote(thread_id, safe='')}"
    return _with_query(base, after, limit)


def get_json(
    session: requests.Session,
    token: str,
    url: str,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> Any:
    logger.debug("GET %s", url)
    resp = session.get(url, headers={"Authorization": f"Bearer {token}"}, timeout=timeout)

    if resp.status_code >= 400:
        body = resp.text[:200].replace("\n", " ")
        raise ApiError(f"Listing request failed with {resp.status_code}: {body}", resp.status_code)

    try:
        return resp.json()
    except ValueError as exc:
        raise MalformedResponseError(f"Response from {url} is not valid JSON") from exc


def listing_page(listing: Any) -> tuple[list[dict[str, Any]], Optional[str]]:
    """Split a listing object into its children and its ``after`` cursor.

    Children are returned as the raw ``{"kind": ..., "data": {...}}`` objects.
    """
    if not isinstance(listing, dict):
        raise MalformedResponseError("Listing is not a JSON object")
    data = listing.get("data")
    if not isinstance(data, dict):
        raise MalformedResponseError("Listing has no 'data' object")
    children = data.get("children", [])
    if not isinstance(children, list):
        raise MalformedResponseError("Listing 'children' is not an array")

    out: list[dict[str, Any]] = []
    for child in children:
        if not isinstance(child, dict) or not isinstance(child.get("data"), dict):
            raise MalformedResponseError("Listing child has no 'data' object")
        out.append(child)

    after = data.get("after")
    return out, after if isinstance(after, str) and after else None


def extract_threads(payload: Any) -> tuple[list[Thread], Optional[str]]:
    children, after = listing_page(payload)
    return [Thread.from_data(child["data"]) for child in children], after


def extract_comments(payload: Any) -> tuple[list[Comment], Optional[str]]:
    # [0] is the post itself, [1] the comment listing
    if not isinstance(payload, list) or len(payload) < 2:
        logger.debug("Comments payload has no comment listing; treating as empty")
        return [], None

    children, after = listing_page(payload[1])
    comments = [
        Comment.from_data(child["data"]) for child in children if child.get("kind") == "t1"
    ]
    return comments, after


def follow_cursor(
    session: requests.Session,
    token: str,
    url_for: Callable[[str], str],
    extract: Callable[[Any], tuple[list[T], Optional[str]]],
    timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> list[T]:
    items: list[T] = []
    seen: set[str] = set()
    after = ""

    while True:
        seen.add(after)
        page, next_after = extract(get_json(session, token, url_for(after), timeout))
        items.extend(page)
        logger.debug("Fetched %d items (next cursor %r)", len(page), next_after)

        if not next_after:
            break
        if next_after in seen:
            logger.warning("Cursor %r was already fetched; stopping pagination", next_after)
            break
        after = next_after

    return items


def fetch_threads(
    session: requests.Session,
    token: str,
    subreddit: str,
    limit: int = DEFAULT_PAGE_LIMIT,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> list[Thread]:
    return follow_cursor(
        session,
        token,
        lambda after: subreddit_url(subreddit, after, limit),
        extract_threads,
        timeout,
    )


def fetch_comments(
    session: requests.Session,
    token: str,
    subreddit: str,
    thread_id: str,
    limit: int = DEFAULT_PAGE_LIMIT,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> list[Comment]:
    return follow_cursor(
        session,
        token,
        lambda after: comments_url(subreddit, thread_id, after, limit),
        extract_comments,
        timeout,
    )
