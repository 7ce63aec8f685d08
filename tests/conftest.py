from __future__ import annotations

import json
from typing import Any, Optional

import pytest

from reddit_reader.config import RedditConfig

ENV_VARS = ("CLIENT_ID", "CLIENT_SECRET", "USERNAME", "PASSWORD", "USER_AGENT")

NOT_JSON = object()


class FakeResponse:
    def __init__(self, payload: Any = None, status_code: int = 200, text: Optional[str] = None) -> None:
        self.payload = payload
        self.status_code = status_code
        if text is None:
            text = "<html>oops</html>" if payload is NOT_JSON else json.dumps(payload)
        self.text = text

    def json(self) -> Any:
        if self.payload is NOT_JSON:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.payload


class FakeSession:
    """Replays queued responses and records every request made."""

    def __init__(self, responses: Optional[list[FakeResponse]] = None) -> None:
        self.responses = list(responses or [])
        self.calls: list[dict[str, Any]] = []
        self.headers: dict[str, str] = {}
        self.closed = False

    def _next(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self.responses:
            raise AssertionError(f"unexpected {method} {url}")
        return self.responses.pop(0)

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._next("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._next("POST", url, **kwargs)

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "FakeSession":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


def listing(children: list[dict[str, Any]], after: Optional[str] = None, kind: str = "t3") -> dict[str, Any]:
    return {
        "kind": "Listing",
        "data": {
            "after": after,
            "children": [{"kind": kind, "data": child} for child in children],
        },
    }


def thread_data(thread_id: str, title: str = "") -> dict[str, Any]:
    return {
        "id": thread_id,
        "title": title or f"title {thread_id}",
        "url": f"https://www.reddit.com/r/Home/comments/{thread_id}/",
    }


def comment_data(comment_id: str, body: str = "", author: str = "someone") -> dict[str, Any]:
    return {
        "id": comment_id,
        "body": body or f"body {comment_id}",
        "author": author,
        "created_utc": 1700000000.0,
    }


def comments_payload(comments: list[dict[str, Any]], after: Optional[str] = None) -> list[dict[str, Any]]:
    return [listing([thread_data("p")]), listing(comments, after, kind="t1")]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    # setenv first so that values loaded from .env files are undone afterwards
    for name in ENV_VARS:
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def config() -> RedditConfig:
    return RedditConfig(
        client_id="cid",
        client_secret="secret",
        username="alice",
        password="hunter2",
        user_agent="test-agent/1.0",
        timeout=5.0,
    )
