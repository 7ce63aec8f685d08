from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import MalformedResponseError


def _require_str(data: dict[str, Any], key: str, kind: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise MalformedResponseError(f"{kind} field {key!r} missing or not a string")
    return value


@dataclass(frozen=True)
class Token:
    access_token: str = ""
    token_type: str = ""
    expires_in: int = 0
    scope: str = ""

    @classmethod
    def from_data(cls, data: Any) -> "Token":
        """Decode a token response, leaving absent or mistyped fields empty."""
        if not isinstance(data, dict):
            return cls()

        def text(key: str) -> str:
            value = data.get(key)
            return value if isinstance(value, str) else ""

        expires_in = data.get("expires_in")
        if isinstance(expires_in, bool) or not isinstance(expires_in, (int, float)):
            expires_in = 0

        return cls(
            access_token=text("access_token"),
            token_type=text("token_type"),
            expires_in=int(expires_in),
            scope=text("scope"),
        )


@dataclass(frozen=True)
class Thread:
    id: str
    title: str
    url: str

    @classmethod
    def from_data(cls, data: dict[str, Any]) -> "Thread":
        return cls(
            id=_require_str(data, "id", "thread"),
            title=_require_str(data, "title", "thread"),
            url=_require_str(data, "url", "thread"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "url": self.url}


@dataclass(frozen=True)
class Comment:
    id: str
    body: str
    author: str
    created_utc: int

    @classmethod
    def from_data(cls, data: dict[str, Any]) -> "Comment":
        created = data.get("created_utc")
        if isinstance(created, bool) or not isinstance(created, (int, float)):
            raise MalformedResponseError("comment field 'created_utc' missing or not a number")

        return cls(
            id=_require_str(data, "id", "comment"),
            body=_require_str(data, "body", "comment"),
            author=_require_str(data, "author", "comment"),
            created_utc=int(created),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "author": self.author,
            "body": self.body,
            "created_utc": self.created_utc,
        }
