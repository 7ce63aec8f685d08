from __future__ import annotations

from typing import Optional


class RedditReaderError(RuntimeError):
    pass


class ConfigError(RedditReaderError):
    pass


class AuthError(RedditReaderError):
    pass


class ApiError(RedditReaderError):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(RedditReaderError):
    """Raised when a response body does not have the shape the API documents."""
