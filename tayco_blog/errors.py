"""Exceptions raised while loading blog posts."""

from __future__ import annotations

from typing import Optional


class BlogError(Exception):
    """Base exception for all blog loading errors."""


class FetchError(BlogError, IOError):
    """Raised when a remote resource cannot be retrieved."""

    def __init__(self, url: str, reason: str | Exception) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch '{url}': {reason}")


class ParseError(BlogError, ValueError):
    """Raised when the index or one of its records is malformed."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        self.url = url
        if url:
            message = f"{message} (in '{url}')"
        super().__init__(message)
