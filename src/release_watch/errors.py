"""Exceptions raised by release_watch."""

from __future__ import annotations

import http.client
import socket
from urllib.error import URLError


class ReleaseWatchError(Exception):
    """Base exception for release_watch."""


class FetchError(ReleaseWatchError):
    """A release request failed before a usable response arrived.

    Attributes:
        status_code: HTTP status if the server answered, else None.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def categorize_fetch_error(error: BaseException) -> FetchError:
    """Convert a transport exception into a :class:`FetchError` with a readable message."""
    if isinstance(error, FetchError):
        return error

    if isinstance(error, URLError):
        reason = error.reason
        if isinstance(reason, (socket.timeout, TimeoutError)):
            return FetchError(f"Request timed out: {reason}")
        reason_text = str(reason)
        if "timed out" in reason_text.lower():
            return FetchError(f"Request timed out: {reason_text}")
        return FetchError(f"Connection failed: {reason_text}")

    if isinstance(error, (socket.timeout, TimeoutError)):
        return FetchError(f"Request timed out: {error}")

    if isinstance(error, http.client.HTTPException):
        return FetchError(f"Connection failed: {type(error).__name__}: {error}")

    return FetchError(f"Network error: {error}")
