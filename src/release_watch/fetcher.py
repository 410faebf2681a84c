"""Fetch the latest published release tag from the GitHub releases API."""

from __future__ import annotations

import http.client
import json
import logging
import urllib.request
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from urllib.error import HTTPError

from release_watch.errors import FetchError, categorize_fetch_error
from release_watch.version import VersionTriple, format_version, try_parse

logger = logging.getLogger(__name__)

DEFAULT_REPO = "arendst/Tasmota"
DEFAULT_USER_AGENT = "release-watch"
DEFAULT_TIMEOUT = 2.0  # seconds


def latest_release_url(repo: str) -> str:
    """Return the GitHub API URL for the latest release of *repo* (``owner/name``)."""
    return f"https://api.github.com/repos/{repo}/releases/latest"


@dataclass
class FetchResult:
    """One HTTP round trip."""

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str = ""


def http_get(url: str, headers: Mapping[str, str], timeout: float) -> FetchResult:
    """Perform one GET and return its status, headers and decoded body.

    Non-2xx answers are returned, not raised. Transport and protocol
    failures (connection refused, DNS, timeout, truncated body) raise
    :class:`FetchError`. The connection is closed on every path.
    """
    req = urllib.request.Request(url, headers=dict(headers), method="GET")
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            body = resp.read().decode("utf-8", errors="replace")
            return FetchResult(
                status_code=resp.status,
                headers=dict(resp.headers.items()),
                body=body,
            )
    except HTTPError as e:
        try:
            body = e.read().decode("utf-8", errors="replace")
        finally:
            e.close()
        return FetchResult(
            status_code=e.code,
            headers=dict(e.headers.items()) if e.headers else {},
            body=body,
        )
    except (OSError, ValueError, http.client.HTTPException) as e:
        raise categorize_fetch_error(e) from e


class ReleaseFetcher:
    """Looks up the newest release of one upstream repository."""

    def __init__(
        self,
        repo: str = DEFAULT_REPO,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
        get: Callable[[str, Mapping[str, str], float], FetchResult] = http_get,
    ) -> None:
        self.url = latest_release_url(repo)
        self.user_agent = user_agent
        self.timeout = timeout
        self._get = get

    def fetch_latest(self) -> VersionTriple | None:
        """Return the latest release version, or None if this cycle should be skipped."""
        headers = {
            "User-Agent": self.user_agent,
            "Accept": "application/vnd.github+json",
        }
        try:
            result = self._get(self.url, headers, self.timeout)
        except FetchError as e:
            logger.error("Release request failed: %s", e)
            return None

        if result.status_code != 200:
            logger.error("Error while checking releases, status: %s", result.status_code)
            return None

        try:
            info = json.loads(result.body)
        except json.JSONDecodeError as e:
            logger.error("Release response is not valid JSON: %s", e)
            return None

        tag = info.get("tag_name") if isinstance(info, dict) else None
        version = try_parse(tag)
        if version is None:
            logger.error("Release tag %r is not a vX.Y.Z version", tag)
            return None

        logger.info("Latest release on GitHub: %s", format_version(version))
        return version
