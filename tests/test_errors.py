"""Tests for release_watch.errors."""

from __future__ import annotations

import http.client
import socket
from urllib.error import URLError

from release_watch.errors import FetchError, ReleaseWatchError, categorize_fetch_error


class TestCategorizeFetchError:
    def test_url_error_timeout(self):
        err = categorize_fetch_error(URLError(socket.timeout("timed out")))
        assert isinstance(err, FetchError)
        assert err.message.startswith("Request timed out")

    def test_url_error_timeout_text(self):
        err = categorize_fetch_error(URLError("_ssl.c:989: The handshake operation timed out"))
        assert err.message.startswith("Request timed out")

    def test_url_error_refused(self):
        err = categorize_fetch_error(URLError(ConnectionRefusedError(111, "Connection refused")))
        assert err.message.startswith("Connection failed")
        assert "Connection refused" in err.message

    def test_bare_timeout(self):
        assert categorize_fetch_error(TimeoutError()).message.startswith("Request timed out")

    def test_other_os_error(self):
        err = categorize_fetch_error(ConnectionResetError("reset by peer"))
        assert err.message == "Network error: reset by peer"
        assert err.status_code is None

    def test_http_protocol_error(self):
        err = categorize_fetch_error(http.client.IncompleteRead(b"{", 100))
        assert err.message.startswith("Connection failed: IncompleteRead")

    def test_fetch_error_passes_through(self):
        original = FetchError("boom", status_code=502)
        assert categorize_fetch_error(original) is original

    def test_hierarchy(self):
        assert issubclass(FetchError, ReleaseWatchError)
