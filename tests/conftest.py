"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import pytest

from release_watch.store import VersionStore
from release_watch.version import VersionTriple


class FakeFetcher:
    """Stands in for ReleaseFetcher: returns queued results in order."""

    def __init__(self, results: Iterable[VersionTriple | None]) -> None:
        self._results = list(results)
        self.calls = 0

    def fetch_latest(self) -> VersionTriple | None:
        self.calls += 1
        if not self._results:
            return None
        return self._results.pop(0)


@pytest.fixture(scope="session")
def qapp():
    """Shared QCoreApplication instance for tests that need a Qt event loop."""
    QtCore = pytest.importorskip("PyQt6.QtCore")

    return QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])


@pytest.fixture
def state_file(tmp_path: Path) -> Path:
    """Path to a (not yet existing) version state file."""
    return tmp_path / "state" / "latest_release.ver"


@pytest.fixture
def store(state_file: Path) -> VersionStore:
    return VersionStore(str(state_file))
