"""Last known release version, persisted as a one-line text file."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from release_watch.version import SENTINEL, VersionTriple, format_version, try_parse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredVersion:
    """Result of reading the state file."""

    version: VersionTriple
    found: bool  # False only when the file does not exist


class VersionStore:
    """Load/save a :class:`VersionTriple` to a single state file.

    The file holds exactly ``v{major}.{minor}.{revision}``. It is opened and
    closed within each call, never held across cycles.
    """

    def __init__(self, path: str) -> None:
        self.path = path

    def load_state(self) -> StoredVersion:
        """Read the stored version. Missing, unreadable or corrupt files degrade to the sentinel."""
        if not os.path.exists(self.path):
            logger.info("No version file at %s", self.path)
            return StoredVersion(SENTINEL, found=False)

        try:
            with open(self.path, encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Cannot read version file %s: %s", self.path, e)
            return StoredVersion(SENTINEL, found=True)

        version = try_parse(text)
        if version is None:
            logger.warning("Version file %s holds unparseable text %r", self.path, text[:40])
            return StoredVersion(SENTINEL, found=True)
        return StoredVersion(version, found=True)

    def load(self) -> VersionTriple:
        """Return the stored version, or :data:`SENTINEL` if there is none."""
        return self.load_state().version

    def save(self, version: VersionTriple) -> bool:
        """Overwrite the state file. Returns False (and logs) if the write failed."""
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(format_version(version))
        except OSError as e:
            logger.error("Error writing version file %s: %s", self.path, e)
            return False
        return True
