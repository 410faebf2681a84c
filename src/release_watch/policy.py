"""Decide whether a fetched release counts as an update."""

from __future__ import annotations

from enum import Enum

from release_watch.version import VersionTriple, compare_versions


class Decision(Enum):
    NONE = "none"  # same or older release
    BASELINE = "baseline"  # first observation, record without notifying
    UPDATE = "update"  # strictly newer release


def is_newer(old: VersionTriple, new: VersionTriple) -> bool:
    """Return True if *new* is strictly newer than *old*."""
    return compare_versions(new, old) == 1


def decide(current: VersionTriple, fetched: VersionTriple, first_observation: bool) -> Decision:
    """Classify a fetched release against the current known version.

    *first_observation* is True only when no state file existed at startup
    and nothing has been recorded since.
    """
    if first_observation:
        return Decision.BASELINE
    if is_newer(current, fetched):
        return Decision.UPDATE
    return Decision.NONE
