"""``major.minor.revision`` release versions as written in upstream tags."""

from __future__ import annotations

import re
from dataclasses import dataclass

# Release tag format: "v14.2.0"
_TAG_RE = re.compile(r"v(\d+)\.(\d+)\.(\d+)")


@dataclass(frozen=True, order=True)
class VersionTriple:
    """An immutable release version, ordered lexicographically."""

    major: int = 0
    minor: int = 0
    revision: int = 0

    def __post_init__(self) -> None:
        for name in ("major", "minor", "revision"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative int, got {value!r}")

    def __str__(self) -> str:
        return format_version(self)


# Stands for "absent or unparseable"; indistinguishable from a real v0.0.0.
SENTINEL = VersionTriple(0, 0, 0)


def try_parse(text: object) -> VersionTriple | None:
    """Parse a tag like ``"v1.2.3"``. Returns None if it does not match exactly.

    The whole string must match: no surrounding whitespace, no trailing text.
    """
    if not isinstance(text, str):
        return None
    m = _TAG_RE.fullmatch(text)
    if m is None:
        return None
    major, minor, revision = (int(g) for g in m.groups())
    return VersionTriple(major, minor, revision)


def parse_version(text: object) -> VersionTriple:
    """Parse a tag like ``"v1.2.3"``, degrading to :data:`SENTINEL` on mismatch."""
    version = try_parse(text)
    return SENTINEL if version is None else version


def compare_versions(a: VersionTriple, b: VersionTriple) -> int:
    """Compare two versions.

    Returns:
        -1 if a < b
         0 if a == b
         1 if a > b
    """
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def format_version(v: VersionTriple) -> str:
    """Render as ``v{major}.{minor}.{revision}``."""
    return f"v{v.major}.{v.minor}.{v.revision}"
