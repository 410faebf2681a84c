"""Watcher settings, persisted to %APPDATA%/release_watch/settings.json."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass

from release_watch.fetcher import DEFAULT_REPO, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from release_watch.scheduler import DEFAULT_POLL_INTERVAL, DEFAULT_STARTUP_DELAY

_STATE_FILENAME = "latest_release.ver"


@dataclass
class WatchSettings:
    """Top-level watcher settings."""

    repo: str = DEFAULT_REPO
    user_agent: str = DEFAULT_USER_AGENT
    state_file: str = ""  # empty -> <settings dir>/latest_release.ver
    startup_delay: float = DEFAULT_STARTUP_DELAY
    poll_interval: float = DEFAULT_POLL_INTERVAL
    request_timeout: float = DEFAULT_TIMEOUT

    def state_path(self) -> str:
        """Return the effective path of the version state file."""
        return self.state_file or os.path.join(_settings_dir(), _STATE_FILENAME)


def _settings_dir() -> str:
    """Return the settings directory path (%APPDATA%/release_watch/)."""
    appdata = os.environ.get("APPDATA", "")
    if not appdata:
        appdata = os.path.expanduser("~")
    return os.path.join(appdata, "release_watch")


def _settings_path() -> str:
    """Return the full path to settings.json."""
    return os.path.join(_settings_dir(), "settings.json")


def load_settings() -> WatchSettings:
    """Load settings from disk. Returns defaults if file missing or corrupt."""
    path = _settings_path()
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError, ValueError):
        return WatchSettings()

    if not isinstance(data, dict):
        return WatchSettings()

    defaults = WatchSettings()
    try:
        return WatchSettings(
            repo=str(data.get("repo", defaults.repo)),
            user_agent=str(data.get("user_agent", defaults.user_agent)),
            state_file=str(data.get("state_file", defaults.state_file)),
            startup_delay=float(data.get("startup_delay", defaults.startup_delay)),
            poll_interval=float(data.get("poll_interval", defaults.poll_interval)),
            request_timeout=float(data.get("request_timeout", defaults.request_timeout)),
        )
    except (TypeError, ValueError):
        return defaults


def save_settings(settings: WatchSettings) -> None:
    """Save settings to disk. Creates the directory if needed."""
    directory = _settings_dir()
    os.makedirs(directory, exist_ok=True)

    path = _settings_path()
    data = asdict(settings)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
