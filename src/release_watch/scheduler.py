"""Polling scheduler: a startup delay, then one release check per interval.

One daemon thread drives the checks, so cycles never overlap. The thread
waits on a :class:`threading.Event`, which makes :meth:`PollingScheduler.stop`
return promptly even in the middle of a day-long interval.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from release_watch.fetcher import ReleaseFetcher
from release_watch.policy import Decision, decide
from release_watch.store import VersionStore
from release_watch.version import VersionTriple, format_version

logger = logging.getLogger(__name__)

DEFAULT_STARTUP_DELAY = 300.0  # 5 minutes
DEFAULT_POLL_INTERVAL = 86400.0  # once per day


class CycleOutcome(Enum):
    """What the most recent check cycle did."""

    SKIPPED = "skipped"  # fetch failed, nothing compared
    UNCHANGED = "unchanged"  # same or older release
    BASELINE = "baseline"  # first version recorded, no notification
    UPDATED = "updated"  # newer release notified and recorded


@dataclass(frozen=True)
class UpdateEvent:
    """A newer release was detected."""

    new: VersionTriple
    old: VersionTriple

    def as_payload(self) -> dict[str, int]:
        """Flatten into the six integer fields hosts expect."""
        return {
            "new_major": self.new.major,
            "new_minor": self.new.minor,
            "new_revision": self.new.revision,
            "old_major": self.old.major,
            "old_minor": self.old.minor,
            "old_revision": self.old.revision,
        }


class PollingScheduler:
    """Owns the current known version and the timer that re-checks it.

    The store is read once, at construction. After that the in-memory value is
    authoritative and the file is only written when a newer release is seen.
    """

    def __init__(
        self,
        store: VersionStore,
        fetcher: ReleaseFetcher,
        notifier: Callable[[UpdateEvent], None],
        startup_delay: float = DEFAULT_STARTUP_DELAY,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self._store = store
        self._fetcher = fetcher
        self._notifier = notifier
        self.startup_delay = startup_delay
        self.poll_interval = poll_interval

        state = store.load_state()
        self._current = state.version
        self._first_observation = not state.found
        self.last_outcome: CycleOutcome | None = None

        self._cycle_lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

        logger.info(
            "Release watcher initialized. Latest known version - %s",
            format_version(self._current),
        )

    @property
    def current(self) -> VersionTriple:
        return self._current

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # ── Lifecycle ──

    def start(self) -> None:
        """Start the polling thread. Raises RuntimeError if already running."""
        if self.running:
            raise RuntimeError("Scheduler is already running")
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._loop, name="release-watch", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: float = 5.0) -> None:
        """Stop the polling thread and wait for it. Safe to call more than once.

        If the thread outlives *timeout* (a fetch still in flight) it is kept,
        so :meth:`start` keeps refusing until it has exited.
        """
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            if not self._thread.is_alive():
                self._thread = None

    def wait(self, timeout: float | None = None) -> bool:
        """Block until :meth:`stop` is called. Returns True if stopped."""
        return self._stop.wait(timeout)

    def _loop(self) -> None:
        if self._stop.wait(self.startup_delay):
            return
        while True:
            try:
                self.run_cycle()
            except Exception:
                logger.exception("Release check failed")
            if self._stop.wait(self.poll_interval):
                return

    # ── Check cycle ──

    def run_cycle(self) -> UpdateEvent | None:
        """Fetch, compare, and notify/persist if a newer release appeared.

        Returns the event that was sent to the notifier, or None. The kind of
        cycle it was is left in :attr:`last_outcome`.
        """
        with self._cycle_lock:
            logger.info("Checking releases...")
            fetched = self._fetcher.fetch_latest()
            if fetched is None:
                self.last_outcome = CycleOutcome.SKIPPED
                return None

            decision = decide(self._current, fetched, self._first_observation)
            if decision is Decision.NONE:
                logger.debug(
                    "No new release (latest %s, known %s)",
                    format_version(fetched),
                    format_version(self._current),
                )
                self.last_outcome = CycleOutcome.UNCHANGED
                return None

            event = None
            if decision is Decision.BASELINE:
                logger.info(
                    "Latest release detected %s (no saved version found)",
                    format_version(fetched),
                )
            else:
                event = UpdateEvent(new=fetched, old=self._current)
                self._notifier(event)
                logger.info(
                    "New version available %s (old %s)",
                    format_version(fetched),
                    format_version(self._current),
                )

            # In-memory state advances even if the write fails; the next
            # process start re-detects the same release.
            self._store.save(fetched)
            self._current = fetched
            self._first_observation = False
            self.last_outcome = (
                CycleOutcome.BASELINE if decision is Decision.BASELINE else CycleOutcome.UPDATED
            )
            return event
