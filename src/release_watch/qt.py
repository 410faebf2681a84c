"""PyQt6 bridge: delivers update events to a GUI host as a Qt signal.

The scheduler calls its notifier from the polling thread. Connecting a slot to
:attr:`UpdateSignals.update_available` with the default (auto) connection type
queues the call onto the receiver's thread, so widgets are only touched from
the GUI thread.
"""

from __future__ import annotations

from collections.abc import Callable

from PyQt6.QtCore import QObject, pyqtSignal

from release_watch.scheduler import UpdateEvent


class UpdateSignals(QObject):
    """Signal carrier living on the GUI thread."""

    update_available = pyqtSignal(object)  # UpdateEvent

    def __init__(self, parent=None):
        super().__init__(parent)
        self.last_event: UpdateEvent | None = None

    def publish(self, event: UpdateEvent) -> None:
        self.last_event = event
        self.update_available.emit(event)


def qt_notifier(signals: UpdateSignals) -> Callable[[UpdateEvent], None]:
    """Return a scheduler notifier that emits on *signals*."""
    return signals.publish
