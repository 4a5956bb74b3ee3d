"""Single-slot toast notification store."""

from __future__ import annotations

import asyncio
import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)


class ToastSeverity(str, Enum):
    """Visual severity of a notification."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Notification:
    """A notification occupying the toast slot."""

    id: int
    message: str
    severity: ToastSeverity = ToastSeverity.INFO
    duration: float | None = None


Listener = Callable[["Notification | None"], None]


class ToastNotifier:
    """Last-write-wins notification slot.

    Showing a notification replaces whatever is displayed; there is no queue.
    Listeners are called with the new slot value (None after dismissal).
    Meant to be used from a single event loop thread.
    """

    def __init__(self) -> None:
        self._current: Notification | None = None
        self._listeners: list[Listener] = []
        self._ids = itertools.count(1)
        self._dismiss_handle: asyncio.TimerHandle | None = None

    @property
    def current(self) -> Notification | None:
        """The notification currently displayed, if any."""
        return self._current

    def show(
        self,
        message: str,
        severity: ToastSeverity | str = ToastSeverity.INFO,
        duration: float | None = None,
    ) -> Notification:
        """Display a notification, replacing the current one.

        Args:
            message: Text to display.
            severity: success, error or info.
            duration: Seconds until automatic dismissal; None keeps it until dismissed.

        Returns:
            Notification: The notification now in the slot.
        """
        self._cancel_timer()
        notification = Notification(
            id=next(self._ids),
            message=message,
            severity=ToastSeverity(severity),
            duration=duration,
        )
        self._current = notification
        logger.debug("Toast %d (%s): %s", notification.id, notification.severity.value, message)

        if duration is not None:
            self._schedule_dismiss(notification.id, duration)

        self._notify()
        return notification

    def dismiss(self, notification_id: int | None = None) -> None:
        """Clear the slot.

        Args:
            notification_id: Only dismiss if this notification is still shown.
                A stale id is ignored so an old timer cannot clear a newer toast.
        """
        if self._current is None:
            return
        if notification_id is not None and self._current.id != notification_id:
            return

        self._cancel_timer()
        self._current = None
        self._notify()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for slot changes.

        Returns:
            Callable: Function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._current)

    def _schedule_dismiss(self, notification_id: int, duration: float) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, toast %d will not auto-dismiss", notification_id)
            return
        self._dismiss_handle = loop.call_later(duration, self.dismiss, notification_id)

    def _cancel_timer(self) -> None:
        if self._dismiss_handle is not None:
            self._dismiss_handle.cancel()
            self._dismiss_handle = None
