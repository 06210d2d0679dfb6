"""Idle-window debouncer for typed stylesheet edits."""

from __future__ import annotations

import threading
from typing import Callable


class Debouncer:
    """Run a callback once input has been idle for ``delay`` seconds.

    Each ``trigger()`` restarts the idle window. ``flush()`` runs a pending
    callback immediately; ``cancel()`` drops it.
    """

    def __init__(self, callback: Callable[[], None], delay: float = 0.5) -> None:
        self._callback = callback
        self._delay = delay
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def trigger(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            timer = threading.Timer(self._delay, lambda: self._fire(timer))
            timer.daemon = True
            self._timer = timer
            timer.start()

    def _fire(self, timer: threading.Timer) -> None:
        with self._lock:
            # A timer that was since replaced or cancelled must not fire.
            if self._timer is not timer:
                return
            self._timer = None
        self._callback()

    def flush(self) -> bool:
        """Run the pending callback now. Returns False if nothing was pending."""
        with self._lock:
            if self._timer is None:
                return False
            self._timer.cancel()
            self._timer = None
        self._callback()
        return True

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
