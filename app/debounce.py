"""
Timer-reset debouncing for text fields.

Each key owns at most one pending timer. A new call for the key cancels the
pending one and schedules a fresh timer, so a burst of edits collapses into a
single call carrying the last value.
"""
from __future__ import annotations
import logging
import threading
from typing import Any, Callable, Dict

log = logging.getLogger(__name__)


class Debouncer:
    def __init__(self, func: Callable[..., Any], wait_ms: int):
        self.func = func
        self.wait = wait_ms / 1000
        self._pending: Dict[Any, tuple[threading.Timer, tuple]] = {}
        self._lock = threading.Lock()

    def __call__(self, key, *args) -> None:
        """Schedule func(key, *args), replacing any pending call for key."""
        timer = threading.Timer(self.wait, self._fire, args=(key,))
        timer.daemon = True
        with self._lock:
            previous = self._pending.pop(key, None)
            if previous:
                previous[0].cancel()
            self._pending[key] = (timer, args)
        timer.start()

    def _fire(self, key) -> None:
        with self._lock:
            entry = self._pending.pop(key, None)
        if entry is None:        # cancelled or flushed meanwhile
            return
        self.func(key, *entry[1])

    def flush(self) -> int:
        """Run every pending call now. Returns how many ran."""
        with self._lock:
            pending, self._pending = self._pending, {}
        for key, (timer, args) in pending.items():
            timer.cancel()
            self.func(key, *args)
        if pending:
            log.debug("Flushed %d pending update(s)", len(pending))
        return len(pending)

    def cancel(self) -> None:
        with self._lock:
            pending, self._pending = self._pending, {}
        for timer, _ in pending.values():
            timer.cancel()

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._pending)
