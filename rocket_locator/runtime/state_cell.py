"""Single-writer, multiple-reader observable value."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class StateCell(Generic[T]):
    """Hold the latest published snapshot and notify subscribers on change.

    Values are replaced wholesale, never mutated, so a reader holding a
    snapshot never sees a later update half applied.

    A subscriber that raises is logged and skipped; the value stays
    published and the remaining subscribers still run.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._lock = threading.Lock()
        self._subscribers: list[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        with self._lock:
            self._value = value
        self._notify(value)

    def update(self, fn: Callable[[T], T]) -> T:
        """Replace the value with ``fn(current)`` and return the new value."""
        with self._lock:
            value = fn(self._value)
            self._value = value
        self._notify(value)
        return value

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register ``callback`` for future values; returns an unsubscribe function."""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, value: T) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(value)
            except Exception:
                logger.exception("State subscriber %r failed", callback)
