"""
Observable state for the tracker screens.

LiveValue holds a value and notifies subscribers synchronously on every set.
`map` derives a new LiveValue that is recomputed whenever its source changes.
Event is a one-shot signal: it stays pending until a consumer calls `consume`.

None of this is thread-safe; all sets happen on the coordinator's event loop.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

Callback = Callable[[T], None]


def _notify(subscribers: list, value, owner: str) -> int:
    notified = 0
    for callback in list(subscribers):
        try:
            callback(value)
            notified += 1
        except Exception as e:
            logger.warning(
                "%s subscriber error: %s (callback: %s)",
                owner,
                e,
                getattr(callback, "__name__", str(callback)),
            )
    return notified


class LiveValue(Generic[T]):
    def __init__(self, value: T = None, name: str = "LiveValue"):
        self._value = value
        self._subscribers: list[Callback] = []
        self.name = name
        self._detach: Optional[Callable[[], bool]] = None

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> int:
        """Store the value and notify every subscriber. Returns how many were notified."""
        self._value = value
        return _notify(self._subscribers, value, self.name)

    def subscribe(self, callback: Callback) -> bool:
        if callback in self._subscribers:
            return False
        self._subscribers.append(callback)
        return True

    def unsubscribe(self, callback: Callback) -> bool:
        try:
            self._subscribers.remove(callback)
            return True
        except ValueError:
            return False

    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def map(self, transform: Callable[[T], R], name: Optional[str] = None) -> "LiveValue[R]":
        derived: LiveValue[R] = LiveValue(transform(self._value), name=name or f"{self.name}.map")

        def recompute(value: T) -> None:
            derived.set(transform(value))

        recompute.__name__ = f"recompute_{derived.name}"
        self.subscribe(recompute)
        derived._detach = lambda: self.unsubscribe(recompute)
        return derived

    def detach(self) -> bool:
        """Stop following the source this value was mapped from."""
        if self._detach is None:
            return False
        detached = self._detach()
        self._detach = None
        return detached

    def __repr__(self) -> str:
        return f"<LiveValue {self.name}={self._value!r}>"


class Event(Generic[T]):
    """Consume-once signal. `fire` makes it pending, `consume` hands the payload out once."""

    def __init__(self, name: str = "Event"):
        self.name = name
        self._payload: Optional[T] = None
        self._pending = False
        self._subscribers: list[Callback] = []

    @property
    def pending(self) -> bool:
        return self._pending

    @property
    def value(self) -> Optional[T]:
        return self._payload if self._pending else None

    def fire(self, payload: T) -> int:
        self._payload = payload
        self._pending = True
        return _notify(self._subscribers, payload, self.name)

    def consume(self) -> Optional[T]:
        if not self._pending:
            return None
        payload = self._payload
        self._payload = None
        self._pending = False
        return payload

    def subscribe(self, callback: Callback) -> bool:
        if callback in self._subscribers:
            return False
        self._subscribers.append(callback)
        return True

    def unsubscribe(self, callback: Callback) -> bool:
        try:
            self._subscribers.remove(callback)
            return True
        except ValueError:
            return False

    def __repr__(self) -> str:
        return f"<Event {self.name} pending={self._pending}>"
