"""Monotonic request tokens.

A refresh takes a token before it reads from the store and may only publish
its result while that token is still the newest one issued. A slow response
to an older selection is therefore dropped instead of overwriting a newer one.
"""

from __future__ import annotations

import threading
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class RequestSequencer:
    def __init__(self):
        self._lock = threading.Lock()
        self._last = 0

    def issue(self) -> int:
        with self._lock:
            self._last += 1
            return self._last

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._last


class LatestOnly(Generic[T]):
    """Holds the result of the newest refresh of one computation."""

    def __init__(self):
        self._sequencer = RequestSequencer()
        self._lock = threading.Lock()
        self._value: Optional[T] = None

    @property
    def value(self) -> Optional[T]:
        with self._lock:
            return self._value

    def begin(self) -> int:
        return self._sequencer.issue()

    def publish(self, token: int, value: T) -> bool:
        with self._lock:
            if not self._sequencer.is_current(token):
                return False
            self._value = value
            return True

    def clear(self) -> None:
        token = self.begin()
        with self._lock:
            if self._sequencer.is_current(token):
                self._value = None

    def run(self, fn: Callable[..., T], *args, **kwargs) -> bool:
        """Compute and publish; returns False when a newer refresh superseded this one."""
        token = self.begin()
        value = fn(*args, **kwargs)
        return self.publish(token, value)
