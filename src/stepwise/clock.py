"""
Tick sources that drive a controller's elapsed time.

Everything here is cooperative: nothing runs on another thread, and
stop() takes effect before it returns.
"""

from __future__ import annotations

import math
import time
from typing import Callable, Protocol

TickCallback = Callable[[float], None]


class TickSource(Protocol):
    """A periodic clock feeding delta seconds into a callback."""

    @property
    def running(self) -> bool:
        ...

    def start(self, callback: TickCallback) -> None:
        ...

    def stop(self) -> None:
        ...


class ManualTicker:
    """Tick source driven explicitly by the host (tests, embedding UIs)."""

    def __init__(self):
        self._callback: TickCallback | None = None

    @property
    def running(self) -> bool:
        return self._callback is not None

    def start(self, callback: TickCallback) -> None:
        self._callback = callback

    def stop(self) -> None:
        self._callback = None

    def advance(self, seconds: float) -> None:
        """Deliver one tick. Ignored while stopped."""
        if self._callback is not None:
            self._callback(seconds)


class MonotonicTicker:
    """
    Measures wall time with a monotonic clock and delivers it in whole
    intervals each time poll() is called.
    """

    def __init__(self, interval: float = 1.0, clock: Callable[[], float] = time.monotonic):
        if interval <= 0:
            raise ValueError("Tick interval must be positive")
        self.interval = interval
        self._clock = clock
        self._callback: TickCallback | None = None
        self._last = 0.0

    @property
    def running(self) -> bool:
        return self._callback is not None

    def start(self, callback: TickCallback) -> None:
        self._callback = callback
        self._last = self._clock()

    def stop(self) -> None:
        self._callback = None

    def poll(self) -> float:
        """Forward the whole intervals elapsed since the last delivery. Returns seconds delivered."""
        if self._callback is None:
            return 0.0
        whole = math.floor((self._clock() - self._last) / self.interval)
        if whole <= 0:
            return 0.0
        delta = whole * self.interval
        self._last += delta
        self._callback(delta)
        return delta
