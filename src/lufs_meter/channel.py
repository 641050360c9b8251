"""Bounded one-way channel from the audio callback to a slower consumer.

The producer side only appends to a ``deque`` with ``maxlen``; when the
consumer falls behind, the oldest unread measurements fall off the front.
Delivery order is always production order.
"""

from __future__ import annotations

import threading
from collections import deque

from .errors import MeterConfigurationError
from .measurement import Measurement
from .utils.config import DEFAULT_CHANNEL_CAPACITY


class MeasurementChannel:
    def __init__(self, capacity: int = DEFAULT_CHANNEL_CAPACITY) -> None:
        if capacity <= 0:
            raise MeterConfigurationError(
                "invalid_capacity", f"Channel capacity must be positive, got {capacity}."
            )
        self._queue: deque[Measurement] = deque(maxlen=capacity)
        self._ready = threading.Event()
        self._sent = 0
        self._dropped = 0

    @property
    def capacity(self) -> int:
        return self._queue.maxlen or 0

    @property
    def sent(self) -> int:
        return self._sent

    @property
    def dropped(self) -> int:
        """Measurements discarded unread because the consumer lagged."""
        return self._dropped

    def __len__(self) -> int:
        return len(self._queue)

    def publish(self, measurement: Measurement) -> None:
        if len(self._queue) == self._queue.maxlen:
            self._dropped += 1
        self._queue.append(measurement)
        self._sent += 1
        self._ready.set()

    def receive(self, timeout: float | None = None) -> Measurement | None:
        """Oldest unread measurement, or ``None`` if none arrives in time."""

        while True:
            try:
                return self._queue.popleft()
            except IndexError:
                pass
            self._ready.clear()
            if self._queue:
                continue
            if not self._ready.wait(timeout):
                return None

    def drain(self) -> list[Measurement]:
        drained = []
        while True:
            try:
                drained.append(self._queue.popleft())
            except IndexError:
                return drained

    def latest(self) -> Measurement | None:
        """Coalesce: discard everything unread except the newest measurement."""

        drained = self.drain()
        return drained[-1] if drained else None
