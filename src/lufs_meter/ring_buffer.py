"""Fixed-capacity circular store of recent mono samples."""

from __future__ import annotations

import numpy as np

from . import statistics
from .errors import MeterConfigurationError


class RingBuffer:
    """Zero-initialised sample arena plus a write cursor.

    The cursor always points at the next slot to write. Reads walk back from
    ``cursor - 1`` and wrap at zero, so a window over history that was never
    written reads as silence.
    """

    __slots__ = ("_buffer", "_cursor")

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise MeterConfigurationError(
                "invalid_capacity", f"Ring buffer capacity must be positive, got {capacity}."
            )
        self._buffer = np.zeros(int(capacity), dtype=np.float64)
        self._cursor = 0

    @property
    def capacity(self) -> int:
        return self._buffer.size

    @property
    def cursor(self) -> int:
        return self._cursor

    def push(self, sample: float) -> None:
        self._buffer[self._cursor] = sample
        self._cursor += 1
        if self._cursor == self._buffer.size:
            self._cursor = 0

    def push_block(self, samples: np.ndarray) -> None:
        """Write ``samples`` oldest first, exactly as repeated :meth:`push`."""

        block = np.asarray(samples).reshape(-1)
        count = block.size
        if count == 0:
            return

        capacity = self._buffer.size
        if count > capacity:
            # Only the newest ``capacity`` samples survive.
            self._cursor = (self._cursor + count - capacity) % capacity
            block = block[count - capacity :]
            count = capacity

        end = self._cursor + count
        if end <= capacity:
            self._buffer[self._cursor : end] = block
        else:
            first = capacity - self._cursor
            self._buffer[self._cursor :] = block[:first]
            self._buffer[: end - capacity] = block[first:]
        self._cursor = end % capacity

    def segments(self, window: int) -> tuple[np.ndarray, np.ndarray]:
        """Views over the last ``window`` samples, in chronological order."""

        capacity = self._buffer.size
        if window < 0 or window > capacity:
            raise MeterConfigurationError(
                "invalid_window", f"Window of {window} samples does not fit capacity {capacity}."
            )

        if window <= self._cursor:
            return self._buffer[self._cursor - window : self._cursor], self._buffer[:0]
        wrapped = window - self._cursor
        return self._buffer[capacity - wrapped :], self._buffer[: self._cursor]

    def snapshot(self) -> np.ndarray:
        """Copy of the whole buffer, oldest sample first."""

        return np.concatenate(self.segments(self._buffer.size))

    def rms_db(self, window: int) -> float:
        return statistics.rms_db(self, window)

    def peak_db(self, window: int) -> float:
        return statistics.peak_db(self, window)
