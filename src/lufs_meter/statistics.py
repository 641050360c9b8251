"""Window statistics over the trailing samples of a :class:`RingBuffer`.

Both functions are pure: they read buffer contents at call time and do not
depend on wall-clock time. Silence and empty windows resolve to
``FLOOR_DB`` before any logarithm is taken.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .ring_buffer import RingBuffer

FLOOR_DB = -100.0
EPSILON = 1e-8


def linear_to_db(value: float) -> float:
    """Convert a linear amplitude to dB, flooring at ``FLOOR_DB``."""

    if value <= EPSILON:
        return FLOOR_DB
    return 20.0 * math.log10(value)


def rms_db(buffer: RingBuffer, window: int) -> float:
    """RMS of the most recent ``window`` samples, in dB."""

    if window <= 0:
        return FLOOR_DB

    total = 0.0
    for segment in buffer.segments(window):
        if segment.size:
            total += float(segment.dot(segment))

    return linear_to_db(math.sqrt(total / window))


def peak_db(buffer: RingBuffer, window: int) -> float:
    """Maximum absolute sample of the most recent ``window`` samples, in dB."""

    if window <= 0:
        return FLOOR_DB

    peak = 0.0
    for segment in buffer.segments(window):
        if segment.size:
            peak = max(peak, float(segment.max()), -float(segment.min()))

    return linear_to_db(peak)
