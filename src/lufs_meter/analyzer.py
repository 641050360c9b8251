"""Streaming loudness analyzer driven by fixed-size sample blocks."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from .application.measurement_sink import MeasurementSink, NullMeasurementSink
from .integration import IntegrationState
from .measurement import Measurement
from .ring_buffer import RingBuffer
from .statistics import peak_db, rms_db
from .utils.config import MeterSettings

logger = logging.getLogger(__name__)

# Float clocks built from block durations land a hair short of the period.
_CLOCK_TOLERANCE_S = 1e-9


class LoudnessAnalyzer:
    """Accumulate blocks into a ring buffer and emit throttled measurements.

    ``current_time`` is an audio-clock reading in seconds supplied by the
    caller; the analyzer owns no timers. A measurement is due once at least
    ``throttle_period_s`` has elapsed since the previous emission.
    """

    def __init__(self, settings: MeterSettings, sink: MeasurementSink | None = None) -> None:
        self.settings = settings
        self.momentary_window_samples = settings.momentary_window_samples
        self.short_term_window_samples = settings.short_term_window_samples
        self.throttle_period_s = settings.throttle_period_s

        self._buffer = RingBuffer(settings.capacity_samples)
        self._integration = IntegrationState(gate_threshold_db=settings.gate_threshold_db)
        self._sink: MeasurementSink = sink if sink is not None else NullMeasurementSink()
        self._last_emit_time = 0.0

        logger.info(
            "loudness_analyzer_created",
            extra={
                "sample_rate_hz": settings.sample_rate_hz,
                "momentary_window_samples": self.momentary_window_samples,
                "short_term_window_samples": self.short_term_window_samples,
                "capacity_samples": self._buffer.capacity,
            },
        )

    @classmethod
    def for_sample_rate(
        cls,
        sample_rate_hz: int,
        sink: MeasurementSink | None = None,
        **overrides: Any,
    ) -> LoudnessAnalyzer:
        settings = MeterSettings(sample_rate_hz=sample_rate_hz, **overrides)
        return cls(settings, sink=sink)

    @property
    def buffer(self) -> RingBuffer:
        return self._buffer

    @property
    def integration(self) -> IntegrationState:
        return self._integration

    @property
    def last_emit_time(self) -> float:
        return self._last_emit_time

    def push_block(self, samples: np.ndarray, current_time: float) -> Measurement | None:
        """Accumulate ``samples``; evaluate and publish if the throttle period has passed."""

        self._buffer.push_block(samples)
        if current_time - self._last_emit_time + _CLOCK_TOLERANCE_S < self.throttle_period_s:
            return None

        measurement = self.evaluate()
        self._last_emit_time = current_time
        self._sink.publish(measurement)
        return measurement

    def evaluate(self) -> Measurement:
        """Compute all five values from the current history and fold the gate."""

        momentary = rms_db(self._buffer, self.momentary_window_samples)
        short_term = rms_db(self._buffer, self.short_term_window_samples)
        self._integration.accumulate(momentary)

        return Measurement(
            momentary=momentary,
            short_term=short_term,
            integrated=self._integration.integrated_db(),
            lra=abs(momentary - short_term),
            true_peak=peak_db(self._buffer, self.momentary_window_samples),
        )

    def reset(self) -> None:
        """Restart integration. Ring buffer history is kept."""

        self._integration.reset()
        logger.info("loudness_analyzer_reset", extra={"sample_rate_hz": self.settings.sample_rate_hz})
