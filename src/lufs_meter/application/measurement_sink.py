"""Application-level measurement delivery contracts."""

from __future__ import annotations

from typing import Iterable, Protocol

from lufs_meter.measurement import Measurement


class MeasurementSink(Protocol):
    """Port receiving measurements from the real-time producer.

    Implementations must return promptly and never wait on a consumer.
    """

    def publish(self, measurement: Measurement) -> None:
        """Deliver a single measurement."""


class NullMeasurementSink:
    """No-op sink used when nobody is listening."""

    def publish(self, measurement: Measurement) -> None:  # noqa: ARG002
        return


class FanOutSink:
    """Forward every measurement to several sinks, in order."""

    def __init__(self, sinks: Iterable[MeasurementSink]) -> None:
        self._sinks = tuple(sinks)

    def publish(self, measurement: Measurement) -> None:
        for sink in self._sinks:
            sink.publish(measurement)
