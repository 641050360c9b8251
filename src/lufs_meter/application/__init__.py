"""Application layer."""

from .measurement_sink import FanOutSink, MeasurementSink, NullMeasurementSink

__all__ = ["FanOutSink", "MeasurementSink", "NullMeasurementSink"]
