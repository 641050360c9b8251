"""Logging-backed implementation of the measurement sink."""

from __future__ import annotations

import logging

from lufs_meter.measurement import Measurement

LOGGER = logging.getLogger("lufs_meter.measurements")


class LoggingMeasurementSink:
    """Emit each measurement as a structured debug record."""

    def publish(self, measurement: Measurement) -> None:
        if not LOGGER.isEnabledFor(logging.DEBUG):
            return
        LOGGER.debug("measurement_emitted", extra={"measurement": measurement.to_dict()})
