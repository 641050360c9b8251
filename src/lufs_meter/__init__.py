"""Public package exports for lufs-meter with lazy imports."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "ArrayAudioSource",
    "IntegrationState",
    "LoudnessAnalyzer",
    "Measurement",
    "MeasurementChannel",
    "MeterAudio",
    "MeterConfigurationError",
    "MeterSettings",
    "MeteringReport",
    "RingBuffer",
    "format_readout",
    "peak_db",
    "rms_db",
]

_EXPORT_MODULES: dict[str, str] = {
    "ArrayAudioSource": "lufs_meter.audio_source",
    "IntegrationState": "lufs_meter.integration",
    "LoudnessAnalyzer": "lufs_meter.analyzer",
    "Measurement": "lufs_meter.measurement",
    "MeasurementChannel": "lufs_meter.channel",
    "MeterAudio": "lufs_meter.application.metering_service",
    "MeterConfigurationError": "lufs_meter.errors",
    "MeterSettings": "lufs_meter.utils.config",
    "MeteringReport": "lufs_meter.application.metering_service",
    "RingBuffer": "lufs_meter.ring_buffer",
    "format_readout": "lufs_meter.display",
    "peak_db": "lufs_meter.statistics",
    "rms_db": "lufs_meter.statistics",
}


def __getattr__(name: str) -> Any:
    if name not in _EXPORT_MODULES:
        raise AttributeError(f"module 'lufs_meter' has no attribute {name!r}")

    module = import_module(_EXPORT_MODULES[name])
    value = getattr(module, name)
    globals()[name] = value
    return value
