from .config import (
    DEFAULT_BLOCK_SIZE,
    DEFAULT_CHANNEL_CAPACITY,
    DEFAULT_SAMPLE_RATE_HZ,
    MeterSettings,
    load_meter_overrides,
)

__all__ = [
    "DEFAULT_BLOCK_SIZE",
    "DEFAULT_CHANNEL_CAPACITY",
    "DEFAULT_SAMPLE_RATE_HZ",
    "MeterSettings",
    "load_meter_overrides",
]
