from __future__ import annotations

from pathlib import Path
from typing import Any

import json

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_SAMPLE_RATE_HZ = 48_000
DEFAULT_BLOCK_SIZE = 128
DEFAULT_CHANNEL_CAPACITY = 64


class MeterSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    sample_rate_hz: int = Field(..., gt=0)
    momentary_window_s: float = Field(0.4, gt=0.0)
    short_term_window_s: float = Field(3.0, gt=0.0)
    throttle_period_s: float = Field(0.05, gt=0.0)
    gate_threshold_db: float = Field(-70.0, le=0.0)
    buffer_margin_s: float = Field(0.125, ge=0.0)
    buffer_capacity_samples: int | None = Field(None, gt=0)
    block_size: int = Field(DEFAULT_BLOCK_SIZE, gt=0)
    channel_capacity: int = Field(DEFAULT_CHANNEL_CAPACITY, gt=0)

    @property
    def momentary_window_samples(self) -> int:
        return int(round(self.sample_rate_hz * self.momentary_window_s))

    @property
    def short_term_window_samples(self) -> int:
        return int(round(self.sample_rate_hz * self.short_term_window_s))

    @property
    def capacity_samples(self) -> int:
        if self.buffer_capacity_samples is not None:
            return self.buffer_capacity_samples
        return int(round(self.sample_rate_hz * (self.short_term_window_s + self.buffer_margin_s)))

    @model_validator(mode="after")
    def _validate_windows(self) -> MeterSettings:
        momentary = self.momentary_window_samples
        short_term = self.short_term_window_samples
        if momentary <= 0:
            raise ValueError("momentary window must span at least one sample.")
        if short_term < momentary:
            raise ValueError("short-term window must not be shorter than the momentary window.")
        if self.capacity_samples < short_term:
            raise ValueError(
                f"buffer capacity of {self.capacity_samples} samples cannot hold "
                f"the {short_term}-sample short-term window."
            )
        return self


def load_meter_overrides(path: Path) -> dict[str, Any]:
    """Validated settings from ``path`` without the sample rate.

    Sources negotiate the rate at run time, so a file may omit it.
    """

    data = _load_config_data(path)
    data.setdefault("sample_rate_hz", DEFAULT_SAMPLE_RATE_HZ)
    settings = MeterSettings.model_validate(data)
    overrides = settings.model_dump(exclude_unset=True)
    overrides.pop("sample_rate_hz", None)
    return overrides


def _load_config_data(path: Path) -> dict:
    if path.suffix.lower() in {".yaml", ".yml"}:
        import yaml

        with path.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle) or {}

    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)
