"""Application services that run audio through the loudness analyzer."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np

from lufs_meter.analyzer import LoudnessAnalyzer
from lufs_meter.application.measurement_sink import FanOutSink, MeasurementSink, NullMeasurementSink
from lufs_meter.audio_contract import ensure_supported_path
from lufs_meter.audio_source import ArrayAudioSource
from lufs_meter.infrastructure.pedalboard_codec import load_audio_file
from lufs_meter.measurement import Measurement
from lufs_meter.reference_loudness import measure_reference_lufs
from lufs_meter.utils.config import MeterSettings

logger = logging.getLogger(__name__)


class _RecordingSink:
    def __init__(self) -> None:
        self.measurements: list[Measurement] = []

    def publish(self, measurement: Measurement) -> None:
        self.measurements.append(measurement)


@dataclass(frozen=True, slots=True)
class MeteringReport:
    """Everything one pass of the meter over a signal produced."""

    sample_rate_hz: int
    duration_seconds: float
    measurements: tuple[Measurement, ...]
    reference_integrated_lufs: float | None = None

    @property
    def final(self) -> Measurement | None:
        return self.measurements[-1] if self.measurements else None

    def to_dict(self, include_series: bool = True) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "sample_rate_hz": self.sample_rate_hz,
            "duration_seconds": self.duration_seconds,
            "measurement_count": len(self.measurements),
            "final": self.final.to_dict() if self.final else None,
            "reference_integrated_lufs": self.reference_integrated_lufs,
        }
        if include_series:
            payload["measurements"] = [measurement.to_dict() for measurement in self.measurements]
        return payload


@dataclass(slots=True)
class MeterAudio:
    """Use case that replays decoded audio through a fresh analyzer."""

    settings_overrides: dict[str, Any] = field(default_factory=dict)
    sink: MeasurementSink = field(default_factory=NullMeasurementSink)

    def run(
        self,
        audio: np.ndarray,
        sample_rate_hz: int,
        *,
        block_size: int | None = None,
        with_reference: bool = False,
    ) -> MeteringReport:
        overrides = dict(self.settings_overrides)
        if block_size is not None:
            overrides["block_size"] = block_size
        overrides.pop("sample_rate_hz", None)

        recorder = _RecordingSink()
        sink = FanOutSink((recorder, self.sink))

        settings = MeterSettings(sample_rate_hz=sample_rate_hz, **overrides)

        def build_analyzer(rate: int) -> LoudnessAnalyzer:
            return LoudnessAnalyzer(MeterSettings(**{**settings.model_dump(), "sample_rate_hz": rate}), sink=sink)

        source = ArrayAudioSource(audio, settings.sample_rate_hz, block_size=settings.block_size)
        source.run(build_analyzer)

        reference = measure_reference_lufs(np.asarray(audio), sample_rate_hz) if with_reference else None
        report = MeteringReport(
            sample_rate_hz=source.sample_rate_hz,
            duration_seconds=source.duration_seconds,
            measurements=tuple(recorder.measurements),
            reference_integrated_lufs=reference,
        )
        logger.info(
            "audio_metered",
            extra={
                "sample_rate_hz": report.sample_rate_hz,
                "duration_seconds": report.duration_seconds,
                "measurement_count": len(report.measurements),
            },
        )
        return report

    def run_file(self, path: Path, *, block_size: int | None = None, with_reference: bool = False) -> MeteringReport:
        ensure_supported_path(path)
        audio, sample_rate_hz = load_audio_file(path)
        return self.run(audio, sample_rate_hz, block_size=block_size, with_reference=with_reference)
