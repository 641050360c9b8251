"""CLI-facing handlers that delegate to application services."""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any, Callable

from lufs_meter.analyzer import LoudnessAnalyzer
from lufs_meter.application.measurement_sink import FanOutSink, MeasurementSink
from lufs_meter.application.metering_service import MeterAudio, MeteringReport
from lufs_meter.channel import MeasurementChannel
from lufs_meter.infrastructure.logging_measurement_sink import LoggingMeasurementSink
from lufs_meter.infrastructure.sounddevice_source import SoundDeviceSource
from lufs_meter.measurement import Measurement
from lufs_meter.utils.config import DEFAULT_CHANNEL_CAPACITY, load_meter_overrides


def resolve_settings_overrides(config_path: Path | None) -> dict[str, Any]:
    if config_path is None:
        return {}
    return load_meter_overrides(config_path)


def meter_file(
    path: Path,
    *,
    config_path: Path | None = None,
    block_size: int | None = None,
    with_reference: bool = False,
    report_json: Path | None = None,
    extra_sink: MeasurementSink | None = None,
) -> MeteringReport:
    sinks: list[MeasurementSink] = [LoggingMeasurementSink()]
    if extra_sink is not None:
        sinks.append(extra_sink)

    service = MeterAudio(settings_overrides=resolve_settings_overrides(config_path), sink=FanOutSink(sinks))
    report = service.run_file(path, block_size=block_size, with_reference=with_reference)

    if report_json is not None:
        report_json.parent.mkdir(parents=True, exist_ok=True)
        report_json.write_text(json.dumps(report.to_dict(), indent=2), encoding="utf-8")
    return report


def run_live(
    on_measurement: Callable[[Measurement], None],
    *,
    source: SoundDeviceSource,
    config_path: Path | None = None,
    poll_interval_s: float = 0.1,
) -> LoudnessAnalyzer:
    """Meter a live input; ``on_measurement`` runs on the calling thread."""

    overrides = resolve_settings_overrides(config_path)
    overrides["block_size"] = source.block_size
    channel = MeasurementChannel(capacity=overrides.get("channel_capacity", DEFAULT_CHANNEL_CAPACITY))

    def build_analyzer(sample_rate_hz: int) -> LoudnessAnalyzer:
        return LoudnessAnalyzer.for_sample_rate(sample_rate_hz, sink=channel, **overrides)

    finished = threading.Event()
    outcome: dict[str, Any] = {}

    def capture() -> None:
        try:
            outcome["analyzer"] = source.run(build_analyzer)
        except Exception as error:  # re-raised on the calling thread
            outcome["error"] = error
        finally:
            finished.set()

    worker = threading.Thread(target=capture, name="LoudnessInput", daemon=True)
    worker.start()
    try:
        while not finished.is_set():
            measurement = channel.receive(timeout=poll_interval_s)
            if measurement is not None:
                on_measurement(measurement)
    except KeyboardInterrupt:
        source.stop()
    worker.join(timeout=2.0)

    for measurement in channel.drain():
        on_measurement(measurement)
    if "error" in outcome:
        raise outcome["error"]
    if "analyzer" not in outcome:
        raise RuntimeError("Audio input did not shut down within the join timeout.")
    return outcome["analyzer"]
