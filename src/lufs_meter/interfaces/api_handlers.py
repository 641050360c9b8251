"""API-facing handlers that delegate to application services."""

from __future__ import annotations

import os
from pathlib import Path

from lufs_meter.application.metering_service import MeterAudio, MeteringReport
from lufs_meter.audio_contract import ensure_supported_upload
from lufs_meter.infrastructure.logging_measurement_sink import LoggingMeasurementSink
from lufs_meter.infrastructure.pedalboard_codec import load_audio_file
from lufs_meter.infrastructure.temp_files import temporary_upload_path
from lufs_meter.utils.config import load_meter_overrides


def _settings_overrides_from_env() -> dict:
    config_path = os.getenv("LUFS_METER_CONFIG")
    if not config_path:
        return {}
    return load_meter_overrides(Path(config_path))


metering_service = MeterAudio(settings_overrides=_settings_overrides_from_env(), sink=LoggingMeasurementSink())


class AudioDecodeError(ValueError):
    """Raised when an accepted upload cannot be decoded."""


def meter_uploaded_bytes(
    payload: bytes,
    filename: str | None,
    content_type: str | None,
    *,
    block_size: int | None = None,
    with_reference: bool = False,
) -> MeteringReport:
    ensure_supported_upload(filename, content_type)
    if not payload:
        raise AudioDecodeError("Uploaded audio is empty.")

    suffix = Path(filename).suffix.lower() if filename else ".wav"
    with temporary_upload_path(payload, suffix or ".wav") as path:
        try:
            audio, sample_rate_hz = load_audio_file(path)
        except (OSError, ValueError, RuntimeError) as error:
            raise AudioDecodeError(f"Could not decode uploaded audio: {error}") from error

    return metering_service.run(audio, sample_rate_hz, block_size=block_size, with_reference=with_reference)


__all__ = ["AudioDecodeError", "meter_uploaded_bytes", "metering_service"]
