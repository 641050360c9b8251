"""Source formats accepted by the file and upload entry points."""

from __future__ import annotations

from pathlib import Path

# Supported source extensions (lower-case, with leading dot).
ACCEPTED_SOURCE_EXTENSIONS: tuple[str, ...] = (
    ".mp3",
    ".wav",
    ".flac",
    ".ogg",
    ".m4a",
    ".aac",
    ".wma",
    ".aiff",
    ".aif",
)

ACCEPTED_MIME_PREFIX = "audio/"


class UnsupportedAudioFormatError(ValueError):
    """Raised when ingest receives media outside the supported source contract."""


def ensure_supported_path(path: Path) -> None:
    """Validate a local file path against accepted extensions."""

    if path.suffix.lower() not in ACCEPTED_SOURCE_EXTENSIONS:
        supported = ", ".join(ACCEPTED_SOURCE_EXTENSIONS)
        raise UnsupportedAudioFormatError(
            f"Unsupported audio format for '{path.name}'. Supported extensions: {supported}"
        )


def ensure_supported_upload(filename: str | None, content_type: str | None) -> None:
    """Accept any ``audio/*`` MIME type, else fall back to the extension."""

    if content_type and content_type.lower().startswith(ACCEPTED_MIME_PREFIX):
        return

    if filename and Path(filename).suffix.lower() in ACCEPTED_SOURCE_EXTENSIONS:
        return

    supported_ext = ", ".join(ACCEPTED_SOURCE_EXTENSIONS)
    raise UnsupportedAudioFormatError(
        f"Unsupported upload format: {content_type or 'unknown'}. "
        f"Supported extensions: {supported_ext}."
    )
