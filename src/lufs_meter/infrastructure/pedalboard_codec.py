"""Audio decode adapter backed by pedalboard."""

from __future__ import annotations

from pathlib import Path

import numpy as np
from pedalboard.io import AudioFile


def load_audio_file(path: Path) -> tuple[np.ndarray, int]:
    """Read an audio file into a channel-first float32 array."""

    with AudioFile(str(path), "r") as audio_file:
        return audio_file.read(audio_file.frames), int(audio_file.samplerate)
