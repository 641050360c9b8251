"""Standards-based integrated loudness, for comparison with the live meter."""

from __future__ import annotations

import numpy as np
import pyloudnorm as pyln


def measure_reference_lufs(audio: np.ndarray, sample_rate: int) -> float | None:
    """Return BS.1770 integrated LUFS, or ``None`` when it is undefined.

    ``audio`` is channel-first, as decoded by pedalboard.
    """

    if audio.ndim == 1:
        data = audio.astype(np.float64, copy=False)
    else:
        data = np.moveaxis(audio, 0, -1).astype(np.float64, copy=False)

    meter = pyln.Meter(sample_rate)
    if data.shape[0] < int(meter.block_size * sample_rate):
        return None
    measured = float(meter.integrated_loudness(data))
    if not np.isfinite(measured):
        return None
    return measured
