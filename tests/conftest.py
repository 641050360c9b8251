import numpy as np
import pytest


def _sine(sample_rate: int, duration_s: float, amplitude: float = 1.0, frequency_hz: float = 1_000.0) -> np.ndarray:
    t = np.arange(int(round(sample_rate * duration_s))) / sample_rate
    return (amplitude * np.sin(2 * np.pi * frequency_hz * t)).astype(np.float32)


@pytest.fixture
def sine_wave():
    sample_rate = 48_000
    return {
        "sample_rate": sample_rate,
        "full_scale": _sine(sample_rate, 4.0),
        "quiet": _sine(sample_rate, 4.0, amplitude=0.1),
        "make": _sine,
    }


@pytest.fixture
def feed():
    """Push ``audio`` through ``analyzer`` in fixed blocks on an audio clock."""

    def _feed(analyzer, audio, block_size=240, start_sample=0):
        sample_rate = analyzer.settings.sample_rate_hz
        emitted = []
        for offset in range(0, audio.size, block_size):
            block = audio[offset : offset + block_size]
            current_time = (start_sample + offset + block.size) / sample_rate
            measurement = analyzer.push_block(block, current_time)
            if measurement is not None:
                emitted.append(measurement)
        return emitted

    return _feed
