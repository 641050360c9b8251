"""Pluggable audio sources feeding a block consumer.

A source owns the host-side timing: it decides the block size, keeps the
audio clock and calls ``push_block`` once per block. Sources build their
consumer only after the sample rate is known, so the analyzer is always
sized for the rate actually delivered.
"""

from __future__ import annotations

from typing import Callable, Iterator, Protocol

import numpy as np

from .utils.config import DEFAULT_BLOCK_SIZE


class BlockConsumer(Protocol):
    def push_block(self, samples: np.ndarray, current_time: float) -> object:
        """Accept one block stamped with the audio-clock time after it."""


ConsumerFactory = Callable[[int], BlockConsumer]


class AudioSource(Protocol):
    def run(self, build_consumer: ConsumerFactory) -> BlockConsumer:
        """Stream every block into the consumer built for the source rate."""


def to_mono(audio: np.ndarray) -> np.ndarray:
    """Down-mix channel-first audio to a float32 mono signal."""

    audio = np.asarray(audio)
    if audio.ndim == 1:
        return audio.astype(np.float32, copy=False)
    if audio.ndim != 2:
        raise ValueError("Audio must be a 1D mono or 2D channel-first array.")
    if audio.shape[0] == 1:
        return audio[0].astype(np.float32, copy=False)
    return np.mean(audio, axis=0, dtype=np.float64).astype(np.float32)


class ArrayAudioSource:
    """Replay an in-memory signal block by block, as a playback graph would."""

    def __init__(self, audio: np.ndarray, sample_rate_hz: int, block_size: int = DEFAULT_BLOCK_SIZE) -> None:
        if sample_rate_hz <= 0:
            raise ValueError("Sample rate must be a positive integer.")
        if block_size <= 0:
            raise ValueError("Block size must be a positive integer.")
        self.samples = to_mono(audio)
        self.sample_rate_hz = int(sample_rate_hz)
        self.block_size = int(block_size)

    @property
    def duration_seconds(self) -> float:
        return self.samples.size / self.sample_rate_hz

    def iter_blocks(self) -> Iterator[tuple[np.ndarray, float]]:
        for start in range(0, self.samples.size, self.block_size):
            block = self.samples[start : start + self.block_size]
            yield block, (start + block.size) / self.sample_rate_hz

    def run(self, build_consumer: ConsumerFactory) -> BlockConsumer:
        consumer = build_consumer(self.sample_rate_hz)
        for block, current_time in self.iter_blocks():
            consumer.push_block(block, current_time)
        return consumer
