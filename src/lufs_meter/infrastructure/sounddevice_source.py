"""Live input adapter backed by sounddevice (PortAudio)."""

from __future__ import annotations

import logging
import threading
from typing import Any

import numpy as np

from lufs_meter.audio_source import BlockConsumer, ConsumerFactory
from lufs_meter.utils.config import DEFAULT_BLOCK_SIZE

logger = logging.getLogger(__name__)


class SoundDeviceSource:
    """Capture one input channel and forward each callback block.

    The consumer is built from the rate PortAudio negotiated for the stream,
    which may differ from the requested one.
    """

    def __init__(
        self,
        sample_rate_hz: int | None = None,
        block_size: int = DEFAULT_BLOCK_SIZE,
        device: int | str | None = None,
        channel: int = 0,
        duration_s: float | None = None,
    ) -> None:
        self.requested_sample_rate_hz = sample_rate_hz
        self.block_size = int(block_size)
        self.device = device
        self.channel = int(channel)
        self.duration_s = duration_s

        self.sample_rate_hz: int | None = None
        self.xrun_count = 0
        self._frames = 0
        self._consumer: BlockConsumer | None = None
        self._stop_evt = threading.Event()

    def stop(self) -> None:
        self._stop_evt.set()

    def run(self, build_consumer: ConsumerFactory) -> BlockConsumer:
        import sounddevice as sd

        self._stop_evt.clear()
        stream = sd.InputStream(
            device=self.device,
            channels=self.channel + 1,
            samplerate=self.requested_sample_rate_hz,
            blocksize=self.block_size,
            dtype="float32",
            latency="low",
            callback=self._callback,
        )
        try:
            consumer = self.bind(build_consumer, int(stream.samplerate))
            stream.start()
            logger.info(
                "audio_input_started",
                extra={"device": self.device, "sample_rate_hz": self.sample_rate_hz, "block_size": self.block_size},
            )
            self._stop_evt.wait(timeout=self.duration_s)
        finally:
            self._stop_evt.set()
            stream.abort()
            stream.close()

        if self.xrun_count:
            logger.warning("audio_input_overflow", extra={"xrun_count": self.xrun_count})
        return consumer

    def bind(self, build_consumer: ConsumerFactory, sample_rate_hz: int) -> BlockConsumer:
        """Attach a consumer for the negotiated rate and restart the audio clock."""

        self.sample_rate_hz = sample_rate_hz
        self._frames = 0
        self.xrun_count = 0
        self._consumer = build_consumer(sample_rate_hz)
        return self._consumer

    def _callback(self, indata: np.ndarray, frames: int, time_info: Any, status: Any) -> None:
        # Real-time context: no logging, no locks.
        if status:
            self.xrun_count += 1
        if self._consumer is None or self._stop_evt.is_set():
            return

        self._frames += frames
        self._consumer.push_block(indata[:, self.channel], self._frames / self.sample_rate_hz)
