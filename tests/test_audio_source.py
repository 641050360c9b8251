import numpy as np
import pytest

from lufs_meter.analyzer import LoudnessAnalyzer
from lufs_meter.audio_source import ArrayAudioSource, to_mono
from lufs_meter.infrastructure.sounddevice_source import SoundDeviceSource


class RecordingConsumer:
    def __init__(self) -> None:
        self.blocks = []

    def push_block(self, samples, current_time) -> None:
        self.blocks.append((np.array(samples), current_time))


def test_to_mono_averages_channel_first_audio() -> None:
    stereo = np.array([[1.0, 0.0, -1.0], [0.0, 0.0, 1.0]], dtype=np.float32)

    mono = to_mono(stereo)

    assert mono.dtype == np.float32
    assert np.allclose(mono, [0.5, 0.0, 0.0])


def test_to_mono_rejects_three_dimensional_input() -> None:
    with pytest.raises(ValueError):
        to_mono(np.zeros((1, 2, 3)))


def test_array_source_stamps_blocks_on_audio_clock() -> None:
    source = ArrayAudioSource(np.arange(10, dtype=np.float32), sample_rate_hz=4, block_size=4)
    rates = []
    consumer = RecordingConsumer()

    def build(rate):
        rates.append(rate)
        return consumer

    assert source.run(build) is consumer
    assert rates == [4]
    assert [block.size for block, _ in consumer.blocks] == [4, 4, 2]
    assert [time for _, time in consumer.blocks] == [1.0, 2.0, 2.5]
    assert source.duration_seconds == 2.5


def test_array_source_drives_analyzer_at_source_rate(sine_wave) -> None:
    source = ArrayAudioSource(sine_wave["full_scale"][:48_000], sine_wave["sample_rate"])

    analyzer = source.run(LoudnessAnalyzer.for_sample_rate)

    assert analyzer.settings.sample_rate_hz == 48_000
    assert analyzer.integration.count > 0


@pytest.mark.parametrize("kwargs", [{"sample_rate_hz": 0}, {"sample_rate_hz": 48_000, "block_size": 0}])
def test_array_source_validates_arguments(kwargs) -> None:
    with pytest.raises(ValueError):
        ArrayAudioSource(np.zeros(4), **kwargs)


def test_sounddevice_callback_forwards_selected_channel() -> None:
    source = SoundDeviceSource(block_size=4, channel=1)
    consumer = RecordingConsumer()
    source.bind(lambda rate: consumer, 8)
    indata = np.array([[0.1, 0.5], [0.2, 0.6], [0.3, 0.7], [0.4, 0.8]], dtype=np.float32)

    source._callback(indata, 4, None, None)
    source._callback(indata, 4, None, "input overflow")

    assert len(consumer.blocks) == 2
    assert np.allclose(consumer.blocks[0][0], [0.5, 0.6, 0.7, 0.8])
    assert [time for _, time in consumer.blocks] == [0.5, 1.0]
    assert source.xrun_count == 1


def test_sounddevice_callback_is_silent_after_stop() -> None:
    source = SoundDeviceSource(block_size=2)
    consumer = RecordingConsumer()
    source.bind(lambda rate: consumer, 48_000)

    source.stop()
    source._callback(np.zeros((2, 1), dtype=np.float32), 2, None, None)

    assert consumer.blocks == []
