import threading

import numpy as np
import pytest

from lufs_meter.analyzer import LoudnessAnalyzer
from lufs_meter.channel import MeasurementChannel
from lufs_meter.errors import MeterConfigurationError
from lufs_meter.measurement import Measurement


def _measurement(value: float) -> Measurement:
    return Measurement(momentary=value, short_term=value, integrated=value, lra=0.0, true_peak=value)


def test_receive_preserves_publish_order() -> None:
    channel = MeasurementChannel(capacity=4)
    for value in (-30.0, -20.0, -10.0):
        channel.publish(_measurement(value))

    received = [channel.receive(timeout=0).momentary for _ in range(3)]

    assert received == [-30.0, -20.0, -10.0]
    assert channel.receive(timeout=0) is None


def test_overflow_drops_oldest_without_blocking() -> None:
    channel = MeasurementChannel(capacity=2)
    for value in (-40.0, -30.0, -20.0, -10.0):
        channel.publish(_measurement(value))

    assert channel.sent == 4
    assert channel.dropped == 2
    assert [measurement.momentary for measurement in channel.drain()] == [-20.0, -10.0]
    assert len(channel) == 0


def test_latest_coalesces_unread_measurements() -> None:
    channel = MeasurementChannel()
    for value in (-12.0, -11.0, -10.0):
        channel.publish(_measurement(value))

    assert channel.latest().momentary == -10.0
    assert channel.latest() is None


def test_receive_times_out_when_idle() -> None:
    assert MeasurementChannel().receive(timeout=0.01) is None


def test_receive_wakes_on_publish_from_another_thread() -> None:
    channel = MeasurementChannel()
    producer = threading.Timer(0.05, channel.publish, args=(_measurement(-18.0),))
    producer.start()

    received = channel.receive(timeout=2.0)
    producer.join()

    assert received is not None
    assert received.momentary == -18.0


def test_capacity_must_be_positive() -> None:
    with pytest.raises(MeterConfigurationError):
        MeasurementChannel(capacity=0)


def test_analyzer_publishes_into_channel() -> None:
    channel = MeasurementChannel()
    analyzer = LoudnessAnalyzer.for_sample_rate(48_000, sink=channel)
    block = np.full(2_400, 0.25, dtype=np.float32)

    for step in range(1, 5):
        analyzer.push_block(block, step * 0.05)

    assert len(channel) == 4
    assert channel.drain()[-1].true_peak == pytest.approx(-12.04, abs=0.01)


def test_empty_channel_is_kept_as_analyzer_sink() -> None:
    channel = MeasurementChannel()
    assert len(channel) == 0

    analyzer = LoudnessAnalyzer.for_sample_rate(48_000, sink=channel)
    emitted = analyzer.push_block(np.zeros(2_400, dtype=np.float32), 0.05)

    assert emitted is not None
    assert channel.receive(timeout=0) is emitted
