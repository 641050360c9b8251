import numpy as np
import pytest

from lufs_meter.errors import MeterConfigurationError
from lufs_meter.ring_buffer import RingBuffer


def test_cursor_returns_to_start_after_capacity_pushes() -> None:
    buffer = RingBuffer(8)

    for value in range(8):
        buffer.push(float(value))

    assert buffer.cursor == 0


def test_contents_after_overflow_are_last_capacity_samples() -> None:
    buffer = RingBuffer(5)

    for value in range(1, 8):
        buffer.push(float(value))

    assert buffer.cursor == 2
    assert np.array_equal(buffer.snapshot(), np.array([3.0, 4.0, 5.0, 6.0, 7.0]))


@pytest.mark.parametrize("block_sizes", [(3, 3, 3), (7,), (2, 11), (4, 4, 4, 4)])
def test_push_block_matches_repeated_push(block_sizes) -> None:
    samples = np.arange(1, sum(block_sizes) + 1, dtype=np.float32)
    by_block = RingBuffer(6)
    by_sample = RingBuffer(6)

    offset = 0
    for size in block_sizes:
        by_block.push_block(samples[offset : offset + size])
        offset += size
    for value in samples:
        by_sample.push(float(value))

    assert by_block.cursor == by_sample.cursor
    assert np.array_equal(by_block.snapshot(), by_sample.snapshot())


def test_empty_block_is_a_no_op() -> None:
    buffer = RingBuffer(4)
    buffer.push_block(np.array([0.5, 0.25], dtype=np.float32))

    buffer.push_block(np.array([], dtype=np.float32))

    assert buffer.cursor == 2


def test_segments_walk_back_across_wrap() -> None:
    buffer = RingBuffer(5)
    buffer.push_block(np.arange(1, 8, dtype=np.float32))

    older, newer = buffer.segments(4)

    assert np.array_equal(np.concatenate((older, newer)), np.array([4.0, 5.0, 6.0, 7.0]))


def test_unwritten_history_reads_as_silence() -> None:
    buffer = RingBuffer(100)
    buffer.push_block(np.full(10, 0.5, dtype=np.float32))

    older, newer = buffer.segments(30)

    assert np.count_nonzero(older) == 0
    assert np.allclose(newer, 0.5)
    assert RingBuffer(100).rms_db(50) == -100.0


def test_window_larger_than_capacity_is_rejected() -> None:
    with pytest.raises(MeterConfigurationError) as exc_info:
        RingBuffer(10).segments(11)

    assert exc_info.value.code == "invalid_window"


def test_non_positive_capacity_is_a_configuration_error() -> None:
    with pytest.raises(MeterConfigurationError) as exc_info:
        RingBuffer(0)

    assert exc_info.value.code == "invalid_capacity"
