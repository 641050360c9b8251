import math

import pytest

from lufs_meter.integration import IntegrationState


def test_no_gated_blocks_reads_floor() -> None:
    assert IntegrationState().integrated_db() == -100.0


def test_readings_at_or_below_gate_are_excluded() -> None:
    state = IntegrationState()

    assert state.accumulate(-70.0) is False
    assert state.accumulate(-90.0) is False
    assert state.count == 0
    assert state.energy_sum == 0.0


def test_constant_readings_integrate_to_same_value() -> None:
    state = IntegrationState()
    for _ in range(5):
        state.accumulate(-23.0)

    assert state.count == 5
    assert state.integrated_db() == pytest.approx(-23.0)


def test_average_is_taken_in_energy_domain() -> None:
    state = IntegrationState()
    state.accumulate(-10.0)
    state.accumulate(-20.0)

    expected = 10 * math.log10((0.1 + 0.01) / 2)
    assert state.integrated_db() == pytest.approx(expected)


def test_custom_gate_threshold() -> None:
    state = IntegrationState(gate_threshold_db=-30.0)

    state.accumulate(-40.0)
    state.accumulate(-20.0)

    assert state.count == 1
    assert state.integrated_db() == pytest.approx(-20.0)


def test_reset_zeroes_accumulator() -> None:
    state = IntegrationState()
    state.accumulate(-6.0)

    state.reset()

    assert state.count == 0
    assert state.energy_sum == 0.0
    assert state.integrated_db() == -100.0
