"""Test flow-rate candidate generation."""

import numpy as np
import pytest

from turbopt.core.types import Fixed, InvalidFlowSpec, StepUntilMax, UseMax, WindowAroundTarget
from turbopt.optimize.flow import flow_candidates, validate_flow_spec


def test_use_max():
    np.testing.assert_array_equal(flow_candidates(UseMax(), 40_000), [40_000])


def test_step_until_max_inclusive():
    np.testing.assert_array_equal(
        flow_candidates(StepUntilMax(10_000), 40_000), [10_000, 20_000, 30_000, 40_000]
    )


def test_step_until_max_beyond_max_is_empty():
    """A step larger than the maximum yields no candidates."""
    assert flow_candidates(StepUntilMax(40_001), 40_000).size == 0


def test_step_must_be_positive():
    with pytest.raises(ValueError):
        StepUntilMax(0)
    with pytest.raises(ValueError):
        StepUntilMax(-100)


def test_fixed_not_clamped():
    """Fixed values pass through; the turbine clamps them."""
    np.testing.assert_array_equal(flow_candidates(Fixed(-5), 40_000), [-5])
    np.testing.assert_array_equal(flow_candidates(Fixed(10**6), 40_000), [10**6])


def test_window_around_target():
    """Window covers [target - 10000, target] in steps of 100."""
    rates = flow_candidates(WindowAroundTarget(20_000), 40_000)

    assert rates.dtype == np.int64
    assert len(rates) == 101
    assert rates[0] == 10_000
    assert rates[-1] == 20_000
    assert np.all(np.diff(rates) == 100)


def test_window_clipped_at_zero_and_max():
    np.testing.assert_array_equal(flow_candidates(WindowAroundTarget(50), 40_000), [0])

    rates = flow_candidates(WindowAroundTarget(45_000), 40_000)
    assert rates[0] == 35_000
    assert rates[-1] == 40_000


def test_window_above_reach_is_empty():
    assert flow_candidates(WindowAroundTarget(100_000), 40_000).size == 0


@pytest.mark.parametrize("spec", ["use_max", 3, None, (1, 1000)])
def test_invalid_flow_spec(spec):
    with pytest.raises(InvalidFlowSpec):
        validate_flow_spec(spec)
    with pytest.raises(InvalidFlowSpec):
        flow_candidates(spec, 40_000)
