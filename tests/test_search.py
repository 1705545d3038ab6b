"""Test the exhaustive turbine search."""

import math

import pytest

from turbopt.core.types import (
    Fixed,
    Geometry,
    InvalidFlowSpec,
    StepUntilMax,
    UseMax,
    WindowAroundTarget,
)
from turbopt.optimize.objectives import (
    accept_all,
    energy_generated,
    energy_per_flow,
    get_fitness,
    max_coil_blocks,
    max_flow_capacity,
)
from turbopt.optimize.search import search

SMALLEST = Geometry(width=5, height=4)


def test_single_candidate_space(iron):
    """One legal triple and UseMax returns exactly that evaluated turbine."""
    result = search(energy_generated, accept_all, iron, UseMax(), SMALLEST)

    assert result.found
    t = result.turbine
    assert (t.outer_height, t.outer_width, t.coil_layers) == (4, 5, 1)
    assert t.flow_rate == t.max_flow_rate == 40_000
    assert result.flow_rate == 40_000
    assert result.fitness == t.energy_generated_last_tick
    assert result.fitness >= 0.0
    assert (result.n_geometries, result.n_evaluated) == (1, 1)


def test_constraint_rejects_everything(iron):
    """An always-false constraint yields the no-solution result."""
    result = search(energy_generated, lambda t: False, iron, UseMax(), Geometry(9, 8))

    assert not result.found
    assert result.turbine is None
    assert result.fitness == -math.inf
    assert result.flow_rate is None
    assert result.n_rejected == result.n_geometries > 0
    assert result.n_evaluated == 0


def test_space_below_minimum_is_empty(iron):
    result = search(energy_generated, accept_all, iron, UseMax(), Geometry(width=3, height=3))

    assert not result.found
    assert result.n_geometries == 0


def test_step_beyond_max_skips_geometry(iron):
    """No flow candidates means nothing is scored, and nothing crashes."""
    result = search(energy_generated, accept_all, iron, StepUntilMax(40_001), SMALLEST)

    assert not result.found
    assert result.n_evaluated == 0


def test_ties_keep_first_candidate(iron):
    """Equal fitness keeps the earliest (height, width, coil layers, flow)."""
    result = search(lambda t: 0.0, accept_all, iron, StepUntilMax(10_000), Geometry(9, 8))

    t = result.turbine
    assert (t.outer_height, t.outer_width, t.coil_layers) == (4, 5, 1)
    assert t.flow_rate == 10_000


def test_iteration_order_height_before_width(iron):
    """Max flow depends only on width; the first widest build is the shortest one."""
    result = search(lambda t: t.max_flow_rate, accept_all, iron, UseMax(), Geometry(9, 6))

    t = result.turbine
    assert (t.outer_height, t.outer_width, t.coil_layers) == (4, 9, 1)
    assert result.fitness == 240_000


def test_counts(iron):
    """Every (height, odd width, coil layers) triple is enumerated once."""
    result = search(energy_generated, accept_all, iron, UseMax(), Geometry(9, 6))

    # heights 4..6 give 1 + 2 + 3 coil options, widths 5, 7, 9
    assert result.n_geometries == 18
    assert result.n_invalid == 0
    assert result.n_evaluated == 18


def test_best_is_snapshot(iron):
    """Later flow candidates on the same geometry do not mutate the kept best."""
    result = search(
        lambda t: -abs(t.flow_rate - 20_000), accept_all, iron, StepUntilMax(10_000), SMALLEST
    )

    assert result.turbine.flow_rate == 20_000
    assert result.fitness == 0
    assert result.n_evaluated == 4


def test_fixed_flow_clamped_by_model(iron):
    result = search(lambda t: 1.0, accept_all, iron, Fixed(-5), SMALLEST)

    assert result.turbine.flow_rate == 0
    assert result.turbine.rpm == 0.0


def test_window_search(iron):
    result = search(energy_generated, accept_all, iron, WindowAroundTarget(20_000), SMALLEST)

    assert result.n_evaluated == 101
    assert 10_000 <= result.flow_rate <= 20_000


def test_energy_search_finds_positive_output():
    """Gold coils at moderate flows produce power somewhere in the space."""
    from turbopt.core.materials import lookup_material

    result = search(
        energy_generated,
        accept_all,
        lookup_material("Gold"),
        StepUntilMax(2_000),
        Geometry(9, 10),
    )

    assert result.found
    assert result.fitness > 0
    assert result.fitness == pytest.approx(result.turbine.energy_generated_last_tick)


def test_deterministic(iron):
    """Identical inputs give identical results."""
    args = (energy_per_flow, accept_all, iron, StepUntilMax(5_000), Geometry(9, 8))
    first = search(*args)
    second = search(*args)

    assert first.fitness == second.fitness
    assert first.turbine.geometry == second.turbine.geometry
    assert first.turbine.coil_layers == second.turbine.coil_layers
    assert first.flow_rate == second.flow_rate


def test_geometry_constraints(iron):
    """Constraints filter geometries before evaluation."""
    result = search(
        lambda t: t.max_flow_rate, max_flow_capacity(120_000), iron, UseMax(), Geometry(9, 6)
    )
    assert result.turbine.outer_width == 7

    result = search(get_fitness("energy"), max_coil_blocks(8), iron, UseMax(), Geometry(9, 6))
    assert result.turbine.coil_size <= 8
    assert result.n_rejected == 15


def test_invalid_flow_spec_raises(iron):
    """An unrecognized flow spec is a caller error and propagates."""
    with pytest.raises(InvalidFlowSpec):
        search(energy_generated, accept_all, iron, "use_max", SMALLEST)

    with pytest.raises(InvalidFlowSpec):
        search(energy_generated, lambda t: False, iron, None, SMALLEST)


def test_unknown_fitness_name():
    with pytest.raises(ValueError):
        get_fitness("beauty")
