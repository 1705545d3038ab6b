"""Test the closed-form equilibrium RPM against the tick-level fixed point."""

import pytest

from turbopt.core.config import TurbineConstants
from turbopt.physics.turbine import TurbineModel


def _settle(turbine: TurbineModel, flow_rate: int) -> float:
    turbine.set_nominal_flow_rate(flow_rate)
    rpm = turbine.final_rpm()
    turbine.set_energy_for_rpm(rpm)
    turbine.tick()
    return rpm


def test_low_speed_regime(small_turbine):
    """Tiny flow settles below 100 RPM where capacity is pinned at its floor."""
    rpm = _settle(small_turbine, 40)

    assert rpm < 100
    assert rpm == pytest.approx(49.953, rel=1e-3)


def test_unrestricted_capacity_regime(iron):
    """A tall rotor with one coil layer absorbs all of a moderate flow."""
    t = TurbineModel(10, 5, 1, iron)
    rpm = _settle(t, 2000)

    assert rpm >= 100
    assert t.rotor_capacity_per_rpm * rpm >= 2000
    assert t.rotor_efficiency_last_tick == pytest.approx(1.0)


def test_capacity_limited_regime(small_turbine):
    """Flooding the small rotor lands in the capacity-limited closed form."""
    rpm = _settle(small_turbine, 40_000)

    assert rpm == pytest.approx(9586.5, rel=1e-3)
    assert small_turbine.rotor_capacity_per_rpm * rpm < 40_000
    assert small_turbine.rotor_efficiency_last_tick < 1.0


def test_zero_flow_is_at_rest(small_turbine):
    """No steam means the rotor is stopped."""
    assert _settle(small_turbine, 0) == 0.0
    assert small_turbine.rpm == 0.0


@pytest.mark.parametrize(
    "height,width,coil_layers,flow_rate",
    [
        (4, 5, 1, 40),
        (4, 5, 1, 1_000),
        (4, 5, 1, 40_000),
        (10, 5, 1, 2_000),
        (8, 9, 2, 10_000),
        (8, 9, 2, 240_000),
        (12, 11, 4, 50_000),
        (16, 15, 3, 900_000),
    ],
)
@pytest.mark.parametrize("material_name", ["Iron", "Gold", "Unobtanium"])
def test_final_rpm_is_tick_fixed_point(height, width, coil_layers, flow_rate, material_name):
    """final_rpm -> set_energy_for_rpm -> tick leaves RPM within 1e-3 relative."""
    from turbopt.core.materials import lookup_material

    t = TurbineModel(height, width, coil_layers, lookup_material(material_name))
    rpm = _settle(t, flow_rate)

    assert rpm >= 0
    assert t.rpm == pytest.approx(rpm, rel=1e-3, abs=1e-9)


def test_fixed_point_with_exact_power(iron):
    """Power-law mode does not change the energy balance."""
    t = TurbineModel(8, 9, 2, iron, constants=TurbineConstants(exact_power=True))
    rpm = _settle(t, 30_000)

    assert t.rpm == pytest.approx(rpm, rel=1e-3)


def test_scenario_iron_smallest_use_max(small_turbine):
    """Iron 4 x 5 x 1 at max flow: valid build, non-negative output."""
    assert small_turbine.max_flow_rate > 0

    _settle(small_turbine, small_turbine.max_flow_rate)

    assert small_turbine.energy_generated_last_tick >= 0.0
