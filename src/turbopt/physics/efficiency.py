"""Coil efficiency curve and the induction power law.

The coil resonates with the grid at ``peak_rpm = frequency * 60``:

    rpm < min_rpm          flat floor of 0.5
    min_rpm <= rpm <= peak  log-periodic ripple between 0.5 and 1.0
    rpm > peak              parabolic falloff, floored at 0

``efficiency_peaks`` sets how many ripples fit between min_rpm and peak.
"""

from __future__ import annotations

import math

from ..core.config import DEFAULT_CONSTANTS, TurbineConstants

LOG2 = math.log(2)


def approx_pow(x: float, y: float) -> float:
    """Approximate ``x ** y`` for ``y`` near 1.

    Taylor series of ``x * exp((y - 1) * ln x)`` about ``y = 1``, truncated
    after the 4th-order term. Relative error is about 1.8e-5 for the coil
    bonuses in the material table.
    """
    if x == 0 or y == 1:
        return x

    p = (y - 1) * math.log(x)
    r = x
    ret = x
    r *= p
    ret += r
    r *= 0.5 * p
    ret += r
    r *= 0.33333333333 * p
    ret += r
    r *= 0.25 * p
    ret += r
    return ret


def exact_pow(x: float, y: float) -> float:
    """``x ** y`` with the same shortcuts as ``approx_pow``."""
    if x == 0 or y == 1:
        return x
    return math.pow(x, y)


def induction_power(torque: float, bonus: float, constants: TurbineConstants = DEFAULT_CONSTANTS) -> float:
    """Raise induction torque to the coil exponent bonus."""
    if constants.exact_power:
        return exact_pow(torque, bonus)
    return approx_pow(torque, bonus)


def coil_efficiency(rpm: float, constants: TurbineConstants = DEFAULT_CONSTANTS) -> float:
    """Fraction of induced energy delivered to the grid at ``rpm``."""
    frequency = constants.effective_grid_frequency
    peak_rpm = constants.peak_rpm
    min_rpm = constants.min_rpm

    if rpm < min_rpm:
        return 0.5
    if rpm > peak_rpm:
        numerator = -(rpm - peak_rpm) * (rpm - peak_rpm)
        denominator = 8 * frequency * peak_rpm
        return max(0.0, numerator / denominator + 1)

    log_value = -2 * ((math.log(rpm) - constants.log_peak_rpm) / LOG2) + 1
    return -0.25 * math.cos(log_value * math.pi) + 0.75
