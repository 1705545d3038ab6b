"""Stock fitness and constraint callables.

A fitness maps an evaluated ``TurbineModel`` to a score (higher is better);
a constraint maps it to ``True`` when the build is acceptable. Constraints
are checked right after construction, before any flow rate is applied, so
they should only read geometry-derived attributes.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from ..physics.turbine import TurbineModel


class Fitness(Protocol):
    def __call__(self, turbine: TurbineModel) -> float: ...


class Constraint(Protocol):
    def __call__(self, turbine: TurbineModel) -> bool: ...


def energy_generated(turbine: TurbineModel) -> float:
    """RF/t produced on the last tick."""
    return turbine.energy_generated_last_tick


def energy_per_flow(turbine: TurbineModel) -> float:
    """RF produced per mB of steam on the last tick."""
    if turbine.flow_rate == 0:
        return 0.0
    return turbine.energy_generated_last_tick / turbine.flow_rate


def coil_efficiency(turbine: TurbineModel) -> float:
    return turbine.coil_efficiency_last_tick


def accept_all(turbine: TurbineModel) -> bool:
    return True


def max_coil_blocks(limit: int) -> Callable[[TurbineModel], bool]:
    """Reject builds needing more than ``limit`` coil blocks."""

    def constraint(turbine: TurbineModel) -> bool:
        return turbine.coil_size <= limit

    return constraint


def max_flow_capacity(limit: int) -> Callable[[TurbineModel], bool]:
    """Reject builds whose maximum flow rate exceeds ``limit`` mB/t."""

    def constraint(turbine: TurbineModel) -> bool:
        return turbine.max_flow_rate <= limit

    return constraint


FITNESS_FUNCTIONS: dict[str, Callable[[TurbineModel], float]] = {
    "energy": energy_generated,
    "energy_per_mb": energy_per_flow,
    "coil_efficiency": coil_efficiency,
}


def get_fitness(name: str) -> Callable[[TurbineModel], float]:
    """Return the stock fitness called ``name``."""
    try:
        return FITNESS_FUNCTIONS[name]
    except KeyError:
        raise ValueError(
            f"Unknown fitness '{name}', expected one of {sorted(FITNESS_FUNCTIONS)}"
        ) from None
