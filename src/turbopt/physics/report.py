"""Read-only summaries of an evaluated turbine for display."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from .turbine import TurbineModel


def turbine_stats(turbine: TurbineModel) -> dict[str, Any]:
    """Operating point of ``turbine`` after its last tick."""
    rpm = turbine.rpm
    total_drag = (
        turbine.friction_drag_last_tick
        + turbine.aero_drag_last_tick
        + turbine.inductor_drag_last_tick
    )
    return {
        "height": turbine.outer_height,
        "width": turbine.outer_width,
        "coil_layers": turbine.coil_layers,
        "coil_size": turbine.coil_size,
        "rotor_shafts": turbine.rotor_shafts,
        "flow_rate": turbine.flow_rate,
        "max_flow_rate": turbine.max_flow_rate,
        "rpm": rpm,
        "rotor_capacity": turbine.rotor_capacity_per_rpm * rpm,
        "energy_generated": turbine.energy_generated_last_tick,
        "energy_per_mb": (
            turbine.energy_generated_last_tick / turbine.flow_rate if turbine.flow_rate else 0.0
        ),
        "rotor_efficiency": turbine.rotor_efficiency_last_tick,
        "coil_efficiency": turbine.coil_efficiency_last_tick,
        "inductor_drag": turbine.inductor_drag_last_tick,
        "friction_drag": turbine.friction_drag_last_tick,
        "aero_drag": turbine.aero_drag_last_tick,
        "useful_drag": turbine.inductor_drag_last_tick / total_drag if total_drag > 0 else 0.0,
    }


@dataclass(frozen=True)
class BuildCost:
    """Blocks needed to build a turbine."""

    controllers: int
    power_taps: int
    io_ports: int
    bearings: int
    casings: int
    glass: int
    coil_blocks: int
    shafts: int
    rotor_blades: int

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


def build_cost(turbine: TurbineModel) -> BuildCost:
    """Block bill of materials for ``turbine``.

    Casings form the frame of the outer box; the remaining face blocks are
    glass except the six taken by controller, power tap, ports and bearings.
    """
    x, y, z = turbine.outer_width, turbine.outer_height, turbine.outer_depth
    k = turbine.constants
    blades = (turbine.rotor_mass - turbine.rotor_shafts * k.rotor_axial_mass_per_shaft) / (
        k.rotor_axial_mass_per_blade
    )
    return BuildCost(
        controllers=1,
        power_taps=1,
        io_ports=2,
        bearings=2,
        casings=4 * (x + y + z) - 16,
        glass=2 * ((x - 2) * (y - 2) + (x - 2) * (z - 2) + (y - 2) * (z - 2)) - 6,
        coil_blocks=turbine.coil_size,
        shafts=turbine.rotor_shafts,
        rotor_blades=int(round(blades)),
    )
