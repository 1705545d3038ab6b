"""Turbine model: construction, per-tick update and closed-form equilibrium.

A turbine is a square-footprint shell around a vertical rotor shaft. The
bottom ``coil_layers`` interior layers are filled with coil blocks, every
other interior layer carries full-length blades in all four quadrants.

Per tick, steam flow adds energy to the rotor while induction, bearing
friction and aerodynamic drag remove it:

    E += effective_flow * latent_heat * turbine_multiplier
    E -= rpm * drag_coeff * coils                   (induction)
    E -= rotor_mass * (rpm * friction)^2            (friction)
    E -= linear_blade_length * (rpm * aero)^2       (aerodynamic)

with ``rpm = E / rotor_axial_mass``. ``final_rpm`` solves the steady state
of that balance in closed form so the optimizer never has to iterate
``tick`` to convergence.
"""

from __future__ import annotations

import copy
import math
from collections.abc import Sequence

from ..core.config import DEFAULT_CONSTANTS, TurbineConstants
from ..core.constants import MIN_HEIGHT, MIN_WIDTH, NON_COIL_LAYERS
from ..core.types import (
    CoilMaterial,
    Geometry,
    GeometryError,
    GeometryErrorKind,
    RotorBladeLevel,
    Size,
)
from .efficiency import coil_efficiency, induction_power

# Below this speed the rotor still accepts flow as if spinning at it
MIN_CAPACITY_RPM = 100.0


def _triangular(n: int) -> int:
    return n * (n + 1) // 2


def validate_geometry(height: int, width: int, coil_layers: int) -> None:
    """Raise GeometryError if the shell cannot form a turbine."""
    if width % 2 == 0:
        kind = GeometryErrorKind.WIDTH_MUST_BE_ODD
    elif coil_layers > height - NON_COIL_LAYERS:
        kind = GeometryErrorKind.TOO_MANY_COIL_LAYERS
    elif height < MIN_HEIGHT or width < MIN_WIDTH:
        kind = GeometryErrorKind.TOO_SMALL
    elif coil_layers < 1:
        kind = GeometryErrorKind.NO_COIL_LAYERS
    else:
        return
    raise GeometryError(kind, height, width, coil_layers)


class TurbineModel:
    """One turbine build and its simulation state.

    Args:
        height: Outer height in blocks (>= 4).
        width: Outer width and depth in blocks (odd, >= 5).
        coil_layers: Number of full coil layers at the bottom (1 .. height - 3).
        material: Coil material filling every coil layer.
        constants: Physics constants; defaults to ``DEFAULT_CONSTANTS``.

    Raises:
        GeometryError: If the geometry is not buildable.
    """

    def __init__(
        self,
        height: int,
        width: int,
        coil_layers: int,
        material: CoilMaterial,
        constants: TurbineConstants | None = None,
    ) -> None:
        validate_geometry(height, width, coil_layers)

        self.constants = constants if constants is not None else DEFAULT_CONSTANTS
        self.material = material
        self.coil_layers = coil_layers

        self.active = False
        self.coil_engaged = False
        self.flow_rate = 0
        self.rotor_configuration: tuple[RotorBladeLevel, ...] = ()

        self.energy_generated_last_tick = 0.0
        self.rotor_efficiency_last_tick = 0.0
        self.coil_efficiency_last_tick = 0.0
        self.inductor_drag_last_tick = 0.0
        self.friction_drag_last_tick = 0.0
        self.aero_drag_last_tick = 0.0

        size = Geometry(width=width, height=height).interior()

        self.reset()
        self.resize(size)
        self.set_full_coil(coil_layers, material)

        blade_length = size.x // 2
        rotors = [RotorBladeLevel.full(blade_length)] * (size.y - coil_layers)
        rotors += [RotorBladeLevel.empty()] * coil_layers
        self.set_rotor_configuration(rotors)

        self.update_internal_values()

        self.active = True
        self.coil_engaged = True
        self.set_nominal_flow_rate(0)

    def __repr__(self) -> str:
        return (
            f"TurbineModel(height={self.outer_height}, width={self.outer_width}, "
            f"coil_layers={self.coil_layers}, flow_rate={self.flow_rate}, rpm={self.rpm:.1f})"
        )

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def outer_width(self) -> int:
        return self.size.x + 2

    @property
    def outer_height(self) -> int:
        return self.size.y + 2

    @property
    def outer_depth(self) -> int:
        return self.size.z + 2

    @property
    def geometry(self) -> Geometry:
        return Geometry(self.outer_width, self.outer_height, self.outer_depth)

    # ------------------------------------------------------------------
    # Construction steps
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Stop the rotor."""
        self.rotor_energy = 0.0

    def resize(self, size: Size) -> None:
        """Set the interior size and clear the coil accumulators."""
        self.size = size
        self.coil_size = 0

        self.induction_efficiency = 0.0
        self.inductor_drag_coefficient = 0.0
        self.induction_exponent_bonus = 0.0

        # One interior block of the cross-section is the bearing
        self.max_flow_rate = (size.x * size.z - 1) * self.constants.flow_rate_per_block

    def set_full_coil(self, layers: int, material: CoilMaterial) -> None:
        """Fill ``layers`` layers with coil, ring by ring around the shaft."""
        for ring in range(self.size.x // 2):
            coils_on_layer = float((ring + 1) * 2 * 4) * layers
            self.coil_size += int(coils_on_layer)
            self.induction_efficiency += material.efficiency * coils_on_layer
            self.induction_exponent_bonus += material.bonus * coils_on_layer
            self.inductor_drag_coefficient += (
                material.extraction_rate * coils_on_layer * (2.0 / (ring + 2.0))
            )

    def add_coil_block(self, x: int, y: int, material: CoilMaterial) -> None:
        """Add a single coil block at offset ``(x, y)`` from the shaft.

        Call ``update_internal_values`` after the last block to normalize.
        """
        self.induction_efficiency += material.efficiency
        self.induction_exponent_bonus += material.bonus

        distance = max(abs(x), abs(y))
        layer_multiplier = 1.0 if distance < 1 else 2 / (distance + 1)
        self.inductor_drag_coefficient += material.extraction_rate * layer_multiplier
        self.coil_size += 1

    def set_rotor_configuration(self, levels: Sequence[RotorBladeLevel]) -> None:
        """Derive rotor mass, inertia and flow capacity from the blade layout."""
        k = self.constants
        self.rotor_configuration = tuple(levels)

        linear_blade_length = 0
        blade_count = 0
        for level in self.rotor_configuration:
            linear_blade_length += sum(_triangular(n) for n in level)
            blade_count += sum(level)
        self.linear_blade_length = float(linear_blade_length)

        self.rotor_capacity_per_rpm = (
            self.linear_blade_length * k.fluid_per_blade_linear_km / 1000 * 2 * math.pi
        )

        self.rotor_shafts = len(self.rotor_configuration)

        self.rotor_axial_mass = self.rotor_shafts * k.rotor_axial_mass_per_shaft
        self.rotor_axial_mass += self.linear_blade_length * k.rotor_axial_mass_per_blade

        self.rotor_mass = blade_count * k.rotor_axial_mass_per_blade
        self.rotor_mass += self.rotor_shafts * k.rotor_axial_mass_per_shaft

    def update_internal_values(self) -> None:
        """Normalize per-coil coefficients and size the battery and tank."""
        k = self.constants
        self.inductor_drag_coefficient *= k.coil_drag_multiplier

        self.battery_capacity = (self.coil_size + 1) * k.battery_size_per_coil_block

        if self.coil_size <= 0:
            self.induction_efficiency = 0.0
            self.inductor_drag_coefficient = 0.0
            self.induction_exponent_bonus = 0.0
        else:
            self.induction_efficiency /= self.coil_size
            self.induction_exponent_bonus /= self.coil_size
            self.inductor_drag_coefficient /= self.coil_size

        self.fluid_tank_capacity = (
            self.size.volume - (self.rotor_shafts + self.coil_size)
        ) * k.tank_volume_per_block

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def rpm(self) -> float:
        return self.rotor_energy / self.rotor_axial_mass

    def set_nominal_flow_rate(self, flow_rate: int) -> None:
        """Set the steam flow, clamped into ``[0, max_flow_rate]``."""
        self.flow_rate = int(min(self.max_flow_rate, max(0, flow_rate)))

    def set_energy_for_rpm(self, rpm: float) -> None:
        self.rotor_energy = self.rotor_axial_mass * rpm

    def copy(self) -> TurbineModel:
        """Independent snapshot of this turbine and its state."""
        return copy.copy(self)

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def tick(self) -> None:
        """Advance the rotor by one game tick."""
        k = self.constants
        rpm = self.rpm

        if self.active:
            flow_rate = float(self.flow_rate)
            effective_flow_rate = flow_rate

            rotor_capacity = self.rotor_capacity_per_rpm * max(MIN_CAPACITY_RPM, rpm)

            if flow_rate > rotor_capacity:
                excess_flow = flow_rate - rotor_capacity
                excess_efficiency = rotor_capacity / flow_rate
                effective_flow_rate = rotor_capacity + excess_flow * excess_efficiency

            if flow_rate != 0:
                self.rotor_efficiency_last_tick = effective_flow_rate / flow_rate
            else:
                self.rotor_efficiency_last_tick = 0.0

            if effective_flow_rate > 0:
                self.rotor_energy += effective_flow_rate * k.rf_per_heat
        else:
            self.rotor_efficiency_last_tick = 0.0

        if self.coil_engaged:
            induction_torque = rpm * self.inductor_drag_coefficient * self.coil_size
            energy = induction_power(induction_torque, self.induction_exponent_bonus, k)
            energy *= self.induction_efficiency

            efficiency = coil_efficiency(rpm, k)
            self.coil_efficiency_last_tick = efficiency

            self.energy_generated_last_tick = energy * efficiency
            self.inductor_drag_last_tick = induction_torque
            self.rotor_energy -= induction_torque
        else:
            self.inductor_drag_last_tick = 0.0
            self.energy_generated_last_tick = 0.0

        friction = rpm * k.friction_drag_multiplier
        self.friction_drag_last_tick = self.rotor_mass * friction * friction
        self.rotor_energy -= self.friction_drag_last_tick

        aero = rpm * k.aerodynamic_drag_multiplier
        self.aero_drag_last_tick = self.linear_blade_length * aero * aero
        self.rotor_energy -= self.aero_drag_last_tick

        if self.rotor_energy < 0:
            self.rotor_energy = 0.0

    def final_rpm(self) -> float:
        """Steady-state RPM for the current flow rate.

        Solves ``a*rpm^2 + b*rpm + c = 0`` for the positive root, where
        ``a`` collects friction and aerodynamic drag, ``b`` induction drag
        and ``c`` the steam input. Three regimes are tried in order:

        1. rpm < 100: rotor capacity is pinned at its 100 RPM floor.
        2. Rotor capacity at the solution covers the whole flow.
        3. Rotor is flooded: the excess-flow penalty is itself linear in
           rpm, which folds into ``a`` and ``b`` and leaves ``c = 0``.
        """
        k = self.constants
        flow_rate = float(self.flow_rate)
        rf_per_heat = k.rf_per_heat

        effective_flow_rate = flow_rate
        rotor_capacity = self.rotor_capacity_per_rpm * MIN_CAPACITY_RPM
        if flow_rate > rotor_capacity:
            effective_flow_rate = (
                rotor_capacity + rotor_capacity - rotor_capacity * rotor_capacity / flow_rate
            )

        a = (
            self.rotor_mass * k.friction_drag_multiplier * k.friction_drag_multiplier
            + self.linear_blade_length * k.aerodynamic_drag_multiplier * k.aerodynamic_drag_multiplier
        )
        b = self.inductor_drag_coefficient * self.coil_size
        c = -effective_flow_rate * rf_per_heat

        predicted_rpm = (-b + math.sqrt(b * b - 4 * a * c)) / (2 * a)
        if predicted_rpm < MIN_CAPACITY_RPM:
            return predicted_rpm

        c = -flow_rate * rf_per_heat
        predicted_rpm = (-b + math.sqrt(b * b - 4 * a * c)) / (2 * a)
        if flow_rate <= self.rotor_capacity_per_rpm * predicted_rpm:
            return predicted_rpm

        a += self.rotor_capacity_per_rpm * self.rotor_capacity_per_rpm / flow_rate * rf_per_heat
        b += -2 * self.rotor_capacity_per_rpm * rf_per_heat
        return -b / a
