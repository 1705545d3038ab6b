"""Core value types shared by the turbine model and the optimizer.

This module defines the canonical types that form the interface
between the physics model and the search loop.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Union

from .constants import SHELL_THICKNESS


class Size(NamedTuple):
    """Interior block dimensions of a turbine (x = width, y = height, z = depth)."""

    x: int
    y: int
    z: int

    @property
    def volume(self) -> int:
        return self.x * self.y * self.z


@dataclass(frozen=True)
class Geometry:
    """Outer shell dimensions of a turbine.

    Attributes:
        width: Outer width in blocks. Must be odd and >= 5 for a buildable turbine.
        height: Outer height in blocks. Must be >= 4 for a buildable turbine.
        depth: Outer depth in blocks. Defaults to ``width`` (square footprint).

    A ``Geometry`` used as a search bound is not validated; only turbine
    construction enforces the shell invariants.
    """

    width: int
    height: int
    depth: int | None = None

    def __post_init__(self) -> None:
        if self.depth is None:
            object.__setattr__(self, "depth", self.width)

    def interior(self) -> Size:
        """Return the interior size (outer minus shell on each face)."""
        return Size(
            self.width - SHELL_THICKNESS,
            self.height - SHELL_THICKNESS,
            self.depth - SHELL_THICKNESS,
        )


@dataclass(frozen=True)
class CoilMaterial:
    """Coil block coefficients.

    Attributes:
        efficiency: Energy yield multiplier.
        bonus: Exponent applied to induction torque.
        extraction_rate: Drag contribution per coil block.
    """

    efficiency: float
    bonus: float
    extraction_rate: float

    def __post_init__(self) -> None:
        for name in ("efficiency", "bonus", "extraction_rate"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")


class RotorBladeLevel(NamedTuple):
    """Blade length in each quadrant of one vertical rotor layer."""

    a: int = 0
    b: int = 0
    c: int = 0
    d: int = 0

    @classmethod
    def full(cls, length: int) -> RotorBladeLevel:
        return cls(length, length, length, length)

    @classmethod
    def empty(cls) -> RotorBladeLevel:
        return cls()


# ---------------------------------------------------------------------------
# Flow candidate specifications
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class UseMax:
    """Evaluate only the geometry's maximum flow rate."""


@dataclass(frozen=True)
class StepUntilMax:
    """Evaluate ``step, 2*step, ...`` up to the maximum flow rate inclusive."""

    step: int

    def __post_init__(self) -> None:
        if int(self.step) != self.step or self.step <= 0:
            raise ValueError(f"step must be a positive integer, got {self.step}")


@dataclass(frozen=True)
class Fixed:
    """Evaluate exactly one flow rate; the model clamps it on application."""

    value: int


@dataclass(frozen=True)
class WindowAroundTarget:
    """Evaluate a window of flow rates at or below ``target``."""

    target: int


FlowSpec = Union[UseMax, StepUntilMax, Fixed, WindowAroundTarget]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class GeometryErrorKind(Enum):
    WIDTH_MUST_BE_ODD = "Turbine width must be odd"
    TOO_MANY_COIL_LAYERS = "Turbine cannot hold that many coil layers"
    TOO_SMALL = "Turbine cannot be this small"
    NO_COIL_LAYERS = "Turbine needs at least one coil layer"


class GeometryError(ValueError):
    """Raised when a turbine cannot be formed from the requested geometry."""

    def __init__(self, kind: GeometryErrorKind, height: int, width: int, coil_layers: int) -> None:
        self.kind = kind
        self.height = height
        self.width = width
        self.coil_layers = coil_layers
        super().__init__(
            f"{kind.value} (height={height}, width={width}, coil_layers={coil_layers})"
        )


class InvalidFlowSpec(TypeError):
    """Raised when the search receives something that is not a FlowSpec variant."""
