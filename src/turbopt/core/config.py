"""Configuration management with pydantic and YAML support."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .constants import MIN_HEIGHT, MIN_WIDTH
from .types import Fixed, FlowSpec, StepUntilMax, UseMax, WindowAroundTarget


class TurbineConstants(BaseModel):
    """Physical constants of the turbine model.

    One immutable value is passed into every ``TurbineModel`` so the model
    never reads process-wide globals.
    """

    model_config = ConfigDict(frozen=True)

    flow_rate_per_block: int = Field(default=5000, gt=0)  # mB/t per interior cross-section block
    latent_heat: float = Field(default=4.0, gt=0)
    turbine_multiplier: float = Field(default=2.5, gt=0)
    fluid_per_blade_linear_km: float = Field(default=20.0, gt=0)
    rotor_axial_mass_per_shaft: float = Field(default=100.0, gt=0)
    rotor_axial_mass_per_blade: float = Field(default=100.0, gt=0)
    coil_drag_multiplier: float = Field(default=10.0, ge=0)
    battery_size_per_coil_block: float = Field(default=300_000.0, ge=0)
    tank_volume_per_block: float = Field(default=10_000.0, ge=0)
    effective_grid_frequency: float = Field(default=30.0, gt=0)
    efficiency_peaks: float = Field(default=2.0, gt=0.5)
    friction_drag_multiplier: float = Field(default=5.0e-4, ge=0)
    aerodynamic_drag_multiplier: float = Field(default=5.0e-4, ge=0)
    # False keeps the 4-term series used in-game; True uses math.pow
    exact_power: bool = False

    @property
    def rf_per_heat(self) -> float:
        return self.latent_heat * self.turbine_multiplier

    @property
    def peak_rpm(self) -> float:
        return self.effective_grid_frequency * 60

    @property
    def log_peak_rpm(self) -> float:
        return math.log(self.peak_rpm)

    @property
    def min_efficiency_scale(self) -> float:
        return 2 ** (self.efficiency_peaks - 0.5)

    @property
    def min_rpm(self) -> float:
        return self.peak_rpm / self.min_efficiency_scale


DEFAULT_CONSTANTS = TurbineConstants()


class FlowConfig(BaseModel):
    """Flow-candidate strategy as it appears in a config file."""

    mode: Literal["use_max", "step_until_max", "fixed", "window_around_target"] = "use_max"
    value: int = 0

    def to_spec(self) -> FlowSpec:
        """Build the matching FlowSpec variant."""
        if self.mode == "use_max":
            return UseMax()
        if self.mode == "step_until_max":
            return StepUntilMax(self.value)
        if self.mode == "fixed":
            return Fixed(self.value)
        return WindowAroundTarget(self.value)


class SearchConfig(BaseModel):
    """Search bounds and objective selection."""

    max_height: int = Field(default=10, ge=MIN_HEIGHT, le=64)
    max_width: int = Field(default=9, ge=MIN_WIDTH, le=64)
    material: str = "Iron"
    fitness: str = "energy"
    flow: FlowConfig = Field(default_factory=FlowConfig)


class TurbOptConfig(BaseModel):
    """Root configuration object."""

    turbine: TurbineConstants = Field(default_factory=TurbineConstants)
    search: SearchConfig = Field(default_factory=SearchConfig)


def load_config(path: str | Path) -> TurbOptConfig:
    """Load configuration from YAML file.

    Args:
        path: Path to YAML config file.

    Returns:
        Parsed TurbOptConfig object.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    return TurbOptConfig.model_validate(data or {})


def save_config(config: TurbOptConfig, path: str | Path) -> None:
    """Save configuration to YAML file.

    Args:
        config: Configuration to save.
        path: Output path.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.safe_dump(config.model_dump(), f, default_flow_style=False)


def default_config() -> TurbOptConfig:
    """Return default configuration."""
    return TurbOptConfig()


def merge_config(base: TurbOptConfig, overrides: dict[str, Any]) -> TurbOptConfig:
    """Merge overrides into base configuration.

    Args:
        base: Base configuration.
        overrides: Dictionary of override values.

    Returns:
        New configuration with overrides applied.
    """
    base_dict = base.model_dump()

    def deep_merge(d1: dict, d2: dict) -> dict:
        result = d1.copy()
        for k, v in d2.items():
            if k in result and isinstance(result[k], dict) and isinstance(v, dict):
                result[k] = deep_merge(result[k], v)
            else:
                result[k] = v
        return result

    merged = deep_merge(base_dict, overrides)
    return TurbOptConfig.model_validate(merged)
