"""Turbine physics — model, efficiency curve, reporting."""

from .efficiency import approx_pow, coil_efficiency, exact_pow, induction_power
from .report import BuildCost, build_cost, turbine_stats
from .turbine import TurbineModel, validate_geometry

__all__ = [
    "BuildCost",
    "TurbineModel",
    "approx_pow",
    "build_cost",
    "coil_efficiency",
    "exact_pow",
    "induction_power",
    "turbine_stats",
    "validate_geometry",
]
