"""Core module — types, materials, configuration, logging."""

from .config import DEFAULT_CONSTANTS, TurbineConstants, TurbOptConfig, load_config
from .materials import DEFAULT_CATALOG, NULL_MATERIAL, MaterialCatalog, lookup_material
from .types import (
    CoilMaterial,
    Fixed,
    FlowSpec,
    Geometry,
    GeometryError,
    GeometryErrorKind,
    InvalidFlowSpec,
    RotorBladeLevel,
    Size,
    StepUntilMax,
    UseMax,
    WindowAroundTarget,
)

__all__ = [
    "CoilMaterial",
    "DEFAULT_CATALOG",
    "DEFAULT_CONSTANTS",
    "Fixed",
    "FlowSpec",
    "Geometry",
    "GeometryError",
    "GeometryErrorKind",
    "InvalidFlowSpec",
    "MaterialCatalog",
    "NULL_MATERIAL",
    "RotorBladeLevel",
    "Size",
    "StepUntilMax",
    "TurbOptConfig",
    "TurbineConstants",
    "UseMax",
    "WindowAroundTarget",
    "load_config",
    "lookup_material",
]
