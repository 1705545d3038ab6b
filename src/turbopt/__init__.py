"""turbopt — reactor-turbine model and exhaustive build search."""

from .core.materials import DEFAULT_CATALOG, lookup_material
from .core.types import Fixed, Geometry, GeometryError, StepUntilMax, UseMax, WindowAroundTarget
from .optimize.search import SearchResult, search
from .physics.turbine import TurbineModel

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CATALOG",
    "Fixed",
    "Geometry",
    "GeometryError",
    "SearchResult",
    "StepUntilMax",
    "TurbineModel",
    "UseMax",
    "WindowAroundTarget",
    "lookup_material",
    "search",
]
