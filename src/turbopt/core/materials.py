"""Coil material catalog.

Unknown material names never raise: they resolve to ``NULL_MATERIAL``,
whose all-zero coefficients leave the coil counted but inert (no drag,
no energy). The fallback is logged at WARN so it is never silent.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from .logging import get_logger
from .types import CoilMaterial

logger = get_logger(__name__)

NULL_MATERIAL = CoilMaterial(0.0, 0.0, 0.0)

# name -> (efficiency, bonus, extraction rate)
COIL_MATERIALS: Mapping[str, CoilMaterial] = MappingProxyType(
    {
        "Iron": CoilMaterial(0.33, 1.0, 0.1),
        "Copper": CoilMaterial(0.396, 1.0, 0.12),
        "Osmium": CoilMaterial(0.462, 1.0, 0.12),
        "Steel": CoilMaterial(0.495, 1.0, 0.13),
        "Invar": CoilMaterial(0.495, 1.0, 0.14),
        "Silver": CoilMaterial(0.561, 1.0, 0.15),
        "Gold": CoilMaterial(0.66, 1.0, 0.175),
        "Electrum": CoilMaterial(0.825, 1.0, 0.2),
        "Platinum": CoilMaterial(0.99, 1.0, 0.25),
        "Enderium": CoilMaterial(0.99, 1.02, 0.3),
        "Ludicrite": CoilMaterial(1.15, 1.02, 0.35),
        "AllTheModium": CoilMaterial(1.2, 1.02, 0.4),
        "Vibranium": CoilMaterial(1.35, 1.04, 0.5),
        "Unobtanium": CoilMaterial(1.5, 1.06, 0.7),
    }
)


class MaterialCatalog(Mapping[str, CoilMaterial]):
    """Read-only name -> CoilMaterial lookup."""

    def __init__(self, materials: Mapping[str, CoilMaterial] | None = None) -> None:
        self._materials = MappingProxyType(dict(materials if materials is not None else COIL_MATERIALS))

    def __getitem__(self, name: str) -> CoilMaterial:
        return self._materials[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._materials)

    def __len__(self) -> int:
        return len(self._materials)

    def names(self) -> list[str]:
        return list(self._materials)

    def lookup(self, name: str) -> CoilMaterial:
        """Return the material called ``name`` or ``NULL_MATERIAL`` if unknown."""
        material = self._materials.get(name)
        if material is None:
            logger.warn("Unknown coil material, using null coefficients", material=name)
            return NULL_MATERIAL
        return material


DEFAULT_CATALOG = MaterialCatalog()


def lookup_material(name: str) -> CoilMaterial:
    """Look up ``name`` in the default catalog (see ``MaterialCatalog.lookup``)."""
    return DEFAULT_CATALOG.lookup(name)
