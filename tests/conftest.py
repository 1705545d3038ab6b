"""Pytest configuration for turbopt.

Shared fixtures build the smallest legal turbine (outer 4 x 5, one iron coil
layer) whose derived values are easy to check by hand:

    interior 3 x 2 x 3, 8 coil blocks, 2 shafts, 4 blades of length 1
"""

from __future__ import annotations

import pytest

from turbopt.core.logging import set_log_level
from turbopt.core.materials import lookup_material
from turbopt.core.types import CoilMaterial
from turbopt.physics.turbine import TurbineModel


@pytest.fixture(autouse=True)
def _reset_log_level():
    set_log_level("INFO")
    yield
    set_log_level("INFO")


@pytest.fixture
def iron() -> CoilMaterial:
    return lookup_material("Iron")


@pytest.fixture
def small_turbine(iron: CoilMaterial) -> TurbineModel:
    return TurbineModel(height=4, width=5, coil_layers=1, material=iron)
