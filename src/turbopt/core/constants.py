"""Core constants for turbopt.

This module defines search-wide invariants such as:
- Smallest buildable turbine shell
- Flow-window sampling knobs
- Model version string (bump when the physics changes)
"""

from __future__ import annotations

# Smallest outer shell that still has a rotor layer, a coil layer and a bearing
MIN_HEIGHT = 4
MIN_WIDTH = 5

# Shell occupies one block on each face
SHELL_THICKNESS = 2

# Top and bottom shell plus at least one rotor layer
NON_COIL_LAYERS = 3

# WindowAroundTarget sampling
FLOW_WINDOW_SPAN = 10_000  # mB/t below the target
FLOW_WINDOW_STEP = 100  # mB/t

MODEL_VERSION_TURBINE = "v1.0_reactor_turbine"
