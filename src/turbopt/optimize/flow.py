"""Flow-rate candidate generation."""

from __future__ import annotations

import numpy as np

from ..core.constants import FLOW_WINDOW_SPAN, FLOW_WINDOW_STEP
from ..core.types import Fixed, FlowSpec, InvalidFlowSpec, StepUntilMax, UseMax, WindowAroundTarget


FLOW_SPEC_TYPES = (UseMax, StepUntilMax, Fixed, WindowAroundTarget)


def validate_flow_spec(spec: FlowSpec) -> None:
    """Raise InvalidFlowSpec unless ``spec`` is a FlowSpec variant."""
    if not isinstance(spec, FLOW_SPEC_TYPES):
        raise InvalidFlowSpec(f"Invalid flow spec: {spec!r}")


def flow_candidates(spec: FlowSpec, max_flow_rate: int) -> np.ndarray:
    """Return the flow rates to evaluate for one geometry, in evaluation order.

    Args:
        spec: Candidate strategy.
        max_flow_rate: Geometry's maximum flow rate (mB/t).

    Returns:
        1-D int64 array, possibly empty.

    Raises:
        InvalidFlowSpec: If ``spec`` is not one of the FlowSpec variants.
    """
    if isinstance(spec, UseMax):
        return np.array([max_flow_rate], dtype=np.int64)
    if isinstance(spec, StepUntilMax):
        return np.arange(spec.step, max_flow_rate + 1, spec.step, dtype=np.int64)
    if isinstance(spec, Fixed):
        return np.array([spec.value], dtype=np.int64)
    if isinstance(spec, WindowAroundTarget):
        low = max(0, spec.target - FLOW_WINDOW_SPAN)
        high = min(max_flow_rate, spec.target)
        return np.arange(low, high + 1, FLOW_WINDOW_STEP, dtype=np.int64)

    raise InvalidFlowSpec(f"Invalid flow spec: {spec!r}")
