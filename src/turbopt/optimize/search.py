"""Exhaustive turbine search.

Flow:
    1. Enumerate height (ascending), odd width (ascending), coil layers (ascending)
    2. Build a TurbineModel; skip unbuildable geometries and failed constraints
    3. For each flow candidate: apply it, solve final_rpm, spin the rotor to
       that speed and tick once so the last-tick metrics are populated
    4. Score with the fitness callable; keep the first strictly better one

Ties keep the earlier candidate, so the result is deterministic for a given
input.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

from ..core.config import TurbineConstants
from ..core.constants import MIN_HEIGHT, MIN_WIDTH, NON_COIL_LAYERS
from ..core.logging import get_logger
from ..core.types import CoilMaterial, FlowSpec, Geometry, GeometryError
from ..physics.turbine import TurbineModel
from .flow import flow_candidates, validate_flow_spec

logger = get_logger(__name__)


@dataclass(frozen=True)
class SearchResult:
    """Outcome of ``search``.

    Attributes:
        turbine: Best evaluated turbine, or None if no candidate was scored
            above ``-inf``.
        fitness: Fitness of ``turbine`` (``-inf`` when nothing was found).
        n_geometries: Geometries enumerated.
        n_invalid: Geometries that failed construction.
        n_rejected: Geometries that failed the constraint.
        n_evaluated: Flow candidates scored.
    """

    turbine: TurbineModel | None
    fitness: float
    n_geometries: int = 0
    n_invalid: int = 0
    n_rejected: int = 0
    n_evaluated: int = 0

    @property
    def found(self) -> bool:
        return self.turbine is not None

    @property
    def flow_rate(self) -> int | None:
        return self.turbine.flow_rate if self.turbine is not None else None


def evaluate_flow(turbine: TurbineModel, flow_rate: int) -> None:
    """Drive ``turbine`` to its steady state at ``flow_rate`` and tick once."""
    turbine.set_nominal_flow_rate(flow_rate)
    turbine.set_energy_for_rpm(turbine.final_rpm())
    turbine.tick()


def search(
    fitness: Callable[[TurbineModel], float],
    constraint: Callable[[TurbineModel], bool],
    material: CoilMaterial,
    flow_spec: FlowSpec,
    max_size: Geometry,
    constants: TurbineConstants | None = None,
) -> SearchResult:
    """Find the turbine maximizing ``fitness`` within ``max_size``.

    Args:
        fitness: Score of an evaluated turbine (higher is better).
        constraint: Geometry filter applied right after construction.
        material: Coil material for every coil layer.
        flow_spec: Flow-rate candidate strategy.
        max_size: Largest outer height and width to try (inclusive).
        constants: Physics constants passed to every TurbineModel.

    Returns:
        SearchResult; ``found`` is False when no candidate beat ``-inf``.

    Raises:
        InvalidFlowSpec: If ``flow_spec`` is not a FlowSpec variant.
    """
    validate_flow_spec(flow_spec)

    best: TurbineModel | None = None
    best_fitness = -math.inf
    n_geometries = n_invalid = n_rejected = n_evaluated = 0

    with logger.timer("search"):
        for height in range(MIN_HEIGHT, max_size.height + 1):
            for width in range(MIN_WIDTH, max_size.width + 1, 2):
                for coil_layers in range(1, height - NON_COIL_LAYERS + 1):
                    n_geometries += 1
                    try:
                        turbine = TurbineModel(height, width, coil_layers, material, constants)
                    except GeometryError as e:
                        n_invalid += 1
                        logger.debug(
                            "Couldn't form a valid turbine",
                            height=height,
                            width=width,
                            coil_layers=coil_layers,
                            reason=e.kind.name,
                        )
                        continue

                    if not constraint(turbine):
                        n_rejected += 1
                        continue

                    for flow_rate in flow_candidates(flow_spec, turbine.max_flow_rate):
                        evaluate_flow(turbine, int(flow_rate))
                        n_evaluated += 1

                        turbine_fitness = fitness(turbine)
                        if turbine_fitness > best_fitness:
                            best = turbine.copy()
                            best_fitness = turbine_fitness

    logger.info(
        "Search finished",
        found=best is not None,
        fitness=best_fitness,
        geometries=n_geometries,
        evaluated=n_evaluated,
    )

    return SearchResult(
        turbine=best,
        fitness=best_fitness,
        n_geometries=n_geometries,
        n_invalid=n_invalid,
        n_rejected=n_rejected,
        n_evaluated=n_evaluated,
    )
