"""Optimizer — exhaustive geometry/flow search."""

from .flow import flow_candidates, validate_flow_spec
from .objectives import FITNESS_FUNCTIONS, accept_all, energy_generated, get_fitness
from .search import SearchResult, evaluate_flow, search

__all__ = [
    "FITNESS_FUNCTIONS",
    "SearchResult",
    "accept_all",
    "energy_generated",
    "evaluate_flow",
    "flow_candidates",
    "get_fitness",
    "search",
    "validate_flow_spec",
]
