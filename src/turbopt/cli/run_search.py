"""Turbine search CLI.

Usage:
    python -m turbopt.cli.run_search --max-height 12 --max-width 11 --material Gold
    python -m turbopt.cli.run_search --config search.yaml --flow-mode step_until_max --flow-value 1000

Outputs JSON with the best turbine's stats and build cost to stdout.
"""

from __future__ import annotations

import argparse
import json
from typing import Any


def main(argv: list[str] | None = None) -> int:
    """Run the exhaustive turbine search.

    Args:
        argv: Command-line arguments (uses sys.argv if None).

    Returns:
        Exit code (0 = solution found, 1 = no solution).
    """
    parser = argparse.ArgumentParser(description="Search for the best turbine build")
    parser.add_argument("--config", type=str, default=None, help="YAML config file")
    parser.add_argument("--max-height", type=int, default=None, help="Largest outer height")
    parser.add_argument("--max-width", type=int, default=None, help="Largest outer width")
    parser.add_argument("--material", type=str, default=None, help="Coil material name")
    parser.add_argument("--fitness", type=str, default=None, help="Fitness function name")
    parser.add_argument(
        "--flow-mode",
        type=str,
        default=None,
        choices=["use_max", "step_until_max", "fixed", "window_around_target"],
        help="Flow candidate strategy",
    )
    parser.add_argument("--flow-value", type=int, default=None, help="Step, fixed flow or target (mB/t)")
    parser.add_argument("--exact-power", action="store_true", help="Use math.pow for induction")
    parser.add_argument(
        "--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARN", "ERROR"]
    )

    args = parser.parse_args(argv)

    from ..core.config import default_config, load_config, merge_config
    from ..core.logging import set_log_level
    from ..core.materials import lookup_material
    from ..core.types import Geometry
    from ..optimize.objectives import accept_all, get_fitness
    from ..optimize.search import search
    from ..physics.report import build_cost, turbine_stats

    set_log_level(args.log_level)

    config = load_config(args.config) if args.config else default_config()

    search_overrides: dict[str, Any] = {}
    if args.max_height is not None:
        search_overrides["max_height"] = args.max_height
    if args.max_width is not None:
        search_overrides["max_width"] = args.max_width
    if args.material is not None:
        search_overrides["material"] = args.material
    if args.fitness is not None:
        search_overrides["fitness"] = args.fitness
    flow_overrides: dict[str, Any] = {}
    if args.flow_mode is not None:
        flow_overrides["mode"] = args.flow_mode
    if args.flow_value is not None:
        flow_overrides["value"] = args.flow_value
    if flow_overrides:
        search_overrides["flow"] = flow_overrides

    overrides: dict[str, Any] = {"search": search_overrides}
    if args.exact_power:
        overrides["turbine"] = {"exact_power": True}
    config = merge_config(config, overrides)

    cfg = config.search
    result = search(
        get_fitness(cfg.fitness),
        accept_all,
        lookup_material(cfg.material),
        cfg.flow.to_spec(),
        Geometry(width=cfg.max_width, height=cfg.max_height),
        constants=config.turbine,
    )

    output: dict[str, Any] = {
        "found": result.found,
        "fitness": result.fitness if result.found else None,
        "material": cfg.material,
        "counts": {
            "geometries": result.n_geometries,
            "invalid": result.n_invalid,
            "rejected": result.n_rejected,
            "evaluated": result.n_evaluated,
        },
    }
    if result.turbine is not None:
        output["stats"] = turbine_stats(result.turbine)
        output["build_cost"] = build_cost(result.turbine).to_dict()

    print(json.dumps(output, indent=2))

    return 0 if result.found else 1


if __name__ == "__main__":
    import sys

    sys.exit(main())
