"""CLI modules for running the turbine search.

Note: avoid importing submodules at import-time. This keeps `python -m turbopt.cli.<cmd>`
free of `runpy` warnings and avoids side effects from eager imports.
"""

from __future__ import annotations


def run_search_main(argv: list[str] | None = None) -> int:
    """Lazy wrapper for `turbopt.cli.run_search.main`."""

    from .run_search import main

    return main(argv)


__all__ = ["run_search_main"]
