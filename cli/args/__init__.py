"""CLI argument builder modules.

The top-level :mod:`ci_analyzer_cli` is intentionally kept thin. Groups of
flags are registered via small "arg builder" functions housed here:

- :func:`cli.args.analyze.add_analyze_args`
"""

from __future__ import annotations

__all__ = [
    "analyze",
]
