from __future__ import annotations

import argparse

from analyzer.wiring import OUTPUT_FORMATS, Settings


def add_analyze_args(parser: argparse.ArgumentParser, *, settings: Settings) -> None:
    """Register flags for analyzing one CI configuration file.

    Defaults come from *settings* (environment / .env), so flags always win.
    """

    parser.add_argument(
        "path",
        nargs="?",
        default=settings.default_file,
        help=f"CI configuration file to analyze, or '-' for stdin (default: {settings.default_file}).",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=list(OUTPUT_FORMATS),
        default=settings.output_format,
        help=f"Report format (default: {settings.output_format}).",
    )
    parser.add_argument(
        "--out",
        dest="out_path",
        default=None,
        help="Write the report to this file (atomically) instead of stdout.",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=settings.log_level,
        help=f"Logging level for diagnostics on stderr (default: {settings.log_level}).",
    )
    parser.add_argument(
        "--list-stages",
        action="store_true",
        help="List the registered analysis stages and exit.",
    )
