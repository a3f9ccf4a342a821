from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

from analyzer.engine import analyze_safe
from analyzer.framework import list_stages
from analyzer.reporting import RENDERERS
from ci_analysis.io.fs import read_text, write_json_atomic, write_text_atomic

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PARSE_ERROR = 1
EXIT_INPUT_ERROR = 2


def _read_input(path: str) -> Tuple[Optional[str], str]:
    """Return (text, label). text is None when the file cannot be read."""
    if path == "-":
        return sys.stdin.read(), "<stdin>"

    p = Path(path).expanduser()
    try:
        return read_text(p), str(p)
    except (OSError, UnicodeDecodeError) as e:
        print(f"❌ Cannot read {p}: {e}", file=sys.stderr)
        return None, str(p)


def run_list_stages() -> int:
    for sd in list_stages():
        print(f"{sd.name:<20} {sd.kind:<10} {sd.description}")
    return EXIT_OK


def run_analyze(args: argparse.Namespace) -> int:
    """Analyze one file and print or write the report.

    A parse failure prints the diagnostic and writes nothing, so a stale
    report from an earlier run is never mistaken for this one's.
    """
    if getattr(args, "list_stages", False):
        return run_list_stages()

    text, label = _read_input(str(args.path))
    if text is None:
        return EXIT_INPUT_ERROR

    outcome = analyze_safe(text, source=label)
    if not outcome.ok:
        print(f"❌ {label}: {outcome.error_message}", file=sys.stderr)
        return EXIT_PARSE_ERROR

    result = outcome.result
    fmt = str(args.output_format)

    if args.out_path:
        out = Path(args.out_path).expanduser()
        if fmt == "json":
            write_json_atomic(out, result.to_dict())
        else:
            write_text_atomic(out, RENDERERS[fmt](result))
        logger.info("wrote %s report for %s to %s", fmt, label, out)
        print(f"✅ Wrote {fmt} report: {out}")
        return EXIT_OK

    sys.stdout.write(RENDERERS[fmt](result))
    return EXIT_OK
