#!/usr/bin/env python3
"""
CLI for the GitLab CI configuration analyzer.

Reads a .gitlab-ci.yml, classifies top-level keys into reserved directives
and jobs, groups jobs by stage, collects only/rules conditions and flags
vault/signing/gara markers.

Usage:
  python ci_analyzer_cli.py
  python ci_analyzer_cli.py path/to/.gitlab-ci.yml
  python ci_analyzer_cli.py path/to/.gitlab-ci.yml --format json --out report.json
  cat .gitlab-ci.yml | python ci_analyzer_cli.py - --format markdown

Environment (also read from .env at the repo root):
  CI_ANALYZER_LOG_LEVEL, CI_ANALYZER_FORMAT, CI_ANALYZER_DEFAULT_FILE
"""

from __future__ import annotations

import argparse
from typing import List, Optional

from analyzer.wiring import Settings, configure_logging, load_settings
from cli.args.analyze import add_analyze_args
from cli.commands.analyze import run_analyze


def parse_args(argv: Optional[List[str]] = None, *, settings: Settings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Summarize a GitLab CI configuration file.")
    add_analyze_args(parser, settings=settings)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    args = parse_args(argv, settings=settings)
    configure_logging(args.log_level)
    return int(run_analyze(args))


if __name__ == "__main__":
    raise SystemExit(main())
