"""analyzer.wiring

This module is the **composition root** for the runtime.

"Composition root" means: the single place where we *assemble* the running
application from its building blocks:

- load configuration / environment variables (``.env`` via python-dotenv)
- configure logging

Keeping this in one place prevents configuration setup from being duplicated
across entrypoints (CLI, scripts, CI jobs that import the engine).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

ROOT_DIR: Path = Path(__file__).resolve().parents[1]
ENV_PATH: Path = ROOT_DIR / ".env"

OUTPUT_FORMATS = ("text", "json", "markdown")

ENV_LOG_LEVEL = "CI_ANALYZER_LOG_LEVEL"
ENV_FORMAT = "CI_ANALYZER_FORMAT"
ENV_DEFAULT_FILE = "CI_ANALYZER_DEFAULT_FILE"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    log_level: str = "WARNING"
    output_format: str = "text"
    default_file: str = ".gitlab-ci.yml"


def settings_from_env(environ: Mapping[str, str]) -> Settings:
    """Build Settings from an environment mapping (unknown values fall back to defaults)."""
    defaults = Settings()

    level = str(environ.get(ENV_LOG_LEVEL) or defaults.log_level).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        level = defaults.log_level

    fmt = str(environ.get(ENV_FORMAT) or defaults.output_format).strip().lower()
    if fmt not in OUTPUT_FORMATS:
        fmt = defaults.output_format

    default_file = str(environ.get(ENV_DEFAULT_FILE) or "").strip() or defaults.default_file

    return Settings(log_level=level, output_format=fmt, default_file=default_file)


def load_settings(*, dotenv_path: Optional[Path] = ENV_PATH, load_env_file: bool = True) -> Settings:
    """Load ``.env`` (without overriding already-set variables) and read Settings."""
    if load_env_file and dotenv_path is not None and Path(dotenv_path).exists():
        load_dotenv(dotenv_path, override=False)
    return settings_from_env(os.environ)


def configure_logging(level: str = "WARNING") -> None:
    """Configure root logging once for a CLI run (stderr)."""
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.WARNING), format=LOG_FORMAT)
