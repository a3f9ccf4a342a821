"""ci_analysis.config

Reading GitLab CI configuration: keyword constants and the YAML loader.
"""

from __future__ import annotations

from .keywords import DEFAULT_STAGE, RESERVED_KEYWORDS, SENSITIVE_MARKERS
from .loader import load

__all__ = [
    "DEFAULT_STAGE",
    "RESERVED_KEYWORDS",
    "SENSITIVE_MARKERS",
    "load",
]
