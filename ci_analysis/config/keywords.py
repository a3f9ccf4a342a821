"""ci_analysis.config.keywords

Process-wide constants describing GitLab CI configuration.

These are read-only and defined once at import time. Stages receive them via
the analysis context rather than importing them directly, so tests can run
the engine with a different keyword set.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

# Top-level keys with pipeline-wide meaning. Every other top-level key is a job.
RESERVED_KEYWORDS: Tuple[str, ...] = (
    "stages",
    "default",
    "include",
    "variables",
    "before_script",
    "after_script",
    "image",
    "services",
    "cache",
    "workflow",
    "rules",
    "pages",
)

# GitLab assigns jobs without an explicit `stage:` to "test".
DEFAULT_STAGE = "test"

# Job fields read by the stage/condition aggregator.
STAGE_FIELD = "stage"
ONLY_FIELD = "only"
RULES_FIELD = "rules"

# Top-level key holding the declared stage order.
STAGES_KEY = "stages"

# flag name -> lowercase substrings; a key, or the scalar it holds, matching any
# substring sets the flag.
SENSITIVE_MARKERS: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "vault_present": ("vault",),
        "signing_present": ("signing",),
        "gara_signing_present": ("gara", "garasign"),
    }
)
