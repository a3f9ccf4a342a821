"""analyzer.stages

Builtin analysis stages.

Importing this package registers builtin stages in the global registry.
"""

# Import side-effect: stage registration decorators.
from . import classify  # noqa: F401
from . import declared_stages  # noqa: F401
from . import aggregate  # noqa: F401
from . import keyword_scan  # noqa: F401

__all__ = [
    "classify",
    "declared_stages",
    "aggregate",
    "keyword_scan",
]
