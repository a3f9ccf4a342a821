"""analyzer.framework

A small stage-based analysis framework.

- **AnalysisContext (ctx)**: an immutable job packet (the parsed document and
  the keyword tables the stages apply to it)
- **ArtifactStore (store)**: a per-run scratchpad stages use to hand results
  to later stages
- **Stages**: small, composable units of work registered by name
- **Pipelines**: ordered lists of stage names

"""

from .context import AnalysisContext
from .store import ArtifactStore
from .stage import StageResult, StageFunc
from .registry import register_stage, get_stage, list_stages, StageDefinition
from .pipelines import PIPELINES
from .runner import StageDependencyError, run_pipeline

__all__ = [
    "AnalysisContext",
    "ArtifactStore",
    "StageResult",
    "StageFunc",
    "StageDefinition",
    "StageDependencyError",
    "PIPELINES",
    "register_stage",
    "get_stage",
    "list_stages",
    "run_pipeline",
]
