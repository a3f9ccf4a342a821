from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Set

from .context import AnalysisContext
from .registry import StageDefinition, get_stage
from .stage import StageResult
from .store import ArtifactStore

logger = logging.getLogger(__name__)


class StageDependencyError(KeyError):
    """A stage's required store keys are missing or produced too late."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "stage dependency error"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _check_order(stage_defs: Sequence[StageDefinition], store: ArtifactStore, *, strict_deps: bool) -> None:
    """Detect stages that require keys only produced by later stages."""
    available: Set[str] = set(store.data.keys())
    for i, sd in enumerate(stage_defs):
        missing = [k for k in sd.requires if k not in available]
        if missing:
            later: Set[str] = set()
            for nxt in stage_defs[i + 1 :]:
                later.update(nxt.produces)
            wrong_order = [k for k in missing if k in later]
            if wrong_order:
                msg = (
                    f"deps: stage '{sd.name}' requires keys produced later in the pipeline: {wrong_order}. "
                    "Consider reordering stages or adjusting requires/produces."
                )
                if strict_deps:
                    raise StageDependencyError(msg)
                store.add_warning(msg)
        available.update(sd.produces)


def run_pipeline(
    ctx: AnalysisContext,
    *,
    stage_names: Sequence[str],
    store: Optional[ArtifactStore] = None,
    continue_on_error: bool = False,
    strict_deps: bool = False,
) -> List[StageResult]:
    """Run an ordered list of registered stages.

    With ``continue_on_error=False`` (the default) the first failing stage's
    exception propagates after its StageResult is recorded in the log.
    Otherwise the failure is recorded on the StageResult and the store's
    error list, and the remaining stages still run.
    """
    store = store if store is not None else ArtifactStore()
    label = ctx.source or "<text>"
    results: List[StageResult] = []

    stage_defs = [get_stage(n) for n in stage_names]
    _check_order(stage_defs, store, strict_deps=strict_deps)

    for stage_def in stage_defs:
        name = stage_def.name
        started = _now_iso()
        t0 = time.perf_counter()

        missing_now = [k for k in stage_def.requires if k not in store.data]
        if missing_now:
            msg = f"deps: stage '{name}' missing required store keys: {missing_now}"
            if strict_deps:
                raise StageDependencyError(msg)
            store.add_warning(msg)

        try:
            summary = stage_def.func(ctx, store) or {}
        except Exception as e:
            duration_ms = (time.perf_counter() - t0) * 1000.0
            store.add_error(f"stage:{name}: {e}")
            results.append(
                StageResult(
                    name=name,
                    ok=False,
                    started_at=started,
                    finished_at=_now_iso(),
                    duration_ms=duration_ms,
                    error=f"{e}",
                    warnings=list(store.warnings),
                )
            )
            if not continue_on_error:
                raise
            logger.warning("stage %s failed on %s: %s", name, label, e, exc_info=True)
            continue

        duration_ms = (time.perf_counter() - t0) * 1000.0
        logger.debug("stage %s ok on %s in %.2fms: %s", name, label, duration_ms, summary)
        results.append(
            StageResult(
                name=name,
                ok=True,
                started_at=started,
                finished_at=_now_iso(),
                duration_ms=duration_ms,
                summary=dict(summary),
                warnings=list(store.warnings),
            )
        )

    return results
