from __future__ import annotations

"""analyzer.stages.aggregate

Stage & condition aggregation.

For every job, in document order:

1. Jobs whose value is not a mapping are *malformed*. They keep their place
   in the job list but contribute nothing here (one broken job must not
   invalidate the report on the rest of the file).
2. The job lands in exactly one stage bucket: its ``stage:`` when that is a
   non-empty scalar, otherwise the default stage (``test``). Buckets are
   created in first-encountered order.
3. ``only:`` (legacy) is normalized to a list and recorded per stage; each
   condition bumps a global tally keyed by its text.
4. ``rules:`` is recorded verbatim per job.

``only`` and ``rules`` are tracked independently. When a job has both, both
are reported and no precedence is computed; this stage describes the file,
it does not evaluate it.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from analyzer.framework import AnalysisContext, ArtifactStore, register_stage
from ci_analysis.config.keywords import DEFAULT_STAGE, ONLY_FIELD, RULES_FIELD, STAGE_FIELD
from ci_analysis.domain.node import (
    ABSENT,
    MappingNode,
    Node,
    ScalarNode,
    SequenceNode,
    node_text,
)
from ci_analysis.domain.result import OnlyJobEntry

from .store_keys import StoreKeys

logger = logging.getLogger(__name__)


@dataclass
class StageAggregation:
    """Accumulated per-stage structures for one run."""

    jobs_by_stage: Dict[str, List[str]] = field(default_factory=dict)
    stages_with_only: Dict[str, List[OnlyJobEntry]] = field(default_factory=dict)
    unique_only_conditions: Counter = field(default_factory=Counter)
    jobs_with_rules: Dict[str, Node] = field(default_factory=dict)
    malformed_jobs: List[str] = field(default_factory=list)

    @property
    def grouped_job_count(self) -> int:
        return sum(len(v) for v in self.jobs_by_stage.values())


def _present(value) -> bool:
    """A field counts as set when the key exists and its value is not YAML null."""
    if value is ABSENT:
        return False
    return not (isinstance(value, ScalarNode) and value.is_null)


def job_stage(job_config: MappingNode, *, default_stage: str = DEFAULT_STAGE) -> str:
    value = job_config.get(STAGE_FIELD)
    if isinstance(value, ScalarNode) and not value.is_null:
        text = value.text.strip()
        if text:
            return text
    return default_stage


def only_conditions(value: Node) -> Tuple[str, ...]:
    """Normalize an ``only:`` value to a tuple of condition strings.

    A list yields one condition per item; anything else (a bare branch name,
    or the ``refs:/variables:`` mapping form) is a single condition.
    """
    items: Sequence[Node] = value.items if isinstance(value, SequenceNode) else (value,)
    return tuple(node_text(item) for item in items)


def aggregate(
    doc: MappingNode,
    job_keys: Sequence[str],
    *,
    default_stage: str = DEFAULT_STAGE,
) -> StageAggregation:
    out = StageAggregation()

    for job in job_keys:
        job_config = doc.get(job)
        if not isinstance(job_config, MappingNode):
            kind = getattr(job_config, "kind", "missing")
            logger.warning("job %r is a %s, not a mapping; skipping stage/condition aggregation", job, kind)
            out.malformed_jobs.append(job)
            continue

        stage = job_stage(job_config, default_stage=default_stage)
        out.jobs_by_stage.setdefault(stage, []).append(job)

        only = job_config.get(ONLY_FIELD)
        if _present(only):
            conditions = only_conditions(only)
            out.stages_with_only.setdefault(stage, []).append(OnlyJobEntry(name=job, only=conditions))
            out.unique_only_conditions.update(conditions)

        rules = job_config.get(RULES_FIELD)
        if _present(rules):
            out.jobs_with_rules[job] = rules

    return out


@register_stage(
    "stage_aggregation",
    kind="analysis",
    description="Group jobs by stage and collect only/rules conditions.",
    requires=[StoreKeys.JOB_KEYS],
    produces=[StoreKeys.STAGE_AGGREGATION],
)
def stage_stage_aggregation(ctx: AnalysisContext, store: ArtifactStore):
    agg = aggregate(
        ctx.document,
        store.require(StoreKeys.JOB_KEYS),
        default_stage=ctx.default_stage,
    )
    for job in agg.malformed_jobs:
        store.add_warning(f"malformed_job: {job}")
    store.put(StoreKeys.STAGE_AGGREGATION, agg)
    return {
        "stages": len(agg.jobs_by_stage),
        "grouped_jobs": agg.grouped_job_count,
        "jobs_with_only": sum(len(v) for v in agg.stages_with_only.values()),
        "jobs_with_rules": len(agg.jobs_with_rules),
        "malformed_jobs": len(agg.malformed_jobs),
    }
