from __future__ import annotations

"""analyzer.stages.declared_stages

Read the top-level ``stages:`` declaration verbatim.

The declaration is recorded as written; it does not influence how jobs are
grouped (jobs_by_stage buckets follow the jobs' own ``stage:`` fields).
"""

import logging
from typing import Tuple

from analyzer.framework import AnalysisContext, ArtifactStore, register_stage
from ci_analysis.config.keywords import STAGES_KEY
from ci_analysis.domain.node import MappingNode, ScalarNode, SequenceNode, node_text

from .store_keys import StoreKeys

logger = logging.getLogger(__name__)


def declared_stages(doc: MappingNode) -> Tuple[str, ...]:
    """Return the declared stage names, or () when ``stages`` is absent.

    A single scalar (``stages: build``) is read as a one-element list. A
    mapping or null value declares nothing.
    """
    value = doc.get(STAGES_KEY)
    if isinstance(value, SequenceNode):
        return tuple(node_text(item) for item in value)
    if isinstance(value, ScalarNode) and not value.is_null:
        return (value.text,)
    if isinstance(value, MappingNode):
        logger.warning("top-level %r is a mapping; ignoring it as a stage declaration", STAGES_KEY)
    return ()


@register_stage(
    "declared_stages",
    kind="inventory",
    description="Record the top-level stages declaration.",
    produces=[StoreKeys.DECLARED_STAGES],
)
def stage_declared_stages(ctx: AnalysisContext, store: ArtifactStore):
    stages = declared_stages(ctx.document)
    store.put(StoreKeys.DECLARED_STAGES, stages)
    return {"declared_stages": len(stages)}
