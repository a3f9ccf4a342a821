from __future__ import annotations

"""analyzer.stages.classify

Partition the document's top-level keys into reserved directives and jobs.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

from analyzer.framework import AnalysisContext, ArtifactStore, register_stage
from ci_analysis.config.keywords import RESERVED_KEYWORDS
from ci_analysis.domain.node import MappingNode

from .store_keys import StoreKeys


@dataclass(frozen=True)
class KeyPartition:
    reserved_keys: Tuple[str, ...] = ()
    job_keys: Tuple[str, ...] = ()


def classify(doc: MappingNode, *, reserved_keywords: Sequence[str] = RESERVED_KEYWORDS) -> KeyPartition:
    """Split top-level keys by exact, case-sensitive membership in *reserved_keywords*.

    Both outputs keep document order; every key lands in exactly one of them.
    """
    reserved = frozenset(reserved_keywords)
    keys = doc.keys()
    return KeyPartition(
        reserved_keys=tuple(k for k in keys if k in reserved),
        job_keys=tuple(k for k in keys if k not in reserved),
    )


@register_stage(
    "classify_keys",
    kind="inventory",
    description="Split top-level keys into reserved directives and jobs.",
    produces=[StoreKeys.RESERVED_KEYS, StoreKeys.JOB_KEYS],
)
def stage_classify_keys(ctx: AnalysisContext, store: ArtifactStore):
    partition = classify(ctx.document, reserved_keywords=ctx.reserved_keywords)
    store.put(StoreKeys.RESERVED_KEYS, partition.reserved_keys)
    store.put(StoreKeys.JOB_KEYS, partition.job_keys)
    return {
        "reserved_keys": len(partition.reserved_keys),
        "job_keys": len(partition.job_keys),
    }
