from __future__ import annotations

"""analyzer.stages.keyword_scan

Sensitive-operation marker scan.

Every ``key: value`` pair anywhere under a job's configuration is checked for
marker substrings (``vault``, ``signing``, ``gara``/``garasign``),
case-insensitively. The key always counts; the value counts when it is a
scalar held directly by that key (``from: vault``). Sequences are descended,
but bare scalar list items (``script:`` lines, branch names) are never
matched.

This is a heuristic presence signal, not a security audit: a job named
``vault_docs`` that only builds documentation still sets the vault flag.

Flags are accumulated across all jobs of the run. The walk is a fold that
returns a :class:`~ci_analysis.domain.result.KeywordFlags` per subtree, and
subtrees are combined with ``|``.
"""

from typing import Mapping, Sequence, Tuple

from analyzer.framework import AnalysisContext, ArtifactStore, register_stage
from ci_analysis.config.keywords import SENSITIVE_MARKERS
from ci_analysis.domain.node import MappingNode, Node, ScalarNode, fold
from ci_analysis.domain.result import KeywordFlags

from .store_keys import StoreKeys


def text_flags(text: str, markers: Mapping[str, Sequence[str]] = SENSITIVE_MARKERS) -> KeywordFlags:
    """Flags raised by one piece of text (checks are independent)."""
    lowered = str(text).lower()
    return KeywordFlags(**{flag: any(m in lowered for m in subs) for flag, subs in markers.items()})


def _mapping_flags(
    node: MappingNode,
    entries: Tuple[Tuple[str, KeywordFlags], ...],
    markers: Mapping[str, Sequence[str]],
) -> KeywordFlags:
    out = KeywordFlags()
    for (key, child_flags), (_, value) in zip(entries, node.entries):
        out = out | text_flags(key, markers) | child_flags
        if isinstance(value, ScalarNode) and not value.is_null:
            out = out | text_flags(value.text, markers)
    return out


def scan(job_config: Node, *, markers: Mapping[str, Sequence[str]] = SENSITIVE_MARKERS) -> KeywordFlags:
    """Scan one subtree; no depth limit."""
    return fold(
        job_config,
        on_scalar=lambda _node: KeywordFlags(),
        on_sequence=lambda _node, items: KeywordFlags.combine(items),
        on_mapping=lambda node, entries: _mapping_flags(node, entries, markers),
    )


@register_stage(
    "keyword_scan",
    kind="analysis",
    description="Flag vault/signing/gara markers in job configuration.",
    requires=[StoreKeys.JOB_KEYS],
    produces=[StoreKeys.KEYWORD_FLAGS],
)
def stage_keyword_scan(ctx: AnalysisContext, store: ArtifactStore):
    doc = ctx.document
    flags = KeywordFlags.combine(
        scan(doc.get(job), markers=ctx.sensitive_markers) for job in store.require(StoreKeys.JOB_KEYS)
    )
    store.put(StoreKeys.KEYWORD_FLAGS, flags)
    return flags.to_dict()
