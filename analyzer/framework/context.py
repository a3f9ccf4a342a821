from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Mapping, Optional, Sequence, Tuple

from ci_analysis.config.keywords import DEFAULT_STAGE, RESERVED_KEYWORDS, SENSITIVE_MARKERS
from ci_analysis.domain.node import MappingNode
from ci_analysis.domain.result import KeywordFlags


@dataclass(frozen=True)
class AnalysisContext:
    """Immutable analysis job packet.

    Stages read everything they need from here and never mutate it; their
    outputs go to the :class:`~analyzer.framework.ArtifactStore`.

    Attributes
    ----------
    document:
        Parsed CI configuration (mapping root).
    reserved_keywords:
        Top-level keys treated as pipeline directives rather than jobs.
    default_stage:
        Stage assigned to jobs without an explicit ``stage:``.
    sensitive_markers:
        Flag name -> lowercase substrings matched against mapping keys and
        the scalar values they hold.
    source:
        Optional label for where the document came from (file path, "<stdin>").
        Used to label stage log messages.
    """

    document: MappingNode
    reserved_keywords: Tuple[str, ...] = RESERVED_KEYWORDS
    default_stage: str = DEFAULT_STAGE
    sensitive_markers: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: SENSITIVE_MARKERS)
    source: Optional[str] = None

    @staticmethod
    def build(
        document: MappingNode,
        *,
        reserved_keywords: Sequence[str] | None = None,
        default_stage: str | None = None,
        sensitive_markers: Mapping[str, Sequence[str]] | None = None,
        source: str | None = None,
    ) -> "AnalysisContext":
        markers = SENSITIVE_MARKERS
        if sensitive_markers is not None:
            known = {f.name for f in fields(KeywordFlags)}
            unknown = sorted(set(sensitive_markers) - known)
            if unknown:
                raise ValueError(f"Unknown sensitive marker flags: {unknown} (expected a subset of {sorted(known)})")
            markers = {k: tuple(str(s).lower() for s in v) for k, v in sensitive_markers.items()}

        return AnalysisContext(
            document=document,
            reserved_keywords=tuple(reserved_keywords) if reserved_keywords is not None else RESERVED_KEYWORDS,
            default_stage=str(default_stage or DEFAULT_STAGE),
            sensitive_markers=markers,
            source=source,
        )
