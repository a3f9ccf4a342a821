"""analyzer.engine

The single entry point callers use: raw CI YAML text in, AnalysisResult out.

    Loader -> classify_keys -> declared_stages -> stage_aggregation -> keyword_scan
           -> assemble AnalysisResult

Each call parses the text afresh, runs the stages against a new
:class:`~analyzer.framework.ArtifactStore` and freezes the store contents
into a new result. Nothing is cached between calls, so concurrent calls on
different inputs need no coordination.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

import analyzer.stages  # noqa: F401  (registers builtin stages)
from analyzer.framework import PIPELINES, AnalysisContext, ArtifactStore, run_pipeline
from analyzer.framework.pipelines import DEFAULT_PIPELINE
from analyzer.stages.store_keys import StoreKeys
from ci_analysis.config.loader import load
from ci_analysis.domain.result import AnalysisResult
from ci_analysis.errors import ParseError

logger = logging.getLogger(__name__)

PARSE_ERROR_PREFIX = "Error parsing the YAML content: "


def assemble_result(store: ArtifactStore) -> AnalysisResult:
    """Freeze stage outputs into an :class:`AnalysisResult`."""
    agg = store.require(StoreKeys.STAGE_AGGREGATION)
    return AnalysisResult.build(
        jobs=store.require(StoreKeys.JOB_KEYS),
        reserved_keywords=store.require(StoreKeys.RESERVED_KEYS),
        stages=store.require(StoreKeys.DECLARED_STAGES),
        jobs_by_stage=agg.jobs_by_stage,
        stages_with_only=agg.stages_with_only,
        unique_only_conditions=agg.unique_only_conditions,
        jobs_with_rules=agg.jobs_with_rules,
        keyword_flags=store.require(StoreKeys.KEYWORD_FLAGS),
        malformed_jobs=agg.malformed_jobs,
    )


def analyze(
    raw_text: str,
    *,
    source: Optional[str] = None,
    reserved_keywords: Sequence[str] | None = None,
    default_stage: str | None = None,
    sensitive_markers: Mapping[str, Sequence[str]] | None = None,
    pipeline: str = DEFAULT_PIPELINE,
) -> AnalysisResult:
    """Analyze GitLab CI YAML text.

    Raises
    ------
    ParseError
        The text is not valid YAML or its root is not a mapping. No result is
        produced in that case.
    """
    document = load(raw_text)
    ctx = AnalysisContext.build(
        document,
        reserved_keywords=reserved_keywords,
        default_stage=default_stage,
        sensitive_markers=sensitive_markers,
        source=source,
    )
    store = ArtifactStore()
    run_pipeline(ctx, stage_names=PIPELINES[pipeline], store=store, strict_deps=True)

    result = assemble_result(store)
    logger.debug(
        "analyzed %s: %d jobs, %d reserved keys, %d stage buckets",
        source or "<text>",
        result.job_count,
        result.reserved_keyword_count,
        len(result.jobs_by_stage),
    )
    return result


@dataclass(frozen=True)
class AnalysisOutcome:
    """Either a result or the parse error that prevented one."""

    result: Optional[AnalysisResult] = None
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_message(self) -> Optional[str]:
        if self.error is None:
            return None
        return PARSE_ERROR_PREFIX + self.error.message


def analyze_safe(raw_text: str, *, source: Optional[str] = None) -> AnalysisOutcome:
    """Like :func:`analyze`, but returns parse failures as a value."""
    try:
        return AnalysisOutcome(result=analyze(raw_text, source=source))
    except ParseError as e:
        logger.info("parse failed for %s: %s", source or "<text>", e)
        return AnalysisOutcome(error=e)
