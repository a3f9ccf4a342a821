from __future__ import annotations

"""analyzer.reporting.render_text

Plain-text report, laid out section by section the way the analyzer's web
view shows it: counts, declared stages with their jobs, ``only`` conditions,
additional checks, job names and used reserved keywords.
"""

from typing import List

from ci_analysis.domain.node import node_text
from ci_analysis.domain.result import AnalysisResult


def _present(flag: bool) -> str:
    return "Present" if flag else "Not Present"


def _stage_lines(result: AnalysisResult) -> List[str]:
    lines: List[str] = []
    for stage in result.stages:
        count = len(result.jobs_by_stage.get(stage, ()))
        lines.append(f"  - {stage}: {count} job(s)")
        for entry in result.stages_with_only.get(stage, ()):
            lines.append(f"      - {entry.name} (only: {', '.join(entry.only)})")

    # Buckets for stages that were used by jobs but never declared.
    undeclared = [s for s in result.jobs_by_stage if s not in result.stages]
    if undeclared:
        lines.append("  Undeclared stages used by jobs:")
        for stage in undeclared:
            lines.append(f"  - {stage}: {len(result.jobs_by_stage[stage])} job(s)")
            for entry in result.stages_with_only.get(stage, ()):
                lines.append(f"      - {entry.name} (only: {', '.join(entry.only)})")
    return lines


def render_text(result: AnalysisResult) -> str:
    lines: List[str] = []

    lines.append("Analysis Results")
    lines.append("================")
    lines.append(f"Jobs: {result.job_count}")
    lines.append(f"Reserved Keywords: {result.reserved_keyword_count}")
    lines.append("")

    lines.append("Stages and their sub-stages (jobs):")
    stage_lines = _stage_lines(result)
    lines.extend(stage_lines or ["  (none)"])
    lines.append("")

    lines.append("Unique 'only' conditions and their count:")
    if result.unique_only_conditions:
        for condition, count in result.unique_only_conditions.items():
            lines.append(f"  - {condition}: {count} occurrence(s)")
    else:
        lines.append("  (none)")
    lines.append("")

    if result.jobs_with_rules:
        lines.append("Jobs using 'rules':")
        for job, rules in result.jobs_with_rules.items():
            lines.append(f"  - {job}: {node_text(rules)}")
        lines.append("")

    lines.append("Additional Checks:")
    lines.append(f"  - Vault: {_present(result.vault_present)}")
    lines.append(f"  - Signing: {_present(result.signing_present)}")
    lines.append(f"  - Gara Signing: {_present(result.gara_signing_present)}")
    lines.append("")

    lines.append("Job Names:")
    lines.append("  " + (", ".join(result.jobs) if result.jobs else "(none)"))
    lines.append("")

    lines.append("Used Reserved Keywords:")
    lines.append("  " + (", ".join(result.reserved_keywords) if result.reserved_keywords else "(none)"))

    if result.malformed_jobs:
        lines.append("")
        lines.append("Jobs skipped (value is not a mapping):")
        lines.append("  " + ", ".join(result.malformed_jobs))

    return "\n".join(lines) + "\n"
