from __future__ import annotations

"""analyzer.reporting.render_md

Markdown rendering, suitable for pasting into a merge request comment.
"""

from typing import List

from ci_analysis.domain.node import node_text
from ci_analysis.domain.result import AnalysisResult


def _code_list(items) -> str:
    return ", ".join(f"`{x}`" for x in items) if items else "_none_"


def render_markdown(result: AnalysisResult, *, title: str = "GitLab CI analysis") -> str:
    lines: List[str] = []

    lines.append(f"# {title}")
    lines.append("")
    lines.append(f"- jobs: **{result.job_count}**")
    lines.append(f"- reserved_keywords: **{result.reserved_keyword_count}**")
    lines.append(f"- declared_stages: {_code_list(result.stages)}")
    lines.append("")

    lines.append("## Jobs by stage")
    lines.append("")
    if result.jobs_by_stage:
        lines.append("| stage | declared | jobs |")
        lines.append("|---|---|---|")
        for stage, jobs in result.jobs_by_stage.items():
            declared = "yes" if stage in result.stages else "no"
            lines.append(f"| `{stage}` | {declared} | {_code_list(jobs)} |")
    else:
        lines.append("_No jobs grouped._")
    lines.append("")

    lines.append("## `only` conditions")
    lines.append("")
    if result.stages_with_only:
        for stage, entries in result.stages_with_only.items():
            for entry in entries:
                lines.append(f"- `{stage}` / `{entry.name}`: {_code_list(entry.only)}")
        lines.append("")
        lines.append("| condition | occurrences |")
        lines.append("|---|---|")
        for condition, count in result.unique_only_conditions.items():
            lines.append(f"| `{condition}` | {count} |")
    else:
        lines.append("_No job uses `only`._")
    lines.append("")

    lines.append("## `rules`")
    lines.append("")
    if result.jobs_with_rules:
        for job, rules in result.jobs_with_rules.items():
            lines.append(f"- `{job}`: `{node_text(rules)}`")
    else:
        lines.append("_No job uses `rules`._")
    lines.append("")

    lines.append("## Sensitive-operation markers")
    lines.append("")
    lines.append(f"- vault: **{'present' if result.vault_present else 'not present'}**")
    lines.append(f"- signing: **{'present' if result.signing_present else 'not present'}**")
    lines.append(f"- gara signing: **{'present' if result.gara_signing_present else 'not present'}**")

    if result.malformed_jobs:
        lines.append("")
        lines.append("## Skipped jobs")
        lines.append("")
        lines.append(f"Value is not a mapping: {_code_list(result.malformed_jobs)}")

    return "\n".join(lines) + "\n"
