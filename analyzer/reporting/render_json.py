from __future__ import annotations

import json

from ci_analysis.domain.result import AnalysisResult


def render_json(result: AnalysisResult, *, indent: int = 2) -> str:
    """Render the result's external dict form as JSON (document order kept)."""
    return json.dumps(result.to_dict(), indent=indent, ensure_ascii=False, default=str) + "\n"
