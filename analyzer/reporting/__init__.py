"""analyzer.reporting

Renderers for :class:`~ci_analysis.domain.result.AnalysisResult`.

Formatting logic only (no file I/O); the CLI decides where output goes.
"""

from __future__ import annotations

from typing import Callable, Dict

from ci_analysis.domain.result import AnalysisResult

from .render_json import render_json
from .render_md import render_markdown
from .render_text import render_text

RENDERERS: Dict[str, Callable[[AnalysisResult], str]] = {
    "text": render_text,
    "json": render_json,
    "markdown": render_markdown,
}

__all__ = [
    "RENDERERS",
    "render_json",
    "render_markdown",
    "render_text",
]
