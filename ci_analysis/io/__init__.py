"""ci_analysis.io

Filesystem helpers for writing analysis reports.
"""

from __future__ import annotations

from .fs import read_text, write_json_atomic, write_text_atomic

__all__ = [
    "read_text",
    "write_json_atomic",
    "write_text_atomic",
]
