"""ci_analysis.errors

Exception types surfaced by the analyzer.

Only :class:`ParseError` is fatal to an analysis run. Everything else the
engine encounters (missing ``stages``, jobs that are not mappings, absent
``only``/``rules``) is absorbed and reported as data on the result.
"""

from __future__ import annotations

from typing import Optional


class CIAnalysisError(Exception):
    """Base class for analyzer errors."""


class ParseError(CIAnalysisError):
    """Raw input is not a well-formed YAML document with a mapping root."""

    def __init__(self, message: str, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = str(message)
        self.cause = cause

    def __str__(self) -> str:
        return self.message
