"""ci_analysis

Low-level contracts for the GitLab CI configuration analyzer.

This package owns:

* the typed document model (``ScalarNode | SequenceNode | MappingNode``)
* the YAML loader that turns raw text into that model
* the pipeline keyword constants (reserved directives, default stage,
  sensitive-operation markers)
* the immutable :class:`AnalysisResult` handed back to callers
* small filesystem helpers for writing reports

The analysis engine (:mod:`analyzer`) and the CLI build on top of these
types. Nothing in here imports from either of them.
"""

from __future__ import annotations

from .config.loader import load
from .domain.node import ABSENT, MappingNode, Node, ScalarNode, SequenceNode
from .domain.result import AnalysisResult, KeywordFlags, OnlyJobEntry
from .errors import CIAnalysisError, ParseError

__all__ = [
    "ABSENT",
    "AnalysisResult",
    "CIAnalysisError",
    "KeywordFlags",
    "MappingNode",
    "Node",
    "OnlyJobEntry",
    "ParseError",
    "ScalarNode",
    "SequenceNode",
    "load",
]
