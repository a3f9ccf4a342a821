"""ci_analysis.domain

Domain objects shared by the loader, the analysis stages and the reporters.

Key idea
--------
YAML parsers hand back untyped ``dict``/``list``/scalar trees. The loader
converts that tree once into a small typed node model so every walk over the
document is a fold over three known shapes instead of a pile of
``isinstance`` checks.
"""

from __future__ import annotations

from .node import ABSENT, MappingNode, Node, ScalarNode, SequenceNode, fold, node_text, to_json_value, to_python
from .result import AnalysisResult, KeywordFlags, OnlyJobEntry

__all__ = [
    "ABSENT",
    "AnalysisResult",
    "KeywordFlags",
    "MappingNode",
    "Node",
    "OnlyJobEntry",
    "ScalarNode",
    "SequenceNode",
    "fold",
    "node_text",
    "to_json_value",
    "to_python",
]
