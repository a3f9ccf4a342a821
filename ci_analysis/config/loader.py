"""ci_analysis.config.loader

Raw text -> typed document.

Parsing is PyYAML's ``SafeLoader`` with two tightenings:

* Duplicate keys inside a mapping are rejected instead of silently keeping
  the last value. Keys are compared the way they end up in the document
  (stringified), so ``1:`` and ``'1':`` collide. A CI file with two
  ``build:`` jobs is almost always a copy/paste mistake, and dropping one of
  them would make every count in the analysis wrong without a trace. Merge
  keys (``<<: *defaults``) are still allowed to be overridden by explicit
  keys.
* Only ``true``/``false`` resolve to booleans (YAML 1.2). ``on``, ``off``,
  ``yes`` and ``no`` stay strings, so ``only: [on]`` tallies as ``on``.

The parsed ``dict``/``list``/scalar tree is converted once into
:mod:`ci_analysis.domain.node` objects. This is the only place in the code
base that inspects Python types of parsed data.
"""

from __future__ import annotations

import logging
import re
from typing import Any, List, Optional

import yaml

from ..domain.node import MappingNode, Node, ScalarNode, SequenceNode, scalar_text
from ..errors import ParseError

logger = logging.getLogger(__name__)

_MERGE_TAG = "tag:yaml.org,2002:merge"
_BOOL_TAG = "tag:yaml.org,2002:bool"


def _key_text(key: Any) -> str:
    return key if isinstance(key, str) else scalar_text(key)


class UniqueKeySafeLoader(yaml.SafeLoader):
    """SafeLoader that fails on duplicate mapping keys."""

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            seen = set()
            for key_node, _value_node in node.value:
                if key_node.tag == _MERGE_TAG:
                    continue
                key = _key_text(self.construct_object(key_node, deep=deep))
                if key in seen:
                    raise yaml.constructor.ConstructorError(
                        "while constructing a mapping",
                        node.start_mark,
                        f"found duplicate key {key!r}",
                        key_node.start_mark,
                    )
                seen.add(key)
        return super().construct_mapping(node, deep=deep)


# Drop the YAML 1.1 yes/no/on/off booleans; keep true/false.
UniqueKeySafeLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
UniqueKeySafeLoader.add_implicit_resolver(
    _BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


def _kind(data: Any) -> str:
    if data is None:
        return "empty document"
    if isinstance(data, (list, tuple, set)):
        return "sequence"
    return f"scalar ({type(data).__name__})"


def _mapping_entries(data: dict, path: List[int]):
    entries = []
    seen = set()
    for k, v in data.items():
        key = _key_text(k)
        # Merged keys skip the constructor check.
        if key in seen:
            raise ParseError(f"duplicate key {key!r} after merging mapping keys")
        seen.add(key)
        entries.append((key, to_node(v, _path=path)))
    return tuple(entries)


def to_node(data: Any, *, _path: Optional[List[int]] = None) -> Node:
    """Convert a parsed YAML value into the typed node model.

    Raises ParseError on self-referencing structures (recursive aliases),
    which cannot be represented as a tree, and on keys that only collide
    once stringified.
    """
    path = _path if _path is not None else []

    if isinstance(data, (dict, list, tuple, set)):
        if id(data) in path:
            raise ParseError("recursive alias: document contains a structure that references itself")
        path.append(id(data))
        try:
            if isinstance(data, dict):
                return MappingNode(_mapping_entries(data, path))
            items = sorted(data, key=scalar_text) if isinstance(data, set) else data
            return SequenceNode(tuple(to_node(x, _path=path) for x in items))
        finally:
            path.pop()

    return ScalarNode(data)


def parse_yaml(raw_text: str) -> Any:
    """Parse YAML text into plain Python values (duplicate keys rejected)."""
    try:
        return yaml.load(raw_text, Loader=UniqueKeySafeLoader)
    except yaml.YAMLError as e:
        raise ParseError(str(e), cause=e) from e


def load(raw_text: str) -> MappingNode:
    """Parse *raw_text* into a document whose root is a mapping.

    Raises
    ------
    ParseError
        The text is not well-formed YAML, or the root is not a mapping.
    """
    data = parse_yaml(raw_text)
    if not isinstance(data, dict):
        raise ParseError(f"document root must be a mapping, got {_kind(data)}")

    doc = to_node(data)
    logger.debug("loaded document with %d top-level keys", len(doc))
    return doc
