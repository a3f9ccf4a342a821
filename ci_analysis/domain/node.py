"""ci_analysis.domain.node

Typed document model for parsed CI configuration.

A document is a tree of three node shapes:

* :class:`ScalarNode`   - a YAML scalar (str, int, float, bool, null, date...)
* :class:`SequenceNode` - an ordered list of nodes
* :class:`MappingNode`  - an ordered list of (string key, node) entries

Walks over the tree go through :func:`fold`, which dispatches on the node
class itself (each class knows how to fold itself), so callers supply one
handler per shape and never inspect types.

Optional field access uses :data:`ABSENT` instead of ``None`` because YAML
``null`` is a legitimate value (``ScalarNode(None)``) and must stay
distinguishable from "key not present".
"""

from __future__ import annotations

import datetime as _dt
import json
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Tuple, TypeVar, Union

T = TypeVar("T")


class _Absent:
    """Marker returned by :meth:`MappingNode.get` for a missing key."""

    _instance: "_Absent | None" = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()


def scalar_text(value: Any) -> str:
    """Stringify a scalar the way it reads in YAML.

    bool is checked before anything else because it is a subclass of int.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (_dt.date, _dt.datetime)):
        return value.isoformat()
    return str(value)


@dataclass(frozen=True)
class ScalarNode:
    value: Any = None

    kind = "scalar"

    @property
    def text(self) -> str:
        return scalar_text(self.value)

    @property
    def is_null(self) -> bool:
        return self.value is None

    def fold(self, on_scalar, on_sequence, on_mapping):
        return on_scalar(self)


@dataclass(frozen=True)
class SequenceNode:
    items: Tuple["Node", ...] = ()

    kind = "sequence"

    def __iter__(self) -> Iterator["Node"]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def fold(self, on_scalar, on_sequence, on_mapping):
        children = tuple(child.fold(on_scalar, on_sequence, on_mapping) for child in self.items)
        return on_sequence(self, children)


@dataclass(frozen=True)
class MappingNode:
    entries: Tuple[Tuple[str, "Node"], ...] = ()

    kind = "mapping"

    def keys(self) -> Tuple[str, ...]:
        return tuple(k for k, _ in self.entries)

    def get(self, key: str) -> Union["Node", _Absent]:
        """Return the child node for *key*, or :data:`ABSENT`."""
        for k, v in self.entries:
            if k == key:
                return v
        return ABSENT

    def __len__(self) -> int:
        return len(self.entries)

    def fold(self, on_scalar, on_sequence, on_mapping):
        children = tuple((k, v.fold(on_scalar, on_sequence, on_mapping)) for k, v in self.entries)
        return on_mapping(self, children)


Node = Union[ScalarNode, SequenceNode, MappingNode]


def fold(
    node: Node,
    *,
    on_scalar: Callable[[ScalarNode], T],
    on_sequence: Callable[[SequenceNode, Tuple[T, ...]], T],
    on_mapping: Callable[[MappingNode, Tuple[Tuple[str, T], ...]], T],
) -> T:
    """Bottom-up fold over a node tree.

    Children are folded first; ``on_sequence`` receives the folded items and
    ``on_mapping`` receives ``(key, folded_value)`` pairs in document order.
    """
    return node.fold(on_scalar, on_sequence, on_mapping)


def to_python(node: Node) -> Any:
    """Convert a node tree back into plain dict/list/scalar values."""
    return fold(
        node,
        on_scalar=lambda n: n.value,
        on_sequence=lambda _n, items: list(items),
        on_mapping=lambda _n, entries: {k: v for k, v in entries},
    )


_JSON_SCALARS = (str, int, float, bool)


def to_json_value(node: Node) -> Any:
    """Like :func:`to_python`, but scalars JSON cannot encode (dates...) become text."""
    return fold(
        node,
        on_scalar=lambda n: n.value if n.value is None or isinstance(n.value, _JSON_SCALARS) else n.text,
        on_sequence=lambda _n, items: list(items),
        on_mapping=lambda _n, entries: {k: v for k, v in entries},
    )


def _compact_json(node: Node) -> str:
    return json.dumps(to_json_value(node), separators=(",", ":"), ensure_ascii=False)


def node_text(node: Node) -> str:
    """Single-string rendering of a node.

    Scalars use :func:`scalar_text`; collections are rendered as compact JSON
    so structurally equal values always produce the same text.
    """
    return fold(
        node,
        on_scalar=lambda n: n.text,
        on_sequence=lambda n, _items: _compact_json(n),
        on_mapping=lambda n, _entries: _compact_json(n),
    )
