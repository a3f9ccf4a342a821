from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .stage import StageFunc


@dataclass(frozen=True)
class StageDefinition:
    """Metadata describing a registered stage.

    Notes
    -----
    ``requires`` and ``produces`` are the stage's contract with the
    :class:`~analyzer.framework.ArtifactStore`:

    - ``requires``: store keys that must exist before the stage runs.
    - ``produces``: store keys that exist after the stage runs.

    The runner uses them to catch mis-ordered pipelines before any stage runs.
    """

    name: str
    func: StageFunc

    kind: str = "analysis"  # inventory|analysis
    description: str = ""

    requires: Tuple[str, ...] = ()
    produces: Tuple[str, ...] = ()


# Filled by @register_stage at import time; read-only afterwards.
_STAGE_REGISTRY: Dict[str, StageDefinition] = {}


def _coerce_keys(keys: Sequence[str] | None) -> Tuple[str, ...]:
    if not keys:
        return ()
    out: List[str] = []
    seen = set()
    for k in keys:
        s = str(k).strip()
        if not s or s in seen:
            continue
        seen.add(s)
        out.append(s)
    return tuple(out)


def register_stage(
    name: str,
    *,
    kind: str = "analysis",
    description: str = "",
    requires: Sequence[str] | None = None,
    produces: Sequence[str] | None = None,
):
    """Decorator to register a stage."""

    def _decorator(fn: StageFunc) -> StageFunc:
        if name in _STAGE_REGISTRY and _STAGE_REGISTRY[name].func is not fn:
            raise ValueError(f"Stage already registered: {name}")
        _STAGE_REGISTRY[name] = StageDefinition(
            name=name,
            func=fn,
            kind=kind,
            description=description,
            requires=_coerce_keys(requires),
            produces=_coerce_keys(produces),
        )
        return fn

    return _decorator


def get_stage(name: str) -> StageDefinition:
    if name not in _STAGE_REGISTRY:
        raise KeyError(f"Unknown stage: {name}")
    return _STAGE_REGISTRY[name]


def list_stages(kind: Optional[str] = None) -> List[StageDefinition]:
    stages = list(_STAGE_REGISTRY.values())
    stages.sort(key=lambda s: s.name)
    if kind:
        return [s for s in stages if s.kind == kind]
    return stages
