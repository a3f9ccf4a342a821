from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class ArtifactStore:
    """Per-run scratchpad for analysis stages.

    Stages should:
    - read inputs from ctx
    - publish their outputs here under the keys in
      :class:`analyzer.stages.store_keys.StoreKeys`

    One store belongs to exactly one run; the engine builds a fresh one for
    every call so nothing leaks between analyses.
    """

    data: Dict[str, Any] = field(default_factory=dict)

    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def put(self, key: str, value: Any) -> None:
        self.data[key] = value

    def require(self, key: str) -> Any:
        if key not in self.data:
            raise KeyError(f"Required artifact missing from store: {key}")
        return self.data[key]

    def add_warning(self, message: str) -> None:
        self.warnings.append(str(message))

    def add_error(self, message: str) -> None:
        self.errors.append(str(message))
