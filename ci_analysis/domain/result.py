"""ci_analysis.domain.result

The immutable analysis result handed back to callers.

Why read-only containers?
-------------------------
A result is built once at the end of a run and then passed around to
reporters, tests and callers. Exposing tuples and ``MappingProxyType`` views
(instead of the lists/dicts the stages accumulate into) means nothing
downstream can mutate it, and two runs never share containers.

``to_dict`` is the conversion boundary to JSON. It uses the camelCase field
names of the external contract (``jobCount``, ``jobsByStage``...) and always
returns fresh containers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Tuple

from .node import Node, to_json_value


def _frozen_mapping(d: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(d))


@dataclass(frozen=True)
class KeywordFlags:
    """Presence flags for sensitive-operation markers.

    Flags only ever go from False to True; ``|`` combines two accumulators.
    """

    vault_present: bool = False
    signing_present: bool = False
    gara_signing_present: bool = False

    def __or__(self, other: "KeywordFlags") -> "KeywordFlags":
        return KeywordFlags(
            vault_present=self.vault_present or other.vault_present,
            signing_present=self.signing_present or other.signing_present,
            gara_signing_present=self.gara_signing_present or other.gara_signing_present,
        )

    @classmethod
    def combine(cls, flags: Iterable["KeywordFlags"]) -> "KeywordFlags":
        out = cls()
        for f in flags:
            out = out | f
        return out

    def to_dict(self) -> Dict[str, bool]:
        return {
            "vaultPresent": self.vault_present,
            "signingPresent": self.signing_present,
            "garaSigningPresent": self.gara_signing_present,
        }


@dataclass(frozen=True)
class OnlyJobEntry:
    """A job that uses the legacy ``only`` construct, with its conditions."""

    name: str
    only: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "only": list(self.only)}


@dataclass(frozen=True)
class AnalysisResult:
    """Structured summary of one CI configuration document."""

    jobs: Tuple[str, ...] = ()
    reserved_keywords: Tuple[str, ...] = ()
    stages: Tuple[str, ...] = ()

    jobs_by_stage: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: _frozen_mapping({}))
    stages_with_only: Mapping[str, Tuple[OnlyJobEntry, ...]] = field(
        default_factory=lambda: _frozen_mapping({})
    )
    unique_only_conditions: Mapping[str, int] = field(default_factory=lambda: _frozen_mapping({}))
    jobs_with_rules: Mapping[str, Node] = field(default_factory=lambda: _frozen_mapping({}))

    keyword_flags: KeywordFlags = field(default_factory=KeywordFlags)

    # Jobs whose value is not a mapping; counted as jobs but not grouped.
    malformed_jobs: Tuple[str, ...] = ()

    @classmethod
    def build(
        cls,
        *,
        jobs: Iterable[str],
        reserved_keywords: Iterable[str],
        stages: Iterable[str],
        jobs_by_stage: Mapping[str, Iterable[str]],
        stages_with_only: Mapping[str, Iterable[OnlyJobEntry]],
        unique_only_conditions: Mapping[str, int],
        jobs_with_rules: Mapping[str, Node],
        keyword_flags: KeywordFlags,
        malformed_jobs: Iterable[str] = (),
    ) -> "AnalysisResult":
        """Freeze stage outputs into a result (copies every container)."""
        return cls(
            jobs=tuple(jobs),
            reserved_keywords=tuple(reserved_keywords),
            stages=tuple(stages),
            jobs_by_stage=_frozen_mapping({k: tuple(v) for k, v in jobs_by_stage.items()}),
            stages_with_only=_frozen_mapping({k: tuple(v) for k, v in stages_with_only.items()}),
            unique_only_conditions=_frozen_mapping({k: int(v) for k, v in unique_only_conditions.items()}),
            jobs_with_rules=_frozen_mapping(jobs_with_rules),
            keyword_flags=keyword_flags,
            malformed_jobs=tuple(malformed_jobs),
        )

    @property
    def job_count(self) -> int:
        return len(self.jobs)

    @property
    def reserved_keyword_count(self) -> int:
        return len(self.reserved_keywords)

    @property
    def vault_present(self) -> bool:
        return self.keyword_flags.vault_present

    @property
    def signing_present(self) -> bool:
        return self.keyword_flags.signing_present

    @property
    def gara_signing_present(self) -> bool:
        return self.keyword_flags.gara_signing_present

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dict (external field names)."""
        out: Dict[str, Any] = {
            "jobCount": self.job_count,
            "reservedKeywordCount": self.reserved_keyword_count,
            "jobs": list(self.jobs),
            "reservedKeywords": list(self.reserved_keywords),
            "stages": list(self.stages),
            "jobsByStage": {k: list(v) for k, v in self.jobs_by_stage.items()},
            "stagesWithOnly": {k: [e.to_dict() for e in v] for k, v in self.stages_with_only.items()},
            "uniqueOnlyConditions": dict(self.unique_only_conditions),
            "jobsWithRules": {k: to_json_value(v) for k, v in self.jobs_with_rules.items()},
        }
        out.update(self.keyword_flags.to_dict())
        out["malformedJobs"] = list(self.malformed_jobs)
        return out
