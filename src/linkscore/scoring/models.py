"""Data models for scored record pairs."""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from linkscore.models.records import Record
from linkscore.scoring.vectors import MatchVector

if TYPE_CHECKING:
    from linkscore.config.matching import MatchingConfig

__all__ = ["MatchStatus", "ScoreSummary", "MatchResult"]


class MatchStatus(StrEnum):
    """Disposition of a scored pair.

    Attributes
    ----------
    UNKNOWN : str
        Not yet classified. The engine only emits this value.
    MATCH : str
        Classified as the same entity.
    NON_MATCH : str
        Classified as different entities.
    """

    UNKNOWN = "unknown"
    MATCH = "match"
    NON_MATCH = "non_match"


@dataclass(frozen=True, slots=True)
class ScoreSummary:
    """Scores derived from a match vector by a scoring model.

    Attributes
    ----------
    score : float
        Total weight over all fields.
    inclusive_score : float
        Total weight over agreeing fields only.
    true_probability : float
        P(vector | records match).
    false_probability : float
        P(vector | records do not match).
    sensitivity : float
        P(true match agrees on at least the agreeing fields).
    specificity : float
        1 - P(non-match agrees on at least the agreeing fields).
    score_vector : Mapping[str, float]
        Per-field weight.
    """

    score: float
    inclusive_score: float
    true_probability: float
    false_probability: float
    sensitivity: float
    specificity: float
    score_vector: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Freeze the per-field weights."""
        object.__setattr__(self, "score_vector", MappingProxyType(dict(self.score_vector)))


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Scored record pair.

    Attributes
    ----------
    vector : MatchVector
        Per-field outcomes the scores were derived from.
    record_a : Record
        First record.
    record_b : Record
        Second record.
    config : MatchingConfig
        Configuration the pair was scored under.
    score : float
        Total weight.
    inclusive_score : float
        Weight over agreeing fields.
    true_probability : float
        P(vector | match).
    false_probability : float
        P(vector | non-match).
    sensitivity : float
        Sensitivity of the agreement pattern.
    specificity : float
        Specificity of the agreement pattern.
    score_vector : Mapping[str, float]
        Per-field weight.
    certainty : float
        Provisional certainty (1.0 once finalized by the engine).
    status : MatchStatus
        Provisional status (UNKNOWN once finalized by the engine).
    """

    vector: MatchVector
    record_a: Record
    record_b: Record
    config: "MatchingConfig"
    score: float
    inclusive_score: float
    true_probability: float
    false_probability: float
    sensitivity: float
    specificity: float
    score_vector: Mapping[str, float]
    certainty: float = 0.0
    status: MatchStatus = MatchStatus.UNKNOWN

    def __post_init__(self) -> None:
        """Freeze the per-field weights."""
        object.__setattr__(self, "score_vector", MappingProxyType(dict(self.score_vector)))

    @classmethod
    def from_summary(
        cls,
        summary: ScoreSummary,
        vector: MatchVector,
        record_a: Record,
        record_b: Record,
        config: "MatchingConfig",
    ) -> "MatchResult":
        """Assemble a result from model output and its inputs."""
        return cls(
            vector=vector,
            record_a=record_a,
            record_b=record_b,
            config=config,
            score=summary.score,
            inclusive_score=summary.inclusive_score,
            true_probability=summary.true_probability,
            false_probability=summary.false_probability,
            sensitivity=summary.sensitivity,
            specificity=summary.specificity,
            score_vector=summary.score_vector,
        )

    def with_scores(self, **changes: Any) -> "MatchResult":
        """Return a copy with derived scoring fields replaced.

        Raises
        ------
        ValueError
            If ``changes`` touches the records, vector or configuration.
        """
        fixed = {"vector", "record_a", "record_b", "config"} & changes.keys()
        if fixed:
            raise ValueError(f"Cannot replace identity fields: {sorted(fixed)}")
        return replace(self, **changes)

    def finalized(self) -> "MatchResult":
        """Return the provisional, unclassified form handed downstream."""
        return replace(self, certainty=1.0, status=MatchStatus.UNKNOWN)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "record_a": getattr(self.record_a, "uid", None),
            "record_b": getattr(self.record_b, "uid", None),
            "config": self.config.name,
            "vector": self.vector.to_dict(),
            "score": self.score,
            "inclusive_score": self.inclusive_score,
            "true_probability": self.true_probability,
            "false_probability": self.false_probability,
            "sensitivity": self.sensitivity,
            "specificity": self.specificity,
            "score_vector": dict(self.score_vector),
            "certainty": self.certainty,
            "status": self.status.value,
        }
