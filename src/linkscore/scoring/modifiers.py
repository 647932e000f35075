"""Post-processing chain applied to scored results.

Modifiers run strictly in registration order, each receiving only the
previous modifier's output. A modifier may change derived scores, certainty
and status; it may not swap the records, vector or configuration a result
refers to.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from linkscore.scoring.models import MatchResult

if TYPE_CHECKING:
    from linkscore.config.matching import MatchingConfig

__all__ = ["Modifier", "ModifierChain", "ModifierError", "RoundingModifier"]


class ModifierError(RuntimeError):
    """Raised when a modifier fails or breaks the result identity contract.

    Attributes
    ----------
    modifier_name : str
        Name of the failing modifier.
    partial_result : MatchResult
        Last result produced before the failure.
    """

    def __init__(self, message: str, modifier_name: str, partial_result: MatchResult) -> None:
        super().__init__(message)
        self.modifier_name = modifier_name
        self.partial_result = partial_result


class Modifier(ABC):
    """Transform applied to a scored result before finalization."""

    @property
    def name(self) -> str:
        """Identifier used in errors and audit events."""
        return type(self).__name__

    @abstractmethod
    def modify(self, result: MatchResult, config: "MatchingConfig") -> MatchResult:
        """Return a possibly adjusted copy of ``result``."""


class RoundingModifier(Modifier):
    """Round derived scores to a fixed number of decimals."""

    def __init__(self, decimals: int = 6) -> None:
        if decimals < 0:
            raise ValueError(f"decimals must be >= 0, got {decimals}")
        self.decimals = decimals

    def modify(self, result: MatchResult, config: "MatchingConfig") -> MatchResult:
        """Round every derived score field."""
        r = self.decimals
        return result.with_scores(
            score=round(result.score, r),
            inclusive_score=round(result.inclusive_score, r),
            true_probability=round(result.true_probability, r),
            false_probability=round(result.false_probability, r),
            sensitivity=round(result.sensitivity, r),
            specificity=round(result.specificity, r),
            score_vector={f: round(w, r) for f, w in result.score_vector.items()},
        )


def _same_identity(before: MatchResult, after: MatchResult) -> bool:
    return (
        after.vector is before.vector
        and after.record_a is before.record_a
        and after.record_b is before.record_b
        and after.config is before.config
    )


class ModifierChain:
    """Ordered list of modifiers. An empty chain returns results unchanged."""

    def __init__(self, modifiers: Iterable[Modifier] = ()) -> None:
        self._modifiers: list[Modifier] = list(modifiers)

    def add(self, modifier: Modifier) -> None:
        """Append ``modifier`` to the end of the chain."""
        self._modifiers.append(modifier)

    def apply(self, result: MatchResult, config: "MatchingConfig") -> MatchResult:
        """Run every modifier in order.

        Raises
        ------
        ModifierError
            If a modifier raises or returns a result for different records,
            vector or configuration. The chain stops at the first failure.
        """
        for modifier in self._modifiers:
            try:
                modified = modifier.modify(result, config)
            except Exception as e:
                raise ModifierError(
                    f"Modifier {modifier.name} failed: {e}",
                    modifier_name=modifier.name,
                    partial_result=result,
                ) from e
            if not isinstance(modified, MatchResult) or not _same_identity(result, modified):
                raise ModifierError(
                    f"Modifier {modifier.name} changed the identity of the result",
                    modifier_name=modifier.name,
                    partial_result=result,
                )
            result = modified
        return result

    def __iter__(self) -> Iterator[Modifier]:
        return iter(self._modifiers)

    def __len__(self) -> int:
        return len(self._modifiers)
