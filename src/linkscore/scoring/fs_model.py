"""Fellegi-Sunter scoring of match vectors.

This module implements the reference scoring model: field weights derived
from the m (agreement) and u (non-agreement) probabilities configured on each
matching row.
"""

import math
from typing import Protocol

from linkscore.config.matching import MatchingConfig
from linkscore.scoring.models import ScoreSummary
from linkscore.scoring.vectors import MatchVector

__all__ = ["ScoringModel", "FSModel", "agreement_weight", "disagreement_weight"]


class ScoringModel(Protocol):
    """Converts a completed match vector into derived scores.

    Implementations must be pure functions of vector content and safe to
    call from several threads.
    """

    def score(self, vector: MatchVector) -> ScoreSummary:
        """Score ``vector``."""
        ...


def agreement_weight(m: float, u: float) -> float:
    """Compute the agreement weight.

    Parameters
    ----------
    m : float
        P(agree | match).
    u : float
        P(agree | non-match).

    Returns
    -------
    float
        log2(m / u).
    """
    return math.log2(m / u)


def disagreement_weight(m: float, u: float) -> float:
    """Compute the disagreement weight, log2((1 - m) / (1 - u))."""
    return math.log2((1.0 - m) / (1.0 - u))


class FSModel:
    """Fellegi-Sunter model over the rows of a matching configuration.

    Attributes
    ----------
    config : MatchingConfig
        Configuration providing per-field m and u probabilities.
    round_decimals : int | None
        Decimal places for output rounding, None to keep full precision.
    """

    __slots__ = ("config", "round_decimals", "_probabilities")

    def __init__(self, config: MatchingConfig, round_decimals: int | None = None) -> None:
        self.config = config
        self.round_decimals = round_decimals
        # {field: (m, u)}
        self._probabilities: dict[str, tuple[float, float]] = {
            row.name: (row.agreement, row.non_agreement) for row in config.rows
        }

    def get_weight(self, field: str, is_match: bool) -> float:
        """Get the weight for a field outcome.

        Raises
        ------
        KeyError
            If the field is not configured.
        """
        m, u = self._probabilities[field]
        return agreement_weight(m, u) if is_match else disagreement_weight(m, u)

    def round_value(self, value: float) -> float:
        """Round value to model precision."""
        if self.round_decimals is None:
            return value
        return round(value, self.round_decimals)

    def score(self, vector: MatchVector) -> ScoreSummary:
        """Score ``vector``.

        Raises
        ------
        KeyError
            If the vector holds a field without a configured row.
        """
        score = 0.0
        inclusive_score = 0.0
        true_probability = 1.0
        false_probability = 1.0
        m_agree = 1.0
        u_agree = 1.0
        score_vector: dict[str, float] = {}

        for field in vector:
            m, u = self._probabilities[field]
            is_match = vector.matched(field)
            weight = self.get_weight(field, is_match)
            score += weight
            score_vector[field] = self.round_value(weight)
            if is_match:
                inclusive_score += weight
                true_probability *= m
                false_probability *= u
                m_agree *= m
                u_agree *= u
            else:
                true_probability *= 1.0 - m
                false_probability *= 1.0 - u

        return ScoreSummary(
            score=self.round_value(score),
            inclusive_score=self.round_value(inclusive_score),
            true_probability=self.round_value(true_probability),
            false_probability=self.round_value(false_probability),
            sensitivity=self.round_value(m_agree),
            specificity=self.round_value(1.0 - u_agree),
            score_vector=score_vector,
        )
