"""Field comparator: scores one field and records the outcome in a vector.

Exact matching agrees on string equality. Every other algorithm agrees when
its similarity strictly exceeds the row threshold, so a similarity equal to
the threshold is a disagreement.
"""

from collections.abc import Callable

from linkscore.config.matching import Algorithm, InvalidConfigurationError
from linkscore.models.records import is_blank
from linkscore.scoring.similarity import (
    dice_similarity,
    exact_match,
    jaro_winkler_similarity,
    lcs_similarity,
    levenshtein_similarity,
)
from linkscore.scoring.vectors import MatchVector

__all__ = ["SIMILARITY_FUNCTIONS", "match_field"]

# Threshold-based algorithms; EXACT_MATCH is handled separately.
SIMILARITY_FUNCTIONS: dict[Algorithm, Callable[[str, str], float]] = {
    Algorithm.JWC: jaro_winkler_similarity,
    Algorithm.LCS: lcs_similarity,
    Algorithm.LEV: levenshtein_similarity,
    Algorithm.DICE: dice_similarity,
}


def match_field(
    vector: MatchVector,
    field: str,
    algorithm: Algorithm,
    threshold: float,
    value_a: str | None,
    value_b: str | None,
) -> bool:
    """Compare two field values and write the outcome into ``vector``.

    Parameters
    ----------
    vector : MatchVector
        Vector receiving ``(score, is_match)`` under ``field``.
    field : str
        Field name.
    algorithm : Algorithm
        Comparison algorithm.
    threshold : float
        Similarity a non-exact algorithm must strictly exceed.
    value_a : str | None
        Value from the first record.
    value_b : str | None
        Value from the second record.

    Returns
    -------
    bool
        Whether the values agree.

    Raises
    ------
    InvalidConfigurationError
        If ``algorithm`` is not a known ``Algorithm``.
    """
    if algorithm is not Algorithm.EXACT_MATCH and algorithm not in SIMILARITY_FUNCTIONS:
        raise InvalidConfigurationError(f"Unexpected algorithm: {algorithm!r}")

    if is_blank(value_a) or is_blank(value_b):
        vector.set_match(field, 0.0, False)
        return False

    similarity: float
    match: bool
    if algorithm is Algorithm.EXACT_MATCH:
        match = exact_match(value_a, value_b)
        similarity = 1.0 if match else 0.0
    else:
        similarity = SIMILARITY_FUNCTIONS[algorithm](value_a, value_b)
        match = similarity > threshold

    vector.set_match(field, similarity, match)
    return match
