"""String similarity functions used by field comparisons.

Every function is pure and returns a similarity in [0, 1]. Edit-distance
family measures are delegated to rapidfuzz.
"""

from collections import Counter

from rapidfuzz.distance import JaroWinkler, LCSseq, Levenshtein

__all__ = [
    "exact_match",
    "jaro_winkler_similarity",
    "lcs_similarity",
    "levenshtein_similarity",
    "dice_similarity",
    "bigrams",
]


def exact_match(a: str, b: str) -> bool:
    """Return True if both strings are identical."""
    return a == b


def jaro_winkler_similarity(a: str, b: str) -> float:
    """Jaro-Winkler similarity (prefix-weighted edit similarity)."""
    return JaroWinkler.normalized_similarity(a, b)


def lcs_similarity(a: str, b: str) -> float:
    """Longest common subsequence length divided by the longer length.

    Notes
    -----
    Two empty strings are fully similar (1.0); one empty string against a
    non-empty one scores 0.0.
    """
    return LCSseq.normalized_similarity(a, b)


def levenshtein_similarity(a: str, b: str) -> float:
    """One minus Levenshtein distance over the longer length."""
    return Levenshtein.normalized_similarity(a, b)


def bigrams(value: str) -> Counter[str]:
    """Multiset of adjacent character pairs in ``value``."""
    return Counter(value[i : i + 2] for i in range(len(value) - 1))


def dice_similarity(a: str, b: str) -> float:
    """Sorensen-Dice coefficient over character bigrams.

    Notes
    -----
    Dice = 2 * |A ∩ B| / (|A| + |B|), with A and B bigram multisets.

    Strings too short to have a bigram fall back to exact equality.
    """
    bigrams_a = bigrams(a)
    bigrams_b = bigrams(b)
    if not bigrams_a or not bigrams_b:
        return 1.0 if a == b else 0.0

    overlap = sum((bigrams_a & bigrams_b).values())
    return 2.0 * overlap / (bigrams_a.total() + bigrams_b.total())
