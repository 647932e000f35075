"""Match vectors: per-field similarity outcomes for one record pair.

A vector is filled in place while a pair is scored. Writing a field that is
already present replaces its outcome, so the final value of each field is the
last one written, in this order: base comparison, multi-valued expansion,
interchangeable group resolution.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

__all__ = ["FieldMatch", "MatchVector", "NullDemographicsMatchVector", "VectorKey"]

# Content key: sorted (field, score, is_match) triples
VectorKey = tuple[tuple[str, float, bool], ...]


@dataclass(frozen=True, slots=True)
class FieldMatch:
    """Outcome of comparing one field.

    Attributes
    ----------
    score : float
        Similarity (0.0-1.0).
    is_match : bool
        Whether the field is considered to agree.
    """

    score: float
    is_match: bool


class MatchVector:
    """Mutable mapping from field name to ``FieldMatch``.

    Equality and hashing are by content (``key()``), which is what the
    frequency tracker counts on. Do not mutate a vector after handing it to
    a tracker or using it as a dict key.
    """

    __slots__ = ("_fields",)

    def __init__(self) -> None:
        self._fields: dict[str, FieldMatch] = {}

    def set_match(self, field: str, score: float, is_match: bool) -> None:
        """Record the outcome for ``field``, replacing any earlier one."""
        self._fields[field] = FieldMatch(float(score), bool(is_match))

    def get(self, field: str) -> FieldMatch | None:
        """Return the outcome for ``field`` or None if not compared."""
        return self._fields.get(field)

    def matched(self, field: str) -> bool:
        """Return True if ``field`` was recorded as a match."""
        fm = self._fields.get(field)
        return fm is not None and fm.is_match

    def score(self, field: str) -> float:
        """Return the similarity recorded for ``field`` (0.0 if absent)."""
        fm = self._fields.get(field)
        return fm.score if fm is not None else 0.0

    @property
    def fields(self) -> tuple[str, ...]:
        """Compared field names in first-write order."""
        return tuple(self._fields)

    def key(self) -> VectorKey:
        """Hashable content key, independent of write order."""
        return tuple(sorted((f, fm.score, fm.is_match) for f, fm in self._fields.items()))

    def copy(self) -> "MatchVector":
        """Return an independent copy of this vector."""
        clone = type(self)()
        clone._fields = dict(self._fields)
        return clone

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Convert to dictionary for JSON serialization."""
        return {f: {"score": fm.score, "match": fm.is_match} for f, fm in self._fields.items()}

    def __contains__(self, field: object) -> bool:
        return field in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __getitem__(self, field: str) -> FieldMatch:
        return self._fields[field]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MatchVector):
            return NotImplemented
        return self._fields == other._fields

    def __hash__(self) -> int:
        return hash(self.key())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_dict()!r})"


class NullDemographicsMatchVector(MatchVector):
    """Match vector that also remembers which fields had a blank input.

    Null flags are informational; they do not take part in equality.
    """

    __slots__ = ("_null_fields",)

    def __init__(self) -> None:
        super().__init__()
        self._null_fields: set[str] = set()

    def had_null_value(self, field: str) -> None:
        """Flag ``field`` as having had a blank value on either side."""
        self._null_fields.add(field)

    def is_null(self, field: str) -> bool:
        """Return True if ``field`` was flagged as having a blank input."""
        return field in self._null_fields

    @property
    def null_fields(self) -> frozenset[str]:
        """All fields flagged as having a blank input."""
        return frozenset(self._null_fields)

    def copy(self) -> "NullDemographicsMatchVector":
        """Return an independent copy of this vector."""
        clone = super().copy()
        clone._null_fields = set(self._null_fields)
        return clone

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Convert to dictionary, adding a ``null`` flag per field."""
        data = super().to_dict()
        for f, entry in data.items():
            entry["null"] = f in self._null_fields
        return data
