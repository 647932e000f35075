"""Thread-safe count of observed match vector patterns."""

import threading
from typing import Any

from linkscore.scoring.vectors import MatchVector, VectorKey

__all__ = ["FrequencyTracker"]


class FrequencyTracker:
    """Counts how many scored pairs produced each distinct vector.

    Vectors are keyed by content (field, score and match flag), so two
    separately built vectors with the same outcomes share a count. All
    operations take one lock, making ``increment`` atomic under concurrent
    callers.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counts: dict[VectorKey, int] = {}
        self._vectors: dict[VectorKey, MatchVector] = {}

    def increment(self, vector: MatchVector) -> int:
        """Count one more observation of ``vector``.

        Returns
        -------
        int
            Count after the increment.
        """
        key = vector.key()
        with self._lock:
            count = self._counts.get(key, 0) + 1
            self._counts[key] = count
            if count == 1:
                self._vectors[key] = vector.copy()
            return count

    def get(self, vector: MatchVector) -> int:
        """Return how many times ``vector`` has been observed (0 if never)."""
        key = vector.key()
        with self._lock:
            return self._counts.get(key, 0)

    def total(self) -> int:
        """Total observations across all vectors."""
        with self._lock:
            return sum(self._counts.values())

    def items(self) -> list[tuple[MatchVector, int]]:
        """Snapshot of ``(vector, count)`` pairs in first-seen order."""
        with self._lock:
            return [(self._vectors[key].copy(), count) for key, count in self._counts.items()]

    def to_dict(self) -> list[dict[str, Any]]:
        """Snapshot for JSON serialization."""
        return [{"vector": v.to_dict(), "count": c} for v, c in self.items()]

    def __len__(self) -> int:
        with self._lock:
            return len(self._counts)
