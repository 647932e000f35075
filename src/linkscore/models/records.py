"""Demographic record types consumed by the scoring engine.

The engine only needs read access to named string values, so any object
implementing the ``Record`` protocol can be scored. ``DemographicRecord`` is
the bundled dict-backed implementation.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable

__all__ = ["Record", "DemographicRecord", "is_blank"]


def is_blank(value: str | None) -> bool:
    """Return True when a demographic value is absent or whitespace only."""
    return value is None or not value.strip()


@runtime_checkable
class Record(Protocol):
    """Read-only view of a demographic record."""

    def get_demographic(self, name: str) -> str | None:
        """Return the value stored under ``name`` or None if absent."""
        ...

    def has_null_values(self) -> bool:
        """Return True if any demographic value is blank."""
        ...


@dataclass(frozen=True, slots=True)
class DemographicRecord:
    """Immutable bag of named demographic values.

    Attributes
    ----------
    uid : str
        Record identifier, carried into audit events and serialized results.
    demographics : Mapping[str, str | None]
        Field name to raw string value. Stored as a read-only mapping.
    """

    uid: str
    demographics: Mapping[str, str | None] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Freeze the demographics mapping."""
        object.__setattr__(self, "demographics", MappingProxyType(dict(self.demographics)))

    def get_demographic(self, name: str) -> str | None:
        """Return the value stored under ``name`` or None if absent."""
        return self.demographics.get(name)

    def has_null_values(self) -> bool:
        """Return True if any stored demographic value is blank.

        A record with no demographics at all has nothing blank to report.
        """
        return any(is_blank(value) for value in self.demographics.values())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"uid": self.uid, "demographics": dict(self.demographics)}
