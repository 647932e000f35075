"""Matching configuration: which fields are compared and how.

A ``MatchingConfig`` is built once and shared read-only by every scoring call.
Configurations can be constructed directly or parsed from a dict / JSON file,
in which case the payload is validated with jsonschema and algorithm ids are
resolved to ``Algorithm`` members up front.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import jsonschema

__all__ = [
    "Algorithm",
    "IDENTIFIER_PREFIX",
    "DEFAULT_MULTI_FIELD_DELIMITER",
    "DEFAULT_INTERCHANGEABLE_THRESHOLD",
    "InterchangeableGroup",
    "InvalidConfigurationError",
    "MATCHING_CONFIG_SCHEMA",
    "MatchingConfig",
    "MatchingConfigRow",
    "load_matching_config",
    "parse_algorithm",
]

# Legacy naming convention for multi-valued identifier fields.
IDENTIFIER_PREFIX = "(Identifier)"
DEFAULT_MULTI_FIELD_DELIMITER = ";"
DEFAULT_INTERCHANGEABLE_THRESHOLD = 0.85
DEFAULT_AGREEMENT = 0.9
DEFAULT_NON_AGREEMENT = 0.1


class InvalidConfigurationError(ValueError):
    """Raised when a matching configuration cannot be used for scoring."""


class Algorithm(Enum):
    """Field comparison algorithms.

    Values are the legacy integer ids, kept so numeric configurations parse.
    """

    EXACT_MATCH = 0
    JWC = 1
    LCS = 2
    LEV = 3
    DICE = 4


def parse_algorithm(value: "Algorithm | str | int") -> Algorithm:
    """Resolve an algorithm id to an ``Algorithm`` member.

    Parameters
    ----------
    value : Algorithm | str | int
        Enum member, case-insensitive member name (``"jwc"``) or legacy
        integer id.

    Returns
    -------
    Algorithm
        Resolved algorithm.

    Raises
    ------
    InvalidConfigurationError
        If the id does not name a known algorithm.
    """
    if isinstance(value, Algorithm):
        return value
    # bool is an int subclass but never a valid id
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return Algorithm(value)
        except ValueError:
            raise InvalidConfigurationError(f"Unexpected algorithm: {value}") from None
    if isinstance(value, str):
        try:
            return Algorithm[value.strip().upper()]
        except KeyError:
            raise InvalidConfigurationError(f"Unexpected algorithm: {value!r}") from None
    raise InvalidConfigurationError(f"Unexpected algorithm: {value!r}")


@dataclass(frozen=True, slots=True)
class MatchingConfigRow:
    """Comparison rule for a single field.

    Attributes
    ----------
    name : str
        Demographic field name.
    algorithm : Algorithm
        Similarity algorithm used for this field.
    threshold : float
        Similarity a non-exact algorithm must strictly exceed to count as a match.
    agreement : float
        m probability: P(fields agree | records match).
    non_agreement : float
        u probability: P(fields agree | records do not match).
    multi_valued : bool | None
        Whether the field holds several delimited values. None defers to the
        ``IDENTIFIER_PREFIX`` naming convention.
    """

    name: str
    algorithm: Algorithm
    threshold: float = 0.0
    agreement: float = DEFAULT_AGREEMENT
    non_agreement: float = DEFAULT_NON_AGREEMENT
    multi_valued: bool | None = None

    def __post_init__(self) -> None:
        """Validate field values."""
        if not self.name:
            raise InvalidConfigurationError("Field name must be non-empty")
        if not 0.0 <= self.threshold <= 1.0:
            raise InvalidConfigurationError(
                f"Threshold for {self.name!r} must be in [0, 1], got {self.threshold}"
            )
        for label, p in (("agreement", self.agreement), ("non_agreement", self.non_agreement)):
            if not 0.0 < p < 1.0:
                raise InvalidConfigurationError(
                    f"{label} for {self.name!r} must be in (0, 1), got {p}"
                )

    @property
    def is_multi_valued(self) -> bool:
        """Whether values of this field are split into candidate pairs."""
        if self.multi_valued is not None:
            return self.multi_valued
        return self.name.startswith(IDENTIFIER_PREFIX)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "algorithm": self.algorithm.name.lower(),
            "threshold": self.threshold,
            "agreement": self.agreement,
            "non_agreement": self.non_agreement,
            "multi_valued": self.multi_valued,
        }


@dataclass(frozen=True, slots=True)
class InterchangeableGroup:
    """Fields that agree together when their concatenation agrees.

    Attributes
    ----------
    comparison_field : str
        Name of the demographic holding the concatenated value.
    constituents : tuple[str, ...]
        Fields marked as matching when the concatenation matches.
    """

    comparison_field: str
    constituents: tuple[str, ...]

    def __post_init__(self) -> None:
        """Normalize constituents to a tuple."""
        object.__setattr__(self, "constituents", tuple(self.constituents))


@dataclass(frozen=True)
class MatchingConfig:
    """Complete, read-only matching configuration.

    Attributes
    ----------
    rows : tuple[MatchingConfigRow, ...]
        Compared fields, in comparison order.
    interchangeable_groups : tuple[InterchangeableGroup, ...]
        Interchangeable groups, in resolution order.
    multi_field_delimiter : str
        Separator between values of a multi-valued field.
    interchangeable_threshold : float
        Similarity the concatenated values must exceed for a group to agree.
    name : str
        Configuration label used in audit events.
    """

    rows: tuple[MatchingConfigRow, ...] = ()
    interchangeable_groups: tuple[InterchangeableGroup, ...] = ()
    multi_field_delimiter: str = DEFAULT_MULTI_FIELD_DELIMITER
    interchangeable_threshold: float = DEFAULT_INTERCHANGEABLE_THRESHOLD
    name: str = "default"
    _groups_by_field: dict[str, InterchangeableGroup] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        """Freeze sequences and validate."""
        object.__setattr__(self, "rows", tuple(self.rows))
        object.__setattr__(self, "interchangeable_groups", tuple(self.interchangeable_groups))

        names = [row.name for row in self.rows]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise InvalidConfigurationError(f"Duplicate field rows: {duplicates}")

        if not self.multi_field_delimiter:
            raise InvalidConfigurationError("multi_field_delimiter must be non-empty")

        if not 0.0 <= self.interchangeable_threshold <= 1.0:
            raise InvalidConfigurationError(
                "interchangeable_threshold must be in [0, 1], "
                f"got {self.interchangeable_threshold}"
            )

        configured = set(names)
        for group in self.interchangeable_groups:
            unknown = [f for f in group.constituents if f not in configured]
            if unknown:
                raise InvalidConfigurationError(
                    f"Interchangeable group {group.comparison_field!r} names fields "
                    f"without a row: {unknown}"
                )

        object.__setattr__(
            self,
            "_groups_by_field",
            {g.comparison_field: g for g in self.interchangeable_groups},
        )

    @property
    def field_names(self) -> tuple[str, ...]:
        """Names of all compared fields, in configuration order."""
        return tuple(row.name for row in self.rows)

    @property
    def interchangeable_columns(self) -> tuple[str, ...]:
        """Comparison field names of the interchangeable groups, in order."""
        return tuple(g.comparison_field for g in self.interchangeable_groups)

    def get_concatenated_demographics(self, comparison_field: str) -> tuple[str, ...]:
        """Return the constituent fields of an interchangeable group."""
        group = self._groups_by_field.get(comparison_field)
        return group.constituents if group is not None else ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (accepted back by ``from_dict``)."""
        return {
            "name": self.name,
            "rows": [row.to_dict() for row in self.rows],
            "interchangeable_groups": [
                {"comparison_field": g.comparison_field, "constituents": list(g.constituents)}
                for g in self.interchangeable_groups
            ],
            "multi_field_delimiter": self.multi_field_delimiter,
            "interchangeable_threshold": self.interchangeable_threshold,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MatchingConfig":
        """Build a configuration from a plain dict.

        Parameters
        ----------
        data : dict[str, Any]
            Payload matching ``MATCHING_CONFIG_SCHEMA``.

        Returns
        -------
        MatchingConfig
            Parsed configuration.

        Raises
        ------
        InvalidConfigurationError
            If the payload fails schema validation or names an unknown algorithm.
        """
        try:
            jsonschema.validate(instance=data, schema=MATCHING_CONFIG_SCHEMA)
        except jsonschema.ValidationError as e:
            raise InvalidConfigurationError(f"Invalid matching configuration: {e.message}") from e

        rows = [
            MatchingConfigRow(
                name=row["name"],
                algorithm=parse_algorithm(row["algorithm"]),
                threshold=row.get("threshold", 0.0),
                agreement=row.get("agreement", DEFAULT_AGREEMENT),
                non_agreement=row.get("non_agreement", DEFAULT_NON_AGREEMENT),
                multi_valued=row.get("multi_valued"),
            )
            for row in data["rows"]
        ]
        groups = [
            InterchangeableGroup(g["comparison_field"], tuple(g["constituents"]))
            for g in data.get("interchangeable_groups", [])
        ]
        return cls(
            rows=tuple(rows),
            interchangeable_groups=tuple(groups),
            multi_field_delimiter=data.get("multi_field_delimiter", DEFAULT_MULTI_FIELD_DELIMITER),
            interchangeable_threshold=data.get(
                "interchangeable_threshold", DEFAULT_INTERCHANGEABLE_THRESHOLD
            ),
            name=data.get("name", "default"),
        )


MATCHING_CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["rows"],
    "additionalProperties": False,
    "properties": {
        "name": {"type": "string"},
        "multi_field_delimiter": {"type": "string", "minLength": 1},
        "interchangeable_threshold": {"type": "number", "minimum": 0, "maximum": 1},
        "rows": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name", "algorithm"],
                "additionalProperties": False,
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "algorithm": {"type": ["string", "integer"]},
                    "threshold": {"type": "number", "minimum": 0, "maximum": 1},
                    "agreement": {"type": "number", "exclusiveMinimum": 0, "exclusiveMaximum": 1},
                    "non_agreement": {
                        "type": "number",
                        "exclusiveMinimum": 0,
                        "exclusiveMaximum": 1,
                    },
                    "multi_valued": {"type": ["boolean", "null"]},
                },
            },
        },
        "interchangeable_groups": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["comparison_field", "constituents"],
                "additionalProperties": False,
                "properties": {
                    "comparison_field": {"type": "string", "minLength": 1},
                    "constituents": {"type": "array", "items": {"type": "string"}},
                },
            },
        },
    },
}


def load_matching_config(config_path: Path | str) -> MatchingConfig:
    """Load a matching configuration from a JSON file.

    Parameters
    ----------
    config_path : Path | str
        Path to configuration JSON.

    Returns
    -------
    MatchingConfig
        Parsed configuration.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    InvalidConfigurationError
        If the file content is not a valid configuration.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Matching configuration not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)

    return MatchingConfig.from_dict(data)
