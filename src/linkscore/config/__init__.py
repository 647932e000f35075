"""Matching configuration for the scoring engine."""

from linkscore.config.matching import (
    DEFAULT_INTERCHANGEABLE_THRESHOLD,
    DEFAULT_MULTI_FIELD_DELIMITER,
    IDENTIFIER_PREFIX,
    MATCHING_CONFIG_SCHEMA,
    Algorithm,
    InterchangeableGroup,
    InvalidConfigurationError,
    MatchingConfig,
    MatchingConfigRow,
    load_matching_config,
    parse_algorithm,
)

__all__ = [
    "Algorithm",
    "IDENTIFIER_PREFIX",
    "DEFAULT_MULTI_FIELD_DELIMITER",
    "DEFAULT_INTERCHANGEABLE_THRESHOLD",
    "MATCHING_CONFIG_SCHEMA",
    "InterchangeableGroup",
    "InvalidConfigurationError",
    "MatchingConfig",
    "MatchingConfigRow",
    "load_matching_config",
    "parse_algorithm",
]
