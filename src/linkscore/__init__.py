"""Pairwise scoring engine for probabilistic demographic record linkage.

This package provides:
- Records (linkscore.models) — record protocol and dict-backed records
- Configuration (linkscore.config) — matching rows, algorithms, groups
- Scoring (linkscore.scoring) — match vectors, comparators, engine
- Audit (linkscore.audit) — structured JSONL event logging
"""

__version__ = "0.1.0"
__license__ = "MIT"

from linkscore.config import (
    Algorithm,
    InterchangeableGroup,
    InvalidConfigurationError,
    MatchingConfig,
    MatchingConfigRow,
    load_matching_config,
)
from linkscore.models import DemographicRecord, Record
from linkscore.scoring import (
    FrequencyTracker,
    MatchResult,
    MatchStatus,
    MatchVector,
    Modifier,
    ModifierError,
    ScoringEngine,
    score_all_pairs,
)

__all__ = [
    "__version__",
    "__license__",
    "Algorithm",
    "InterchangeableGroup",
    "InvalidConfigurationError",
    "MatchingConfig",
    "MatchingConfigRow",
    "load_matching_config",
    "DemographicRecord",
    "Record",
    "FrequencyTracker",
    "MatchResult",
    "MatchStatus",
    "MatchVector",
    "Modifier",
    "ModifierError",
    "ScoringEngine",
    "score_all_pairs",
]
