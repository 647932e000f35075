"""Pairwise scoring of demographic records.

This module implements the scoring layer that compares two records field by
field, builds a match vector and derives Fellegi-Sunter scores from it.
"""

from linkscore.scoring.candidates import expand_candidates
from linkscore.scoring.comparators import match_field
from linkscore.scoring.engine import ScoringEngine
from linkscore.scoring.frequency import FrequencyTracker
from linkscore.scoring.fs_model import FSModel, ScoringModel
from linkscore.scoring.interchangeable import resolve_interchangeable_fields
from linkscore.scoring.models import MatchResult, MatchStatus, ScoreSummary
from linkscore.scoring.modifiers import Modifier, ModifierChain, ModifierError, RoundingModifier
from linkscore.scoring.score_pairs import score_all_pairs
from linkscore.scoring.vectors import FieldMatch, MatchVector, NullDemographicsMatchVector

__all__ = [
    # Models
    "FieldMatch",
    "MatchVector",
    "NullDemographicsMatchVector",
    "MatchResult",
    "MatchStatus",
    "ScoreSummary",
    # Fellegi-Sunter
    "FSModel",
    "ScoringModel",
    # Components
    "match_field",
    "expand_candidates",
    "resolve_interchangeable_fields",
    "FrequencyTracker",
    "Modifier",
    "ModifierChain",
    "ModifierError",
    "RoundingModifier",
    # Pipeline
    "ScoringEngine",
    "score_all_pairs",
]
