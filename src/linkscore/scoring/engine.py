"""Pairwise scoring engine.

Scoring a pair runs these steps, in order:
1. Compare every configured field into a match vector
2. Resolve interchangeable field groups (may overwrite fields)
3. Score the vector with the scoring model
4. Run the modifier chain
5. Finalize as provisional (certainty 1.0, status UNKNOWN)
6. Count the vector pattern in the frequency tracker

One engine may be shared by many threads. Per-call state is local; the
frequency tracker is the only shared mutable state and is synchronized.
"""

from collections.abc import Iterable

from linkscore.audit.logger import AuditLogger
from linkscore.config.matching import InvalidConfigurationError, MatchingConfig, MatchingConfigRow
from linkscore.models.records import Record, is_blank
from linkscore.scoring.candidates import expand_candidates
from linkscore.scoring.comparators import match_field
from linkscore.scoring.frequency import FrequencyTracker
from linkscore.scoring.fs_model import FSModel, ScoringModel
from linkscore.scoring.interchangeable import resolve_interchangeable_fields
from linkscore.scoring.models import MatchResult
from linkscore.scoring.modifiers import Modifier, ModifierChain, ModifierError
from linkscore.scoring.vectors import MatchVector, NullDemographicsMatchVector

__all__ = ["ScoringEngine", "pair_ids"]


def pair_ids(record_a: Record, record_b: Record) -> tuple[str, str]:
    """Return printable ids for a record pair."""
    return (str(getattr(record_a, "uid", "?")), str(getattr(record_b, "uid", "?")))


class ScoringEngine:
    """Scores record pairs under one matching configuration.

    Attributes
    ----------
    config : MatchingConfig
        Matching configuration (read-only).
    model : ScoringModel
        Model deriving scores from a match vector.
    modifiers : ModifierChain
        Post-processing chain.
    frequencies : FrequencyTracker
        Observed vector pattern counts, shared by all calls on this engine.
    """

    def __init__(
        self,
        config: MatchingConfig,
        model: ScoringModel | None = None,
        modifiers: Iterable[Modifier] = (),
        frequencies: FrequencyTracker | None = None,
        logger: AuditLogger | None = None,
    ) -> None:
        """Initialize the engine.

        Parameters
        ----------
        config : MatchingConfig
            Matching configuration.
        model : ScoringModel | None, optional
            Scoring model, by default an ``FSModel`` over ``config``.
        modifiers : Iterable[Modifier], optional
            Initial modifiers, in application order.
        frequencies : FrequencyTracker | None, optional
            Tracker to count into, by default a new empty one.
        logger : AuditLogger | None, optional
            Audit logger for events, by default None.
        """
        self.config = config
        self.model: ScoringModel = model if model is not None else FSModel(config)
        self.modifiers = ModifierChain(modifiers)
        self.frequencies = frequencies if frequencies is not None else FrequencyTracker()
        self.logger = logger

        if logger:
            logger.engine_created(
                config.name,
                list(config.field_names),
                [m.name for m in self.modifiers],
            )

    def add_modifier(self, modifier: Modifier) -> None:
        """Append a modifier to the chain."""
        self.modifiers.add(modifier)

    def score_pair(self, record_a: Record, record_b: Record) -> MatchResult:
        """Score a pair of records.

        Parameters
        ----------
        record_a : Record
            First record.
        record_b : Record
            Second record.

        Returns
        -------
        MatchResult
            Provisional result with status UNKNOWN and certainty 1.0.

        Raises
        ------
        InvalidConfigurationError
            If a row names an unknown algorithm. No result is produced.
        ModifierError
            If a modifier fails. The vector pattern is not counted.
        """
        try:
            vector = self.build_vector(record_a, record_b)
        except InvalidConfigurationError as e:
            if self.logger:
                self.logger.error(type(e).__name__, str(e), pair=pair_ids(record_a, record_b))
            raise

        group = resolve_interchangeable_fields(self.config, record_a, record_b, vector)

        summary = self.model.score(vector)
        result = MatchResult.from_summary(summary, vector, record_a, record_b, self.config)

        try:
            result = self.modifiers.apply(result, self.config)
        except ModifierError as e:
            if self.logger:
                self.logger.modifier_failed(pair_ids(record_a, record_b), e.modifier_name, str(e))
            raise

        result = result.finalized()

        count = self.frequencies.increment(result.vector)

        if self.logger:
            self.logger.pair_scored(
                pair_ids(record_a, record_b),
                result.score,
                result.vector.to_dict(),
                count,
                interchangeable_group=group,
            )

        return result

    def build_vector(self, record_a: Record, record_b: Record) -> MatchVector:
        """Compare every configured field of two records.

        Interchangeable groups are not applied here.
        """
        vector: MatchVector
        if record_a.has_null_values() or record_b.has_null_values():
            vector = NullDemographicsMatchVector()
        else:
            vector = MatchVector()

        for row in self.config.rows:
            self._compare_row(vector, row, record_a, record_b)

        return vector

    def _compare_row(
        self,
        vector: MatchVector,
        row: MatchingConfigRow,
        record_a: Record,
        record_b: Record,
    ) -> None:
        value_a = record_a.get_demographic(row.name)
        value_b = record_b.get_demographic(row.name)

        blank = is_blank(value_a) or is_blank(value_b)
        if blank and isinstance(vector, NullDemographicsMatchVector):
            vector.had_null_value(row.name)

        if not row.is_multi_valued or blank:
            match_field(vector, row.name, row.algorithm, row.threshold, value_a, value_b)
            return

        # First agreeing candidate wins; otherwise the last one evaluated stays.
        candidates = expand_candidates(value_a, value_b, self.config.multi_field_delimiter)
        for candidate_a, candidate_b in candidates:
            if match_field(vector, row.name, row.algorithm, row.threshold, candidate_a, candidate_b):
                break

        if not candidates:
            match_field(vector, row.name, row.algorithm, row.threshold, None, None)
