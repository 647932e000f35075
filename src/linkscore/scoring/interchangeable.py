"""Agreement propagation across interchangeable field groups.

Some fields (e.g. first and last name) are sometimes recorded swapped or
merged. A group names a concatenated comparison field; when the two records'
concatenations are similar enough, every constituent field is marked as a
match regardless of its own comparison.
"""

from linkscore.config.matching import MatchingConfig
from linkscore.models.records import Record, is_blank
from linkscore.scoring.similarity import lcs_similarity
from linkscore.scoring.vectors import MatchVector

__all__ = ["resolve_interchangeable_fields"]


def resolve_interchangeable_fields(
    config: MatchingConfig,
    record_a: Record,
    record_b: Record,
    vector: MatchVector,
) -> str | None:
    """Apply the first usable interchangeable group to ``vector`` in place.

    Parameters
    ----------
    config : MatchingConfig
        Configuration holding the ordered groups and the fixed threshold.
    record_a : Record
        First record.
    record_b : Record
        Second record.
    vector : MatchVector
        Vector to update.

    Returns
    -------
    str | None
        Comparison field of the group that overwrote its constituents, or
        None if no group did.

    Notes
    -----
    Only the first group whose comparison field is non-blank on either
    record is evaluated. Resolution stops there whether or not its
    similarity crosses the threshold.
    """
    for comparison_field in config.interchangeable_columns:
        concat_a = record_a.get_demographic(comparison_field)
        concat_b = record_b.get_demographic(comparison_field)
        if is_blank(concat_a) and is_blank(concat_b):
            continue

        similarity = lcs_similarity(concat_a or "", concat_b or "")
        if similarity <= config.interchangeable_threshold:
            return None

        for field in config.get_concatenated_demographics(comparison_field):
            vector.set_match(field, similarity, True)
        return comparison_field

    return None
