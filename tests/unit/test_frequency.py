"""Tests for the vector frequency tracker."""

import pytest

from linkscore.scoring.frequency import FrequencyTracker
from linkscore.scoring.vectors import MatchVector, NullDemographicsMatchVector


def _vector(**outcomes: tuple[float, bool]) -> MatchVector:
    v = MatchVector()
    for field, (score, match) in outcomes.items():
        v.set_match(field, score, match)
    return v


@pytest.mark.unit
def test_unseen_vector_count_is_zero() -> None:
    """Test get() returns 0 for vectors never counted."""
    tracker = FrequencyTracker()
    assert tracker.get(_vector(fn=(1.0, True))) == 0
    assert len(tracker) == 0
    assert tracker.total() == 0


@pytest.mark.unit
def test_increment_by_content() -> None:
    """Test separately built vectors with equal content share a count."""
    tracker = FrequencyTracker()

    assert tracker.increment(_vector(fn=(1.0, True), ln=(0.0, False))) == 1
    assert tracker.increment(_vector(ln=(0.0, False), fn=(1.0, True))) == 2
    assert tracker.get(_vector(fn=(1.0, True), ln=(0.0, False))) == 2


@pytest.mark.unit
def test_different_scores_are_different_patterns() -> None:
    """Test score differences create separate entries."""
    tracker = FrequencyTracker()
    tracker.increment(_vector(fn=(0.91, True)))
    tracker.increment(_vector(fn=(0.92, True)))

    assert len(tracker) == 2
    assert tracker.total() == 2


@pytest.mark.unit
def test_null_aware_vectors_share_plain_counts() -> None:
    """Test null flags do not split counts."""
    tracker = FrequencyTracker()
    null_aware = NullDemographicsMatchVector()
    null_aware.set_match("fn", 0.0, False)
    null_aware.had_null_value("fn")

    tracker.increment(null_aware)
    tracker.increment(_vector(fn=(0.0, False)))

    assert tracker.get(null_aware) == 2


@pytest.mark.unit
def test_snapshot_is_detached() -> None:
    """Test items() returns copies unaffected by later mutation."""
    tracker = FrequencyTracker()
    vector = _vector(fn=(1.0, True))
    tracker.increment(vector)
    vector.set_match("fn", 0.0, False)

    [(stored, count)] = tracker.items()
    assert stored.matched("fn")
    assert count == 1
    assert tracker.to_dict() == [{"vector": {"fn": {"score": 1.0, "match": True}}, "count": 1}]
