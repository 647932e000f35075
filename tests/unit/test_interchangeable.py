"""Tests for interchangeable field group resolution."""

from collections.abc import Callable

import pytest

from linkscore.config import Algorithm, InterchangeableGroup, MatchingConfig, MatchingConfigRow
from linkscore.models import DemographicRecord
from linkscore.scoring.interchangeable import resolve_interchangeable_fields
from linkscore.scoring.similarity import lcs_similarity
from linkscore.scoring.vectors import FieldMatch, MatchVector


def _config(*groups: InterchangeableGroup) -> MatchingConfig:
    return MatchingConfig(
        rows=(
            MatchingConfigRow("fn", Algorithm.EXACT_MATCH),
            MatchingConfigRow("ln", Algorithm.EXACT_MATCH),
            MatchingConfigRow("city", Algorithm.EXACT_MATCH),
            MatchingConfigRow("st", Algorithm.EXACT_MATCH),
        ),
        interchangeable_groups=groups,
    )


NAME_GROUP = InterchangeableGroup("fn_ln", ("fn", "ln"))
ADDRESS_GROUP = InterchangeableGroup("city_st", ("city", "st"))


@pytest.fixture
def vector() -> MatchVector:
    """Vector where every field disagreed on its own."""
    v = MatchVector()
    for field in ("fn", "ln", "city", "st"):
        v.set_match(field, 0.0, False)
    return v


@pytest.mark.unit
def test_agreeing_group_overwrites_constituents(
    make_record: Callable[..., DemographicRecord], vector: MatchVector
) -> None:
    """Test every constituent becomes a match scored with the group similarity."""
    rec_a = make_record("a", fn_ln="John Smith")
    rec_b = make_record("b", fn_ln="Jon Smith")
    expected = lcs_similarity("John Smith", "Jon Smith")

    applied = resolve_interchangeable_fields(_config(NAME_GROUP), rec_a, rec_b, vector)

    assert applied == "fn_ln"
    assert vector["fn"] == FieldMatch(expected, True)
    assert vector["ln"] == FieldMatch(expected, True)
    assert vector["city"] == FieldMatch(0.0, False)


@pytest.mark.unit
def test_swapped_names_do_not_cross_threshold(
    make_record: Callable[..., DemographicRecord], vector: MatchVector
) -> None:
    """Test a dissimilar concatenation leaves the vector alone."""
    rec_a = make_record("a", fn_ln="John Smith")
    rec_b = make_record("b", fn_ln="Mary Jones")

    assert resolve_interchangeable_fields(_config(NAME_GROUP), rec_a, rec_b, vector) is None
    assert not vector.matched("fn")
    assert not vector.matched("ln")


@pytest.mark.unit
def test_equal_to_threshold_does_not_agree(
    make_record: Callable[..., DemographicRecord], vector: MatchVector
) -> None:
    """Test similarity must strictly exceed the group threshold."""
    config = MatchingConfig(
        rows=(
            MatchingConfigRow("fn", Algorithm.EXACT_MATCH),
            MatchingConfigRow("ln", Algorithm.EXACT_MATCH),
        ),
        interchangeable_groups=(NAME_GROUP,),
        interchangeable_threshold=0.9,
    )
    rec_a = make_record("a", fn_ln="John Smith")
    rec_b = make_record("b", fn_ln="Jon Smith")

    assert resolve_interchangeable_fields(config, rec_a, rec_b, vector) is None
    assert not vector.matched("fn")


@pytest.mark.unit
def test_stops_after_first_non_blank_group_even_without_match(
    make_record: Callable[..., DemographicRecord], vector: MatchVector
) -> None:
    """Test later groups are never evaluated once one group is considered."""
    rec_a = make_record("a", fn_ln="John Smith", city_st="Boston MA")
    rec_b = make_record("b", fn_ln="Mary Jones", city_st="Boston MA")

    applied = resolve_interchangeable_fields(
        _config(NAME_GROUP, ADDRESS_GROUP), rec_a, rec_b, vector
    )

    assert applied is None
    assert not vector.matched("city")
    assert not vector.matched("st")


@pytest.mark.unit
def test_skips_groups_blank_on_both_records(
    make_record: Callable[..., DemographicRecord], vector: MatchVector
) -> None:
    """Test a group blank on both sides is passed over."""
    rec_a = make_record("a", fn_ln="  ", city_st="Boston MA")
    rec_b = make_record("b", city_st="Boston MA")

    applied = resolve_interchangeable_fields(
        _config(NAME_GROUP, ADDRESS_GROUP), rec_a, rec_b, vector
    )

    assert applied == "city_st"
    assert vector["city"] == FieldMatch(1.0, True)
    assert vector["st"] == FieldMatch(1.0, True)
    assert not vector.matched("fn")


@pytest.mark.unit
def test_one_sided_blank_group_stops_resolution(
    make_record: Callable[..., DemographicRecord], vector: MatchVector
) -> None:
    """Test a group present on one record only is evaluated and ends resolution."""
    rec_a = make_record("a", fn_ln="John Smith", city_st="Boston MA")
    rec_b = make_record("b", city_st="Boston MA")

    applied = resolve_interchangeable_fields(
        _config(NAME_GROUP, ADDRESS_GROUP), rec_a, rec_b, vector
    )

    assert applied is None
    assert not vector.matched("city")


@pytest.mark.unit
def test_no_groups_is_noop(
    make_record: Callable[..., DemographicRecord], vector: MatchVector
) -> None:
    """Test configurations without groups leave the vector unchanged."""
    before = vector.copy()
    rec = make_record("a", fn_ln="John Smith")
    assert resolve_interchangeable_fields(_config(), rec, rec, vector) is None
    assert vector == before
