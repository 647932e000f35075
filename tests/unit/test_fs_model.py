"""Tests for the Fellegi-Sunter scoring model."""

import math

import pytest

from linkscore.config import Algorithm, MatchingConfig, MatchingConfigRow
from linkscore.scoring.fs_model import FSModel, agreement_weight, disagreement_weight
from linkscore.scoring.vectors import MatchVector

_LOG2_9 = math.log2(9)


@pytest.fixture
def model() -> FSModel:
    """Two-field model with default m=0.9, u=0.1."""
    return FSModel(
        MatchingConfig(
            rows=(
                MatchingConfigRow("fn", Algorithm.JWC, threshold=0.8),
                MatchingConfigRow("ln", Algorithm.EXACT_MATCH),
            )
        )
    )


def _vector(fn: bool, ln: bool) -> MatchVector:
    v = MatchVector()
    v.set_match("fn", 1.0 if fn else 0.0, fn)
    v.set_match("ln", 1.0 if ln else 0.0, ln)
    return v


@pytest.mark.unit
def test_weights() -> None:
    """Test agreement and disagreement weights are log2 likelihood ratios."""
    assert agreement_weight(0.9, 0.1) == pytest.approx(_LOG2_9)
    assert disagreement_weight(0.9, 0.1) == pytest.approx(-_LOG2_9)


@pytest.mark.unit
def test_get_weight_unknown_field(model: FSModel) -> None:
    """Test weight lookup raises for unconfigured fields."""
    with pytest.raises(KeyError):
        model.get_weight("dob", True)


@pytest.mark.unit
def test_score_all_agree(model: FSModel) -> None:
    """Test full agreement sums agreement weights."""
    summary = model.score(_vector(True, True))

    assert summary.score == pytest.approx(2 * _LOG2_9)
    assert summary.inclusive_score == pytest.approx(2 * _LOG2_9)
    assert summary.true_probability == pytest.approx(0.81)
    assert summary.false_probability == pytest.approx(0.01)
    assert summary.sensitivity == pytest.approx(0.81)
    assert summary.specificity == pytest.approx(0.99)
    assert dict(summary.score_vector) == pytest.approx({"fn": _LOG2_9, "ln": _LOG2_9})


@pytest.mark.unit
def test_score_mixed(model: FSModel) -> None:
    """Test disagreements lower the score but not the inclusive score."""
    summary = model.score(_vector(True, False))

    assert summary.score == pytest.approx(0.0)
    assert summary.inclusive_score == pytest.approx(_LOG2_9)
    assert summary.true_probability == pytest.approx(0.09)
    assert summary.false_probability == pytest.approx(0.09)
    assert summary.sensitivity == pytest.approx(0.9)
    assert summary.specificity == pytest.approx(0.9)


@pytest.mark.unit
def test_empty_vector_is_neutral(model: FSModel) -> None:
    """Test an empty vector contributes nothing."""
    summary = model.score(MatchVector())

    assert summary.score == 0.0
    assert summary.inclusive_score == 0.0
    assert summary.true_probability == 1.0
    assert summary.specificity == 0.0
    assert dict(summary.score_vector) == {}


@pytest.mark.unit
def test_score_unconfigured_field(model: FSModel) -> None:
    """Test scoring raises for a field without a row."""
    vector = _vector(True, True)
    vector.set_match("dob", 1.0, True)

    with pytest.raises(KeyError):
        model.score(vector)


@pytest.mark.unit
def test_rounding() -> None:
    """Test round_decimals is applied to outputs."""
    config = MatchingConfig(rows=(MatchingConfigRow("ln", Algorithm.EXACT_MATCH),))
    vector = MatchVector()
    vector.set_match("ln", 1.0, True)
    summary = FSModel(config, round_decimals=2).score(vector)
    assert summary.score == 3.17
