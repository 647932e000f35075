"""Pytest configuration and fixtures for test suite."""

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from linkscore.config import (  # noqa: E402
    Algorithm,
    InterchangeableGroup,
    MatchingConfig,
    MatchingConfigRow,
)
from linkscore.models import DemographicRecord  # noqa: E402

MRN = "(Identifier)MRN"


@pytest.fixture
def make_record() -> Callable[..., DemographicRecord]:
    """Factory for records: ``make_record("r1", fn="John", ln="Smith")``.

    Field names that are not valid keywords go in ``extra``.
    """

    def _factory(
        uid: str = "rec_001",
        *,
        extra: dict[str, str | None] | None = None,
        **demographics: str | None,
    ) -> DemographicRecord:
        values = dict(demographics)
        if extra:
            values.update(extra)
        return DemographicRecord(uid, values)

    return _factory


@pytest.fixture
def person_config() -> MatchingConfig:
    """Name, birth year and multi-valued MRN with a name group."""
    return MatchingConfig(
        rows=(
            MatchingConfigRow("fn", Algorithm.JWC, threshold=0.8),
            MatchingConfigRow("ln", Algorithm.EXACT_MATCH),
            MatchingConfigRow("yb", Algorithm.EXACT_MATCH),
            MatchingConfigRow(MRN, Algorithm.EXACT_MATCH),
        ),
        interchangeable_groups=(InterchangeableGroup("fn_ln", ("fn", "ln")),),
        name="person",
    )
