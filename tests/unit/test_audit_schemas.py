"""Tests for schema validation of audit events."""

import json
from collections.abc import Callable
from pathlib import Path

import jsonschema
import pytest

from linkscore.audit import AuditLogger
from linkscore.config import MatchingConfig
from linkscore.models import DemographicRecord
from linkscore.scoring import ScoringEngine, score_all_pairs

_SCHEMAS_DIR = Path(__file__).parent.parent.parent / "schemas"


@pytest.fixture(scope="module")
def event_schema() -> dict:
    """Load log event JSON schema."""
    with (_SCHEMAS_DIR / "log_event.schema.json").open() as f:
        return json.load(f)


@pytest.mark.unit
def test_generated_events_validate(
    tmp_path: Path,
    event_schema: dict,
    person_config: MatchingConfig,
    make_record: Callable[..., DemographicRecord],
) -> None:
    """Test events emitted while scoring validate against the schema."""
    log_path = tmp_path / "events.jsonl"
    with AuditLogger(run_id="schema_run", log_path=log_path) as logger:
        engine = ScoringEngine(person_config, logger=logger)
        pairs = [
            (make_record("a", fn="John", ln="Smith"), make_record("b", fn="Jon", ln="Smith")),
            (make_record("c", fn="Mary", ln=""), make_record("d", fn="Mary", ln="Jones")),
        ]
        score_all_pairs(engine, pairs, max_workers=2)
        logger.error("ValueError", "bad")

    with log_path.open() as f:
        events = [json.loads(line) for line in f if line.strip()]

    assert {e["event"] for e in events} == {
        "engine_created",
        "stage_started",
        "pair_scored",
        "stage_finished",
        "error",
    }
    for event in events:
        jsonschema.validate(instance=event, schema=event_schema)


@pytest.mark.unit
@pytest.mark.parametrize(
    "mutation",
    [
        {"level": "VERBOSE"},
        {"pair": ["only_one"]},
        {"ts": "yesterday"},
        {"extra": 1},
    ],
    ids=["bad_level", "short_pair", "bad_ts", "extra_key"],
)
def test_invalid_events_rejected(event_schema: dict, mutation: dict) -> None:
    """Test the schema rejects malformed events."""
    event = {
        "ts": "2026-01-01T00:00:00.000000Z",
        "run_id": "r",
        "level": "INFO",
        "event": "pair_scored",
        "data": {},
        "stage": None,
        "pair": ["a", "b"],
    }
    jsonschema.validate(instance=event, schema=event_schema)

    event.update(mutation)
    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate(instance=event, schema=event_schema)
