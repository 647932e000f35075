"""Structured audit logger for JSONL event logging.

Provides append-only structured event logging to JSONL files with a
persistent file handle. Writes are serialized with a lock so one logger can
be shared by concurrent scoring threads.
"""

import json
import secrets
import threading
from dataclasses import asdict
from pathlib import Path
from typing import Any

from linkscore.audit.models import LOG_LEVELS, LogEvent
from linkscore.utils import get_iso_timestamp

__all__ = ["AuditLogger", "generate_run_id"]


def generate_run_id() -> str:
    """Generate a short random run identifier (e.g. ``"run_1f3a9c0b2d4e"``)."""
    return f"run_{secrets.token_hex(6)}"


class AuditLogger:
    """JSONL audit logger with persistent file handle.

    Writes structured log events to a JSONL file (one JSON object per line).
    Events are append-only and flushed after each write for durability.

    Attributes
    ----------
    run_id : str
        Unique run identifier.
    log_path : Path
        Path to JSONL log file.
    current_stage : str | None
        Current stage name for context.
    min_level : str
        Events below this level are dropped.
    """

    def __init__(self, run_id: str, log_path: Path, min_level: str = "DEBUG") -> None:
        """Initialize audit logger and open file handle.

        Parameters
        ----------
        run_id : str
            Unique run identifier.
        log_path : Path
            Path to JSONL log file.
        min_level : str, optional
            Lowest level written, by default "DEBUG".
        """
        if min_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {min_level}")

        self.run_id = run_id
        self.log_path = Path(log_path)
        self.current_stage: str | None = None
        self.min_level = min_level
        self._lock = threading.Lock()

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.log_path.open("a", encoding="utf-8")

    def __enter__(self) -> "AuditLogger":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager and close file."""
        self.close()

    def close(self) -> None:
        """Flush and close the log file handle."""
        with self._lock:
            if not self._file.closed:
                self._file.flush()
                self._file.close()

    def set_stage(self, stage: str | None) -> None:
        """Set current stage context."""
        self.current_stage = stage

    def event(
        self,
        event_type: str,
        data: dict[str, Any] | None = None,
        level: str = "INFO",
        stage: str | None = None,
        pair: tuple[str, str] | None = None,
    ) -> None:
        """Write structured event to log.

        Parameters
        ----------
        event_type : str
            Event type identifier (e.g., "pair_scored").
        data : dict[str, Any] | None, optional
            Event-specific data payload.
        level : str, optional
            Log level ("DEBUG", "INFO", "WARN", "ERROR").
        stage : str | None, optional
            Stage identifier, uses current_stage if not provided.
        pair : tuple[str, str] | None, optional
            Record ids if the event concerns one scored pair.
        """
        if LOG_LEVELS.index(level) < LOG_LEVELS.index(self.min_level):
            return

        log_event = LogEvent(
            ts=get_iso_timestamp(),
            run_id=self.run_id,
            level=level,
            event=event_type,
            data=data if data is not None else {},
            stage=stage if stage is not None else self.current_stage,
            pair=list(pair) if pair is not None else None,
        )

        self._write_event(log_event)

    def _write_event(self, event: LogEvent) -> None:
        line = json.dumps(asdict(event), ensure_ascii=False, separators=(",", ":"))
        with self._lock:
            self._file.write(line + "\n")
            self._file.flush()

    def engine_created(self, config_name: str, fields: list[str], modifiers: list[str]) -> None:
        """Log engine_created event.

        Parameters
        ----------
        config_name : str
            Matching configuration name.
        fields : list[str]
            Compared field names in order.
        modifiers : list[str]
            Registered modifier names in order.
        """
        self.event(
            "engine_created",
            data={"config": config_name, "fields": fields, "modifiers": modifiers},
        )

    def pair_scored(
        self,
        pair: tuple[str, str],
        score: float,
        vector: dict[str, Any],
        vector_count: int,
        interchangeable_group: str | None = None,
    ) -> None:
        """Log pair_scored event at DEBUG level.

        Parameters
        ----------
        pair : tuple[str, str]
            Record ids.
        score : float
            Final score after modifiers.
        vector : dict[str, Any]
            Serialized match vector.
        vector_count : int
            Observations of this vector pattern so far, including this one.
        interchangeable_group : str | None, optional
            Group that overwrote constituent fields, if any.
        """
        data: dict[str, Any] = {"score": score, "vector": vector, "vector_count": vector_count}
        if interchangeable_group is not None:
            data["interchangeable_group"] = interchangeable_group
        self.event("pair_scored", data=data, level="DEBUG", pair=pair)

    def modifier_failed(self, pair: tuple[str, str], modifier_name: str, message: str) -> None:
        """Log modifier_failed event."""
        self.event(
            "modifier_failed",
            data={"modifier": modifier_name, "message": message},
            level="ERROR",
            pair=pair,
        )

    def stage_started(self, stage: str, expected_pairs: int | None = None) -> None:
        """Log stage_started event.

        Parameters
        ----------
        stage : str
            Stage identifier.
        expected_pairs : int | None, optional
            Expected number of pairs.
        """
        self.set_stage(stage)

        data: dict[str, Any] = {}
        if expected_pairs is not None:
            data["expected_pairs"] = expected_pairs

        self.event("stage_started", data=data, stage=stage)

    def stage_finished(
        self,
        stage: str,
        duration_seconds: float,
        counters: dict[str, int] | None = None,
    ) -> None:
        """Log stage_finished event.

        Parameters
        ----------
        stage : str
            Stage identifier.
        duration_seconds : float
            Stage execution time in seconds.
        counters : dict[str, int] | None, optional
            Stage-specific counters.
        """
        data: dict[str, Any] = {"duration_seconds": duration_seconds}
        if counters:
            data["counters"] = counters

        self.event("stage_finished", data=data, stage=stage)

    def error(
        self,
        exception_class: str,
        message: str,
        stage: str | None = None,
        pair: tuple[str, str] | None = None,
    ) -> None:
        """Log error event.

        Parameters
        ----------
        exception_class : str
            Exception class name.
        message : str
            Error message.
        stage : str | None, optional
            Stage where error occurred.
        pair : tuple[str, str] | None, optional
            Record ids if the error is pair-specific.
        """
        self.event(
            "error",
            data={"exception_class": exception_class, "message": message},
            stage=stage,
            level="ERROR",
            pair=pair,
        )
