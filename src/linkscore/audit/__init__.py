"""Audit logging subsystem for linkscore.

Main Components
---------------
- AuditLogger: JSONL event logger
- LogEvent: Structured event envelope
"""

from linkscore.audit.logger import AuditLogger, generate_run_id
from linkscore.audit.models import LOG_LEVELS, LogEvent

__all__ = ["AuditLogger", "LogEvent", "LOG_LEVELS", "generate_run_id"]
