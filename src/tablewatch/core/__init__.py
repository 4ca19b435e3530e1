"""Snapshot diffing and notification dispatch.

Everything here is synchronous and I/O free except ``telemetry``.
"""

from tablewatch.core.cards import format_card, format_cards
from tablewatch.core.differ import diff_states
from tablewatch.core.dispatch import (
    DispatchOutput,
    OutputType,
    SessionContext,
    process_closed_event,
    process_state_event,
)
from tablewatch.core.snapshot import Phase, Snapshot, SnapshotError, parse_snapshot
from tablewatch.core.summary import build_summary

__all__ = [
    "DispatchOutput",
    "OutputType",
    "Phase",
    "SessionContext",
    "Snapshot",
    "SnapshotError",
    "build_summary",
    "diff_states",
    "format_card",
    "format_cards",
    "parse_snapshot",
    "process_closed_event",
    "process_state_event",
]
