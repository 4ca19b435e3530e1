"""TableListener — the seam between a snapshot transport and the dispatcher.

The transport (an SSE subscription, a replayed JSONL file, a test) hands
raw ``state`` payloads to ``on_state`` and calls ``on_closed`` when the
server closes the table. The listener owns the session's context, so one
listener serves exactly one table.

Usage:
    listener = TableListener(ListenerConfig(stop_on=frozenset({OutputType.YOUR_TURN})))
    for record in listener.run(open("session.jsonl")):
        print(json.dumps(record))
"""

from __future__ import annotations

import json
import logging
import uuid
from collections import Counter
from typing import Iterable, Iterator

from tablewatch.config import ListenerConfig
from tablewatch.core.dispatch import (
    DispatchOutput,
    OutputType,
    SessionContext,
    process_closed_event,
    process_state_event,
)
from tablewatch.core.snapshot import SnapshotError, parse_snapshot
from tablewatch.core.telemetry import OutputLog

logger = logging.getLogger(__name__)

CONNECTION_ERROR = "CONNECTION_ERROR"


class TableListener:
    """Drive one table session from raw snapshot payloads."""

    def __init__(
        self,
        config: ListenerConfig | None = None,
        session_id: str | None = None,
        output_log: OutputLog | None = None,
    ) -> None:
        self._config = config or ListenerConfig()
        self._session_id = session_id or f"session-{uuid.uuid4().hex[:12]}"
        self._context = SessionContext()
        self._counts: Counter[str] = Counter()
        self._closed = False

        if output_log is None and self._config.output_dir is not None:
            output_log = OutputLog(self._config.output_dir, self._session_id)
        self._output_log = output_log

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def context(self) -> SessionContext:
        return self._context

    @property
    def counts(self) -> dict[str, int]:
        """Number of outputs emitted so far, by output type."""
        return dict(self._counts)

    @property
    def closed(self) -> bool:
        return self._closed

    def feed(self, payload: dict | str | bytes) -> list[DispatchOutput]:
        """Parse one payload and dispatch it.

        Raises SnapshotError if the payload is not a valid snapshot; the
        session context is left untouched in that case.
        """
        if isinstance(payload, (str, bytes)):
            try:
                payload = json.loads(payload)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise SnapshotError(f"Invalid JSON: {e}") from e

        snapshot = parse_snapshot(payload, validate=self._config.validate_snapshots)
        outputs = process_state_event(snapshot, self._context)
        self._record(outputs)
        return outputs

    def on_state(self, payload: dict | str | bytes) -> list[dict]:
        """Handle a ``state`` event; returns outputs in their JSON form.

        A payload that cannot be processed yields a single
        ``CONNECTION_ERROR`` record instead of raising.
        """
        try:
            outputs = self.feed(payload)
        except SnapshotError as e:
            logger.warning("Rejected state event for %s: %s", self._session_id, e)
            return [
                {
                    "type": CONNECTION_ERROR,
                    "error": f"Failed to process state event: {e}",
                }
            ]
        return [o.to_dict() for o in outputs]

    def on_closed(self) -> list[dict]:
        """Handle the table's ``closed`` event and finalize the session log."""
        outputs = process_closed_event()
        self._record(outputs)
        self._closed = True
        if self._output_log is not None:
            self._output_log.finalize_session(self.counts)
        return [o.to_dict() for o in outputs]

    def run(self, lines: Iterable[str]) -> Iterator[dict]:
        """Feed JSON lines as state events, yielding output records.

        Stops after the first batch containing a type in ``config.stop_on``.
        """
        stop_on = {t.value for t in self._config.stop_on}
        for line in lines:
            line = line.strip()
            if not line:
                continue
            records = self.on_state(line)
            yield from records
            if any(r["type"] in stop_on for r in records):
                logger.debug("Stopping %s on actionable output", self._session_id)
                return

    def _record(self, outputs: list[DispatchOutput]) -> None:
        for output in outputs:
            self._counts[output.type.value] += 1
            logger.debug("%s -> %s", self._session_id, output.type.value)
            if self._output_log is not None:
                self._output_log.log_output(output)
