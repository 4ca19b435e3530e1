"""OutputLog — JSONL session logging.

One log per table session. Writes one JSONL line per dispatch output plus a
session summary as the final line. All entries include schema version and
session ID.
"""

import json
from datetime import datetime, timezone
from pathlib import Path

import tablewatch
from tablewatch.core.dispatch import DispatchOutput

_SCHEMA_VERSION = "1.0.0"


class OutputLog:
    """Writes JSONL records of dispatch outputs for a single session."""

    def __init__(self, output_dir: Path, session_id: str):
        self._output_dir = Path(output_dir)
        self._session_id = session_id
        self._output_dir.mkdir(parents=True, exist_ok=True)
        self._file_path = self._output_dir / f"{session_id}.jsonl"

    @property
    def file_path(self) -> Path:
        return self._file_path

    def log_output(self, output: DispatchOutput) -> None:
        record = output.to_dict()
        record["schema_version"] = _SCHEMA_VERSION
        record["session_id"] = self._session_id
        record["timestamp"] = datetime.now(timezone.utc).isoformat()
        self._append(record)

    def finalize_session(self, counts: dict[str, int], extra: dict | None = None) -> None:
        record = {
            "schema_version": _SCHEMA_VERSION,
            "record_type": "session_summary",
            "session_id": self._session_id,
            "output_counts": counts,
            "engine_version": tablewatch.__version__,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        if extra:
            record.update(extra)
        self._append(record)

    def _append(self, record: dict) -> None:
        with open(self._file_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(record, default=str, ensure_ascii=False) + "\n")
