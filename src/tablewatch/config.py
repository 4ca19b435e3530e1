"""Listener configuration loader."""

import logging

import yaml
from dataclasses import dataclass, field
from pathlib import Path

from tablewatch.core.dispatch import OutputType


@dataclass
class ListenerConfig:
    validate_snapshots: bool = True
    # Output types after which run() stops consuming; empty = consume everything
    stop_on: frozenset[OutputType] = field(default_factory=frozenset)
    log_level: str = "WARNING"
    output_dir: Path | None = None  # JSONL output log; None disables it


def load_config(path: Path) -> ListenerConfig:
    """Load listener config from YAML file."""
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return config_from_dict(raw)


def config_from_dict(raw: dict) -> ListenerConfig:
    """Build a ListenerConfig from an already-parsed mapping."""
    listener = raw.get("listener") or {}
    output = raw.get("output") or {}

    stop_on = set()
    for name in listener.get("stop_on", []):
        try:
            stop_on.add(OutputType(name))
        except ValueError:
            valid = ", ".join(t.value for t in OutputType)
            raise ValueError(
                f"Unknown output type in stop_on: {name!r} (expected one of {valid})"
            ) from None

    log_level = str(listener.get("log_level", "WARNING")).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"Invalid log_level: {log_level!r}")

    output_dir = output.get("dir")

    return ListenerConfig(
        validate_snapshots=listener.get("validate_snapshots", True),
        stop_on=frozenset(stop_on),
        log_level=log_level,
        output_dir=Path(output_dir) if output_dir else None,
    )


def configure_logging(config: ListenerConfig) -> None:
    """Apply ``config.log_level`` to the ``tablewatch`` logger.

    Call once per process, after loading the config.
    """
    logging.getLogger("tablewatch").setLevel(config.log_level)
