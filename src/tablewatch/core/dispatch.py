"""Dispatch state machine — decide what the watching agent must hear about.

Each call to ``process_state_event`` diffs the new snapshot against the
session's previous one, wraps the differences as EVENT outputs, and
appends at most one actionable notification:

    YOUR_TURN            once per (hand, phase) decision point
    HAND_RESULT          once per hand, whichever detection path sees it first
    REBUY_AVAILABLE      instead of HAND_RESULT when busted with rebuy allowed
    WAITING_FOR_PLAYERS  once per stretch of sitting alone in WAITING

Hand completion is detected two ways. A phase move from an active betting
round to SHOWDOWN/WAITING is the normal path; a jump in hand number covers
hands that end by everyone folding before the upstream ever shows a
SHOWDOWN or WAITING phase. Both paths share ``last_reported_hand``.

All session state lives in ``SessionContext``; the module holds none.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from tablewatch.core.differ import diff_states
from tablewatch.core.snapshot import (
    ACTIVE,
    ACTIVE_PHASES,
    FOLDED,
    HAND_OVER_PHASES,
    Phase,
    Snapshot,
)
from tablewatch.core.summary import build_summary

__all__ = [
    "DispatchOutput",
    "OutputType",
    "SessionContext",
    "process_closed_event",
    "process_state_event",
]

logger = logging.getLogger(__name__)

# Fewer seated players than this in WAITING means nobody to play against
MIN_PLAYERS = 2


class OutputType(str, Enum):
    EVENT = "EVENT"
    YOUR_TURN = "YOUR_TURN"
    HAND_RESULT = "HAND_RESULT"
    REBUY_AVAILABLE = "REBUY_AVAILABLE"
    WAITING_FOR_PLAYERS = "WAITING_FOR_PLAYERS"
    TABLE_CLOSED = "TABLE_CLOSED"


@dataclass(frozen=True)
class DispatchOutput:
    """One tagged output of the dispatcher."""

    type: OutputType
    message: str | None = None
    hand_number: int | None = None
    snapshot: Snapshot | None = None
    summary: str | None = None

    def to_dict(self) -> dict:
        """JSON-serialisable form: ``{"type": ..., ...}`` with unset fields omitted."""
        record: dict = {"type": self.type.value}
        if self.message is not None:
            record["message"] = self.message
        if self.hand_number is not None:
            record["handNumber"] = self.hand_number
        if self.summary is not None:
            record["summary"] = self.summary
        if self.snapshot is not None:
            record["state"] = self.snapshot.to_dict()
        return record


@dataclass
class SessionContext:
    """Mutable per-table state threaded through ``process_state_event``."""

    prev_snapshot: Snapshot | None = None
    prev_phase: Phase | None = None
    last_reported_hand: int = 0
    last_action_key: str | None = None
    last_turn_key: tuple[int, Phase] | None = None


def process_state_event(
    snapshot: Snapshot, context: SessionContext
) -> list[DispatchOutput]:
    """Diff ``snapshot`` against the session and return the outputs it causes.

    ``context`` is updated in place before returning.
    """
    outputs = [
        DispatchOutput(OutputType.EVENT, message=msg, hand_number=snapshot.hand_number)
        for msg in diff_states(context.prev_snapshot, snapshot)
    ]

    prev_snapshot = context.prev_snapshot
    prev_phase = context.prev_phase
    context.prev_snapshot = snapshot
    context.prev_phase = snapshot.phase

    if prev_phase != snapshot.phase:
        context.last_turn_key = None
        context.last_action_key = None

    # Viewer to act
    if snapshot.is_your_turn:
        turn_key = (snapshot.hand_number, snapshot.phase)
        if turn_key != context.last_turn_key:
            context.last_turn_key = turn_key
            outputs.append(
                DispatchOutput(
                    OutputType.YOUR_TURN,
                    snapshot=snapshot,
                    summary=build_summary(snapshot),
                )
            )
            logger.debug(
                "YOUR_TURN hand=%d phase=%s", snapshot.hand_number, snapshot.phase.value
            )
        else:
            logger.debug("YOUR_TURN suppressed, already notified for %s", turn_key)
        # Hand-end checks are skipped on the viewer's turn, including a hand
        # number jump; the next call no longer sees that jump.
        return outputs
    context.last_turn_key = None

    # Hand reached SHOWDOWN/WAITING from a betting round of the same hand.
    # A new hand number is left to the jump check below, which reports the
    # hand that actually ended.
    same_hand = (
        prev_snapshot is not None
        and prev_snapshot.hand_number == snapshot.hand_number
    )
    if (
        same_hand
        and prev_phase in ACTIVE_PHASES
        and snapshot.phase in HAND_OVER_PHASES
        and snapshot.hand_number != context.last_reported_hand
    ):
        if snapshot.your_chips == 0 and snapshot.can_rebuy:
            outputs.append(DispatchOutput(OutputType.REBUY_AVAILABLE, snapshot=snapshot))
            logger.info("Hand #%d over, busted with rebuy available", snapshot.hand_number)
        else:
            outputs.append(
                DispatchOutput(
                    OutputType.HAND_RESULT,
                    snapshot=snapshot,
                    hand_number=snapshot.hand_number,
                )
            )
            logger.info("Hand #%d over (%s)", snapshot.hand_number, snapshot.phase.value)
        context.last_reported_hand = snapshot.hand_number
        return outputs

    # Hand number moved on without a visible showdown (everyone folded)
    if (
        prev_snapshot is not None
        and snapshot.hand_number > prev_snapshot.hand_number
        and prev_snapshot.hand_number != context.last_reported_hand
    ):
        old_hand = prev_snapshot.hand_number
        for name in _unreported_folds(prev_snapshot):
            outputs.append(
                DispatchOutput(
                    OutputType.EVENT, message=f"{name} folded", hand_number=old_hand
                )
            )
        outputs.append(
            DispatchOutput(OutputType.HAND_RESULT, snapshot=snapshot, hand_number=old_hand)
        )
        context.last_reported_hand = old_hand
        logger.info("Hand #%d over (new hand #%d dealt)", old_hand, snapshot.hand_number)
        return outputs

    # Alone at the table
    if snapshot.phase is Phase.WAITING and len(snapshot.players) < MIN_PLAYERS:
        action_key = OutputType.WAITING_FOR_PLAYERS.value
        if context.last_action_key != action_key:
            outputs.append(
                DispatchOutput(OutputType.WAITING_FOR_PLAYERS, snapshot=snapshot)
            )
            logger.info("Alone at table, waiting for players")
        context.last_action_key = action_key
    else:
        context.last_action_key = None

    return outputs


def process_closed_event() -> list[DispatchOutput]:
    """The table was closed by the server."""
    logger.info("Table closed")
    return [DispatchOutput(OutputType.TABLE_CLOSED)]


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _unreported_folds(old: Snapshot) -> list[str]:
    """Names of opponents who must have folded for ``old`` to end.

    Winners come from ``old.winners`` when the upstream sent them;
    otherwise every non-folded player sitting on the table's top bet
    is taken to be a winner.
    """
    if old.winners is not None:
        winners = set(old.winners)
    else:
        top = old.max_bet()
        winners = {p.seat for p in old.players if p.status != FOLDED and p.bet == top}

    return [
        p.name
        for p in old.players
        if p.seat != old.your_seat and p.status == ACTIVE and p.seat not in winners
    ]

