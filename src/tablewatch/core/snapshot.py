"""Snapshot — one player's view of the table at an instant.

Payloads arrive as camelCase JSON objects (the upstream ``PlayerView``).
``parse_snapshot`` validates them against ``snapshot.schema.json`` and
turns them into frozen dataclasses the differ and dispatcher work with.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from pathlib import Path

import jsonschema

__all__ = [
    "ForcedBets",
    "LegalAction",
    "Phase",
    "Player",
    "SidePot",
    "Snapshot",
    "SnapshotError",
    "parse_snapshot",
]

_SCHEMA_PATH = Path(__file__).parent / "snapshot.schema.json"


class SnapshotError(ValueError):
    """Raised when a payload cannot be turned into a Snapshot."""


class Phase(str, Enum):
    """Betting phase of the current hand."""

    PREFLOP = "PREFLOP"
    FLOP = "FLOP"
    TURN = "TURN"
    RIVER = "RIVER"
    SHOWDOWN = "SHOWDOWN"
    WAITING = "WAITING"


# Phases in which cards are being dealt and bets made
ACTIVE_PHASES = frozenset({Phase.PREFLOP, Phase.FLOP, Phase.TURN, Phase.RIVER})

# Phases that follow the end of a hand
HAND_OVER_PHASES = frozenset({Phase.SHOWDOWN, Phase.WAITING})

# Board size for phases where it is fixed
_BOARD_SIZE = {Phase.PREFLOP: 0, Phase.FLOP: 3, Phase.TURN: 4, Phase.RIVER: 5}

ACTIVE = "active"
FOLDED = "folded"
ALL_IN = "all_in"


@dataclass(frozen=True)
class Player:
    seat: int
    name: str
    chips: int
    bet: int
    invested: int = 0
    status: str = ACTIVE  # "active", "folded", "all_in"
    is_dealer: bool = False
    is_current_actor: bool = False


@dataclass(frozen=True)
class LegalAction:
    type: str  # "FOLD", "CHECK", "CALL", "BET", "RAISE", "ALL_IN"
    amount: int | None = None
    min: int | None = None
    max: int | None = None


@dataclass(frozen=True)
class ForcedBets:
    small_blind: int
    big_blind: int
    ante: int = 0


@dataclass(frozen=True)
class SidePot:
    amount: int
    eligible_seats: tuple[int, ...] = ()


@dataclass(frozen=True)
class Snapshot:
    """Immutable view of the table as seen from ``your_seat``."""

    hand_number: int
    phase: Phase
    pot: int
    board_cards: tuple[str, ...]
    your_seat: int
    players: tuple[Player, ...]
    game_id: str | None = None
    your_cards: tuple[str, ...] = ()
    your_chips: int = 0
    your_bet: int = 0
    is_your_turn: bool = False
    can_rebuy: bool = False
    available_actions: tuple[LegalAction, ...] = ()
    dealer_seat: int | None = None
    num_seats: int | None = None
    forced_bets: ForcedBets | None = None
    side_pots: tuple[SidePot, ...] = ()
    current_player_to_act: int | None = None
    timeout_at: str | int | None = None
    winners: tuple[int, ...] | None = None
    # Wire payload as received, kept for serialisation
    raw: dict = field(default_factory=dict, compare=False, repr=False)

    def player_at(self, seat: int) -> Player | None:
        """Return the player in ``seat``, or None if the seat is empty."""
        for p in self.players:
            if p.seat == seat:
                return p
        return None

    def max_bet(self) -> int:
        """Highest current-round bet at the table (0 when nobody has bet)."""
        return max((p.bet for p in self.players), default=0)

    def to_dict(self) -> dict:
        """Return the camelCase payload this snapshot was built from."""
        return dict(self.raw)


@lru_cache(maxsize=1)
def _load_schema() -> dict:
    with open(_SCHEMA_PATH) as f:
        return json.load(f)


def parse_snapshot(payload: dict, validate: bool = True) -> Snapshot:
    """Build a Snapshot from a camelCase ``PlayerView`` payload.

    With ``validate`` the payload is checked against the bundled JSON
    Schema first. Raises SnapshotError on schema violations, missing
    required keys, duplicate seats, or a board that does not fit the
    phase.
    """
    if not isinstance(payload, dict):
        raise SnapshotError(f"Snapshot must be an object, got {type(payload).__name__}")

    if validate:
        try:
            jsonschema.validate(payload, _load_schema())
        except jsonschema.ValidationError as e:
            raise SnapshotError(f"Schema validation: {e.message}") from e

    try:
        phase = Phase(payload["phase"])
        players = tuple(_parse_player(p) for p in payload["players"])
        board = tuple(payload["boardCards"])
        snapshot = Snapshot(
            hand_number=payload["handNumber"],
            phase=phase,
            pot=payload["pot"],
            board_cards=board,
            your_seat=payload["yourSeat"],
            players=players,
            game_id=payload.get("gameId"),
            your_cards=tuple(payload.get("yourCards") or ()),
            your_chips=payload.get("yourChips", 0),
            your_bet=payload.get("yourBet", 0),
            is_your_turn=payload.get("isYourTurn", False),
            can_rebuy=payload.get("canRebuy", False),
            available_actions=tuple(
                LegalAction(
                    type=a["type"],
                    amount=a.get("amount"),
                    min=a.get("min"),
                    max=a.get("max"),
                )
                for a in payload.get("availableActions") or ()
            ),
            dealer_seat=payload.get("dealerSeat"),
            num_seats=payload.get("numSeats"),
            forced_bets=_parse_forced_bets(payload.get("forcedBets")),
            side_pots=tuple(
                SidePot(
                    amount=sp["amount"],
                    eligible_seats=tuple(sp.get("eligibleSeats", ())),
                )
                for sp in payload.get("sidePots") or ()
            ),
            current_player_to_act=payload.get("currentPlayerToAct"),
            timeout_at=payload.get("timeoutAt"),
            winners=(
                tuple(payload["winners"])
                if payload.get("winners") is not None
                else None
            ),
            raw=dict(payload),
        )
        has_duplicate_seats = len({p.seat for p in players}) != len(players)
    except KeyError as e:
        raise SnapshotError(f"Missing required field: {e.args[0]}") from e
    except (TypeError, AttributeError) as e:
        raise SnapshotError(f"Malformed snapshot: {e}") from e
    except ValueError as e:
        raise SnapshotError(str(e)) from e

    if has_duplicate_seats:
        seats = sorted(p.seat for p in players)
        raise SnapshotError(f"Duplicate seats in snapshot: {seats}")

    expected = _BOARD_SIZE.get(phase)
    if expected is not None and len(board) != expected:
        raise SnapshotError(
            f"Board has {len(board)} cards but phase {phase.value} needs {expected}"
        )

    return snapshot


def _parse_player(p: dict) -> Player:
    return Player(
        seat=p["seat"],
        name=p["name"],
        chips=p["chips"],
        bet=p["bet"],
        invested=p.get("invested", 0),
        status=p["status"],
        is_dealer=p.get("isDealer", False),
        is_current_actor=p.get("isCurrentActor", False),
    )


def _parse_forced_bets(raw: dict | None) -> ForcedBets | None:
    if not raw:
        return None
    return ForcedBets(
        small_blind=raw.get("smallBlind", 0),
        big_blind=raw.get("bigBlind", 0),
        ante=raw.get("ante", 0),
    )
