"""State differ — describe what changed between two snapshots.

``diff_states`` is pure: same inputs, same strings, no side effects.
Event order is opponent actions (in player order) followed by board cards.
"""

from __future__ import annotations

from typing import Callable

from tablewatch.core.cards import format_card, format_cards
from tablewatch.core.snapshot import ACTIVE, ALL_IN, FOLDED, Player, Snapshot

__all__ = ["diff_states"]

# (predicate, formatter) pairs evaluated top-down; first match wins.
# Each callable receives (prev_player, next_player, prev_snapshot).
_Rule = tuple[
    Callable[[Player, Player, Snapshot], bool],
    Callable[[Player, Player, Snapshot], str],
]


def _went_all_in(before: Player, after: Player, prev: Snapshot) -> bool:
    return before.status != ALL_IN and after.status == ALL_IN


def _folded(before: Player, after: Player, prev: Snapshot) -> bool:
    return before.status != FOLDED and after.status == FOLDED


def _bet_increased(before: Player, after: Player, prev: Snapshot) -> bool:
    return after.bet > before.bet


def _checked(before: Player, after: Player, prev: Snapshot) -> bool:
    return (
        before.is_current_actor
        and not after.is_current_actor
        and after.bet == before.bet
        and after.status == ACTIVE
    )


def _describe_bet(before: Player, after: Player, prev: Snapshot) -> str:
    """Classify a bet increase against the previous table maximum."""
    prev_max = prev.max_bet()
    if prev_max == 0:
        return f"{after.name} bet {after.bet}"
    if after.bet > prev_max:
        return f"{after.name} raised to {after.bet}"
    return f"{after.name} called {after.bet}"


_PLAYER_RULES: tuple[_Rule, ...] = (
    (_went_all_in, lambda b, a, p: f"{a.name} went all-in ({a.bet})"),
    (_folded, lambda b, a, p: f"{a.name} folded"),
    (_bet_increased, _describe_bet),
    (_checked, lambda b, a, p: f"{a.name} checked"),
)


def diff_states(prev: Snapshot | None, next: Snapshot) -> list[str]:
    """Compare two successive snapshots and describe the changes.

    A missing ``prev`` or a changed hand number starts a new hand: the
    only possible event is the hand-start line, and only when hole cards
    are known.
    """
    if prev is None or prev.hand_number != next.hand_number:
        if next.your_cards:
            return [
                f"Hand #{next.hand_number} — Your cards: {format_cards(next.your_cards)}"
            ]
        return []

    events = _player_events(prev, next)
    events.extend(_board_events(prev, next))
    return events


def _player_events(prev: Snapshot, next: Snapshot) -> list[str]:
    events = []
    before_by_seat = {p.seat: p for p in prev.players}

    for after in next.players:
        if after.seat == next.your_seat:
            continue
        before = before_by_seat.get(after.seat)
        if before is None:
            continue
        for matches, describe in _PLAYER_RULES:
            if matches(before, after, prev):
                events.append(describe(before, after, prev))
                break

    return events


def _board_events(prev: Snapshot, next: Snapshot) -> list[str]:
    events = []
    before = len(prev.board_cards)
    after = len(next.board_cards)
    board = next.board_cards

    if before == 0 and after >= 3:
        events.append(f"Flop: {format_cards(board[:3])} | Pot: {next.pot}")
    if before == 3 and after >= 4:
        events.append(f"Turn: {format_card(board[3])} | Pot: {next.pot}")
    if before == 4 and after >= 5:
        events.append(f"River: {format_card(board[4])} | Pot: {next.pot}")

    return events
