"""Compact text summary of a snapshot, attached to YOUR_TURN notifications."""

from __future__ import annotations

from tablewatch.core.cards import format_cards
from tablewatch.core.snapshot import ALL_IN, FOLDED, LegalAction, Player, Snapshot

__all__ = ["build_summary"]

_STATUS_LABELS = {FOLDED: "(folded)", ALL_IN: "(all-in)"}


def build_summary(snapshot: Snapshot) -> str:
    """Render the decision-relevant parts of ``snapshot`` as plain text."""
    board = format_cards(snapshot.board_cards) if snapshot.board_cards else "none"
    hole = format_cards(snapshot.your_cards) if snapshot.your_cards else "none"

    lines = [
        f"Hand #{snapshot.hand_number} | {snapshot.phase.value} | Pot: {snapshot.pot}",
        f"Board: {board}",
        f"Your cards: {hole} | Stack: {snapshot.your_chips} | Bet: {snapshot.your_bet}",
        "Players:",
    ]
    lines.extend(_player_line(p, snapshot) for p in snapshot.players)

    if snapshot.side_pots:
        pots = ", ".join(
            f"{sp.amount} ({len(sp.eligible_seats)} eligible)"
            for sp in snapshot.side_pots
        )
        lines.append(f"Side pots: {pots}")

    if snapshot.available_actions:
        actions = ", ".join(_format_action(a) for a in snapshot.available_actions)
    else:
        actions = "none"
    lines.append(f"Actions: {actions}")

    fb = snapshot.forced_bets
    if fb is not None:
        blinds = f"Blinds: {fb.small_blind}/{fb.big_blind}"
        if fb.ante:
            blinds += f" ante {fb.ante}"
        lines.append(blinds)

    return "\n".join(lines)


def _player_line(player: Player, snapshot: Snapshot) -> str:
    dealer = "[D] " if player.is_dealer else ""
    line = f"  {dealer}Seat {player.seat} {player.name}: {player.chips} chips, bet {player.bet}"
    status = _STATUS_LABELS.get(player.status)
    if status:
        line += f" {status}"
    if player.is_current_actor:
        line += " <- to act"
    if player.seat == snapshot.your_seat:
        line += " (you)"
    return line


def _format_action(action: LegalAction) -> str:
    name = action.type.lower()
    if action.amount is not None:
        return f"{name} {action.amount}"
    if action.min is not None and action.max is not None:
        return f"{name} {action.min}-{action.max}"
    return name
