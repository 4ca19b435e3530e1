"""Shared test fixtures for tablewatch."""

import copy

import pytest

from tablewatch.core.snapshot import parse_snapshot


def build_player(seat: int, name: str, **overrides) -> dict:
    """A camelCase player record with quiet defaults."""
    player = {
        "seat": seat,
        "name": name,
        "chips": 1000,
        "bet": 0,
        "invested": 0,
        "status": "active",
        "isDealer": False,
        "isCurrentActor": False,
    }
    player.update(overrides)
    return player


_BASE_VIEW = {
    "gameId": "game-1",
    "handNumber": 1,
    "phase": "PREFLOP",
    "pot": 30,
    "boardCards": [],
    "yourSeat": 0,
    "yourCards": ["As", "Kh"],
    "yourChips": 970,
    "yourBet": 10,
    "isYourTurn": False,
    "canRebuy": False,
    "availableActions": [],
    "players": [
        build_player(0, "Hero", chips=970, bet=10, invested=10, isDealer=True),
        build_player(1, "Alice", chips=980, bet=20, invested=20, isCurrentActor=True),
    ],
    "dealerSeat": 0,
    "numSeats": 6,
    "forcedBets": {"smallBlind": 10, "bigBlind": 20, "ante": 0},
    "sidePots": [],
    "currentPlayerToAct": 1,
    "timeoutAt": None,
}


def build_view(**overrides) -> dict:
    """A heads-up preflop PlayerView payload with ``overrides`` applied."""
    view = copy.deepcopy(_BASE_VIEW)
    view.update(overrides)
    return view


@pytest.fixture
def make_payload():
    """Factory for raw camelCase payloads."""
    return build_view


@pytest.fixture
def make_view():
    """Factory for parsed snapshots: ``make_view(phase="FLOP", ...)``."""

    def _make(**overrides):
        return parse_snapshot(build_view(**overrides))

    return _make


@pytest.fixture
def make_player():
    return build_player


@pytest.fixture
def tmp_output(tmp_path):
    """Provide a temporary output directory for session logs."""
    return tmp_path / "output"
