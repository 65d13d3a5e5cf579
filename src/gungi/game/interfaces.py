"""Enumerations shared by the game layer."""

from __future__ import annotations

from enum import IntEnum, auto

# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a Gungi game."""

    NOT_STARTED = auto()
    DRAFT = auto()  # players are still placing their armies
    AWAITING_MOVE = auto()
    GAME_OVER = auto()


class GameEndReason(IntEnum):
    """Why a finished game ended."""

    NONE = 0
    MARSHAL_CAPTURED = auto()
    CHECKMATE = auto()
    STALEMATE = auto()
    INSUFFICIENT_MATERIAL = auto()
    FOURFOLD_REPETITION = auto()
    RESIGNATION = auto()
