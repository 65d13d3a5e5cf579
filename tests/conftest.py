"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from gungi.core.notation import BEGINNER_POSITION, position_from_fen
from gungi.core.position import Position
from gungi.game.state import GameState


@pytest.fixture
def beginner_position() -> Position:
    """The beginner start position, white to move."""
    return position_from_fen(BEGINNER_POSITION)


@pytest.fixture
def game() -> GameState:
    """A beginner game that has been set up and awaits white's first move."""
    state = GameState()
    state.setup()
    return state
