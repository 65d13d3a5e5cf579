"""Game management layer: settings, state machine and move history.

Quick start::

    from gungi.game import GameSettings, GameState
    from gungi.core import SetupMode

    game = GameState()
    game.setup(GameSettings(mode=SetupMode.BEGINNER))
    game.apply_notation("兵(7-1-1)(6-1-1)")
"""

from gungi.game.interfaces import GameEndReason, GamePhase
from gungi.game.settings import GameSettings
from gungi.game.state import GameState, MoveRecord

__all__ = [
    "GameEndReason",
    "GamePhase",
    "GameSettings",
    "GameState",
    "MoveRecord",
]
