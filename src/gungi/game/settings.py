"""User-configurable game settings."""

from __future__ import annotations

from dataclasses import dataclass

from gungi.core.enums import SetupMode
from gungi.core.notation.fen import starting_position


@dataclass
class GameSettings:
    """Options a new game is created with."""

    mode: SetupMode = SetupMode.BEGINNER
    start_fen: str | None = None  # overrides the mode's start position
    annotate_terminal: bool = True  # append +, # and 停 to recorded notation

    @property
    def initial_fen(self) -> str:
        return self.start_fen or starting_position(self.mode)
