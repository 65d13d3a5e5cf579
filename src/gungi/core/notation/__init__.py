"""Notation package: position encoding and move notation."""

from gungi.core.notation.fen import (
    ADVANCED_POSITION,
    BEGINNER_POSITION,
    INTERMEDIATE_POSITION,
    INTRO_POSITION,
    FenValidation,
    position_from_fen,
    position_to_fen,
    repetition_key,
    starting_position,
    validate_fen,
)
from gungi.core.notation.kifu import (
    move_to_notation,
    parse_notation,
    strip_markers,
    terminal_suffix,
)

__all__ = [
    "ADVANCED_POSITION",
    "BEGINNER_POSITION",
    "INTERMEDIATE_POSITION",
    "INTRO_POSITION",
    "FenValidation",
    "position_from_fen",
    "position_to_fen",
    "repetition_key",
    "starting_position",
    "validate_fen",
    "move_to_notation",
    "parse_notation",
    "strip_markers",
    "terminal_suffix",
]
