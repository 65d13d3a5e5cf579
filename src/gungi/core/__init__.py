"""Core domain layer: pure Gungi rules with zero external dependencies.

Quick start::

    from gungi.core import MoveGenerator, position_from_fen, BEGINNER_POSITION

    pos = position_from_fen(BEGINNER_POSITION)
    gen = MoveGenerator(pos)
    for move in gen.generate_legal_moves():
        print(move)
"""

from gungi.core.board import Board
from gungi.core.enums import (
    Color,
    DraftRights,
    GameResult,
    MoveType,
    PieceKind,
    SetupMode,
)
from gungi.core.errors import (
    GungiError,
    IllegalMoveError,
    InvariantViolation,
    MalformedPositionError,
    SquareOutOfBoundsError,
)
from gungi.core.move import Move
from gungi.core.move_generator import MoveGenerator
from gungi.core.notation import (
    ADVANCED_POSITION,
    BEGINNER_POSITION,
    INTERMEDIATE_POSITION,
    INTRO_POSITION,
    move_to_notation,
    parse_notation,
    position_from_fen,
    position_to_fen,
    starting_position,
    validate_fen,
)
from gungi.core.piece import HandEntry, Piece, PlacedPiece
from gungi.core.position import Position
from gungi.core.reach import reachable_squares
from gungi.core.rules import Rules
from gungi.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "Color",
    "DraftRights",
    "GameResult",
    "MoveType",
    "PieceKind",
    "SetupMode",
    # Errors
    "GungiError",
    "IllegalMoveError",
    "InvariantViolation",
    "MalformedPositionError",
    "SquareOutOfBoundsError",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "HandEntry",
    "Move",
    "MoveGenerator",
    "Piece",
    "PlacedPiece",
    "Position",
    "Rules",
    "reachable_squares",
    # Notation
    "ADVANCED_POSITION",
    "BEGINNER_POSITION",
    "INTERMEDIATE_POSITION",
    "INTRO_POSITION",
    "move_to_notation",
    "parse_notation",
    "position_from_fen",
    "position_to_fen",
    "starting_position",
    "validate_fen",
]
