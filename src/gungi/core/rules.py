"""High-level Gungi rules: checkmate, stalemate, draw and game-end detection."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from gungi.core.enums import Color, GameResult, PieceKind
from gungi.core.move_generator import MoveGenerator
from gungi.core.types import chebyshev_distance

if TYPE_CHECKING:
    from gungi.core.move import Move
    from gungi.core.position import Position

FOURFOLD = 4


def _key_of_encoding(fen: str) -> str:
    return " ".join(fen.split(" ")[:2])


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    *history* is the sequence of moves already played, oldest first; each
    move's ``before`` encoding is what repetition counts against.
    """

    @staticmethod
    def is_in_check(position: Position, color: Color | None = None) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.turn if color is None else color)

    @staticmethod
    def _both_marshals_on_board(position: Position) -> bool:
        board = position.board
        return bool(board.marshal_squares(Color.WHITE)) and bool(
            board.marshal_squares(Color.BLACK)
        )

    @staticmethod
    def is_marshal_captured(position: Position) -> bool:
        """A side has no marshal left, neither on the board nor in hand."""
        if position.in_draft:
            return False
        return any(
            not position.board.marshal_squares(color) and not position.marshal_in_hand(color)
            for color in Color
        )

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        if position.in_draft or not Rules._both_marshals_on_board(position):
            return False
        gen = MoveGenerator(position)
        if not gen.is_in_check(position.turn):
            return False
        return len(gen.generate_legal_moves()) == 0

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        if position.in_draft or not Rules._both_marshals_on_board(position):
            return False
        gen = MoveGenerator(position)
        if gen.is_in_check(position.turn):
            return False
        return len(gen.generate_legal_moves()) == 0

    @staticmethod
    def is_insufficient_material(position: Position) -> bool:
        """Bare marshals that do not touch, with both hands empty."""
        if position.in_draft or position.hands:
            return False
        pieces = list(position.board.placed_pieces())
        if len(pieces) != 2:
            return False
        if any(p.piece.kind != PieceKind.MARSHAL for p in pieces):
            return False
        a, b = pieces
        if a.piece.color == b.piece.color:
            return False
        return chebyshev_distance(a.square, b.square) > 1

    @staticmethod
    def repetition_count(position: Position, history: Sequence[Move] = ()) -> int:
        """Occurrences of the current placement and hands, this one included."""
        key = position.repetition_key()
        earlier = sum(1 for move in history if move.before and _key_of_encoding(move.before) == key)
        return earlier + 1

    @staticmethod
    def is_fourfold_repetition(position: Position, history: Sequence[Move] = ()) -> bool:
        return Rules.repetition_count(position, history) >= FOURFOLD

    @staticmethod
    def is_draw(position: Position, history: Sequence[Move] = ()) -> bool:
        return (
            Rules.is_stalemate(position)
            or Rules.is_insufficient_material(position)
            or Rules.is_fourfold_repetition(position, history)
        )

    @staticmethod
    def is_game_over(position: Position, history: Sequence[Move] = ()) -> bool:
        if position.in_draft:
            return False
        if Rules.is_marshal_captured(position):
            return True
        if Rules.is_fourfold_repetition(position, history):
            return True
        if Rules.is_insufficient_material(position):
            return True
        return len(MoveGenerator(position).generate_legal_moves()) == 0

    @staticmethod
    def game_result(position: Position, history: Sequence[Move] = ()) -> GameResult:
        """Determine the current game result."""
        if position.in_draft:
            return GameResult.IN_PROGRESS

        board = position.board
        for color in Color:
            if not board.marshal_squares(color) and not position.marshal_in_hand(color):
                return GameResult.BLACK_WINS if color == Color.WHITE else GameResult.WHITE_WINS

        if Rules.is_fourfold_repetition(position, history) or Rules.is_insufficient_material(
            position
        ):
            return GameResult.DRAW

        gen = MoveGenerator(position)
        if not gen.generate_legal_moves():
            if gen.is_in_check(position.turn):
                return (
                    GameResult.BLACK_WINS
                    if position.turn == Color.WHITE
                    else GameResult.WHITE_WINS
                )
            return GameResult.DRAW

        return GameResult.IN_PROGRESS
