"""Tests for move notation rendering and parsing."""

import pytest

from gungi.core.enums import Color, MoveType, PieceKind
from gungi.core.errors import IllegalMoveError
from gungi.core.move import Move
from gungi.core.move_generator import MoveGenerator
from gungi.core.notation import (
    BEGINNER_POSITION,
    move_to_notation,
    parse_notation,
    position_from_fen,
    strip_markers,
)
from gungi.core.notation.kifu import is_well_formed
from gungi.core.piece import Piece, PlacedPiece
from gungi.core.types import parse_square


class TestRender:
    def test_route(self) -> None:
        move = Move(
            Color.WHITE,
            PieceKind.SOLDIER,
            MoveType.ROUTE,
            parse_square("6-1"),
            1,
            parse_square("7-1"),
            1,
        )
        assert move_to_notation(move) == "兵(7-1-1)(6-1-1)"
        assert str(move) == move.notation == "兵(7-1-1)(6-1-1)"

    def test_tsuke(self) -> None:
        move = Move(
            Color.WHITE,
            PieceKind.LIEUTENANT_GENERAL,
            MoveType.TSUKE,
            parse_square("5-8"),
            2,
            parse_square("4-9"),
            1,
        )
        assert move.notation == "中(4-9-1)(5-8-2)付"

    def test_capture(self) -> None:
        victim = PlacedPiece(parse_square("5-5"), 1, Piece(Color.BLACK, PieceKind.SOLDIER))
        move = Move(
            Color.WHITE,
            PieceKind.MAJOR_GENERAL,
            MoveType.CAPTURE,
            parse_square("5-5"),
            1,
            parse_square("7-5"),
            2,
            (victim,),
        )
        assert move.notation == "小(7-5-2)取(5-5-1)"

    def test_betray_lists_converted_bottom_up(self) -> None:
        target = parse_square("5-8")
        converted = (
            PlacedPiece(target, 1, Piece(Color.BLACK, PieceKind.LIEUTENANT_GENERAL)),
            PlacedPiece(target, 2, Piece(Color.BLACK, PieceKind.LANCER)),
        )
        move = Move(
            Color.WHITE,
            PieceKind.TACTICIAN,
            MoveType.BETRAY,
            target,
            3,
            parse_square("4-9"),
            2,
            converted,
        )
        assert move.notation == "謀(4-9-2)(5-8-3)返中槍"

    def test_placements(self) -> None:
        plain = Move(Color.WHITE, PieceKind.MAJOR_GENERAL, MoveType.ARATA, parse_square("7-2"), 1)
        stacked = Move(
            Color.WHITE, PieceKind.MAJOR_GENERAL, MoveType.ARATA, parse_square("7-5"), 2
        )
        finished = Move(
            Color.WHITE,
            PieceKind.SOLDIER,
            MoveType.ARATA,
            parse_square("4-2"),
            1,
            draft_finished=True,
        )
        assert plain.notation == "新小(7-2-1)"
        assert stacked.notation == "新小(7-5-2)付"
        assert finished.notation == "新兵(4-2-1)終"


class TestParse:
    def test_every_legal_move_parses_back(self) -> None:
        pos = position_from_fen(BEGINNER_POSITION)
        for move in MoveGenerator(pos).generate_legal_moves():
            assert parse_notation(pos, move.notation) == move

    def test_markers_are_ignored(self) -> None:
        pos = position_from_fen(BEGINNER_POSITION)
        move = parse_notation(pos, "兵(7-1-1)(6-1-1)+")
        assert move.to_sq == parse_square("6-1")

    def test_illegal_move(self) -> None:
        pos = position_from_fen(BEGINNER_POSITION)
        with pytest.raises(IllegalMoveError, match="Illegal move"):
            parse_notation(pos, "兵(7-1-1)(5-1-1)")

    def test_malformed(self) -> None:
        pos = position_from_fen(BEGINNER_POSITION)
        with pytest.raises(IllegalMoveError, match="Invalid move notation"):
            parse_notation(pos, "e2e4")

    def test_strip_markers(self) -> None:
        assert strip_markers("帥(9-1-1)(8-1-1)+停") == "帥(9-1-1)(8-1-1)"
        assert strip_markers(" 新小(7-2-1)# ") == "新小(7-2-1)"

    @pytest.mark.parametrize(
        "text",
        [
            "兵(7-1-1)(6-1-1)",
            "中(4-9-1)(5-8-2)付",
            "小(7-5-2)取(5-5-1)",
            "謀(4-9-2)(5-8-3)返中槍",
            "新小(7-5-2)付",
            "新兵(4-2-1)終",
        ],
    )
    def test_well_formed(self, text: str) -> None:
        assert is_well_formed(text)

    def test_not_well_formed(self) -> None:
        assert not is_well_formed("兵(0-1-1)(6-1-1)")
        assert not is_well_formed("新兵(4-2-4)")
