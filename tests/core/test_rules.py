"""Tests for Rules: check, checkmate, stalemate, draws and game end."""

from gungi.core.enums import GameResult
from gungi.core.move import Move
from gungi.core.notation import (
    BEGINNER_POSITION,
    INTERMEDIATE_POSITION,
    parse_notation,
    position_from_fen,
)
from gungi.core.position import Position
from gungi.core.rules import Rules

CHECKMATE = (
    "3img3/1ra1|n:G|1as1/d1fwdwf2/9/8d/9/D1FWDWF1D/1SA1N1AR1/4MI3 "
    "J2N2S1R1D1/j2n2s1r1d1 b 1 - 3"
)
IN_CHECK = (
    "3img3/1ra1N1as1/d1fw2f1d/4dw3/9/9/D1FWDWF1D/1SA3AR1/3GMI3 "
    "J2N2S1R1D1/j2n2s1r1d1 b 1 - 3"
)
STALEMATE = "8m/9/7DD/7C1/9/9/9/9/M8 -/- b 3 - 1"
BARE_MARSHALS = "m8/9/9/9/9/9/9/9/8M -/- w 3 - 1"
MARSHAL_CAPTURED = (
    "1|g:N|2|W:N|Ad1f/7r1/1nd2Adfr/2|c:G|j2K2/6s1D/1w|W:T|6/2F4J|F:D|/i8/"
    "2|S:w||R:M|3C1 -/- b 3 - 164"
)
SHUFFLE = "m7d/9/9/9/9/9/9/9/D7M -/- w 3 - 1"
SHUFFLE_CYCLE = (
    "帥(9-1-1)(8-1-1)",
    "帥(1-9-1)(2-9-1)",
    "帥(8-1-1)(9-1-1)",
    "帥(2-9-1)(1-9-1)",
)


def _shuffle(cycles: int) -> tuple[Position, list[Move]]:
    pos = position_from_fen(SHUFFLE)
    history: list[Move] = []
    for _ in range(cycles):
        for text in SHUFFLE_CYCLE:
            move = parse_notation(pos, text)
            history.append(move)
            pos = pos.apply_move(move)
    return pos, history


class TestCheck:
    def test_starting_not_in_check(self) -> None:
        assert not Rules.is_in_check(position_from_fen(BEGINNER_POSITION))

    def test_in_check(self) -> None:
        pos = position_from_fen(IN_CHECK)
        assert Rules.is_in_check(pos)
        assert not Rules.is_checkmate(pos)
        assert not Rules.is_game_over(pos)

    def test_missing_marshal_is_not_in_check(self) -> None:
        assert not Rules.is_in_check(position_from_fen(MARSHAL_CAPTURED))


class TestCheckmate:
    def test_covered_escape_squares(self) -> None:
        pos = position_from_fen(CHECKMATE)
        assert Rules.is_in_check(pos)
        assert Rules.is_checkmate(pos)
        assert not Rules.is_stalemate(pos)
        assert Rules.is_game_over(pos)
        assert Rules.game_result(pos) == GameResult.WHITE_WINS


class TestStalemate:
    def test_marshal_boxed_in(self) -> None:
        pos = position_from_fen(STALEMATE)
        assert Rules.is_stalemate(pos)
        assert not Rules.is_checkmate(pos)
        assert Rules.is_draw(pos)
        assert Rules.is_game_over(pos)
        assert Rules.game_result(pos) == GameResult.DRAW

    def test_not_stalemate_when_has_moves(self) -> None:
        assert not Rules.is_stalemate(position_from_fen(BEGINNER_POSITION))


class TestInsufficientMaterial:
    def test_bare_marshals(self) -> None:
        pos = position_from_fen(BARE_MARSHALS)
        assert Rules.is_insufficient_material(pos)
        assert Rules.is_game_over(pos)
        assert Rules.game_result(pos) == GameResult.DRAW

    def test_adjacent_marshals(self) -> None:
        pos = position_from_fen("mM7/9/9/9/9/9/9/9/9 -/- w 3 - 1")
        assert not Rules.is_insufficient_material(pos)

    def test_diagonal_marshals(self) -> None:
        pos = position_from_fen("m8/1M7/9/9/9/9/9/9/9 -/- w 3 - 1")
        assert not Rules.is_insufficient_material(pos)

    def test_pieces_in_hand(self) -> None:
        pos = position_from_fen("m8/9/9/9/9/9/9/9/8M D1/d1 w 3 - 1")
        assert not Rules.is_insufficient_material(pos)

    def test_single_marshal(self) -> None:
        pos = position_from_fen("m8/9/9/9/9/9/9/9/9 -/- w 3 - 1")
        assert not Rules.is_insufficient_material(pos)

    def test_three_marshals(self) -> None:
        pos = position_from_fen("mMm6/9/9/9/9/9/9/9/9 -/- w 3 - 1")
        assert not Rules.is_insufficient_material(pos)


class TestDraft:
    def test_nothing_ends_during_draft(self) -> None:
        pos = position_from_fen(INTERMEDIATE_POSITION)
        assert not Rules.is_checkmate(pos)
        assert not Rules.is_stalemate(pos)
        assert not Rules.is_insufficient_material(pos)
        assert not Rules.is_marshal_captured(pos)
        assert not Rules.is_game_over(pos)
        assert Rules.game_result(pos) == GameResult.IN_PROGRESS


class TestMarshalCaptured:
    def test_game_over_without_mate(self) -> None:
        pos = position_from_fen(MARSHAL_CAPTURED)
        assert Rules.is_marshal_captured(pos)
        assert Rules.is_game_over(pos)
        assert not Rules.is_checkmate(pos)
        assert not Rules.is_stalemate(pos)
        assert Rules.game_result(pos) == GameResult.WHITE_WINS


class TestRepetition:
    def test_three_occurrences_are_not_enough(self) -> None:
        pos, history = _shuffle(2)
        assert Rules.repetition_count(pos, history) == 3
        assert not Rules.is_fourfold_repetition(pos, history)
        assert not Rules.is_game_over(pos, history)

    def test_fourfold(self) -> None:
        pos, history = _shuffle(3)
        assert Rules.is_fourfold_repetition(pos, history)
        assert Rules.is_draw(pos, history)
        assert Rules.is_game_over(pos, history)
        assert Rules.game_result(pos, history) == GameResult.DRAW

    def test_without_history(self) -> None:
        pos, _ = _shuffle(3)
        assert Rules.repetition_count(pos) == 1
