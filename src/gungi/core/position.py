"""Position: complete game state (board + hands + metadata)."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from gungi.core.board import Board
from gungi.core.enums import Color, DraftRights, MoveType, PieceKind, SetupMode
from gungi.core.errors import InvariantViolation
from gungi.core.move import Move
from gungi.core.piece import HandEntry, Piece


def debit_hand(
    hands: Iterable[HandEntry], color: Color, kind: PieceKind, amount: int = 1
) -> tuple[HandEntry, ...]:
    """Return *hands* with *amount* pieces of *kind* taken from *color*.

    Entries that drop to zero are removed; the rest keep their order.
    """
    result: list[HandEntry] = []
    found = False
    for entry in hands:
        if entry.color == color and entry.kind == kind:
            found = True
            remaining = entry.count - amount
            if remaining < 0:
                raise InvariantViolation(
                    f"Hand count for {color} {kind.english_name} would go negative"
                )
            if remaining:
                result.append(HandEntry(color, kind, remaining))
        else:
            result.append(entry)
    if not found and amount > 0:
        raise InvariantViolation(f"No {color} {kind.english_name} in hand")
    return tuple(result)


@dataclass(frozen=True, slots=True)
class Position:
    """Immutable snapshot of a Gungi game.

    Transitions never mutate: :meth:`apply_move` copies the board and
    returns a new position.
    """

    board: Board
    hands: tuple[HandEntry, ...] = ()
    turn: Color = Color.WHITE
    mode: SetupMode = SetupMode.BEGINNER
    drafting: DraftRights = DraftRights.NONE
    move_number: int = 1

    # ── Hand queries ─────────────────────────────────────────────────────

    def hand(self, color: Color) -> tuple[HandEntry, ...]:
        return tuple(e for e in self.hands if e.color == color)

    def hand_count(self, color: Color, kind: PieceKind) -> int:
        for entry in self.hands:
            if entry.color == color and entry.kind == kind:
                return entry.count
        return 0

    def hand_total(self, color: Color) -> int:
        return sum(e.count for e in self.hands if e.color == color)

    # ── Draft state ──────────────────────────────────────────────────────

    @property
    def in_draft(self) -> bool:
        return self.drafting != DraftRights.NONE

    def is_drafting(self, color: Color) -> bool:
        return bool(self.drafting & DraftRights.for_color(color))

    def marshal_in_hand(self, color: Color) -> bool:
        return self.hand_count(color, PieceKind.MARSHAL) > 0

    def repetition_key(self) -> str:
        """Placement and hands; two positions repeat iff their keys match."""
        from gungi.core.notation.fen import repetition_key

        return repetition_key(self)

    # ── Transition ───────────────────────────────────────────────────────

    def apply_move(self, move: Move) -> Position:
        """Return the position that results from playing *move*.

        The move is trusted to come from the move generator.
        """
        board = self.board.copy()
        hands = self.hands
        drafting = self.drafting
        color = move.color
        max_tier = self.mode.max_tier

        if move.move_type == MoveType.ARATA:
            hands = debit_hand(hands, color, move.kind)
            board.put(move.to_sq, Piece(color, move.kind), max_tier)
            if move.draft_finished:
                drafting &= ~DraftRights.for_color(color)
        else:
            if move.from_sq is None:
                raise InvariantViolation(f"Board move without origin: {move!r}")
            piece = board.remove_top(move.from_sq)
            tiers = [c.tier for c in move.captured]
            if move.move_type == MoveType.CAPTURE:
                board.remove_tiers(move.to_sq, tiers)
                board.put(move.to_sq, piece, max_tier)
            elif move.move_type == MoveType.BETRAY:
                board.put(move.to_sq, piece, max_tier)
                board.convert(move.to_sq, tiers)
                for converted in move.captured:
                    hands = debit_hand(hands, color, converted.piece.kind)
            else:
                board.put(move.to_sq, piece, max_tier)

        white_drafting = bool(drafting & DraftRights.WHITE)
        black_drafting = bool(drafting & DraftRights.BLACK)
        if white_drafting == black_drafting:
            turn = self.turn.opposite
        else:
            turn = Color.WHITE if white_drafting else Color.BLACK

        move_number = self.move_number
        if color == Color.BLACK and (not white_drafting or not black_drafting):
            move_number += 1
        elif color == Color.WHITE and move.draft_finished:
            move_number += 1

        return Position(board, hands, turn, self.mode, drafting, move_number)
