"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

from dataclasses import replace
from itertools import product
from typing import TYPE_CHECKING

from gungi.core.enums import Color, MoveType, PieceKind
from gungi.core.move import Move
from gungi.core.notation.fen import position_to_fen
from gungi.core.piece import HandEntry, Piece, PlacedPiece
from gungi.core.reach import reachable_squares
from gungi.core.types import BOARD_SIZE, Square, make_square

if TYPE_CHECKING:
    from gungi.core.position import Position


HOME_RANKS: dict[Color, tuple[int, ...]] = {
    Color.WHITE: (7, 8, 9),
    Color.BLACK: (1, 2, 3),
}

# Nothing may ever be stacked on these.
_UNSTACKABLE: frozenset[PieceKind] = frozenset({PieceKind.MARSHAL, PieceKind.FORTRESS})


class MoveGenerator:
    """Generates legal moves for a given :class:`Position`.

    Candidates are simulated on a copy of the position; the position
    itself is never touched.
    """

    __slots__ = ("_pos", "_board", "_before")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board
        self._before: str | None = None

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self, square: Square | None = None) -> list[Move]:
        """All strictly legal moves for the side to move.

        With *square*, only the board moves of the tower on that square.
        """
        if square is not None:
            return self.moves_from(square)
        return self._filter_legal(self.generate_pseudo_legal_moves())

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """All pseudo-legal moves (may leave own marshal in check)."""
        pos = self._pos
        moves: list[Move] = []
        if not pos.in_draft:
            for sq in self._board.top_squares(pos.turn):
                self._gen_board_moves(sq, moves)
        for entry in pos.hand(pos.turn):
            self._gen_placements(entry, moves)
        return moves

    def moves_from(self, square: Square) -> list[Move]:
        """Legal board moves of the top piece on *square*.

        Empty when the square is empty, the top belongs to the opponent or
        the game is still in its draft.
        """
        pos = self._pos
        top = self._board.top_of(square)
        if pos.in_draft or top is None or top.color != pos.turn:
            return []
        moves: list[Move] = []
        self._gen_board_moves(square, moves)
        return self._filter_legal(moves)

    def generate_placements(self, entry: HandEntry | None = None) -> list[Move]:
        """Legal placements from hand, for every entry or just *entry*."""
        pos = self._pos
        entries = pos.hand(pos.turn) if entry is None else (entry,)
        moves: list[Move] = []
        for item in entries:
            self._gen_placements(item, moves)
        return self._filter_legal(moves)

    def placement_ranks(self, color: Color) -> tuple[int, ...]:
        """Ranks on which *color* may currently place pieces from hand."""
        pos = self._pos
        home = HOME_RANKS[color]
        if pos.is_drafting(color) or pos.marshal_in_hand(color):
            return home
        own_ranks = [
            rank
            for rank in range(1, BOARD_SIZE + 1)
            if self._board.color_occupies_rank(color, rank)
        ]
        if not own_ranks:
            return home
        if color == Color.WHITE:
            return tuple(range(min(own_ranks), BOARD_SIZE + 1))
        return tuple(range(1, max(own_ranks) + 1))

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s marshal attacked by the opponent?

        A marshal that is not on the board is never in check.
        """
        return any(
            self.is_square_attacked(sq, color.opposite)
            for sq in self._board.marshal_squares(color)
        )

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* reachable by a tower topped by *by_color*?"""
        board = self._board
        return any(sq in reachable_squares(board, origin) for origin in board.top_squares(by_color))

    # -- Legality filter ----------------------------------------------------

    def _filter_legal(self, candidates: list[Move]) -> list[Move]:
        pos = self._pos
        if self._before is None:
            self._before = position_to_fen(pos)
        legal: list[Move] = []
        for move in candidates:
            after = pos.apply_move(move)
            if MoveGenerator(after).is_in_check(move.color):
                continue
            legal.append(replace(move, before=self._before, after=position_to_fen(after)))
        return legal

    # -- Board moves --------------------------------------------------------

    def _gen_board_moves(self, sq: Square, moves: list[Move]) -> None:
        pos = self._pos
        board = self._board
        mover = board.top_of(sq)
        if mover is None:
            return
        color = mover.color
        from_tier = board.height(sq)
        max_tier = pos.mode.max_tier

        for target in reachable_squares(board, sq):
            tower = board.tower_at(target)
            if not tower:
                moves.append(
                    Move(color, mover.kind, MoveType.ROUTE, target, 1, sq, from_tier)
                )
                continue

            top = tower[-1]
            if self._may_stack(mover, tower, max_tier):
                moves.append(
                    Move(color, mover.kind, MoveType.TSUKE, target, len(tower) + 1, sq, from_tier)
                )
                if mover.kind == PieceKind.TACTICIAN and top.color != color:
                    self._gen_betrayals(sq, from_tier, target, tower, mover, moves)

            if top.color != color:
                own = [p for p in tower if p.color == color]
                if own and (mover.kind == PieceKind.FORTRESS or own[-1].kind in _UNSTACKABLE):
                    continue
                captured = tuple(
                    PlacedPiece(target, tier, p)
                    for tier, p in enumerate(tower, start=1)
                    if p.color != color
                )
                moves.append(
                    Move(
                        color,
                        mover.kind,
                        MoveType.CAPTURE,
                        target,
                        len(own) + 1,
                        sq,
                        from_tier,
                        captured,
                    )
                )

    def _may_stack(self, mover: Piece, tower: tuple[Piece, ...], max_tier: int) -> bool:
        if len(tower) >= max_tier:
            return False
        if tower[-1].kind in _UNSTACKABLE or mover.kind == PieceKind.FORTRESS:
            return False
        if mover.kind == PieceKind.MARSHAL and not self._pos.mode.marshal_may_stack:
            return False
        return True

    def _gen_betrayals(
        self,
        sq: Square,
        from_tier: int,
        target: Square,
        tower: tuple[Piece, ...],
        mover: Piece,
        moves: list[Move],
    ) -> None:
        """One move per affordable count of each enemy kind in the tower.

        Pieces of the same kind are interchangeable in notation, so the
        topmost ones of a kind are the ones converted.
        """
        pos = self._pos
        color = mover.color
        by_kind: dict[PieceKind, list[PlacedPiece]] = {}
        for tier, p in enumerate(tower, start=1):
            if p.color != color:
                by_kind.setdefault(p.kind, []).append(PlacedPiece(target, tier, p))

        choices: list[list[list[PlacedPiece]]] = []
        for kind, placed in by_kind.items():
            topmost = placed[::-1]
            affordable = min(len(placed), pos.hand_count(color, kind))
            choices.append([topmost[:n] for n in range(affordable + 1)])

        for combo in product(*choices):
            converted = tuple(sorted((p for part in combo for p in part), key=lambda p: p.tier))
            if not converted:
                continue
            moves.append(
                Move(
                    color,
                    mover.kind,
                    MoveType.BETRAY,
                    target,
                    len(tower) + 1,
                    sq,
                    from_tier,
                    converted,
                )
            )

    # -- Placements ---------------------------------------------------------

    def _gen_placements(self, entry: HandEntry, moves: list[Move]) -> None:
        pos = self._pos
        board = self._board
        color = entry.color
        kind = entry.kind
        if color != pos.turn or entry.count <= 0:
            return
        if kind != PieceKind.MARSHAL and pos.marshal_in_hand(color):
            return

        max_tier = pos.mode.max_tier
        drafting = pos.is_drafting(color)
        last_piece = pos.hand_total(color) == 1

        for rank in self.placement_ranks(color):
            for file in range(BOARD_SIZE, 0, -1):
                sq = make_square(rank, file)
                tower = board.tower_at(sq)
                if tower:
                    top = tower[-1]
                    if (
                        kind == PieceKind.FORTRESS
                        or top.color != color
                        or len(tower) >= max_tier
                        or top.kind in _UNSTACKABLE
                    ):
                        continue
                to_tier = len(tower) + 1
                if not (drafting and last_piece):
                    moves.append(Move(color, kind, MoveType.ARATA, sq, to_tier))
                if drafting:
                    moves.append(
                        Move(color, kind, MoveType.ARATA, sq, to_tier, draft_finished=True)
                    )
