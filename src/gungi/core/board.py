"""Board - towers of up to three pieces on a 9x9 grid."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from gungi.core.enums import Color, PieceKind
from gungi.core.errors import InvariantViolation, SquareOutOfBoundsError
from gungi.core.piece import Piece, PlacedPiece
from gungi.core.types import SQUARE_COUNT, Square, is_valid_square, rank_of

MAX_TIER = 3


class Board:
    """Mutable 81-square board; each square holds a bottom-first tower."""

    __slots__ = ("_towers",)

    def __init__(self) -> None:
        self._towers: list[list[Piece]] = [[] for _ in range(SQUARE_COUNT)]

    @staticmethod
    def _check(sq: Square) -> None:
        if not is_valid_square(sq):
            raise SquareOutOfBoundsError(f"Square index out of bounds: {sq}")

    # -- Element access -----------------------------------------------------

    def tower_at(self, sq: Square) -> tuple[Piece, ...]:
        """Pieces on *sq*, bottom first."""
        self._check(sq)
        return tuple(self._towers[sq])

    def height(self, sq: Square) -> int:
        self._check(sq)
        return len(self._towers[sq])

    def top_of(self, sq: Square) -> Piece | None:
        self._check(sq)
        tower = self._towers[sq]
        return tower[-1] if tower else None

    def is_empty(self, sq: Square) -> bool:
        self._check(sq)
        return not self._towers[sq]

    # -- Query helpers ------------------------------------------------------

    def placed_pieces(self) -> Iterator[PlacedPiece]:
        """Every piece on the board with its square and tier."""
        for sq, tower in enumerate(self._towers):
            for tier, piece in enumerate(tower, start=1):
                yield PlacedPiece(sq, tier, piece)

    def pieces(self, color: Color) -> list[PlacedPiece]:
        return [p for p in self.placed_pieces() if p.piece.color == color]

    def top_squares(self, color: Color) -> list[Square]:
        """Squares whose top piece belongs to *color*."""
        return [
            sq for sq, tower in enumerate(self._towers) if tower and tower[-1].color == color
        ]

    def marshal_squares(self, color: Color) -> list[Square]:
        """Squares holding a marshal of *color* at any tier."""
        return [
            p.square
            for p in self.placed_pieces()
            if p.piece.color == color and p.piece.kind == PieceKind.MARSHAL
        ]

    def marshal_square(self, color: Color) -> Square | None:
        squares = self.marshal_squares(color)
        return squares[0] if squares else None

    def color_occupies_rank(self, color: Color, rank: int) -> bool:
        return any(
            rank_of(p.square) == rank for p in self.placed_pieces() if p.piece.color == color
        )

    def piece_count(self) -> int:
        return sum(len(tower) for tower in self._towers)

    # -- Mutation / copying -------------------------------------------------

    def put(self, sq: Square, piece: Piece, max_tier: int = MAX_TIER) -> int:
        """Stack *piece* on top of *sq* and return the tier it lands on."""
        self._check(sq)
        tower = self._towers[sq]
        if len(tower) >= max_tier:
            raise InvariantViolation(
                f"Tower on square {sq} is already {len(tower)} high (max {max_tier})"
            )
        tower.append(piece)
        return len(tower)

    def remove_top(self, sq: Square) -> Piece:
        self._check(sq)
        tower = self._towers[sq]
        if not tower:
            raise InvariantViolation(f"No piece on square {sq}")
        return tower.pop()

    def remove_tiers(self, sq: Square, tiers: Iterable[int]) -> list[Piece]:
        """Remove pieces at *tiers* from *sq*; survivors drop down."""
        self._check(sq)
        tower = self._towers[sq]
        doomed = set(tiers)
        if any(not 1 <= t <= len(tower) for t in doomed):
            raise InvariantViolation(f"Invalid tiers {sorted(doomed)} on square {sq}")
        removed = [p for t, p in enumerate(tower, start=1) if t in doomed]
        self._towers[sq] = [p for t, p in enumerate(tower, start=1) if t not in doomed]
        return removed

    def convert(self, sq: Square, tiers: Iterable[int]) -> None:
        """Flip the color of the pieces at *tiers* on *sq*."""
        self._check(sq)
        tower = self._towers[sq]
        for tier in tiers:
            if not 1 <= tier <= len(tower):
                raise InvariantViolation(f"Invalid tier {tier} on square {sq}")
            piece = tower[tier - 1]
            tower[tier - 1] = Piece(piece.color.opposite, piece.kind)

    def copy(self) -> Board:
        b = Board()
        b._towers = [tower.copy() for tower in self._towers]
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._towers == other._towers

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(9):
            cells = []
            for file in range(8, -1, -1):
                tower = self._towers[rank * 9 + file]
                cells.append("".join(str(p) for p in tower).ljust(3, "."))
            rows.append(f"{rank + 1} {' '.join(cells)}")
        return "\n".join(rows)
