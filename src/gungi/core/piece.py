"""Piece value objects."""

from __future__ import annotations

from dataclasses import dataclass

from gungi.core.enums import Color, PieceKind
from gungi.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a Gungi piece.

    A piece never stores where it stands: square and tier always come
    from the tower that holds it.
    """

    color: Color
    kind: PieceKind

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Encoding letter (uppercase = white, lowercase = black)."""
        code = self.kind.fen_code
        return code.upper() if self.color == Color.WHITE else code

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from its letter, e.g. 'G' → white general."""
        if len(char) != 1 or not char.isalpha():
            raise ValueError(f"Invalid piece character: {char!r}")
        kind = PieceKind.from_fen_code(char)
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(color, kind)

    @property
    def glyph(self) -> str:
        return self.kind.glyph


@dataclass(frozen=True, slots=True)
class PlacedPiece:
    """A piece together with the square and tier it occupies."""

    square: Square
    tier: int
    piece: Piece

    def __str__(self) -> str:
        return f"{self.piece}@{square_name(self.square)}-{self.tier}"


@dataclass(frozen=True, slots=True)
class HandEntry:
    """Pieces of one kind waiting in a player's hand."""

    color: Color
    kind: PieceKind
    count: int

    def __str__(self) -> str:
        return f"{Piece(self.color, self.kind)}{self.count}"
