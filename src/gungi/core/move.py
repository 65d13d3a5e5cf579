"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass, field

from gungi.core.enums import Color, MoveType, PieceKind
from gungi.core.piece import PlacedPiece
from gungi.core.types import Square


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single Gungi move.

    ``from_sq``/``from_tier`` are ``None`` for placements from hand.
    ``before``/``after`` carry the position encodings around the move and
    take no part in equality.
    """

    color: Color
    kind: PieceKind
    move_type: MoveType
    to_sq: Square
    to_tier: int
    from_sq: Square | None = None
    from_tier: int | None = None
    captured: tuple[PlacedPiece, ...] = ()
    draft_finished: bool = False
    before: str = field(default="", compare=False, repr=False)
    after: str = field(default="", compare=False, repr=False)

    # ── Classification ───────────────────────────────────────────────────

    @property
    def is_placement(self) -> bool:
        return self.move_type == MoveType.ARATA

    @property
    def is_capture(self) -> bool:
        return self.move_type == MoveType.CAPTURE

    # ── Display ──────────────────────────────────────────────────────────

    @property
    def notation(self) -> str:
        """Move notation without check or draw markers."""
        from gungi.core.notation.kifu import move_to_notation

        return move_to_notation(self)

    def __str__(self) -> str:
        return self.notation
