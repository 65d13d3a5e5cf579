"""Probe tables and the scan that turns them into reachable squares.

Every kind is described by one entry per direction.  An entry is either
``0`` (no movement), an integer ``d`` (start ``d`` squares away), a pair
``(d, carry)`` or :data:`SLIDE`.  The scan length grows with the tier the
piece stands on: ``tier + carry - 1`` squares, where a bare integer has a
carry of one.  Sliders start on the adjacent square and run to the edge.

Tables are written from white's side (forward = towards rank 1); black
mirrors the rank delta.
"""

from __future__ import annotations

from typing import TypeAlias

from gungi.core.board import Board
from gungi.core.enums import Color, PieceKind
from gungi.core.types import BOARD_SIZE, Square, offset

SLIDE = -1

Probe: TypeAlias = int | tuple[int, int]

# (d_rank, d_file) in white's frame
DIRECTIONS: tuple[tuple[int, int], ...] = (
    (-1, 1),
    (-1, 0),
    (-1, -1),
    (0, 1),
    (0, -1),
    (1, 1),
    (1, 0),
    (1, -1),
)

PROBES: dict[PieceKind, tuple[Probe, ...]] = {
    PieceKind.MARSHAL: (1, 1, 1, 1, 1, 1, 1, 1),
    PieceKind.GENERAL: (1, SLIDE, 1, SLIDE, SLIDE, 1, SLIDE, 1),
    PieceKind.LIEUTENANT_GENERAL: (SLIDE, 1, SLIDE, 1, 1, SLIDE, 1, SLIDE),
    PieceKind.MAJOR_GENERAL: (1, 1, 1, 1, 1, 0, 1, 0),
    PieceKind.WARRIOR: (1, 1, 1, 0, 0, 0, 1, 0),
    PieceKind.LANCER: (1, (1, 2), 1, 0, 0, 0, 1, 0),
    PieceKind.RIDER: (0, (1, 2), 0, 1, 1, 0, (1, 2), 0),
    PieceKind.SPY: ((1, 2), 0, (1, 2), 0, 0, (1, 2), 0, (1, 2)),
    PieceKind.FORTRESS: (0, 1, 0, 1, 1, 1, 0, 1),
    PieceKind.SOLDIER: (0, 1, 0, 0, 0, 0, 1, 0),
    PieceKind.CANNON: (0, 3, 0, 1, 1, 0, 1, 0),
    PieceKind.ARCHER: (2, 2, 2, 0, 0, 0, 1, 0),
    PieceKind.MUSKETEER: (0, 2, 0, 0, 0, 1, 0, 1),
    PieceKind.TACTICIAN: (1, 0, 1, 0, 0, 0, 1, 0),
}

# Kinds that keep scanning past an occupied square.
LEAPERS: frozenset[PieceKind] = frozenset(
    {PieceKind.CANNON, PieceKind.MUSKETEER, PieceKind.ARCHER}
)


def _top_tier_above(board: Board, sq: Square, tier: int) -> bool:
    return board.height(sq) > tier


def _scan(
    board: Board,
    origin: Square,
    direction: tuple[int, int],
    base: int,
    length: int,
    kind: PieceKind,
    tier: int,
) -> list[Square]:
    d_rank, d_file = direction
    start = offset(origin, base * d_rank, base * d_file)
    if start is None:
        return []

    # A taller tower between origin and start blocks the whole direction.
    for k in range(base - 1, 0, -1):
        between = offset(origin, k * d_rank, k * d_file)
        if between is not None and _top_tier_above(board, between, tier):
            return []

    squares: list[Square] = []
    current: Square | None = start
    for _ in range(length):
        if current is None:
            break
        if _top_tier_above(board, current, tier):
            break
        squares.append(current)
        if not board.is_empty(current) and kind not in LEAPERS:
            break
        current = offset(current, d_rank, d_file)
    return squares


def reachable_squares(board: Board, sq: Square) -> list[Square]:
    """Squares the top piece on *sq* can move to or attack.

    Only the top of a tower is active; an empty square reaches nothing.
    """
    tower = board.tower_at(sq)
    if not tower:
        return []
    piece = tower[-1]
    tier = len(tower)
    rank_sign = 1 if piece.color == Color.WHITE else -1

    squares: list[Square] = []
    for (d_rank, d_file), probe in zip(DIRECTIONS, PROBES[piece.kind]):
        if probe == 0:
            continue
        if probe == SLIDE:
            base, length = 1, BOARD_SIZE
        elif isinstance(probe, tuple):
            base, carry = probe
            length = tier + carry - 1
        else:
            base, length = probe, tier
        squares.extend(
            _scan(board, sq, (d_rank * rank_sign, d_file), base, length, piece.kind, tier)
        )
    return squares


def attacks(board: Board, color: Color) -> set[Square]:
    """Every square reachable by a tower topped by *color*."""
    covered: set[Square] = set()
    for sq in board.top_squares(color):
        covered.update(reachable_squares(board, sq))
    return covered
