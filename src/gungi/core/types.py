"""Square type alias and coordinate helpers.

Board layout (rank-major, both coordinates 1-based as printed):
    1-1=0, 1-2=1, ..., 1-9=8
    2-1=9, ...
    ...
    9-1=72, ..., 9-9=80

White advances toward rank 1, black toward rank 9.
"""

from __future__ import annotations

from typing import TypeAlias

from gungi.core.errors import SquareOutOfBoundsError

Square: TypeAlias = int  # 0–80

BOARD_SIZE = 9
SQUARE_COUNT = BOARD_SIZE * BOARD_SIZE


def is_on_board(rank: int, file: int) -> bool:
    return 1 <= rank <= BOARD_SIZE and 1 <= file <= BOARD_SIZE


def is_valid_square(sq: int) -> bool:
    """Check whether integer is a valid square index."""
    return 0 <= sq < SQUARE_COUNT


def make_square(rank: int, file: int) -> Square:
    """Create square from rank (1–9) and file (1–9)."""
    if not is_on_board(rank, file):
        raise SquareOutOfBoundsError(f"Square out of bounds: {rank}-{file}")
    return (rank - 1) * BOARD_SIZE + (file - 1)


def rank_of(sq: Square) -> int:
    """Rank 1–9."""
    return sq // BOARD_SIZE + 1


def file_of(sq: Square) -> int:
    """File 1–9."""
    return sq % BOARD_SIZE + 1


def offset(sq: Square, d_rank: int, d_file: int) -> Square | None:
    """Square shifted by the given deltas, or ``None`` if it falls off the board."""
    rank = rank_of(sq) + d_rank
    file = file_of(sq) + d_file
    if not is_on_board(rank, file):
        return None
    return (rank - 1) * BOARD_SIZE + (file - 1)


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. 0 → '1-1', 80 → '9-9'."""
    return f"{rank_of(sq)}-{file_of(sq)}"


def parse_square(name: str) -> Square:
    """Parse square name, e.g. '5-5' → 40."""
    rank_text, sep, file_text = name.partition("-")
    if not sep or not rank_text.isdigit() or not file_text.isdigit():
        raise ValueError(f"Invalid square name: {name!r}")
    return make_square(int(rank_text), int(file_text))


def chebyshev_distance(a: Square, b: Square) -> int:
    return max(abs(rank_of(a) - rank_of(b)), abs(file_of(a) - file_of(b)))

