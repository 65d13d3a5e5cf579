"""Move notation: rendering and parsing.

A coordinate is written ``(rank-file-tier)``.  Examples::

    兵(7-1-1)(6-1-1)          route
    中(4-9-1)(5-8-2)付        tsuke (stack)
    小(7-5-2)取(5-5-1)        capture
    謀(4-9-2)(5-8-3)返中槍    tactician stack converting two pieces
    新小(7-2-1)               placement from hand
    新兵(4-2-1)終             placement that ends the player's draft

After a move is played, ``#`` (checkmate), ``+`` (check) and ``停``
(draw) may be appended.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import TYPE_CHECKING

from gungi.core.enums import MoveType
from gungi.core.errors import IllegalMoveError
from gungi.core.types import Square, file_of, rank_of

if TYPE_CHECKING:
    from gungi.core.move import Move
    from gungi.core.position import Position

TSUKE = "付"
TAKE = "取"
BETRAY = "返"
ARATA = "新"
DRAFT_FINISHED = "終"
CHECK = "+"
CHECKMATE = "#"
DRAW = "停"

_GLYPHS = "帥大中小侍槍馬忍砦兵砲弓筒謀"
_COORD = r"\([1-9]-[1-9]-[1-3]\)"
_NOTATION_RE = re.compile(
    rf"(?:{ARATA}[{_GLYPHS}]{_COORD}{TSUKE}?{DRAFT_FINISHED}?"
    rf"|[{_GLYPHS}]{_COORD}(?:{_COORD}{TSUKE}?|{TAKE}{_COORD}|{_COORD}{BETRAY}[{_GLYPHS}]{{1,2}}))"
)
_MARKERS = CHECK + CHECKMATE + DRAW


def _coord(sq: Square, tier: int) -> str:
    return f"({rank_of(sq)}-{file_of(sq)}-{tier})"


def move_to_notation(move: Move) -> str:
    """Render *move* without check or draw markers."""
    glyph = move.kind.glyph
    target = _coord(move.to_sq, move.to_tier)

    if move.is_placement:
        text = f"{ARATA}{glyph}{target}"
        if move.to_tier > 1:
            text += TSUKE
        if move.draft_finished:
            text += DRAFT_FINISHED
        return text

    assert move.from_sq is not None and move.from_tier is not None
    origin = _coord(move.from_sq, move.from_tier)
    if move.move_type == MoveType.CAPTURE:
        return f"{glyph}{origin}{TAKE}{target}"
    if move.move_type == MoveType.BETRAY:
        converted = "".join(p.piece.glyph for p in sorted(move.captured, key=lambda p: p.tier))
        return f"{glyph}{origin}{target}{BETRAY}{converted}"
    if move.move_type == MoveType.TSUKE:
        return f"{glyph}{origin}{target}{TSUKE}"
    return f"{glyph}{origin}{target}"


def strip_markers(text: str) -> str:
    """Drop trailing check, checkmate and draw markers."""
    return text.strip().rstrip(_MARKERS)


def is_well_formed(text: str) -> bool:
    return _NOTATION_RE.fullmatch(strip_markers(text)) is not None


def parse_notation(position: Position, text: str) -> Move:
    """Find the legal move in *position* written as *text*.

    Raises :class:`IllegalMoveError` if the text is malformed or names a
    move that is not legal.
    """
    from gungi.core.move_generator import MoveGenerator

    wanted = strip_markers(text)
    if _NOTATION_RE.fullmatch(wanted) is None:
        raise IllegalMoveError(f"Invalid move notation: {text!r}")
    for move in MoveGenerator(position).generate_legal_moves():
        if move_to_notation(move) == wanted:
            return move
    raise IllegalMoveError(f"Illegal move: {text!r}")


def terminal_suffix(position: Position, history: Sequence[Move] = ()) -> str:
    """Markers for the position reached after a move.

    ``#`` for checkmate or ``+`` for check, followed by ``停`` for a draw.
    """
    from gungi.core.rules import Rules

    suffix = ""
    if Rules.is_checkmate(position):
        suffix = CHECKMATE
    elif Rules.is_in_check(position):
        suffix = CHECK
    if Rules.is_draw(position, history):
        suffix += DRAW
    return suffix
