"""Position encoding: parsing, validation and serialization.

Six space-separated fields::

    placement hands turn mode draft move-number

Ranks are listed from rank 1 to rank 9, separated by ``/``; within a rank
squares run from file 9 to file 1.  Digits are runs of empty squares,
single letters are one-piece squares (uppercase = white) and multi-piece
towers are written bottom first as ``|a:b|`` or ``|a:b:c|``.  Hands are
``white/black``, each a series of letter+count pairs or ``-``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from gungi.core.board import MAX_TIER, Board
from gungi.core.enums import Color, DraftRights, PieceKind, SetupMode
from gungi.core.errors import MalformedPositionError
from gungi.core.piece import HandEntry, Piece
from gungi.core.position import Position
from gungi.core.types import BOARD_SIZE, make_square

INTRO_POSITION = (
    "3img3/1s2n2s1/d1fwdwf1d/9/9/9/D1FWDWF1D/1S2N2S1/3GMI3 "
    "J2N2R2D1/j2n2r2d1 w 0 - 1"
)
BEGINNER_POSITION = (
    "3img3/1ra1n1as1/d1fwdwf1d/9/9/9/D1FWDWF1D/1SA1N1AR1/3GMI3 "
    "J2N2S1R1D1/j2n2s1r1d1 w 1 - 1"
)
INTERMEDIATE_POSITION = (
    "9/9/9/9/9/9/9/9/9 "
    "M1G1I1J2W2N3R2S2F2D4C1A2K1T1/m1g1i1j2w2n3r2s2f2d4c1a2k1t1 w 2 wb 1"
)
ADVANCED_POSITION = (
    "9/9/9/9/9/9/9/9/9 "
    "M1G1I1J2W2N3R2S2F2D4C1A2K1T1/m1g1i1j2w2n3r2s2f2d4c1a2k1t1 w 3 wb 1"
)

_STARTING_POSITIONS: dict[SetupMode, str] = {
    SetupMode.INTRO: INTRO_POSITION,
    SetupMode.BEGINNER: BEGINNER_POSITION,
    SetupMode.INTERMEDIATE: INTERMEDIATE_POSITION,
    SetupMode.ADVANCED: ADVANCED_POSITION,
}

_DRAFT_FIELDS: dict[str, DraftRights] = {
    "-": DraftRights.NONE,
    "w": DraftRights.WHITE,
    "b": DraftRights.BLACK,
    "wb": DraftRights.BOTH,
}
_DRAFT_TOKENS: dict[DraftRights, str] = {v: k for k, v in _DRAFT_FIELDS.items()}

# |tower| , digit run, single piece, anything else
_SQUARE_TOKEN = re.compile(r"\|([^|]*)\||([0-9])|([A-Za-z])|(.)", re.DOTALL)
_HAND_PAIR = re.compile(r"([A-Za-z])([0-9])")
_MOVE_NUMBER = re.compile(r"[1-9][0-9]*")


def starting_position(mode: SetupMode) -> str:
    """Start encoding for *mode*."""
    return _STARTING_POSITIONS[SetupMode(mode)]


@dataclass(frozen=True, slots=True)
class FenValidation:
    """Outcome of :func:`validate_fen`."""

    ok: bool
    error: str | None = None

    def __bool__(self) -> bool:
        return self.ok


# ── Parsing ──────────────────────────────────────────────────────────────────


def _letter(ch: str, where: str) -> Piece:
    try:
        return Piece.from_char(ch)
    except ValueError:
        raise MalformedPositionError(f"Invalid FEN piece {ch!r} {where}") from None


def _parse_rank(text: str, rank: int) -> list[tuple[int, list[Piece]]]:
    """Return ``(file, tower)`` pairs for every occupied square of *rank*."""
    where = f"in rank {rank}"
    squares: list[tuple[int, list[Piece]]] = []
    file = BOARD_SIZE
    previous_digit = False
    for match in _SQUARE_TOKEN.finditer(text):
        tower_text, digit, letter, stray = match.groups()
        if stray is not None:
            raise MalformedPositionError(f"Invalid FEN character {stray!r} {where}")
        if digit is not None:
            if digit == "0" or previous_digit:
                raise MalformedPositionError(f"Invalid FEN empty run {where}: {text!r}")
            previous_digit = True
            file -= int(digit)
        else:
            previous_digit = False
            if tower_text is not None:
                letters = tower_text.split(":")
                if not 2 <= len(letters) <= MAX_TIER:
                    raise MalformedPositionError(
                        f"Invalid FEN tower size {len(letters)} {where}: {text!r}"
                    )
                tower = [_letter(ch, where) for ch in letters]
            else:
                tower = [_letter(letter, where)]
            if file >= 1:
                squares.append((file, tower))
            file -= 1
        if file < 0:
            break
    if file != 0:
        raise MalformedPositionError(
            f"Invalid FEN rank width (expected {BOARD_SIZE} squares) {where}: {text!r}"
        )
    return squares


def _parse_hand(text: str, color: Color) -> list[HandEntry]:
    if text == "-":
        return []
    if not text or _HAND_PAIR.sub("", text):
        raise MalformedPositionError(f"Invalid FEN hand field: {text!r}")
    entries: list[HandEntry] = []
    seen: set[PieceKind] = set()
    for ch, count_text in _HAND_PAIR.findall(text):
        piece = _letter(ch, "in hand")
        if piece.color != color:
            raise MalformedPositionError(
                f"Invalid FEN hand field (wrong case for {color}): {text!r}"
            )
        count = int(count_text)
        if count < 1:
            raise MalformedPositionError(f"Invalid FEN hand count: {text!r}")
        if piece.kind in seen:
            raise MalformedPositionError(f"Invalid FEN hand field (duplicate): {text!r}")
        seen.add(piece.kind)
        entries.append(HandEntry(color, piece.kind, count))
    return entries


def _parse(fen: str) -> Position:
    parts = fen.split(" ")
    if len(parts) != 6:
        raise MalformedPositionError(
            f"Invalid FEN (need 6 fields, got {len(parts)}): {fen!r}"
        )
    placement, hand_part, turn_part, mode_part, draft_part, number_part = parts

    # 1. Placement
    ranks = placement.split("/")
    if len(ranks) != BOARD_SIZE:
        raise MalformedPositionError(
            f"Invalid FEN board (must contain {BOARD_SIZE} ranks): {fen!r}"
        )
    board = Board()
    for rank, rank_text in enumerate(ranks, start=1):
        for file, tower in _parse_rank(rank_text, rank):
            sq = make_square(rank, file)
            for piece in tower:
                board.put(sq, piece)

    # 2. Hands
    sides = hand_part.split("/")
    if len(sides) != 2:
        raise MalformedPositionError(f"Invalid FEN hand field: {hand_part!r}")
    hands = tuple(
        _parse_hand(sides[0], Color.WHITE) + _parse_hand(sides[1], Color.BLACK)
    )

    # 3. Turn
    if turn_part == "w":
        turn = Color.WHITE
    elif turn_part == "b":
        turn = Color.BLACK
    else:
        raise MalformedPositionError(f"Invalid FEN side-to-move field: {turn_part!r}")

    # 4. Mode
    if len(mode_part) != 1 or mode_part not in "0123":
        raise MalformedPositionError(f"Invalid FEN setup mode: {mode_part!r}")
    mode = SetupMode(int(mode_part))

    # 5. Draft
    drafting = _DRAFT_FIELDS.get(draft_part)
    if drafting is None:
        raise MalformedPositionError(f"Invalid FEN draft field: {draft_part!r}")

    # 6. Move number
    if _MOVE_NUMBER.fullmatch(number_part) is None:
        raise MalformedPositionError(f"Invalid FEN move number: {number_part!r}")

    return Position(board, hands, turn, mode, drafting, int(number_part))


def validate_fen(fen: str) -> FenValidation:
    """Structural check of *fen*; never raises."""
    try:
        _parse(fen)
    except MalformedPositionError as exc:
        return FenValidation(False, str(exc))
    return FenValidation(True)


def position_from_fen(fen: str) -> Position:
    """Parse an encoding into a :class:`Position`.

    Raises :class:`MalformedPositionError` if validation fails.
    """
    return _parse(fen)


# ── Serialisation ────────────────────────────────────────────────────────────


def _placement(board: Board) -> str:
    rows: list[str] = []
    for rank in range(1, BOARD_SIZE + 1):
        empty = 0
        row = ""
        for file in range(BOARD_SIZE, 0, -1):
            tower = board.tower_at(make_square(rank, file))
            if not tower:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            if len(tower) == 1:
                row += str(tower[0])
            else:
                row += "|" + ":".join(str(p) for p in tower) + "|"
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)


def _hands(position: Position) -> str:
    sides = []
    for color in (Color.WHITE, Color.BLACK):
        entries = position.hand(color)
        sides.append("".join(str(e) for e in entries) or "-")
    return "/".join(sides)


def repetition_key(position: Position) -> str:
    """Placement and hands fields; the equality used for repetition."""
    return f"{_placement(position.board)} {_hands(position)}"


def position_to_fen(position: Position) -> str:
    """Serialise a :class:`Position`."""
    return (
        f"{repetition_key(position)} {position.turn.fen_char} "
        f"{int(position.mode)} {_DRAFT_TOKENS[position.drafting]} {position.move_number}"
    )
