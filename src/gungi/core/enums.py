"""Core enumerations and flags for the Gungi domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def fen_char(self) -> str:
        return "w" if self == Color.WHITE else "b"

    def __str__(self) -> str:
        return self.name.lower()


class PieceKind(IntEnum):
    """The fourteen Gungi piece kinds."""

    MARSHAL = 1
    GENERAL = 2
    LIEUTENANT_GENERAL = 3
    MAJOR_GENERAL = 4
    WARRIOR = 5
    LANCER = 6
    RIDER = 7
    SPY = 8
    FORTRESS = 9
    SOLDIER = 10
    CANNON = 11
    ARCHER = 12
    MUSKETEER = 13
    TACTICIAN = 14

    @property
    def glyph(self) -> str:
        """Kanji used in move notation, e.g. 帥."""
        return _GLYPHS[self]

    @property
    def fen_code(self) -> str:
        """Lowercase letter used in the position encoding."""
        return _FEN_CODES[self]

    @property
    def english_name(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def canonical_name(self) -> str:
        """Romanised Japanese name, e.g. ``taishou``."""
        return _CANONICAL_NAMES[self]

    @classmethod
    def from_glyph(cls, glyph: str) -> PieceKind:
        try:
            return _KIND_BY_GLYPH[glyph]
        except KeyError:
            raise ValueError(f"Invalid piece glyph: {glyph!r}") from None

    @classmethod
    def from_fen_code(cls, code: str) -> PieceKind:
        try:
            return _KIND_BY_CODE[code.lower()]
        except KeyError:
            raise ValueError(f"Invalid piece letter: {code!r}") from None


_GLYPHS: dict[PieceKind, str] = {
    PieceKind.MARSHAL: "帥",
    PieceKind.GENERAL: "大",
    PieceKind.LIEUTENANT_GENERAL: "中",
    PieceKind.MAJOR_GENERAL: "小",
    PieceKind.WARRIOR: "侍",
    PieceKind.LANCER: "槍",
    PieceKind.RIDER: "馬",
    PieceKind.SPY: "忍",
    PieceKind.FORTRESS: "砦",
    PieceKind.SOLDIER: "兵",
    PieceKind.CANNON: "砲",
    PieceKind.ARCHER: "弓",
    PieceKind.MUSKETEER: "筒",
    PieceKind.TACTICIAN: "謀",
}

_FEN_CODES: dict[PieceKind, str] = {
    PieceKind.MARSHAL: "m",
    PieceKind.GENERAL: "g",
    PieceKind.LIEUTENANT_GENERAL: "i",
    PieceKind.MAJOR_GENERAL: "j",
    PieceKind.WARRIOR: "w",
    PieceKind.LANCER: "n",
    PieceKind.RIDER: "r",
    PieceKind.SPY: "s",
    PieceKind.FORTRESS: "f",
    PieceKind.SOLDIER: "d",
    PieceKind.CANNON: "c",
    PieceKind.ARCHER: "a",
    PieceKind.MUSKETEER: "k",
    PieceKind.TACTICIAN: "t",
}

_CANONICAL_NAMES: dict[PieceKind, str] = {
    PieceKind.MARSHAL: "sui",
    PieceKind.GENERAL: "taishou",
    PieceKind.LIEUTENANT_GENERAL: "chuujou",
    PieceKind.MAJOR_GENERAL: "shoushou",
    PieceKind.WARRIOR: "samurai",
    PieceKind.LANCER: "yari",
    PieceKind.RIDER: "kiba",
    PieceKind.SPY: "shinobi",
    PieceKind.FORTRESS: "toride",
    PieceKind.SOLDIER: "hyou",
    PieceKind.CANNON: "oodzutsu",
    PieceKind.ARCHER: "yumi",
    PieceKind.MUSKETEER: "tsutsu",
    PieceKind.TACTICIAN: "boushou",
}

_KIND_BY_GLYPH: dict[str, PieceKind] = {v: k for k, v in _GLYPHS.items()}
_KIND_BY_CODE: dict[str, PieceKind] = {v: k for k, v in _FEN_CODES.items()}


class MoveType(IntEnum):
    """How a move changes the board."""

    ROUTE = 0  # onto an empty square
    TSUKE = 1  # stack onto a tower without capturing
    CAPTURE = 2
    BETRAY = 3  # tactician stack that converts enemy pieces
    ARATA = 4  # place from hand


class SetupMode(IntEnum):
    """Game setup mode, fixed for the whole game."""

    INTRO = 0
    BEGINNER = 1
    INTERMEDIATE = 2
    ADVANCED = 3

    @property
    def max_tier(self) -> int:
        return 2 if self <= SetupMode.BEGINNER else 3

    @property
    def has_draft(self) -> bool:
        return self >= SetupMode.INTERMEDIATE

    @property
    def marshal_may_stack(self) -> bool:
        """Whether a marshal may itself stack onto another tower."""
        return self >= SetupMode.INTERMEDIATE


class DraftRights(IntFlag):
    """Bitmask of colors still placing their army."""

    NONE = 0
    WHITE = auto()
    BLACK = auto()

    BOTH = WHITE | BLACK

    @classmethod
    def for_color(cls, color: Color) -> DraftRights:
        return cls.WHITE if color == Color.WHITE else cls.BLACK


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3
