"""Game state machine: tracks phase transitions and move history."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from gungi.core.enums import Color, GameResult, MoveType
from gungi.core.errors import IllegalMoveError
from gungi.core.move import Move
from gungi.core.move_generator import MoveGenerator
from gungi.core.notation import (
    parse_notation,
    position_from_fen,
    position_to_fen,
    terminal_suffix,
)
from gungi.core.piece import HandEntry, Piece
from gungi.core.position import Position
from gungi.core.rules import Rules
from gungi.game.interfaces import GameEndReason, GamePhase
from gungi.game.settings import GameSettings

_LOGGER = logging.getLogger(__name__)


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    notation: str
    fen_after: str
    was_check: bool = False
    was_capture: bool = False


@dataclass
class GameState:
    """Manages game lifecycle: phase, result, move history.

    This is a pure data/logic class with no threading and no UI.
    """

    settings: GameSettings = field(default_factory=GameSettings)
    position: Position = field(init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    result: GameResult = field(default=GameResult.IN_PROGRESS, init=False)
    end_reason: GameEndReason = field(default=GameEndReason.NONE, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)
    start_fen: str = field(default="", init=False)

    def __post_init__(self) -> None:
        self.start_fen = self.settings.initial_fen
        self.position = position_from_fen(self.start_fen)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, source: GameSettings | str | None = None) -> None:
        """Initialise (or reset) the game from settings or an encoding."""
        if isinstance(source, GameSettings):
            self.settings = source
            self.start_fen = source.initial_fen
        elif isinstance(source, str):
            self.start_fen = source
        else:
            self.start_fen = self.settings.initial_fen

        self.position = position_from_fen(self.start_fen)
        self.result = GameResult.IN_PROGRESS
        self.end_reason = GameEndReason.NONE
        self.move_history.clear()
        self._update_phase()
        _LOGGER.debug("New game (%s): %s", self.position.mode.name.lower(), self.start_fen)

    def load(self, fen: str) -> None:
        self.setup(fen)

    def reset(self) -> None:
        """Restart from the same start position."""
        self.setup(self.start_fen)

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move) -> MoveRecord:
        """Validate and apply *move*, returning the history record.

        Raises :class:`IllegalMoveError` (leaving the state untouched) when
        the game is not running or *move* is not legal here.
        """
        if self.phase in (GamePhase.NOT_STARTED, GamePhase.GAME_OVER):
            _LOGGER.warning("Move %s rejected: game phase is %s", move, self.phase.name)
            raise IllegalMoveError(f"No moves allowed in phase {self.phase.name}")

        legal = next((m for m in self.legal_moves() if m == move), None)
        if legal is None:
            _LOGGER.warning("Illegal move rejected: %s", move)
            raise IllegalMoveError(f"Illegal move: {move}")

        position = self.position.apply_move(legal)
        history = [*self.history_moves, legal]

        notation = legal.notation
        if self.settings.annotate_terminal:
            notation += terminal_suffix(position, history)

        record = MoveRecord(
            move=legal,
            notation=notation,
            fen_after=position_to_fen(position),
            was_check=Rules.is_in_check(position),
            was_capture=legal.move_type == MoveType.CAPTURE,
        )
        self.move_history.append(record)
        self.position = position
        _LOGGER.debug("Move %d: %s", self.ply_count, notation)

        self._update_phase()
        return record

    def apply_notation(self, text: str) -> MoveRecord:
        """Apply the move written as *text* (markers are ignored)."""
        try:
            move = parse_notation(self.position, text)
        except IllegalMoveError:
            _LOGGER.warning("Illegal move rejected: %s", text)
            raise
        return self.apply_move(move)

    def undo_last_move(self) -> Move | None:
        """Undo the last move. Returns the undone Move, or None if empty."""
        if not self.move_history:
            return None

        record = self.move_history.pop()
        self.position = position_from_fen(record.move.before)

        # Reset result if we un-did a game-ending move
        self.result = GameResult.IN_PROGRESS
        self.end_reason = GameEndReason.NONE
        self._update_phase()
        return record.move

    # ── Resignation ──────────────────────────────────────────────────────

    def resign(self, color: Color) -> None:
        self.result = (
            GameResult.BLACK_WINS if color == Color.WHITE else GameResult.WHITE_WINS
        )
        self.end_reason = GameEndReason.RESIGNATION
        self.phase = GamePhase.GAME_OVER
        _LOGGER.info("%s resigned", str(color).capitalize())

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def fen(self) -> str:
        return position_to_fen(self.position)

    @property
    def side_to_move(self) -> Color:
        return self.position.turn

    @property
    def in_draft(self) -> bool:
        return self.position.in_draft

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    @property
    def history_moves(self) -> list[Move]:
        return [record.move for record in self.move_history]

    def notation_history(self) -> list[str]:
        return [record.notation for record in self.move_history]

    def hand(self, color: Color) -> tuple[HandEntry, ...]:
        return self.position.hand(color)

    def captured(self, color: Color) -> list[Piece]:
        """Pieces *color* has captured so far, in capture order."""
        return [
            placed.piece
            for record in self.move_history
            if record.move.color == color and record.move.move_type == MoveType.CAPTURE
            for placed in record.move.captured
        ]

    def legal_moves(self, square: int | None = None) -> list[Move]:
        """Legal moves in the current position."""
        gen = MoveGenerator(self.position)
        return gen.generate_legal_moves(square)

    def placements(self, entry: HandEntry | None = None) -> list[Move]:
        gen = MoveGenerator(self.position)
        return gen.generate_placements(entry)

    # ── Internal ─────────────────────────────────────────────────────────

    def _update_phase(self) -> None:
        history = self.history_moves
        if not Rules.is_game_over(self.position, history):
            self.phase = GamePhase.DRAFT if self.position.in_draft else GamePhase.AWAITING_MOVE
            return

        self.result = Rules.game_result(self.position, history)
        self.end_reason = self._end_reason(history)
        self.phase = GamePhase.GAME_OVER
        _LOGGER.info(
            "Game over after %d moves: %s (%s)",
            self.ply_count,
            self.result.name,
            self.end_reason.name,
        )

    def _end_reason(self, history: list[Move]) -> GameEndReason:
        position = self.position
        if Rules.is_marshal_captured(position):
            return GameEndReason.MARSHAL_CAPTURED
        if Rules.is_fourfold_repetition(position, history):
            return GameEndReason.FOURFOLD_REPETITION
        if Rules.is_insufficient_material(position):
            return GameEndReason.INSUFFICIENT_MATERIAL
        if Rules.is_in_check(position):
            return GameEndReason.CHECKMATE
        return GameEndReason.STALEMATE
