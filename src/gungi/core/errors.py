"""Exception hierarchy for the rules engine."""

from __future__ import annotations


class GungiError(Exception):
    """Base class for every error raised by the engine."""


class MalformedPositionError(GungiError, ValueError):
    """A position encoding failed validation."""


class IllegalMoveError(GungiError, ValueError):
    """A move was submitted that is not among the legal moves."""


class InvariantViolation(GungiError, RuntimeError):
    """Internal state broke a board or hand invariant (engine bug)."""


class SquareOutOfBoundsError(InvariantViolation, ValueError):
    """A square index or coordinate lies outside the 9x9 board."""
