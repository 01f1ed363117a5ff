"""Exception hierarchy raised by the rules engine.

Every failure is a programmer or client-input error and is raised
synchronously; nothing in the engine retries or recovers.
"""

from __future__ import annotations


class ChessError(Exception):
    """Base class for all engine errors."""


# ── Validation ───────────────────────────────────────────────────────────────


class InvalidSquareError(ChessError, ValueError):
    """A square key or coordinate is off the board or malformed."""


# ── State preconditions ──────────────────────────────────────────────────────


class IllegalMoveError(ChessError, ValueError):
    """The requested action does not fit the current board state."""


class EmptySquareError(IllegalMoveError):
    """The action needs a piece on a square that is empty."""


class KingCaptureError(IllegalMoveError):
    """A move would take a king off the board."""


class GameOverError(IllegalMoveError):
    """A move was submitted after the game ended."""


# ── Resource limits ──────────────────────────────────────────────────────────


class HistoryOverflowError(ChessError, OverflowError):
    """A bounded stack is already at capacity."""


class HistoryUnderflowError(ChessError, IndexError):
    """A bounded stack is empty."""
