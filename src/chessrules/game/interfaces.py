"""Abstract interfaces for the game layer.

The transport layer (sockets, HTTP, a UI) talks to a game only through
:class:`IGameController`; squares and moves cross that boundary in their
wire form.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import IntEnum, auto
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from chessrules.core.enums import PieceType
    from chessrules.core.move import Move
    from chessrules.core.piece import Piece
    from chessrules.core.types import Square


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    GAME_OVER = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameController(ABC):
    """Engine-facing operations consumed by the transport layer."""

    @abstractmethod
    def get_legal_moves(self, position: str) -> list[dict[str, str]] | None:
        """Legal moves of the piece on *position*, None if it is not selectable."""

    @abstractmethod
    def make_move(
        self,
        position: str,
        move: Mapping[str, Any] | Move,
        promotion: str | PieceType | None = None,
    ) -> None:
        """Play *move* for the piece on *position*; raises on failure."""

    @abstractmethod
    def get_board(self) -> Mapping[Square, Piece | None]:
        """Read-only snapshot of all 64 squares."""

    @abstractmethod
    def reset_game(self) -> None:
        """Start over with a fresh board and fresh players."""
