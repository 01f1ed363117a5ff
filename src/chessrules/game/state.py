"""Move history records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from chessrules.core.enums import PieceType
    from chessrules.core.move import Move
    from chessrules.core.piece import Piece
    from chessrules.core.types import Square


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in a player's move history.

    ``score`` and ``captured`` are the player's values right after the move;
    ``captured`` runs from most recent capture to oldest.
    """

    origin: Square
    move: Move
    piece: Piece
    captured_piece: Piece | None
    promotion: PieceType | None
    score: int
    captured: tuple[Piece, ...]

    @property
    def was_capture(self) -> bool:
        return self.captured_piece is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "currentPosition": self.origin.key,
            "move": self.move.to_dict(),
            "piece": self.piece.piece_id,
            "capturedPiece": (
                self.captured_piece.piece_id if self.captured_piece else None
            ),
            "promotionPieceType": (
                self.promotion.name.capitalize() if self.promotion else None
            ),
            "inGamePoints": self.score,
        }
