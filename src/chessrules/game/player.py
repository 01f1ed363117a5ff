"""Player: score, history and the move executor."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chessrules.core.enums import PROMOTION_TYPES, Color, MoveType, PieceType
from chessrules.core.errors import (
    EmptySquareError,
    HistoryOverflowError,
    IllegalMoveError,
    KingCaptureError,
)
from chessrules.core.history import DEFAULT_CAPACITY, BoundedStack
from chessrules.core.piece import King, Knight, Pawn, Piece, create_piece
from chessrules.core.rules import Rules
from chessrules.core.types import Square
from chessrules.game.config import MAX_CAPTURES
from chessrules.game.state import MoveRecord

if TYPE_CHECKING:
    from chessrules.core.board import Board
    from chessrules.core.move import Move

_LOGGER = logging.getLogger(__name__)


class Player:
    """One side of the game.

    :meth:`make_move` is the move executor: it checks the preconditions of
    the move type, applies it through the board, credits material and logs
    a :class:`MoveRecord`. It does not check whether the move is legal in
    the position; the controller does that before calling it.
    """

    __slots__ = ("_color", "_name", "score", "history", "captured", "king_square")

    def __init__(
        self,
        color: Color,
        name: str,
        history_capacity: int = DEFAULT_CAPACITY,
        captured_capacity: int = MAX_CAPTURES,
    ) -> None:
        if not name:
            raise ValueError("Please provide a name to create a player")
        self._color = color
        self._name = name
        self.score = 0
        self.history: BoundedStack[MoveRecord] = BoundedStack(history_capacity)
        self.captured: BoundedStack[Piece] = BoundedStack(captured_capacity)
        # Cached so check queries need no board scan.
        self.king_square = Square(color.back_rank, 4)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def last_move(self) -> MoveRecord | None:
        return None if self.history.is_empty() else self.history.peek()

    # ── Selection ────────────────────────────────────────────────────────

    def select_piece(self, board: Board, sq: Square) -> list[Move] | None:
        """Legal moves of own piece on *sq*, or None if it cannot be selected."""
        piece = board[sq]
        if piece is None or piece.captured or piece.color != self._color:
            return None
        moves = Rules.legal_moves(board, sq)
        if isinstance(piece, Knight) and piece.is_pinned:
            return None
        return moves

    # ── Check state ──────────────────────────────────────────────────────

    def locate_king(self, board: Board) -> King:
        """Own king, resyncing the cached square from the board when stale."""
        king = board[self.king_square]
        if not isinstance(king, King) or king.color != self._color:
            self.king_square = board.king_square(self._color)
            king = board[self.king_square]
            assert isinstance(king, King)
        return king

    def is_in_check(self, board: Board) -> bool:
        return self.locate_king(board).scan_threats(board).in_check

    def is_in_double_check(self, board: Board) -> bool:
        return self.locate_king(board).scan_threats(board).in_double_check

    # ── Move executor ────────────────────────────────────────────────────

    def make_move(
        self,
        board: Board,
        origin: Square,
        move: Move | None,
        promotion: PieceType | str | None = None,
    ) -> MoveRecord:
        """Apply *move* for the piece on *origin* and return the history record."""
        if move is None:
            raise IllegalMoveError("Move could not be registered")
        mover = board[origin]
        if mover is None:
            raise EmptySquareError(f"No piece on current position {origin.key}")
        if mover.color != self._color:
            raise IllegalMoveError(
                f"Piece on {origin.key} belongs to {mover.color}, not {self._color}"
            )
        if self.history.is_full():
            raise HistoryOverflowError(
                f"Move history is full ({self.history.capacity} moves)"
            )

        target = move.target
        occupant = board[target]
        taken: Piece | None = None
        promo_type: PieceType | None = None

        match move.move_type:
            case MoveType.ADVANCE:
                self._require_empty(occupant, target)
                mover.move_to(board, target)

            case MoveType.ADVANCE_TWICE:
                if not isinstance(mover, Pawn):
                    raise IllegalMoveError(
                        "Advance twice attempt on piece that is not a Pawn"
                    )
                self._require_empty(occupant, target)
                mover.first_move_counter = board.move_counter
                mover.move_to(board, target)

            case MoveType.CAPTURE:
                taken = self._capture_target(occupant, target)
                taken.mark_captured()
                mover.move_to(board, target)

            case MoveType.PROMOTE | MoveType.PROMOTE_WITH_CAPTURE:
                if not isinstance(mover, Pawn):
                    raise IllegalMoveError("Invalid promotion attempt: mover is not a Pawn")
                promo_type = self._promotion_type(promotion)
                if move.move_type is MoveType.PROMOTE_WITH_CAPTURE:
                    taken = self._capture_target(occupant, target)
                else:
                    self._require_empty(occupant, target)
                promoted = create_piece(promo_type, self._color, target)
                if taken is not None:
                    taken.mark_captured()
                mover.move_to(board, target)
                board.promote(target, promoted)
                mover.promoted = True
                # The pawn's own point is swapped out for the new piece.
                self.score += promoted.value - 1

            case MoveType.EN_PASSANT:
                if not isinstance(mover, Pawn):
                    raise IllegalMoveError("En passant attempt on piece that is not a Pawn")
                self._require_empty(occupant, target)
                victim_sq = Square(origin.rank, target.file)
                victim = board[victim_sq]
                if not isinstance(victim, Pawn) or victim.color == self._color:
                    raise IllegalMoveError(
                        f"En passant only allowed on an enemy pawn, found {victim!r}"
                    )
                self._require_capture_room()
                taken = victim
                taken.mark_captured()
                board.remove(victim_sq)
                mover.move_to(board, target)

            case MoveType.CASTLE:
                if not isinstance(mover, King):
                    raise IllegalMoveError("Castling attempt on piece that is not a King")
                mover.castle(board, target)

            case _:
                raise IllegalMoveError(
                    f"Invalid move type {move.move_type}, cannot play move"
                )

        if taken is not None:
            self.score += taken.value
            self.captured.push(taken)

        if isinstance(mover, King):
            self.king_square = mover.square

        record = MoveRecord(
            origin=origin,
            move=move,
            piece=mover,
            captured_piece=taken,
            promotion=promo_type,
            score=self.score,
            captured=self.captured.snapshot(),
        )
        self.history.push(record)
        _LOGGER.debug(
            "%s (%s) played %s from %s, score %d",
            self._name,
            self._color,
            move,
            origin.key,
            self.score,
        )
        return record

    # ── Precondition helpers ─────────────────────────────────────────────

    @staticmethod
    def _require_empty(occupant: Piece | None, target: Square) -> None:
        if occupant is not None:
            raise IllegalMoveError(f"Target square {target.key} is occupied")

    def _require_capture_room(self) -> None:
        if self.captured.is_full():
            raise HistoryOverflowError(
                f"Captured pieces stack is full ({self.captured.capacity})"
            )

    def _capture_target(self, occupant: Piece | None, target: Square) -> Piece:
        if occupant is None:
            raise IllegalMoveError(f"Opposing piece not found on {target.key}")
        if occupant.piece_type is PieceType.KING:
            raise KingCaptureError("King cannot be captured")
        if occupant.color == self._color:
            raise IllegalMoveError(f"Cannot capture own piece on {target.key}")
        self._require_capture_room()
        return occupant

    @staticmethod
    def _promotion_type(promotion: PieceType | str | None) -> PieceType:
        if promotion is None:
            raise IllegalMoveError("Please provide promotion piece type")
        try:
            piece_type = PieceType.parse(promotion)
        except ValueError as exc:
            raise IllegalMoveError(str(exc)) from None
        if piece_type not in PROMOTION_TYPES:
            raise IllegalMoveError(f"Cannot promote to a {piece_type.name.capitalize()}")
        return piece_type

    def __repr__(self) -> str:
        return f"Player({self._name!r}, {self._color}, score={self.score})"
