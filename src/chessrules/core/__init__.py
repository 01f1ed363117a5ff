"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chessrules.core import Board, Rules, parse_square

    board = Board.initial()
    for move in Rules.legal_moves(board, parse_square("14")):
        print(move.to_dict())
"""

from chessrules.core.attacks import Pin, ThreatScan
from chessrules.core.board import Board
from chessrules.core.enums import (
    Color,
    Direction,
    GameResult,
    MoveType,
    PieceType,
    PinAxis,
)
from chessrules.core.errors import (
    ChessError,
    EmptySquareError,
    GameOverError,
    HistoryOverflowError,
    HistoryUnderflowError,
    IllegalMoveError,
    InvalidSquareError,
    KingCaptureError,
)
from chessrules.core.history import BoundedStack
from chessrules.core.move import Move
from chessrules.core.piece import (
    Bishop,
    King,
    Knight,
    Pawn,
    Piece,
    Queen,
    Rook,
    create_piece,
)
from chessrules.core.rules import Rules
from chessrules.core.types import Square, parse_square, square_key

__all__ = [
    # Enums
    "Color",
    "Direction",
    "GameResult",
    "MoveType",
    "PieceType",
    "PinAxis",
    # Errors
    "ChessError",
    "EmptySquareError",
    "GameOverError",
    "HistoryOverflowError",
    "HistoryUnderflowError",
    "IllegalMoveError",
    "InvalidSquareError",
    "KingCaptureError",
    # Types / helpers
    "Square",
    "parse_square",
    "square_key",
    # Domain objects
    "Board",
    "BoundedStack",
    "Move",
    "Pin",
    "ThreatScan",
    "Rules",
    # Pieces
    "Piece",
    "Pawn",
    "Knight",
    "Bishop",
    "Rook",
    "Queen",
    "King",
    "create_piece",
]
