"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceType
from chessrules.core.piece import Piece, create_piece
from chessrules.core.types import parse_square

PlaceFn = Callable[[Board, str, PieceType, Color], Piece]


@pytest.fixture
def board() -> Board:
    """Standard starting position."""
    return Board.initial()


@pytest.fixture
def empty_board() -> Board:
    return Board()


@pytest.fixture
def place() -> PlaceFn:
    """Put a fresh piece on a square given by its ``"RF"`` key."""

    def _place(board: Board, key: str, piece_type: PieceType, color: Color) -> Piece:
        sq = parse_square(key)
        piece = create_piece(piece_type, color, sq)
        board.place(sq, piece)
        return piece

    return _place
