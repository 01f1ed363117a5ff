"""Tests for pin detection and pin-restricted movement."""

from __future__ import annotations

from chessrules.core.attacks import Pin, find_pin, scan_king
from chessrules.core.board import Board
from chessrules.core.enums import Color, Direction, MoveType, PieceType, PinAxis
from chessrules.core.move import Move
from chessrules.core.types import Square

W, B = Color.WHITE, Color.BLACK


def keys(moves: list[Move]) -> set[str]:
    return {m.target.key for m in moves}


class TestPinDetection:
    def test_diagonal_pin(self, empty_board: Board, place) -> None:
        place(empty_board, "00", PieceType.KING, W)
        rook = place(empty_board, "22", PieceType.ROOK, W)
        place(empty_board, "55", PieceType.BISHOP, B)
        pin = rook.find_pin(empty_board)
        assert pin == Pin(PinAxis.DIAGONAL, Direction.UP_RIGHT)
        assert rook.is_pinned

    def test_vertical_pin_points_at_slider(self, empty_board: Board, place) -> None:
        place(empty_board, "74", PieceType.KING, B)
        knight = place(empty_board, "54", PieceType.KNIGHT, B)
        place(empty_board, "14", PieceType.QUEEN, W)
        assert knight.find_pin(empty_board) == Pin(PinAxis.VERTICAL, Direction.DOWN)

    def test_wrong_slider_does_not_pin(self, empty_board: Board, place) -> None:
        place(empty_board, "00", PieceType.KING, W)
        rook = place(empty_board, "22", PieceType.ROOK, W)
        place(empty_board, "55", PieceType.ROOK, B)
        assert rook.find_pin(empty_board) is None

    def test_two_blockers_means_no_pin(self, empty_board: Board, place) -> None:
        place(empty_board, "04", PieceType.KING, W)
        knight = place(empty_board, "14", PieceType.KNIGHT, W)
        place(empty_board, "24", PieceType.PAWN, W)
        place(empty_board, "74", PieceType.ROOK, B)
        assert knight.find_pin(empty_board) is None

    def test_pin_appears_when_line_opens(self, empty_board: Board, place) -> None:
        place(empty_board, "04", PieceType.KING, W)
        knight = place(empty_board, "14", PieceType.KNIGHT, W)
        place(empty_board, "34", PieceType.PAWN, W)
        place(empty_board, "74", PieceType.ROOK, B)
        assert knight.find_pin(empty_board) is None
        empty_board.remove(Square(3, 4))
        assert knight.find_pin(empty_board) is not None

    def test_king_scan_lists_pinned_pieces(self, empty_board: Board, place) -> None:
        place(empty_board, "04", PieceType.KING, W)
        place(empty_board, "14", PieceType.ROOK, W)
        place(empty_board, "13", PieceType.PAWN, W)
        place(empty_board, "64", PieceType.ROOK, B)
        place(empty_board, "40", PieceType.BISHOP, B)
        scan = scan_king(empty_board.occupancy, Square(0, 4))
        assert not scan.in_check
        assert dict(scan.pinned) == {
            Square(1, 4): Pin(PinAxis.VERTICAL, Direction.UP),
            Square(1, 3): Pin(PinAxis.DIAGONAL, Direction.UP_LEFT),
        }

    def test_empty_square_has_no_pin(self, empty_board: Board) -> None:
        assert find_pin(empty_board.occupancy, Square(3, 3)) is None


class TestPinnedMovement:
    def test_diagonally_pinned_rook_cannot_move(self, empty_board: Board, place) -> None:
        place(empty_board, "00", PieceType.KING, W)
        rook = place(empty_board, "22", PieceType.ROOK, W)
        place(empty_board, "55", PieceType.BISHOP, B)
        assert rook.legal_moves(empty_board) == []

    def test_pinned_bishop_slides_along_pin(self, empty_board: Board, place) -> None:
        place(empty_board, "00", PieceType.KING, W)
        bishop = place(empty_board, "22", PieceType.BISHOP, W)
        place(empty_board, "55", PieceType.BISHOP, B)
        moves = bishop.legal_moves(empty_board)
        assert keys(moves) == {"11", "33", "44", "55"}
        assert Move(Square(5, 5), MoveType.CAPTURE) in moves

    def test_vertically_pinned_rook(self, empty_board: Board, place) -> None:
        place(empty_board, "04", PieceType.KING, W)
        rook = place(empty_board, "24", PieceType.ROOK, W)
        place(empty_board, "64", PieceType.QUEEN, B)
        assert keys(rook.legal_moves(empty_board)) == {"14", "34", "44", "54", "64"}

    def test_pinned_knight_is_frozen(self, empty_board: Board, place) -> None:
        place(empty_board, "30", PieceType.KING, W)
        knight = place(empty_board, "33", PieceType.KNIGHT, W)
        place(empty_board, "37", PieceType.QUEEN, B)
        assert knight.legal_moves(empty_board) == []
        assert knight.pin is not None and knight.pin.axis is PinAxis.HORIZONTAL

    def test_horizontally_pinned_pawn_cannot_advance(
        self, empty_board: Board, place
    ) -> None:
        place(empty_board, "30", PieceType.KING, W)
        pawn = place(empty_board, "33", PieceType.PAWN, W)
        place(empty_board, "37", PieceType.ROOK, B)
        assert pawn.legal_moves(empty_board) == []

    def test_diagonally_pinned_pawn_may_take_pinner(
        self, empty_board: Board, place
    ) -> None:
        place(empty_board, "00", PieceType.KING, W)
        pawn = place(empty_board, "11", PieceType.PAWN, W)
        place(empty_board, "22", PieceType.BISHOP, B)
        assert pawn.legal_moves(empty_board) == [Move(Square(2, 2), MoveType.CAPTURE)]

    def test_vertically_pinned_pawn_keeps_pushing(self, empty_board: Board, place) -> None:
        place(empty_board, "04", PieceType.KING, W)
        pawn = place(empty_board, "14", PieceType.PAWN, W)
        place(empty_board, "74", PieceType.ROOK, B)
        place(empty_board, "25", PieceType.KNIGHT, B)
        assert set(pawn.legal_moves(empty_board)) == {
            Move(Square(2, 4), MoveType.ADVANCE),
            Move(Square(3, 4), MoveType.ADVANCE_TWICE),
        }
