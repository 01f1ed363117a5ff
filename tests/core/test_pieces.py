"""Tests for per-piece move generation."""

from __future__ import annotations

from chessrules.core.board import Board
from chessrules.core.enums import Color, MoveType, PieceType
from chessrules.core.move import Move
from chessrules.core.piece import Pawn
from chessrules.core.types import Square, parse_square

W, B = Color.WHITE, Color.BLACK


def targets(moves: list[Move]) -> set[str]:
    return {m.target.key for m in moves}


def of_type(moves: list[Move], move_type: MoveType) -> set[str]:
    return {m.target.key for m in moves if m.move_type is move_type}


def double_advance(board: Board, origin: str, target: str) -> Pawn:
    """Play a pawn's double advance the way the executor stamps it."""
    pawn = board[parse_square(origin)]
    assert isinstance(pawn, Pawn)
    pawn.first_move_counter = board.move_counter
    pawn.move_to(board, parse_square(target))
    return pawn


class TestInitialPosition:
    def test_pawn_single_and_double_advance(self, board: Board) -> None:
        moves = board[Square(1, 1)].legal_moves(board)  # type: ignore[union-attr]
        assert set(moves) == {
            Move(Square(2, 1), MoveType.ADVANCE),
            Move(Square(3, 1), MoveType.ADVANCE_TWICE),
        }

    def test_black_pawn_moves_down(self, board: Board) -> None:
        moves = board[Square(6, 1)].legal_moves(board)  # type: ignore[union-attr]
        assert of_type(moves, MoveType.ADVANCE) == {"51"}
        assert of_type(moves, MoveType.ADVANCE_TWICE) == {"41"}

    def test_knight_jumps_over_pawns(self, board: Board) -> None:
        moves = board[Square(0, 1)].legal_moves(board)  # type: ignore[union-attr]
        assert targets(moves) == {"20", "22"}

    def test_blocked_pieces_have_no_moves(self, board: Board) -> None:
        for file in (0, 2, 3, 4):
            assert board[Square(0, file)].legal_moves(board) == []  # type: ignore[union-attr]


class TestPawn:
    def test_blocked_pawn(self, empty_board: Board, place) -> None:
        pawn = place(empty_board, "14", PieceType.PAWN, W)
        place(empty_board, "24", PieceType.KNIGHT, B)
        assert pawn.legal_moves(empty_board) == []

    def test_double_advance_needs_both_squares(self, empty_board: Board, place) -> None:
        pawn = place(empty_board, "14", PieceType.PAWN, W)
        place(empty_board, "34", PieceType.KNIGHT, B)
        assert targets(pawn.legal_moves(empty_board)) == {"24"}

    def test_no_double_advance_after_moving(self, empty_board: Board, place) -> None:
        pawn = place(empty_board, "14", PieceType.PAWN, W)
        pawn.move_to(empty_board, Square(2, 4))
        assert targets(pawn.legal_moves(empty_board)) == {"34"}

    def test_diagonal_captures(self, empty_board: Board, place) -> None:
        pawn = place(empty_board, "33", PieceType.PAWN, W)
        pawn.move_count = 1
        place(empty_board, "42", PieceType.KNIGHT, B)
        place(empty_board, "44", PieceType.PAWN, W)
        moves = pawn.legal_moves(empty_board)
        assert of_type(moves, MoveType.CAPTURE) == {"42"}
        assert of_type(moves, MoveType.ADVANCE) == {"43"}

    def test_enemy_king_is_not_a_capture(self, empty_board: Board, place) -> None:
        pawn = place(empty_board, "33", PieceType.PAWN, W)
        place(empty_board, "44", PieceType.KING, B)
        assert "44" not in targets(pawn.legal_moves(empty_board))

    def test_promotion_moves(self, empty_board: Board, place) -> None:
        pawn = place(empty_board, "60", PieceType.PAWN, W)
        place(empty_board, "71", PieceType.ROOK, B)
        assert set(pawn.legal_moves(empty_board)) == {
            Move(Square(7, 0), MoveType.PROMOTE),
            Move(Square(7, 1), MoveType.PROMOTE_WITH_CAPTURE),
        }

    def test_black_promotes_on_rank_zero(self, empty_board: Board, place) -> None:
        pawn = place(empty_board, "13", PieceType.PAWN, B)
        pawn.move_count = 4
        assert pawn.legal_moves(empty_board) == [Move(Square(0, 3), MoveType.PROMOTE)]

    def test_captured_piece_has_no_moves(self, board: Board) -> None:
        pawn = board[Square(1, 4)]
        pawn.mark_captured()  # type: ignore[union-attr]
        assert pawn.legal_moves(board) == []  # type: ignore[union-attr]


class TestEnPassant:
    def _setup(self, board: Board, place) -> Pawn:
        white = place(board, "44", PieceType.PAWN, W)
        white.move_count = 2
        place(board, "63", PieceType.PAWN, B)
        double_advance(board, "63", "43")
        return white

    def test_available_right_after_double_advance(self, empty_board: Board, place) -> None:
        white = self._setup(empty_board, place)
        assert Move(Square(5, 3), MoveType.EN_PASSANT) in white.legal_moves(empty_board)

    def test_expires_after_one_ply(self, empty_board: Board, place) -> None:
        white = self._setup(empty_board, place)
        rook = place(empty_board, "00", PieceType.ROOK, W)
        rook.move_to(empty_board, Square(0, 1))
        assert of_type(white.legal_moves(empty_board), MoveType.EN_PASSANT) == set()

    def test_not_after_two_single_steps(self, empty_board: Board, place) -> None:
        white = place(empty_board, "44", PieceType.PAWN, W)
        white.move_count = 2
        black = place(empty_board, "63", PieceType.PAWN, B)
        black.move_to(empty_board, Square(5, 3))
        black.move_to(empty_board, Square(4, 3))
        assert of_type(white.legal_moves(empty_board), MoveType.EN_PASSANT) == set()

    def test_black_captures_en_passant(self, empty_board: Board, place) -> None:
        black = place(empty_board, "33", PieceType.PAWN, B)
        black.move_count = 2
        place(empty_board, "14", PieceType.PAWN, W)
        double_advance(empty_board, "14", "34")
        assert Move(Square(2, 4), MoveType.EN_PASSANT) in black.legal_moves(empty_board)

    def test_refused_when_it_opens_the_rank(self, empty_board: Board, place) -> None:
        place(empty_board, "40", PieceType.KING, W)
        place(empty_board, "47", PieceType.ROOK, B)
        white = self._setup(empty_board, place)
        assert of_type(white.legal_moves(empty_board), MoveType.EN_PASSANT) == set()


class TestSliders:
    def test_rook_open_board(self, empty_board: Board, place) -> None:
        rook = place(empty_board, "33", PieceType.ROOK, W)
        assert len(rook.legal_moves(empty_board)) == 14

    def test_bishop_open_board(self, empty_board: Board, place) -> None:
        bishop = place(empty_board, "33", PieceType.BISHOP, W)
        assert len(bishop.legal_moves(empty_board)) == 13

    def test_queen_open_board(self, empty_board: Board, place) -> None:
        queen = place(empty_board, "33", PieceType.QUEEN, W)
        assert len(queen.legal_moves(empty_board)) == 27

    def test_rays_stop_at_pieces(self, empty_board: Board, place) -> None:
        rook = place(empty_board, "33", PieceType.ROOK, W)
        place(empty_board, "35", PieceType.PAWN, W)
        place(empty_board, "53", PieceType.KNIGHT, B)
        moves = rook.legal_moves(empty_board)
        assert targets(moves) == {"34", "43", "53", "23", "13", "03", "32", "31", "30"}
        assert of_type(moves, MoveType.CAPTURE) == {"53"}

    def test_enemy_king_blocks_but_is_not_captured(self, empty_board: Board, place) -> None:
        rook = place(empty_board, "33", PieceType.ROOK, W)
        place(empty_board, "36", PieceType.KING, B)
        found = targets(rook.legal_moves(empty_board))
        assert "35" in found
        assert "36" not in found
        assert "37" not in found


class TestKnight:
    def test_corner(self, empty_board: Board, place) -> None:
        knight = place(empty_board, "00", PieceType.KNIGHT, W)
        assert targets(knight.legal_moves(empty_board)) == {"21", "12"}

    def test_center_with_capture(self, empty_board: Board, place) -> None:
        knight = place(empty_board, "33", PieceType.KNIGHT, W)
        place(empty_board, "54", PieceType.ROOK, B)
        place(empty_board, "52", PieceType.PAWN, W)
        moves = knight.legal_moves(empty_board)
        assert len(moves) == 7
        assert of_type(moves, MoveType.CAPTURE) == {"54"}


class TestPieceInfo:
    def test_values_and_symbols(self, board: Board) -> None:
        assert board[Square(0, 3)].value == 9  # type: ignore[union-attr]
        assert board[Square(7, 1)].value == 3  # type: ignore[union-attr]
        assert board[Square(0, 4)].symbol == "K"  # type: ignore[union-attr]
        assert board[Square(7, 4)].symbol == "k"  # type: ignore[union-attr]

    def test_ids_are_unique(self, board: Board) -> None:
        ids = {piece.piece_id for _, piece in board.pieces()}
        assert len(ids) == 32

    def test_to_dict(self, board: Board) -> None:
        data = board[Square(1, 4)].to_dict()  # type: ignore[union-attr]
        assert data["type"] == "Pawn"
        assert data["color"] == "white"
        assert data["position"] == "14"
        assert data["moveCounter"] == 0
