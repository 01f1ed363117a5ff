"""High-level chess rules: king safety, checkmate, stalemate, draw detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.attacks import is_square_attacked
from chessrules.core.enums import Color, GameResult, MoveType, PieceType
from chessrules.core.move import Move
from chessrules.core.piece import King
from chessrules.core.types import Square

if TYPE_CHECKING:
    from chessrules.core.board import Board
    from chessrules.core.piece import Piece


class Rules:
    """Static rule-checker that operates on a :class:`Board`.

    The piece model already handles pins; this layer adds what a single
    piece cannot see on its own: answering a check, double check, and
    the king's walk during castling.
    """

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        king_sq = board.king_square(color)
        return is_square_attacked(board.occupancy, king_sq, color.opposite)

    @staticmethod
    def legal_moves(board: Board, sq: Square) -> list[Move]:
        """Fully legal moves of the piece on *sq* (empty if none)."""
        piece = board[sq]
        if piece is None or piece.captured:
            return []

        candidates = piece.legal_moves(board)
        if piece.piece_type is PieceType.KING:
            # King moves already avoid attacked squares.
            return candidates

        try:
            king_sq = board.king_square(piece.color)
        except ValueError:
            return candidates
        king = board[king_sq]
        if isinstance(king, King) and king.scan_threats(board).in_double_check:
            return []

        return [
            move
            for move in candidates
            if not Rules.leaves_king_in_check(board, sq, move, king_sq)
        ]

    @staticmethod
    def leaves_king_in_check(
        board: Board, origin: Square, move: Move, king_sq: Square
    ) -> bool:
        """Play *move* on a scratch occupancy and test the mover's king."""
        piece = board[origin]
        assert piece is not None
        occ: dict[Square, Piece] = dict(board.occupancy)
        del occ[origin]
        if move.move_type is MoveType.EN_PASSANT:
            occ.pop(Square(origin.rank, move.target.file), None)
        occ[move.target] = piece
        if piece.piece_type is PieceType.KING:
            king_sq = move.target
        return is_square_attacked(occ, king_sq, piece.color.opposite)

    @staticmethod
    def all_legal_moves(board: Board, color: Color) -> dict[Square, list[Move]]:
        """Every square of *color* that has at least one legal move."""
        result: dict[Square, list[Move]] = {}
        for sq, _piece in board.pieces(color):
            moves = Rules.legal_moves(board, sq)
            if moves:
                result[sq] = moves
        return result

    @staticmethod
    def has_legal_move(board: Board, color: Color) -> bool:
        return any(Rules.legal_moves(board, sq) for sq, _ in board.pieces(color))

    @staticmethod
    def is_checkmate(board: Board, color: Color) -> bool:
        if not Rules.is_in_check(board, color):
            return False
        return not Rules.has_legal_move(board, color)

    @staticmethod
    def is_stalemate(board: Board, color: Color) -> bool:
        if Rules.is_in_check(board, color):
            return False
        return not Rules.has_legal_move(board, color)

    @staticmethod
    def is_insufficient_material(board: Board) -> bool:
        """Neither side can ever deliver mate with what is left.

        That is a lone king facing a king with at most one knight or bishop,
        or one bishop each when both bishops run on the same square color.
        """
        material = [
            (sq, piece)
            for sq, piece in board.pieces()
            if piece.piece_type is not PieceType.KING
        ]
        if len(material) > 2:
            return False
        if len(material) < 2:
            return all(
                piece.piece_type in (PieceType.KNIGHT, PieceType.BISHOP)
                for _, piece in material
            )

        (first_sq, first), (second_sq, second) = material
        bishops = {first.piece_type, second.piece_type} == {PieceType.BISHOP}
        return (
            bishops
            and first.color != second.color
            and first_sq.is_light == second_sq.is_light
        )

    @staticmethod
    def game_result(board: Board, side_to_move: Color) -> GameResult:
        """Outcome for the position with *side_to_move* to play."""
        if Rules.has_legal_move(board, side_to_move):
            if Rules.is_insufficient_material(board):
                return GameResult.DRAW
            return GameResult.IN_PROGRESS
        if not Rules.is_in_check(board, side_to_move):
            return GameResult.DRAW
        # Mated: the side that just moved wins.
        if side_to_move is Color.WHITE:
            return GameResult.BLACK_WINS
        return GameResult.WHITE_WINS
