"""Piece model: six piece classes that generate their own legal moves.

Every piece knows its color, square, move count and pin. Move generation
honours pins (a pinned piece only moves along the pin line). A king
recomputes its full threat picture on every query. Whether a non-king move
answers a check is decided one level up, in :mod:`chessrules.core.rules`.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any, ClassVar

from chessrules.core.attacks import (
    BISHOP_DIRS,
    KING_OFFSETS,
    KNIGHT_OFFSETS,
    QUEEN_DIRS,
    ROOK_DIRS,
    Pin,
    ThreatScan,
    between,
    find_pin,
    is_square_attacked,
    offset_squares,
    on_line,
    ray,
    scan_king,
)
from chessrules.core.enums import Color, Direction, MoveType, PieceType
from chessrules.core.errors import IllegalMoveError
from chessrules.core.move import Move
from chessrules.core.types import Square

if TYPE_CHECKING:
    from chessrules.core.board import Board

_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}

KING_SIDE_ROOK_FILE = 7
QUEEN_SIDE_ROOK_FILE = 0


class Piece:
    """Common state and behaviour shared by all six piece kinds."""

    piece_type: ClassVar[PieceType]

    __slots__ = ("piece_id", "color", "square", "captured", "move_count", "pin")

    def __init__(self, color: Color, square: Square) -> None:
        self.piece_id = uuid.uuid4().hex
        self.color = color
        self.square = square
        self.captured = False
        self.move_count = 0
        self.pin: Pin | None = None

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def value(self) -> int:
        return self.piece_type.material

    @property
    def symbol(self) -> str:
        """Letter, uppercase for white: ``K``, ``q``, ..."""
        letter = _LETTERS[self.piece_type]
        return letter.upper() if self.color is Color.WHITE else letter

    @property
    def is_pinned(self) -> bool:
        return self.pin is not None

    # ── State changes ────────────────────────────────────────────────────

    def move_to(self, board: Board, target: Square) -> None:
        """Relocate through the board and count the move."""
        board.move(self.square, target)
        self.move_count += 1
        self.pin = None

    def mark_captured(self) -> None:
        self.captured = True
        self.pin = None

    # ── Move generation ──────────────────────────────────────────────────

    def find_pin(self, board: Board) -> Pin | None:
        """Recompute and store this piece's pin."""
        self.pin = find_pin(board.occupancy, self.square)
        return self.pin

    def legal_moves(self, board: Board) -> list[Move]:
        """Moves this piece may make, respecting any pin to its own king."""
        if self.captured:
            return []
        pin = self.find_pin(board)
        moves = self._candidate_moves(board)
        if pin is None:
            return moves
        return [m for m in moves if on_line(self.square, m.target, pin.direction)]

    def _candidate_moves(self, board: Board) -> list[Move]:
        raise NotImplementedError

    def _can_take(self, other: Piece) -> bool:
        return other.color != self.color and other.piece_type is not PieceType.KING

    def _slide(self, board: Board, directions: tuple[Direction, ...]) -> list[Move]:
        moves: list[Move] = []
        for direction in directions:
            for to_sq in ray(self.square, direction):
                target = board[to_sq]
                if target is None:
                    moves.append(Move(to_sq, MoveType.ADVANCE))
                    continue
                if self._can_take(target):
                    moves.append(Move(to_sq, MoveType.CAPTURE))
                break
        return moves

    def _step(self, board: Board, offsets: tuple[tuple[int, int], ...]) -> list[Move]:
        moves: list[Move] = []
        for to_sq in offset_squares(self.square, offsets):
            target = board[to_sq]
            if target is None:
                moves.append(Move(to_sq, MoveType.ADVANCE))
            elif self._can_take(target):
                moves.append(Move(to_sq, MoveType.CAPTURE))
        return moves

    # ── Display ──────────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.piece_id,
            "type": self.piece_type.name.capitalize(),
            "color": str(self.color),
            "position": self.square.key,
            "captured": self.captured,
            "moveCounter": self.move_count,
        }

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.color}, {self.square.key}"
            f"{', captured' if self.captured else ''})"
        )


class Pawn(Piece):
    """Pawn: pushes, double push, diagonal captures, en passant, promotion."""

    piece_type = PieceType.PAWN

    __slots__ = ("promoted", "first_move_counter")

    def __init__(self, color: Color, square: Square) -> None:
        super().__init__(color, square)
        self.promoted = False
        # Global move counter at the moment of the double advance.
        self.first_move_counter: int | None = None

    def _candidate_moves(self, board: Board) -> list[Move]:
        moves: list[Move] = []
        fwd = self.color.forward
        last_rank = self.color.promotion_rank

        one = self.square.shifted(fwd, 0)
        if one is None:
            return moves

        if board.is_empty(one):
            promotes = one.rank == last_rank
            moves.append(Move(one, MoveType.PROMOTE if promotes else MoveType.ADVANCE))
            if self.move_count == 0:
                two = one.shifted(fwd, 0)
                if two is not None and board.is_empty(two):
                    moves.append(Move(two, MoveType.ADVANCE_TWICE))

        for df in (-1, 1):
            diag = self.square.shifted(fwd, df)
            if diag is None:
                continue
            target = board[diag]
            if target is not None:
                if self._can_take(target):
                    move_type = (
                        MoveType.PROMOTE_WITH_CAPTURE
                        if diag.rank == last_rank
                        else MoveType.CAPTURE
                    )
                    moves.append(Move(diag, move_type))
            elif self.can_capture_en_passant(board, df):
                moves.append(Move(diag, MoveType.EN_PASSANT))
        return moves

    def can_capture_en_passant(self, board: Board, df: int) -> bool:
        """En passant toward file offset *df* (-1 or 1) is available.

        The neighbour must be an enemy pawn whose only move was a double
        advance on the immediately preceding ply.
        """
        side = self.square.shifted(0, df)
        diag = self.square.shifted(self.color.forward, df)
        if side is None or diag is None or not board.is_empty(diag):
            return False
        neighbour = board[side]
        if not isinstance(neighbour, Pawn) or neighbour.color == self.color:
            return False
        if neighbour.move_count != 1 or neighbour.first_move_counter is None:
            return False
        if board.move_counter - neighbour.first_move_counter != 1:
            return False
        return not self._en_passant_exposes_king(board, side, diag)

    def _en_passant_exposes_king(
        self, board: Board, captured_sq: Square, target: Square
    ) -> bool:
        """Both pawns leave their rank at once, which can open a line to the king."""
        occ = dict(board.occupancy)
        try:
            king_sq = board.king_square(self.color)
        except ValueError:
            return False
        del occ[self.square]
        del occ[captured_sq]
        occ[target] = self
        return is_square_attacked(occ, king_sq, self.color.opposite)


class Knight(Piece):
    piece_type = PieceType.KNIGHT

    __slots__ = ()

    def legal_moves(self, board: Board) -> list[Move]:
        if self.captured:
            return []
        # Every knight jump leaves the line, so any pin freezes it.
        if self.find_pin(board) is not None:
            return []
        return self._candidate_moves(board)

    def _candidate_moves(self, board: Board) -> list[Move]:
        return self._step(board, KNIGHT_OFFSETS)


class Bishop(Piece):
    piece_type = PieceType.BISHOP

    __slots__ = ()

    def _candidate_moves(self, board: Board) -> list[Move]:
        return self._slide(board, BISHOP_DIRS)


class Rook(Piece):
    piece_type = PieceType.ROOK

    __slots__ = ()

    def _candidate_moves(self, board: Board) -> list[Move]:
        return self._slide(board, ROOK_DIRS)


class Queen(Piece):
    piece_type = PieceType.QUEEN

    __slots__ = ()

    def _candidate_moves(self, board: Board) -> list[Move]:
        return self._slide(board, QUEEN_DIRS)


class King(Piece):
    """King: one-step moves onto undefended squares, plus castling.

    ``in_check``, ``in_double_check`` and ``attacked_from`` reflect the last
    :meth:`scan_threats`, which :meth:`legal_moves` always runs first.
    """

    piece_type = PieceType.KING

    __slots__ = ("in_check", "in_double_check", "castled", "attacked_from")

    def __init__(self, color: Color, square: Square) -> None:
        super().__init__(color, square)
        self.in_check = False
        self.in_double_check = False
        self.castled = False
        self.attacked_from: tuple[Square, ...] = ()

    def find_pin(self, board: Board) -> Pin | None:
        self.pin = None
        return None

    def scan_threats(self, board: Board) -> ThreatScan:
        """Recompute check state from scratch and return the full scan."""
        scan = scan_king(board.occupancy, self.square)
        self.attacked_from = scan.attackers
        self.in_check = scan.in_check
        self.in_double_check = scan.in_double_check
        return scan

    def legal_moves(self, board: Board) -> list[Move]:
        if self.captured:
            return []
        self.scan_threats(board)
        occ = board.occupancy
        enemy = self.color.opposite

        moves: list[Move] = []
        for to_sq in offset_squares(self.square, KING_OFFSETS):
            target = occ.get(to_sq)
            if target is not None and not self._can_take(target):
                continue
            # The king must not shadow the square it is leaving.
            if is_square_attacked(occ, to_sq, enemy, ignore=self.square):
                continue
            moves.append(
                Move(to_sq, MoveType.CAPTURE if target else MoveType.ADVANCE)
            )

        king_side, queen_side = self._castling_sides(board)
        if king_side:
            moves.append(
                Move(Square(self.square.rank, KING_SIDE_ROOK_FILE), MoveType.CASTLE)
            )
        if queen_side:
            moves.append(
                Move(Square(self.square.rank, QUEEN_SIDE_ROOK_FILE), MoveType.CASTLE)
            )
        return moves

    # ── Castling ─────────────────────────────────────────────────────────

    def can_castle(self, board: Board) -> tuple[bool, bool]:
        """``(king_side, queen_side)`` availability after a fresh threat scan."""
        self.scan_threats(board)
        return self._castling_sides(board)

    def _castling_sides(self, board: Board) -> tuple[bool, bool]:
        if self.move_count > 0 or self.in_check or self.castled:
            return (False, False)
        return (
            self._castle_side_ok(board, KING_SIDE_ROOK_FILE),
            self._castle_side_ok(board, QUEEN_SIDE_ROOK_FILE),
        )

    def _castle_side_ok(self, board: Board, rook_file: int) -> bool:
        rank = self.square.rank
        rook_sq = Square(rank, rook_file)
        if rook_sq == self.square:
            return False
        if any(not board.is_empty(sq) for sq in between(self.square, rook_sq)):
            return False

        rook = board[rook_sq]
        if (
            rook is None
            or rook.piece_type is not PieceType.ROOK
            or rook.color != self.color
            or rook.move_count > 0
        ):
            return False

        # The king may not pass through or land on an attacked square.
        dest = Square(rank, _king_castle_file(rook_file))
        occ = board.occupancy
        enemy = self.color.opposite
        path = between(self.square, dest) + [dest]
        return not any(is_square_attacked(occ, sq, enemy) for sq in path)

    def castle(self, board: Board, rook_square: Square) -> None:
        """Move the rook on *rook_square*, then the king, as one action."""
        rook = board[rook_square]
        if (
            rook is None
            or rook.piece_type is not PieceType.ROOK
            or rook.color != self.color
        ):
            raise IllegalMoveError(f"Rook not found during castling on {rook_square.key}")
        rank = self.square.rank
        king_side = rook_square.file > self.square.file
        rook_dest = Square(rank, 5 if king_side else 3)
        rook.move_to(board, rook_dest)
        self.move_to(board, Square(rank, _king_castle_file(rook_square.file)))
        self.castled = True

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(
            inCheck=self.in_check,
            inDoubleCheck=self.in_double_check,
            castled=self.castled,
            attackedFrom=[sq.key for sq in self.attacked_from],
        )
        return data


def _king_castle_file(rook_file: int) -> int:
    return 6 if rook_file == KING_SIDE_ROOK_FILE else 2


_CLASSES: dict[PieceType, type[Piece]] = {
    PieceType.PAWN: Pawn,
    PieceType.KNIGHT: Knight,
    PieceType.BISHOP: Bishop,
    PieceType.ROOK: Rook,
    PieceType.QUEEN: Queen,
    PieceType.KING: King,
}


def create_piece(piece_type: PieceType, color: Color, square: Square) -> Piece:
    """Instantiate the class for *piece_type*."""
    return _CLASSES[piece_type](color, square)
