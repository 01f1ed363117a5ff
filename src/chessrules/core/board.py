"""Board - piece placement on an 8x8 board plus the global move counter."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from chessrules.core.enums import Color, PieceType
from chessrules.core.errors import EmptySquareError
from chessrules.core.piece import Piece, create_piece
from chessrules.core.types import ALL_SQUARES, Square

BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable square → piece mapping.

    The board does not judge legality. It relocates what it is told to and
    keeps each piece's ``square`` in step with the mapping. The global move
    counter goes up once per :meth:`move`.
    """

    __slots__ = ("_squares", "_move_counter")

    def __init__(self) -> None:
        self._squares: dict[Square, Piece] = {}
        self._move_counter = 0

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares.get(sq)

    def get(self, sq: Square) -> Piece | None:
        return self._squares.get(sq)

    def __contains__(self, sq: object) -> bool:
        return sq in self._squares

    def is_empty(self, sq: Square) -> bool:
        return sq not in self._squares

    @property
    def move_counter(self) -> int:
        """Relocations performed since the last reset."""
        return self._move_counter

    @property
    def occupancy(self) -> Mapping[Square, Piece]:
        """Live read-only view of the occupied squares."""
        return MappingProxyType(self._squares)

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color | None = None) -> Iterator[tuple[Square, Piece]]:
        """Occupied squares, optionally limited to *color*."""
        for sq, piece in list(self._squares.items()):
            if color is None or piece.color == color:
                yield sq, piece

    def king_square(self, color: Color) -> Square:
        """Square of *color*'s king (scans the board)."""
        for sq, piece in self._squares.items():
            if piece.piece_type is PieceType.KING and piece.color == color:
                return sq
        raise ValueError(f"No {color.name} king on board")

    def snapshot(self) -> Mapping[Square, Piece | None]:
        """Read-only copy of all 64 squares, empty ones mapped to None."""
        return MappingProxyType({sq: self._squares.get(sq) for sq in ALL_SQUARES})

    # -- Mutation -----------------------------------------------------------

    def move(self, origin: Square, target: Square) -> Piece:
        """Relocate the piece on *origin* to *target*, replacing any occupant."""
        piece = self._squares.pop(origin, None)
        if piece is None:
            raise EmptySquareError(f"Source square {origin.key} is empty")
        self._squares[target] = piece
        piece.square = target
        self._move_counter += 1
        return piece

    def promote(self, sq: Square, new_piece: Piece) -> None:
        """Replace the piece on *sq* in place."""
        if sq not in self._squares:
            raise EmptySquareError(f"No piece to promote on {sq.key}")
        self._squares[sq] = new_piece
        new_piece.square = sq

    def place(self, sq: Square, piece: Piece) -> None:
        """Put *piece* on *sq* without touching the move counter."""
        self._squares[sq] = piece
        piece.square = sq

    def remove(self, sq: Square) -> Piece | None:
        """Take whatever stands on *sq* off the board."""
        return self._squares.pop(sq, None)

    def clear(self) -> None:
        self._squares = {}
        self._move_counter = 0

    def reset(self) -> None:
        """Standard starting position, counter back to zero."""
        self.clear()
        for color in Color:
            back = color.back_rank
            pawn_rank = back + color.forward
            for file, piece_type in enumerate(BACK_RANK):
                sq = Square(back, file)
                self._squares[sq] = create_piece(piece_type, color, sq)
                pawn_sq = Square(pawn_rank, file)
                self._squares[pawn_sq] = create_piece(PieceType.PAWN, color, pawn_sq)

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        b.reset()
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __len__(self) -> int:
        return len(self._squares)

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self._squares.get(Square(rank, file))
                row.append(p.symbol if p else ".")
            rows.append(f"{rank} {' '.join(row)}")
        rows.append("  0 1 2 3 4 5 6 7")
        return "\n".join(rows)
