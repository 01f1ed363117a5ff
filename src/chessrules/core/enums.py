"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import Enum, IntEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def forward(self) -> int:
        """Rank step of a pawn advance: white climbs, black descends."""
        return 1 if self is Color.WHITE else -1

    @property
    def back_rank(self) -> int:
        return 0 if self is Color.WHITE else 7

    @property
    def promotion_rank(self) -> int:
        return 7 if self is Color.WHITE else 0

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def material(self) -> int:
        """Points credited to the capturer."""
        return _MATERIAL[self]

    @classmethod
    def parse(cls, name: str | PieceType) -> PieceType:
        """Accept a member or a case-insensitive name such as ``"Queen"``."""
        if isinstance(name, PieceType):
            return name
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown piece type: {name!r}") from None


_MATERIAL: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
    PieceType.KING: 0,
}

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


class MoveType(str, Enum):
    """Move classification, serialised with the wire tag."""

    ADVANCE = "advance"
    ADVANCE_TWICE = "advanceTwice"
    CAPTURE = "capture"
    EN_PASSANT = "enpassant"
    PROMOTE = "promote"
    PROMOTE_WITH_CAPTURE = "promoteWithCapture"
    CASTLE = "castle"
    # Informational only, never executed.
    CHECK = "check"
    PIN = "pin"
    CAPTURE_WITH_CHECK = "captureWithCheck"

    @property
    def is_capture(self) -> bool:
        return self in (
            MoveType.CAPTURE,
            MoveType.PROMOTE_WITH_CAPTURE,
            MoveType.EN_PASSANT,
        )

    def __str__(self) -> str:
        return self.value


class PinAxis(IntEnum):
    """Line along which a piece is pinned to its king."""

    HORIZONTAL = 0
    VERTICAL = 1
    DIAGONAL = 2


class Direction(Enum):
    """The eight ray directions as ``(rank_step, file_step)``."""

    UP = (1, 0)
    DOWN = (-1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)
    UP_LEFT = (1, -1)
    UP_RIGHT = (1, 1)
    DOWN_LEFT = (-1, -1)
    DOWN_RIGHT = (-1, 1)

    @property
    def dr(self) -> int:
        return self.value[0]

    @property
    def df(self) -> int:
        return self.value[1]

    @property
    def is_diagonal(self) -> bool:
        return self.dr != 0 and self.df != 0

    @property
    def opposite(self) -> Direction:
        return Direction((-self.dr, -self.df))

    @property
    def axis(self) -> PinAxis:
        if self.is_diagonal:
            return PinAxis.DIAGONAL
        return PinAxis.VERTICAL if self.df == 0 else PinAxis.HORIZONTAL

    def slider_types(self) -> tuple[PieceType, PieceType]:
        """Sliders that attack along this direction."""
        if self.is_diagonal:
            return (PieceType.BISHOP, PieceType.QUEEN)
        return (PieceType.ROOK, PieceType.QUEEN)


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3
