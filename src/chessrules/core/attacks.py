"""Ray casting, attack detection and pin/check geometry.

Every function here works on an occupancy mapping (``Square → Piece``) and
reads only the mapping keys plus each piece's color and type. That lets
callers probe hypothetical positions on a plain ``dict`` copy without
touching live pieces.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessrules.core.enums import Color, Direction, PieceType, PinAxis
from chessrules.core.types import Square

if TYPE_CHECKING:
    from chessrules.core.piece import Piece

Occupancy = Mapping[Square, "Piece"]

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = tuple(d.value for d in Direction)

ROOK_DIRS: tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)
BISHOP_DIRS: tuple[Direction, ...] = (
    Direction.UP_LEFT,
    Direction.UP_RIGHT,
    Direction.DOWN_LEFT,
    Direction.DOWN_RIGHT,
)
QUEEN_DIRS: tuple[Direction, ...] = ROOK_DIRS + BISHOP_DIRS

# One representative per axis; its opposite covers the other half of the line.
_AXIS_DIRS: tuple[Direction, ...] = (
    Direction.UP,
    Direction.RIGHT,
    Direction.UP_RIGHT,
    Direction.UP_LEFT,
)


@dataclass(frozen=True, slots=True)
class Pin:
    """A piece's pin: the axis and the direction the pinning slider lies in."""

    axis: PinAxis
    direction: Direction

    @classmethod
    def toward(cls, direction: Direction) -> Pin:
        return cls(direction.axis, direction)


@dataclass(frozen=True, slots=True)
class ThreatScan:
    """What a king sees from its square."""

    attackers: tuple[Square, ...] = ()
    pinned: tuple[tuple[Square, Pin], ...] = ()

    @property
    def in_check(self) -> bool:
        return bool(self.attackers)

    @property
    def in_double_check(self) -> bool:
        return len(self.attackers) >= 2


# -- Rays --------------------------------------------------------------------


def ray(sq: Square, direction: Direction) -> Iterator[Square]:
    """Squares from *sq* (exclusive) to the board edge along *direction*."""
    nxt = sq.shifted(direction.dr, direction.df)
    while nxt is not None:
        yield nxt
        nxt = nxt.shifted(direction.dr, direction.df)


def first_on_ray(
    occ: Occupancy,
    sq: Square,
    direction: Direction,
    ignore: Square | None = None,
) -> tuple[Square, Piece] | None:
    """First occupied square along a ray, skipping *ignore* as if empty."""
    for to_sq in ray(sq, direction):
        if to_sq == ignore:
            continue
        piece = occ.get(to_sq)
        if piece is not None:
            return to_sq, piece
    return None


def offset_squares(sq: Square, offsets: tuple[tuple[int, int], ...]) -> list[Square]:
    """On-board squares reached from *sq* by each offset."""
    targets: list[Square] = []
    for dr, df in offsets:
        to_sq = sq.shifted(dr, df)
        if to_sq is not None:
            targets.append(to_sq)
    return targets


def on_line(origin: Square, target: Square, direction: Direction) -> bool:
    """Whether *target* lies on the line through *origin* along *direction*."""
    d_rank = target.rank - origin.rank
    d_file = target.file - origin.file
    return direction.dr * d_file - direction.df * d_rank == 0


def between(a: Square, b: Square) -> list[Square]:
    """Squares strictly between two squares sharing a rank, file or diagonal."""
    d_rank = b.rank - a.rank
    d_file = b.file - a.file
    if d_rank and d_file and abs(d_rank) != abs(d_file):
        return []
    step_r = (d_rank > 0) - (d_rank < 0)
    step_f = (d_file > 0) - (d_file < 0)
    squares: list[Square] = []
    cur = a.shifted(step_r, step_f)
    while cur is not None and cur != b:
        squares.append(cur)
        cur = cur.shifted(step_r, step_f)
    return squares


# -- Attack detection --------------------------------------------------------


def attackers_of(
    occ: Occupancy,
    sq: Square,
    by_color: Color,
    ignore: Square | None = None,
) -> list[Square]:
    """Squares of *by_color* pieces that attack *sq*.

    *ignore* is treated as empty, which is how a king checks the squares
    it would step to without shielding them with its own body.
    """
    found: list[Square] = []

    for direction in QUEEN_DIRS:
        hit = first_on_ray(occ, sq, direction, ignore)
        if hit is None:
            continue
        hit_sq, piece = hit
        if piece.color == by_color and piece.piece_type in direction.slider_types():
            found.append(hit_sq)

    for from_sq in offset_squares(sq, KNIGHT_OFFSETS):
        piece = occ.get(from_sq)
        if (
            piece is not None
            and piece.color == by_color
            and piece.piece_type is PieceType.KNIGHT
        ):
            found.append(from_sq)

    # A pawn attacks one rank ahead of itself, so it stands one rank behind.
    pawn_rank_step = -by_color.forward
    for df in (-1, 1):
        from_sq = sq.shifted(pawn_rank_step, df)
        if from_sq is None:
            continue
        piece = occ.get(from_sq)
        if (
            piece is not None
            and piece.color == by_color
            and piece.piece_type is PieceType.PAWN
        ):
            found.append(from_sq)

    for from_sq in offset_squares(sq, KING_OFFSETS):
        piece = occ.get(from_sq)
        if (
            piece is not None
            and piece.color == by_color
            and piece.piece_type is PieceType.KING
        ):
            found.append(from_sq)

    return found


def is_square_attacked(
    occ: Occupancy,
    sq: Square,
    by_color: Color,
    ignore: Square | None = None,
) -> bool:
    return bool(attackers_of(occ, sq, by_color, ignore))


# -- Pins and checks ---------------------------------------------------------


def find_pin(occ: Occupancy, sq: Square) -> Pin | None:
    """Pin of the piece standing on *sq*, if its own king is behind it."""
    piece = occ.get(sq)
    if piece is None or piece.piece_type is PieceType.KING:
        return None

    for direction in _AXIS_DIRS:
        ahead = first_on_ray(occ, sq, direction)
        behind = first_on_ray(occ, sq, direction.opposite)
        if ahead is None or behind is None:
            continue
        for (_, king), (_, slider), toward in (
            (behind, ahead, direction),
            (ahead, behind, direction.opposite),
        ):
            if (
                king.piece_type is PieceType.KING
                and king.color == piece.color
                and slider.color != piece.color
                and slider.piece_type in toward.slider_types()
            ):
                return Pin.toward(toward)
    return None


def scan_king(occ: Occupancy, king_sq: Square) -> ThreatScan:
    """Attackers of the king on *king_sq* and the friendly pieces pinned to it."""
    king = occ.get(king_sq)
    if king is None:
        raise ValueError(f"No king on {king_sq.key}")
    enemy = king.color.opposite

    pinned: list[tuple[Square, Pin]] = []
    for direction in QUEEN_DIRS:
        candidate: Square | None = None
        for to_sq in ray(king_sq, direction):
            piece = occ.get(to_sq)
            if piece is None:
                continue
            if piece.color == king.color:
                if candidate is not None:
                    break
                candidate = to_sq
                continue
            if candidate is not None and piece.piece_type in direction.slider_types():
                # Seen from the pinned piece, the slider lies further along.
                pinned.append((candidate, Pin.toward(direction)))
            break

    attackers = attackers_of(occ, king_sq, enemy)
    return ThreatScan(tuple(attackers), tuple(pinned))
