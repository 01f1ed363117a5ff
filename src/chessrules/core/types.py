"""Square value object and coordinate helpers.

Board layout (rank, file), both 0–7:
    rank 0 is white's back rank, rank 7 is black's.
    file 0 is the queen-side edge (a-file), file 7 the king-side edge.

On the wire a square is the two-digit key ``"RF"``, e.g. ``"14"`` → e2.
"""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.errors import InvalidSquareError

_DIGITS = "01234567"
_FILES = "abcdefgh"


def is_on_board(rank: int, file: int) -> bool:
    """Check whether both coordinates lie in 0–7."""
    return 0 <= rank < 8 and 0 <= file < 8


@dataclass(frozen=True, slots=True)
class Square:
    """Immutable board coordinate."""

    rank: int
    file: int

    def __post_init__(self) -> None:
        if not is_on_board(self.rank, self.file):
            raise InvalidSquareError(
                f"Square out of range: ({self.rank!r}, {self.file!r})"
            )

    # ── Serialisation ────────────────────────────────────────────────────

    @property
    def key(self) -> str:
        """Wire key ``"RF"``."""
        return f"{self.rank}{self.file}"

    @property
    def name(self) -> str:
        """Algebraic name, e.g. ``Square(1, 4).name == 'e2'``."""
        return f"{_FILES[self.file]}{self.rank + 1}"

    def __str__(self) -> str:
        return self.key

    # ── Geometry ─────────────────────────────────────────────────────────

    def shifted(self, dr: int, df: int) -> Square | None:
        """Square offset by ``(dr, df)``, or None when it falls off the board."""
        rank = self.rank + dr
        file = self.file + df
        if not is_on_board(rank, file):
            return None
        return Square(rank, file)

    @property
    def is_light(self) -> bool:
        return (self.rank + self.file) % 2 == 1


def parse_square(key: str) -> Square:
    """Parse a wire key, e.g. ``'14'`` → ``Square(1, 4)``."""
    if (
        not isinstance(key, str)
        or len(key) != 2
        or key[0] not in _DIGITS
        or key[1] not in _DIGITS
    ):
        raise InvalidSquareError(f"Incorrect position format: {key!r}")
    return Square(int(key[0]), int(key[1]))


def square_key(rank: int, file: int) -> str:
    """Wire key for a raw coordinate pair."""
    return Square(rank, file).key


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(rank, file) for rank in range(8) for file in range(8)
)

# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = (Square(0, f) for f in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Square(1, f) for f in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Square(2, f) for f in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Square(3, f) for f in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Square(4, f) for f in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Square(5, f) for f in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Square(6, f) for f in range(8))
A8, B8, C8, D8, E8, F8, G8, H8 = (Square(7, f) for f in range(8))
