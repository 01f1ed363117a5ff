"""Move value object: a target square plus a move-type tag."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from chessrules.core.enums import MoveType
from chessrules.core.errors import IllegalMoveError
from chessrules.core.types import Square, parse_square


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object describing where a selected piece goes.

    The origin is not part of the move; it is the square the caller
    selected when asking for legal moves.
    """

    target: Square
    move_type: MoveType = MoveType.ADVANCE

    # ── Display / wire ───────────────────────────────────────────────────

    def __str__(self) -> str:
        return f"{self.move_type}@{self.target.key}"

    def to_dict(self) -> dict[str, str]:
        """Wire shape ``{"position": "RF", "moveType": tag}``."""
        return {"position": self.target.key, "moveType": self.move_type.value}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Move:
        try:
            position = data["position"]
            tag = data["moveType"]
        except (KeyError, TypeError):
            raise IllegalMoveError(f"Move could not be registered: {data!r}") from None
        try:
            move_type = MoveType(tag)
        except ValueError:
            raise IllegalMoveError(f"Invalid move type {tag!r}") from None
        return cls(parse_square(position), move_type)
