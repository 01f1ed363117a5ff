"""GameController — the central orchestrator of a chess game.

Coordinates: Board, Players, Rules.
Emits events via simple callbacks so a transport layer / tests can subscribe.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from chessrules.core.board import Board
from chessrules.core.enums import Color, GameResult, PieceType
from chessrules.core.errors import EmptySquareError, GameOverError, IllegalMoveError
from chessrules.core.move import Move
from chessrules.core.piece import King, Piece
from chessrules.core.rules import Rules
from chessrules.core.types import Square, parse_square
from chessrules.game.config import GameConfig
from chessrules.game.interfaces import GamePhase, IGameController
from chessrules.game.player import Player
from chessrules.game.state import MoveRecord

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, Player], None]  # record, mover
GameOverCallback = Callable[[GameResult], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Owns one game: the board, both players and whose turn it is.

    Colors are assigned by *rng* (or fixed by *first_player_color*, the
    color given to the first player). White always moves first.

    Thread-safety: none. A host serving concurrent requests must serialise
    all calls on one controller.
    """

    __slots__ = (
        "_config",
        "_rng",
        "_first_player_color",
        "_board",
        "_players",
        "_current",
        "_phase",
        "_result",
        "events",
    )

    def __init__(
        self,
        config: GameConfig | None = None,
        rng: random.Random | None = None,
        first_player_color: Color | None = None,
    ) -> None:
        self._config = config if config is not None else GameConfig.default()
        self._rng = rng if rng is not None else random.Random()
        self._first_player_color = first_player_color
        self._board = Board()
        self._players: tuple[Player, Player] | None = None
        self._current: Player | None = None
        self._phase = GamePhase.NOT_STARTED
        self._result = GameResult.IN_PROGRESS
        self.events = GameEvents()
        self.new_game()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def board(self) -> Board:
        return self._board

    @property
    def players(self) -> tuple[Player, Player]:
        """``(first player, second player)`` in creation order."""
        assert self._players is not None
        return self._players

    @property
    def current_player(self) -> Player:
        assert self._current is not None
        return self._current

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def result(self) -> GameResult:
        return self._result

    @property
    def is_game_over(self) -> bool:
        return self._phase == GamePhase.GAME_OVER

    def player(self, color: Color) -> Player:
        for p in self.players:
            if p.color == color:
                return p
        raise ValueError(f"No player for {color}")

    def king(self, color: Color) -> King:
        """*color*'s king; raises ValueError when it is not on the board."""
        return self.player(color).locate_king(self._board)

    # ── Game lifecycle ───────────────────────────────────────────────────

    def new_game(self, first_player_color: Color | None = None) -> None:
        """Repopulate the board and recreate both players."""
        self._board.reset()

        first_color = first_player_color
        if first_color is None:
            first_color = self._first_player_color
        if first_color is None:
            first_color = self._rng.choice((Color.WHITE, Color.BLACK))

        cfg = self._config
        first = Player(
            first_color,
            cfg.player_names[0],
            cfg.history_capacity,
            cfg.captured_capacity,
        )
        second = Player(
            first_color.opposite,
            cfg.player_names[1],
            cfg.history_capacity,
            cfg.captured_capacity,
        )
        self._players = (first, second)
        self._current = first if first.color == Color.WHITE else second
        self._result = GameResult.IN_PROGRESS
        _LOGGER.debug(
            "New game: %s plays %s, %s plays %s",
            first.name,
            first.color,
            second.name,
            second.color,
        )
        self._set_phase(GamePhase.AWAITING_MOVE)

    # ── Turn handling ────────────────────────────────────────────────────

    def legal_moves(self, sq: Square) -> list[Move] | None:
        """Legal moves for the side to move's piece on *sq*."""
        if self.is_game_over:
            return None
        return self.current_player.select_piece(self._board, sq)

    def submit_move(
        self,
        origin: Square,
        move: Move | None,
        promotion: PieceType | str | None = None,
    ) -> MoveRecord:
        """Validate and play *move*, then pass the turn."""
        if self.is_game_over:
            raise GameOverError(f"Game is over: {self._result.name}")
        if move is None:
            raise IllegalMoveError("Move could not be registered")

        mover = self.current_player
        legal = self.legal_moves(origin)
        if legal is None:
            if self._board.is_empty(origin):
                raise EmptySquareError(f"No piece on current position {origin.key}")
            raise IllegalMoveError(
                f"Piece on {origin.key} cannot be selected by {mover.name}"
            )
        if move not in legal:
            raise IllegalMoveError(f"Illegal move {move} for piece on {origin.key}")

        # Both kings must be locatable before the board changes.
        for color in Color:
            self.king(color)

        record = mover.make_move(self._board, origin, move, promotion)
        self._current = self.player(mover.color.opposite)
        self._refresh_kings()
        ended = self._config.detect_game_over and self._check_game_over()

        # Notify listeners once the turn has fully passed
        self._emit_move(record, mover)
        if ended:
            self._emit_game_over()
        return record

    def _refresh_kings(self) -> None:
        for color in Color:
            self.king(color).scan_threats(self._board)

    def _check_game_over(self) -> bool:
        result = Rules.game_result(self._board, self.current_player.color)
        if result == GameResult.IN_PROGRESS:
            return False
        self._result = result
        self._phase = GamePhase.GAME_OVER
        _LOGGER.info("Game over: %s", result.name)
        return True

    # ── IGameController impl ─────────────────────────────────────────────

    def get_legal_moves(self, position: str) -> list[dict[str, str]] | None:
        moves = self.legal_moves(parse_square(position))
        if moves is None:
            return None
        return [m.to_dict() for m in moves]

    def make_move(
        self,
        position: str,
        move: Mapping[str, Any] | Move,
        promotion: str | PieceType | None = None,
    ) -> None:
        origin = parse_square(position)
        if move is None:
            raise IllegalMoveError("Move could not be registered")
        parsed = move if isinstance(move, Move) else Move.from_dict(move)
        self.submit_move(origin, parsed, promotion)

    def get_board(self) -> Mapping[Square, Piece | None]:
        return self._board.snapshot()

    def reset_game(self) -> None:
        self.new_game()

    # ── Internal helpers ─────────────────────────────────────────────────

    def _emit_move(self, record: MoveRecord, mover: Player) -> None:
        for cb in self.events.on_move:
            cb(record, mover)

    def _emit_game_over(self) -> None:
        for cb in self.events.on_phase_changed:
            cb(self._phase)
        for cb in self.events.on_game_over:
            cb(self._result)

    def _set_phase(self, phase: GamePhase) -> None:
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)
