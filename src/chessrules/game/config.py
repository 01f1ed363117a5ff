"""Game configuration value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.history import DEFAULT_CAPACITY

# An opponent owns 15 non-king pieces and promotion only replaces one of them.
MAX_CAPTURES = 15


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Immutable game settings.

    Args:
        player_names: Display names of the first and second player.
        history_capacity: Moves each player's history keeps before overflowing.
        captured_capacity: Size of each player's captured-pieces stack.
        detect_game_over: Evaluate checkmate / stalemate / dead draws after
            every move.
    """

    player_names: tuple[str, str] = ("Player 1", "Player 2")
    history_capacity: int = DEFAULT_CAPACITY
    captured_capacity: int = MAX_CAPTURES
    detect_game_over: bool = True

    def __post_init__(self) -> None:
        if len(self.player_names) != 2 or not all(self.player_names):
            raise ValueError(f"Two non-empty player names required: {self.player_names!r}")
        if self.player_names[0] == self.player_names[1]:
            raise ValueError(f"Player names must differ: {self.player_names!r}")
        if self.history_capacity < 1:
            raise ValueError(f"history_capacity must be >= 1, got {self.history_capacity!r}")
        if self.captured_capacity < 1:
            raise ValueError(
                f"captured_capacity must be >= 1, got {self.captured_capacity!r}"
            )

    # Presets
    @classmethod
    def default(cls) -> GameConfig:
        return cls()

    @classmethod
    def sandbox(cls) -> GameConfig:
        """No terminal detection: the game runs until the caller stops it."""
        return cls(detect_game_over=False)
