"""Game management layer — controller, players, move history.

Quick start::

    from chessrules.game import GameController

    ctrl = GameController()
    ctrl.get_legal_moves("14")
    ctrl.make_move("14", {"position": "34", "moveType": "advanceTwice"})
"""

from chessrules.game.config import GameConfig
from chessrules.game.controller import GameController, GameEvents
from chessrules.game.interfaces import GamePhase, IGameController
from chessrules.game.player import Player
from chessrules.game.state import MoveRecord

__all__ = [
    # Interfaces
    "GamePhase",
    "IGameController",
    # Concrete
    "GameConfig",
    "GameController",
    "GameEvents",
    "MoveRecord",
    "Player",
]
