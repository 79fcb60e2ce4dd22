"""Game management layer: state machine, controller, players, sessions.

Quick start::

    from chessroom.game import GameConfig, GameController

    ctrl = GameController(GameConfig())
    ctrl.move_piece(4, 6, 4, 4)  # e2-e4
"""

from chessroom.game.controller import GameController, GameEvents, OpponentRequest
from chessroom.game.history import UndoHistory
from chessroom.game.interfaces import (
    Difficulty,
    GameConfig,
    GameMode,
    GamePhase,
    IPlayer,
)
from chessroom.game.player import AIPlayer, HumanPlayer, RemotePlayer
from chessroom.game.relay import RelayMessage
from chessroom.game.sessions import GameSession, SessionManager
from chessroom.game.state import GameState, MoveRecord

__all__ = [
    # Interfaces / config
    "Difficulty",
    "GameConfig",
    "GameMode",
    "GamePhase",
    "IPlayer",
    # Concrete
    "AIPlayer",
    "GameController",
    "GameEvents",
    "GameSession",
    "GameState",
    "HumanPlayer",
    "MoveRecord",
    "OpponentRequest",
    "RelayMessage",
    "RemotePlayer",
    "SessionManager",
    "UndoHistory",
]
