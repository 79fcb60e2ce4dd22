"""Computer opponent package: move pickers and the Qt worker bridge."""

from chessroom.engine.heuristic import HeuristicEngine, evaluate
from chessroom.engine.qt_bridge import EngineWorker
from chessroom.engine.search import CancelCheck, IEngine, MoveChoice
from chessroom.engine.session import OpponentSession

__all__ = [
    "CancelCheck",
    "EngineWorker",
    "HeuristicEngine",
    "IEngine",
    "MoveChoice",
    "OpponentSession",
    "evaluate",
]
