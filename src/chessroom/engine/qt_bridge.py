"""Qt bridge to run the opponent's move choice in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chessroom.core.board import Board
from chessroom.core.enums import Color, Difficulty
from chessroom.engine.heuristic import HeuristicEngine
from chessroom.engine.search import IEngine

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that picks opponent moves on demand."""

    best_move_ready = pyqtSignal(int, object)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_engine")

    def __init__(self, engine: IEngine | None = None, *, depth: int = 3) -> None:
        super().__init__()
        self._engine = engine or HeuristicEngine(depth=depth)
        self._cancel_event = threading.Event()

    @pyqtSlot(object, object, object, int)
    def request_move(
        self,
        board_obj: object,
        color_obj: object,
        difficulty_obj: object,
        request_id: int,
    ) -> None:
        """Pick a move for *color_obj* on *board_obj* and emit the result."""
        if not isinstance(board_obj, Board):
            self.search_error.emit(request_id, "Engine received invalid board")
            return
        try:
            color = Color(color_obj)
            difficulty = Difficulty(difficulty_obj)
        except ValueError as exc:
            self.search_error.emit(request_id, str(exc))
            return

        self._cancel_event.clear()
        try:
            choice = self._engine.choose_move(
                board_obj,
                color,
                difficulty,
                is_cancelled=self._cancel_event.is_set,
            )
        except Exception as exc:
            _LOGGER.exception("Engine failed on request %d", request_id)
            self.search_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        if choice is None:
            self.search_no_move.emit(request_id)
            return

        self.best_move_ready.emit(request_id, choice)

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current search."""
        self._cancel_event.set()
