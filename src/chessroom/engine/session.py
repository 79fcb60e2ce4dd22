"""Computer opponent orchestration for the Qt main thread."""

from __future__ import annotations

import logging
from collections.abc import Callable

from PyQt6.QtCore import QObject, QThread, QTimer, pyqtSignal

from chessroom.core.types import Square
from chessroom.engine.qt_bridge import EngineWorker
from chessroom.engine.search import IEngine, MoveChoice
from chessroom.game.controller import GameController, OpponentRequest
from chessroom.settings import AppSettings

_LOGGER = logging.getLogger(__name__)

SubmitMove = Callable[[int, Square, Square], bool]


class _OpponentCommandBus(QObject):
    """Signal bridge for issuing worker commands with queued delivery."""

    move_requested = pyqtSignal(object, object, object, int)
    cancel_requested = pyqtSignal()


class OpponentSession:
    """Owns the worker-thread lifecycle and hands moves back to the controller.

    Each opponent request is delayed by ``delay_ms`` before the worker
    starts, and its result is submitted with the request's ticket so the
    controller can drop answers that arrive after an undo or reset.
    """

    _SHUTDOWN_WAIT_MS = 2000

    __slots__ = (
        "__weakref__",
        "_controller",
        "_submit",
        "_delay_ms",
        "_command_bus",
        "_dispatch_timer",
        "_worker_thread",
        "_worker",
        "_pending_request",
        "_is_shutting_down",
        "_is_started",
    )

    def __init__(
        self,
        controller: GameController,
        *,
        submit: SubmitMove | None = None,
        delay_ms: int = 500,
        depth: int = 3,
        engine: IEngine | None = None,
        parent: QObject | None = None,
    ) -> None:
        self._controller = controller
        self._submit: SubmitMove = submit or controller.submit_opponent_move
        self._delay_ms = delay_ms

        self._command_bus = _OpponentCommandBus(parent)
        self._dispatch_timer = QTimer(parent)
        self._dispatch_timer.setSingleShot(True)
        self._dispatch_timer.timeout.connect(self._emit_pending_request)

        self._worker_thread = QThread(parent)
        self._worker = EngineWorker(engine, depth=depth)
        self._pending_request: OpponentRequest | None = None
        self._is_shutting_down = False
        self._is_started = False

    @classmethod
    def from_settings(
        cls,
        controller: GameController,
        settings: AppSettings,
        *,
        submit: SubmitMove | None = None,
        parent: QObject | None = None,
    ) -> OpponentSession:
        return cls(
            controller,
            submit=submit,
            delay_ms=settings.ai_move_delay_ms,
            depth=settings.engine_depth,
            parent=parent,
        )

    @property
    def pending_request(self) -> OpponentRequest | None:
        return self._pending_request

    @property
    def is_started(self) -> bool:
        return self._is_started

    def setup(self) -> None:
        """Start the worker thread and subscribe to the controller."""
        if self._is_started:
            return
        self._is_shutting_down = False
        self._worker.moveToThread(self._worker_thread)
        self._command_bus.move_requested.connect(self._worker.request_move)
        self._command_bus.cancel_requested.connect(self._worker.cancel)
        self._worker.best_move_ready.connect(self._on_best_move)
        self._worker.search_cancelled.connect(self._on_cancelled)
        self._worker.search_no_move.connect(self._on_no_move)
        self._worker.search_error.connect(self._on_error)
        self._worker_thread.start()

        events = self._controller.events
        events.on_opponent_turn.append(self.request_move)
        events.on_opponent_cancelled.append(self.cancel)
        self._is_started = True

        # The controller may already be waiting on us (computer opens).
        pending = self._controller.pending_opponent_request
        if pending is not None:
            self.request_move(pending)

    def shutdown(self) -> None:
        """Stop any active search and shut down the worker thread."""
        if not self._is_started:
            return
        self._is_shutting_down = True
        self.cancel()
        self._worker_thread.quit()
        self._worker_thread.wait(self._SHUTDOWN_WAIT_MS)

        events = self._controller.events
        if self.request_move in events.on_opponent_turn:
            events.on_opponent_turn.remove(self.request_move)
        if self.cancel in events.on_opponent_cancelled:
            events.on_opponent_cancelled.remove(self.cancel)
        self._is_started = False

    def request_move(self, request: OpponentRequest) -> None:
        """Queue a move search for *request* after the configured delay."""
        if not self._is_started or self._is_shutting_down:
            return
        self.cancel()
        self._pending_request = request
        _LOGGER.debug(
            "Opponent request %d queued (%s, %s)",
            request.ticket,
            request.color,
            request.difficulty.value,
        )
        self._dispatch_timer.start(self._delay_ms)

    def cancel(self) -> None:
        """Drop the pending request and stop any running search."""
        self._dispatch_timer.stop()
        self._pending_request = None
        if self._is_started:
            self._command_bus.cancel_requested.emit()

    # -- Worker callbacks ---------------------------------------------------

    def _emit_pending_request(self) -> None:
        if self._is_shutting_down:
            return
        request = self._pending_request
        if request is None:
            return
        self._command_bus.move_requested.emit(
            request.board, request.color, request.difficulty, request.ticket
        )

    def _on_best_move(self, request_id: int, choice_obj: object) -> None:
        if self._is_shutting_down or not self._is_current(request_id):
            return
        if not isinstance(choice_obj, MoveChoice):
            _LOGGER.warning("Opponent returned %r instead of a move", choice_obj)
            return
        self._pending_request = None
        accepted = self._submit(request_id, choice_obj.from_sq, choice_obj.to_sq)
        if not accepted:
            _LOGGER.info("Opponent move %s for ticket %d was rejected", choice_obj, request_id)

    def _on_cancelled(self, request_id: int) -> None:
        _LOGGER.debug("Opponent search %d cancelled", request_id)

    def _on_no_move(self, request_id: int) -> None:
        if self._is_shutting_down or not self._is_current(request_id):
            return
        self._pending_request = None
        _LOGGER.warning("Opponent has no legal move (ticket %d)", request_id)

    def _on_error(self, request_id: int, message: str) -> None:
        if self._is_shutting_down or not self._is_current(request_id):
            return
        self._pending_request = None
        _LOGGER.error("Opponent search %d failed: %s", request_id, message)

    def _is_current(self, request_id: int) -> bool:
        request = self._pending_request
        return request is not None and request.ticket == request_id
