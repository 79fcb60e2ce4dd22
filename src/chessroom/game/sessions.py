"""Session table: independent matches addressed by opaque handles."""

from __future__ import annotations

import logging
import threading
import time
import uuid
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from chessroom.core.errors import LockUnavailableError, SessionNotFoundError
from chessroom.core.types import Square
from chessroom.game.controller import GameController
from chessroom.game.interfaces import GameConfig
from chessroom.game.state import GameState
from chessroom.settings import AppSettings

_LOGGER = logging.getLogger(__name__)


@dataclass
class GameSession:
    """One match plus the lock that serializes commands against it."""

    session_id: str
    controller: GameController
    created_at: float = field(default_factory=time.time)
    last_updated: float = field(default_factory=time.time)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def config(self) -> GameConfig:
        return self.controller.state.config


class SessionManager:
    """Creates, tracks and dispatches commands to game sessions.

    Every command holds the target session's lock for its whole duration,
    so moves within a match are atomic with respect to each other while
    distinct matches never block one another.
    """

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()
        self._sessions: dict[str, GameSession] = {}
        self._active_id: str | None = None
        self._table_lock = threading.Lock()

    # ── Session lifecycle ────────────────────────────────────────────────

    def create_session(
        self,
        config: GameConfig,
        *,
        setup: Callable[[str, GameController], None] | None = None,
    ) -> str:
        """Register a new match and make it the active one.

        *setup* receives the new id and controller before the first turn
        is handed out, so listeners (for example an opponent session) see
        the opening request.
        """
        session_id = uuid.uuid4().hex
        controller = GameController(
            config,
            undo_capacity=self._settings.undo_capacity,
            default_difficulty=self._settings.default_difficulty,
        )
        if setup is not None:
            setup(session_id, controller)
        controller.start()

        session = GameSession(session_id=session_id, controller=controller)
        with self._table_lock:
            self._sessions[session_id] = session
            self._active_id = session_id

        _LOGGER.info("Created session %s (%s)", session_id, config.mode.value)
        return session_id

    def get_session(self, session_id: str) -> GameSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(f"Session not found: {session_id}")
        return session

    def switch_session(self, session_id: str) -> GameSession:
        session = self.get_session(session_id)
        self._active_id = session_id
        _LOGGER.debug("Switched to session %s", session_id)
        return session

    @property
    def active_session(self) -> GameSession | None:
        if self._active_id is None:
            return None
        return self._sessions.get(self._active_id)

    def end_session(self, session_id: str) -> None:
        with self._table_lock:
            session = self._sessions.pop(session_id, None)
            if session is None:
                raise SessionNotFoundError(f"Session not found: {session_id}")
            if self._active_id == session_id:
                self._active_id = None
        session.controller.close()
        _LOGGER.info("Ended session %s", session_id)

    def list_sessions(self) -> list[GameSession]:
        return sorted(self._sessions.values(), key=lambda s: s.created_at)

    def __len__(self) -> int:
        return len(self._sessions)

    # ── Commands ─────────────────────────────────────────────────────────

    def get_state(self, session_id: str) -> GameState:
        return self._run(session_id, lambda c: c.get_state())

    def select_square(self, session_id: str, x: int, y: int) -> GameState:
        return self._run(session_id, lambda c: c.select_square(x, y))

    def move_piece(
        self, session_id: str, from_x: int, from_y: int, to_x: int, to_y: int
    ) -> GameState:
        return self._run(session_id, lambda c: c.move_piece(from_x, from_y, to_x, to_y))

    def reset_game(self, session_id: str) -> GameState:
        return self._run(session_id, lambda c: c.reset_game())

    def start_new_game(self, session_id: str, config: GameConfig) -> GameState:
        return self._run(session_id, lambda c: c.start_new_game(config))

    def undo_move(self, session_id: str) -> GameState:
        return self._run(session_id, lambda c: c.undo_move())

    def submit_opponent_move(
        self, session_id: str, ticket: int, from_sq: Square, to_sq: Square
    ) -> bool:
        with self.locked(session_id) as controller:
            return controller.submit_opponent_move(ticket, from_sq, to_sq)

    # ── Internal ─────────────────────────────────────────────────────────

    @contextmanager
    def locked(self, session_id: str) -> Iterator[GameController]:
        """Hold *session_id*'s lock and yield its controller.

        Raises:
            SessionNotFoundError: unknown handle.
            LockUnavailableError: the lock was not acquired in time.
        """
        session = self.get_session(session_id)
        if not session.lock.acquire(timeout=self._settings.lock_timeout_seconds):
            raise LockUnavailableError(f"Session {session_id} is busy")
        try:
            yield session.controller
        finally:
            session.last_updated = time.time()
            session.lock.release()

    def _run(
        self, session_id: str, command: Callable[[GameController], GameState]
    ) -> GameState:
        with self.locked(session_id) as controller:
            return command(controller).copy()
