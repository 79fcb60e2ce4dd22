"""Bounded undo stack of full game-state snapshots."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from chessroom.core.errors import NoHistoryError

if TYPE_CHECKING:
    from chessroom.game.state import GameState

DEFAULT_CAPACITY = 50


class UndoHistory:
    """LIFO of snapshots; when full, the oldest snapshot is evicted."""

    __slots__ = ("_snapshots",)

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"Undo capacity must be positive, got {capacity}")
        self._snapshots: deque[GameState] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        maxlen = self._snapshots.maxlen
        assert maxlen is not None
        return maxlen

    def push(self, snapshot: GameState) -> None:
        self._snapshots.append(snapshot)

    def pop(self) -> GameState:
        if not self._snapshots:
            raise NoHistoryError()
        return self._snapshots.pop()

    def clear(self) -> None:
        self._snapshots.clear()

    def __len__(self) -> int:
        return len(self._snapshots)
