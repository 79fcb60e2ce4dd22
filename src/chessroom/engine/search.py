"""Shared engine models and protocol."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chessroom.core.board import Board
    from chessroom.core.enums import Color, Difficulty
    from chessroom.core.types import Square

CancelCheck = Callable[[], bool]


@dataclass(slots=True, frozen=True)
class MoveChoice:
    """A move picked by the engine."""

    from_sq: Square
    to_sq: Square

    def __str__(self) -> str:
        return f"{self.from_sq}-{self.to_sq}"


class IEngine(Protocol):
    """Protocol for move pickers used by the opponent session / console."""

    def choose_move(
        self,
        board: Board,
        color: Color,
        difficulty: Difficulty,
        is_cancelled: CancelCheck | None = None,
    ) -> MoveChoice | None: ...
