"""Abstract interfaces and configuration types for the game layer.

High-level GameController depends on these, not on concrete players.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from chessroom.core.enums import Color, Difficulty, GameMode

if TYPE_CHECKING:
    from chessroom.core.board import Board


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a single match."""

    IDLE = auto()
    SELECTED = auto()
    GAME_OVER = auto()


# ── Configuration ────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class GameConfig:
    """How a match is played.

    Args:
        mode: Local hot-seat, versus the computer, or networked.
        difficulty: Computer strength (AI mode only).
        player_color: The side controlled on this machine (AI and
            multiplayer modes). Defaults to White when unset.
        game_id: Room identifier for multiplayer games.
    """

    mode: GameMode = GameMode.LOCAL
    difficulty: Difficulty | None = None
    player_color: Color | None = None
    game_id: str | None = None

    @property
    def local_color(self) -> Color:
        return self.player_color if self.player_color is not None else Color.WHITE

    def to_dict(self) -> dict[str, str | None]:
        return {
            "mode": self.mode.value,
            "difficulty": self.difficulty.value if self.difficulty else None,
            "player_color": str(self.player_color) if self.player_color is not None else None,
            "game_id": self.game_id,
        }


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a game participant."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_local(self) -> bool:
        """Whether moves for this side come from this machine's user."""

    @abstractmethod
    def request_move(self, board: Board, ticket: int) -> None:
        """Begin the move-selection process.

        For humans and remote peers this is a no-op. For the computer it
        kicks off a background search tagged with *ticket*.
        """

    @abstractmethod
    def cancel(self) -> None:
        """Cancel an ongoing move computation (computer only)."""
