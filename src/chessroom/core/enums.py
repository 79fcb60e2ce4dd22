"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import Enum, IntEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class GameMode(str, Enum):
    """How the two sides of a match are controlled."""

    LOCAL = "LOCAL"
    AI = "AI"
    MULTIPLAYER = "MULTIPLAYER"


class Difficulty(str, Enum):
    """Computer opponent strength."""

    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"
