"""Application settings."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from chessroom.core.enums import Difficulty

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class AppSettings:
    """All user-configurable settings."""

    # Computer opponent
    ai_move_delay_ms: int = 500
    default_difficulty: Difficulty = Difficulty.MEDIUM
    engine_depth: int = 3

    # Game
    undo_capacity: int = 50
    lock_timeout_seconds: float = 2.0

    # Diagnostics
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.ai_move_delay_ms < 0:
            raise ValueError(f"ai_move_delay_ms must be >= 0, got {self.ai_move_delay_ms}")
        if self.engine_depth < 1:
            raise ValueError(f"engine_depth must be >= 1, got {self.engine_depth}")
        if self.undo_capacity < 1:
            raise ValueError(f"undo_capacity must be >= 1, got {self.undo_capacity}")
        if self.lock_timeout_seconds <= 0:
            raise ValueError(
                f"lock_timeout_seconds must be > 0, got {self.lock_timeout_seconds}"
            )
        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level!r}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AppSettings:
        """Build settings from ``CHESSROOM_*`` environment variables."""
        env = os.environ if environ is None else environ
        defaults = cls()

        def _int(name: str, default: int) -> int:
            raw = env.get(name)
            if raw is None or raw == "":
                return default
            try:
                return int(raw)
            except ValueError:
                raise ValueError(f"{name} must be an integer, got {raw!r}") from None

        raw_timeout = env.get("CHESSROOM_LOCK_TIMEOUT")
        try:
            lock_timeout = (
                float(raw_timeout) if raw_timeout else defaults.lock_timeout_seconds
            )
        except ValueError:
            raise ValueError(
                f"CHESSROOM_LOCK_TIMEOUT must be a number, got {raw_timeout!r}"
            ) from None

        raw_difficulty = env.get("CHESSROOM_DIFFICULTY")
        try:
            difficulty = (
                Difficulty(raw_difficulty.upper())
                if raw_difficulty
                else defaults.default_difficulty
            )
        except ValueError:
            raise ValueError(f"Unknown difficulty: {raw_difficulty!r}") from None

        return cls(
            ai_move_delay_ms=_int("CHESSROOM_AI_DELAY_MS", defaults.ai_move_delay_ms),
            default_difficulty=difficulty,
            engine_depth=_int("CHESSROOM_ENGINE_DEPTH", defaults.engine_depth),
            undo_capacity=_int("CHESSROOM_UNDO_CAPACITY", defaults.undo_capacity),
            lock_timeout_seconds=lock_timeout,
            log_level=env.get("CHESSROOM_LOG_LEVEL") or defaults.log_level,
        )
