"""Domain errors raised by the rule engine and the game layer."""

from __future__ import annotations


class ChessError(ValueError):
    """Base class for recoverable chess command failures."""


class NoPieceAtSourceError(ChessError):
    """A move was requested from an empty square."""

    def __init__(self, message: str = "no piece at source") -> None:
        super().__init__(message)


class InvalidMoveError(ChessError):
    """The destination is not among the computed legal moves."""

    def __init__(self, message: str = "invalid move") -> None:
        super().__init__(message)


class NoHistoryError(ChessError):
    """Undo was requested with an empty snapshot stack."""

    def __init__(self, message: str = "no moves to undo") -> None:
        super().__init__(message)


class LockUnavailableError(ChessError):
    """A session lock could not be acquired in time."""


class SessionNotFoundError(ChessError):
    """No session is registered under the given handle."""
