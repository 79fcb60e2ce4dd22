"""Concrete player implementations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from chessroom.core.enums import Color
from chessroom.game.interfaces import IPlayer

if TYPE_CHECKING:
    from chessroom.core.board import Board


class _Seat(IPlayer):
    """Side of the board with a display name; moves arrive from outside."""

    __slots__ = ("_color", "_name")

    _LABEL = "Player"

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"{self._LABEL} ({color})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_local(self) -> bool:
        return False

    def request_move(self, board: Board, ticket: int) -> None:
        del board, ticket

    def cancel(self) -> None:
        return None


class HumanPlayer(_Seat):
    """Someone at this machine; moves come in via ``controller.move_piece``."""

    __slots__ = ()

    @property
    def is_local(self) -> bool:
        return True


class RemotePlayer(_Seat):
    """The peer in a networked game; moves come in as relay messages."""

    __slots__ = ()

    _LABEL = "Opponent"


class AIPlayer(_Seat):
    """The computer opponent; the search itself lives behind callbacks.

    Args:
        color: Side the computer plays.
        name: Display name.
        on_request_move: ``(Board, ticket) -> None``, invoked when the
            controller hands the computer its turn.
        on_cancel: ``() -> None``, invoked to abort a running search.
    """

    __slots__ = ("_on_request_move", "_on_cancel")

    def __init__(
        self,
        color: Color,
        name: str = "Computer",
        on_request_move: Callable[[Board, int], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(color, name)
        self._on_request_move = on_request_move
        self._on_cancel = on_cancel

    def request_move(self, board: Board, ticket: int) -> None:
        if self._on_request_move is not None:
            self._on_request_move(board, ticket)

    def cancel(self) -> None:
        if self._on_cancel is not None:
            self._on_cancel()
