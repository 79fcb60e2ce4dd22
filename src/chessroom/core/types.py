"""Square value type and coordinate helpers.

Board layout (row-major from White's point of view, top row first)::

    y=0   a8 b8 c8 d8 e8 f8 g8 h8
    y=1   a7 ...
    ...
    y=7   a1 b1 c1 d1 e1 f1 g1 h1

``x`` is the file index (0 = ``a``), ``y`` the stored row index.
"""

from __future__ import annotations

from dataclasses import dataclass

BOARD_SIZE = 8
_FILES = "abcdefgh"


@dataclass(frozen=True, slots=True)
class Square:
    """Immutable ``(x, y)`` board coordinate.

    No range check happens here; :meth:`Board.in_bounds` is the single
    place that decides whether a square addresses a real cell.
    """

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> Square:
        return Square(self.x + dx, self.y + dy)

    def __str__(self) -> str:
        return square_name(self)


def in_bounds(sq: Square) -> bool:
    """Whether *sq* lies on the 8x8 board."""
    return 0 <= sq.x < BOARD_SIZE and 0 <= sq.y < BOARD_SIZE


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. ``Square(4, 6)`` → ``'e2'``."""
    if not in_bounds(sq):
        raise ValueError(f"Square off the board: ({sq.x}, {sq.y})")
    return _FILES[sq.x] + str(BOARD_SIZE - sq.y)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. ``'e4'`` → ``Square(4, 4)``."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(_FILES.index(name[0]), BOARD_SIZE - int(name[1]))


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(x, y) for y in range(BOARD_SIZE) for x in range(BOARD_SIZE)
)
