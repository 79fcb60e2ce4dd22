"""Board - piece placement on an 8x8 grid plus the capture log."""

from __future__ import annotations

from chessroom.core.enums import Color, PieceType
from chessroom.core.errors import InvalidMoveError, NoPieceAtSourceError
from chessroom.core.piece import Piece
from chessroom.core.types import ALL_SQUARES, BOARD_SIZE, Square, in_bounds

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 64-cell grid of optional pieces.

    All bounds checks go through :meth:`in_bounds`; reads of off-board
    squares fail closed and report an empty cell.
    """

    __slots__ = ("_grid", "captured_pieces")

    def __init__(self) -> None:
        # _grid[y][x]
        self._grid: list[list[Piece | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]
        # Insertion order is capture order.
        self.captured_pieces: list[Piece] = []

    # -- Element access -----------------------------------------------------

    @staticmethod
    def in_bounds(sq: Square) -> bool:
        return in_bounds(sq)

    def get(self, sq: Square) -> Piece | None:
        if not in_bounds(sq):
            return None
        return self._grid[sq.y][sq.x]

    def __getitem__(self, sq: Square) -> Piece | None:
        return self.get(sq)

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        if not in_bounds(sq):
            raise ValueError(f"Square off the board: ({sq.x}, {sq.y})")
        self._grid[sq.y][sq.x] = piece

    def is_empty(self, sq: Square) -> bool:
        return self.get(sq) is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color) -> list[Square]:
        """Squares occupied by *color*, top row first."""
        squares: list[Square] = []
        for sq in ALL_SQUARES:
            piece = self._grid[sq.y][sq.x]
            if piece is not None and piece.color == color:
                squares.append(sq)
        return squares

    def king_square(self, color: Color) -> Square | None:
        """First square holding *color*'s king, or ``None`` if it is gone."""
        king = Piece(color, PieceType.KING)
        for sq in ALL_SQUARES:
            if self._grid[sq.y][sq.x] == king:
                return sq
        return None

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked? ``False`` when no king is on the board."""
        from chessroom.core.move_generator import MoveGenerator

        return MoveGenerator(self).is_in_check(color)

    def rows(self) -> list[list[Piece | None]]:
        """Copy of the grid as rows, top row first."""
        return [row.copy() for row in self._grid]

    # -- Mutation / copying -------------------------------------------------

    def relocate(self, from_sq: Square, to_sq: Square) -> Piece | None:
        """Move the piece on *from_sq* to *to_sq*, returning any captured piece."""
        piece = self.get(from_sq)
        if piece is None:
            raise NoPieceAtSourceError()
        if from_sq == to_sq:
            raise InvalidMoveError()
        if not in_bounds(to_sq):
            raise ValueError(f"Square off the board: ({to_sq.x}, {to_sq.y})")

        captured = self.get(to_sq)
        if captured is not None:
            self.captured_pieces.append(captured)
        self[to_sq] = piece
        self[from_sq] = None
        return captured

    def copy(self) -> Board:
        b = Board()
        b._grid = [row.copy() for row in self._grid]
        b.captured_pieces = self.captured_pieces.copy()
        return b

    def clear(self) -> None:
        self._grid = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        self.captured_pieces = []

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position, White on the bottom rows."""
        b = cls()
        for x, pt in enumerate(_BACK_RANK):
            b[Square(x, 0)] = Piece(Color.BLACK, pt)
            b[Square(x, 1)] = Piece(Color.BLACK, PieceType.PAWN)
            b[Square(x, 6)] = Piece(Color.WHITE, PieceType.PAWN)
            b[Square(x, 7)] = Piece(Color.WHITE, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._grid == other._grid
            and self.captured_pieces == other.captured_pieces
        )

    def __repr__(self) -> str:
        rows: list[str] = []
        for y, row in enumerate(self._grid):
            cells = " ".join(str(p) if p else "." for p in row)
            rows.append(f"{BOARD_SIZE - y} {cells}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
