"""Move notation for the history log and the board placement codec."""

from __future__ import annotations

from chessroom.core.board import Board
from chessroom.core.enums import PieceType
from chessroom.core.piece import Piece
from chessroom.core.types import BOARD_SIZE, Square, square_name

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

_PIECE_PREFIX: dict[PieceType, str] = {
    PieceType.PAWN: "",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}


# ── Move notation ────────────────────────────────────────────────────────────


def notate(piece: Piece, from_sq: Square, to_sq: Square, was_capture: bool) -> str:
    """Long algebraic string for a completed move, e.g. ``Ng1-f3`` or ``e4xd5``."""
    separator = "x" if was_capture else "-"
    return (
        _PIECE_PREFIX[piece.piece_type]
        + square_name(from_sq)
        + separator
        + square_name(to_sq)
    )


# ── Placement ────────────────────────────────────────────────────────────────


def board_to_placement(board: Board) -> str:
    """Serialize piece placement as a FEN placement field (top row first)."""
    rows: list[str] = []
    for row in board.rows():
        text = ""
        empty = 0
        for piece in row:
            if piece is None:
                empty += 1
                continue
            if empty:
                text += str(empty)
                empty = 0
            text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)
    return "/".join(rows)


def board_from_placement(placement: str, captured: str = "") -> Board:
    """Parse a FEN placement field into a :class:`Board`.

    *captured* is an optional string of FEN letters restored into the
    capture log in order.
    """
    rows = placement.strip().split("/")
    if len(rows) != BOARD_SIZE:
        raise ValueError(f"Invalid placement (must contain 8 rows): {placement!r}")

    board = Board()
    for y, row_text in enumerate(rows):
        x = 0
        for ch in row_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= BOARD_SIZE):
                    raise ValueError(f"Invalid placement digit {ch!r}: {placement!r}")
                x += step
                continue
            if x >= BOARD_SIZE:
                raise ValueError(f"Placement row overflow: {placement!r}")
            board[Square(x, y)] = Piece.from_char(ch)
            x += 1
        if x != BOARD_SIZE:
            raise ValueError(f"Placement row {y} has {x} cells: {placement!r}")

    board.captured_pieces = [Piece.from_char(ch) for ch in captured]
    return board


def captured_to_text(board: Board) -> str:
    """Capture log as a string of FEN letters."""
    return "".join(str(p) for p in board.captured_pieces)
