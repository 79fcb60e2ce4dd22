"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from chessroom.core import Board, Color, Rules, parse_square

    board = Board.initial()
    for to_sq in Rules.legal_moves(board, parse_square("g1"), Color.WHITE):
        print(to_sq)
"""

from chessroom.core.board import Board
from chessroom.core.enums import Color, Difficulty, GameMode, PieceType
from chessroom.core.errors import (
    ChessError,
    InvalidMoveError,
    LockUnavailableError,
    NoHistoryError,
    NoPieceAtSourceError,
    SessionNotFoundError,
)
from chessroom.core.move_generator import MoveGenerator, in_check
from chessroom.core.notation import (
    STARTING_PLACEMENT,
    board_from_placement,
    board_to_placement,
    notate,
)
from chessroom.core.piece import Piece
from chessroom.core.rules import Rules
from chessroom.core.types import Square, in_bounds, parse_square, square_name

__all__ = [
    # Enums
    "Color",
    "Difficulty",
    "GameMode",
    "PieceType",
    # Types / helpers
    "Square",
    "in_bounds",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "MoveGenerator",
    "Piece",
    "Rules",
    "in_check",
    # Errors
    "ChessError",
    "InvalidMoveError",
    "LockUnavailableError",
    "NoHistoryError",
    "NoPieceAtSourceError",
    "SessionNotFoundError",
    # Notation
    "STARTING_PLACEMENT",
    "board_from_placement",
    "board_to_placement",
    "notate",
]
