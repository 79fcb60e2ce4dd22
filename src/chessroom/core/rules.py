"""High-level chess rules: legal-move filtering, check and king capture."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessroom.core.enums import Color, PieceType
from chessroom.core.move_generator import MoveGenerator
from chessroom.core.piece import Piece

if TYPE_CHECKING:
    from chessroom.core.board import Board
    from chessroom.core.types import Square


class Rules:
    """Static rule-checker that operates on a :class:`Board`.

    This is the only legality authority in the package; game state,
    computer opponent and relay all go through it.
    """

    # Product policy: a game ends only when a king is captured. There is
    # no checkmate, stalemate or draw-by-rule detection.

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return MoveGenerator(board).is_in_check(color)

    @staticmethod
    def legal_moves(board: Board, sq: Square, side_to_move: Color) -> list[Square]:
        """Pseudo-legal moves of the piece on *sq* that keep its king safe.

        Empty when *sq* is empty or holds a piece *side_to_move* does not
        own. Generation order is preserved.
        """
        piece = board.get(sq)
        if piece is None or piece.color != side_to_move:
            return []

        legal: list[Square] = []
        for to_sq in MoveGenerator(board).pseudo_legal_moves(sq):
            scratch = board.copy()
            scratch.relocate(sq, to_sq)
            if not MoveGenerator(scratch).is_in_check(piece.color):
                legal.append(to_sq)
        return legal

    @staticmethod
    def all_legal_moves(board: Board, color: Color) -> list[tuple[Square, Square]]:
        """Every legal ``(from, to)`` pair for *color*, board order."""
        pairs: list[tuple[Square, Square]] = []
        for sq in board.pieces(color):
            for to_sq in Rules.legal_moves(board, sq, color):
                pairs.append((sq, to_sq))
        return pairs

    @staticmethod
    def is_king_captured(board: Board, color: Color) -> bool:
        """Whether *color*'s king has been taken off the board."""
        return Piece(color, PieceType.KING) in board.captured_pieces
