"""Pseudo-legal move generation and check detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessroom.core.enums import Color, PieceType
from chessroom.core.types import ALL_SQUARES, Square, in_bounds

if TYPE_CHECKING:
    from chessroom.core.board import Board


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (1, 2),
    (2, 1),
    (2, -1),
    (1, -2),
    (-1, -2),
    (-2, -1),
    (-2, 1),
    (-1, 2),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (0, -1),
    (1, -1),
    (-1, 0),
    (1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))
QUEEN_DIRS: tuple[tuple[int, int], ...] = ROOK_DIRS + BISHOP_DIRS

# color -> (forward dy, start row)
_PAWN_GEOMETRY: dict[Color, tuple[int, int]] = {
    Color.WHITE: (-1, 6),
    Color.BLACK: (1, 1),
}


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> dict[Square, tuple[Square, ...]]:
    targets: dict[Square, tuple[Square, ...]] = {}
    for sq in ALL_SQUARES:
        moves = [sq.offset(dx, dy) for dx, dy in offsets]
        targets[sq] = tuple(to_sq for to_sq in moves if in_bounds(to_sq))
    return targets


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> dict[Square, tuple[tuple[Square, ...], ...]]:
    rays_per_square: dict[Square, tuple[tuple[Square, ...], ...]] = {}
    for sq in ALL_SQUARES:
        square_rays: list[tuple[Square, ...]] = []
        for dx, dy in directions:
            ray: list[Square] = []
            to_sq = sq.offset(dx, dy)
            while in_bounds(to_sq):
                ray.append(to_sq)
                to_sq = to_sq.offset(dx, dy)
            square_rays.append(tuple(ray))
        rays_per_square[sq] = tuple(square_rays)
    return rays_per_square


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_SLIDING_RAYS = {
    PieceType.BISHOP: _BISHOP_RAYS,
    PieceType.ROOK: _ROOK_RAYS,
    PieceType.QUEEN: _QUEEN_RAYS,
}


class MoveGenerator:
    """Generates pseudo-legal destinations for pieces on a :class:`Board`.

    Pseudo-legal means the piece's movement pattern and the board
    occupancy are respected, but whether the move leaves the mover's own
    king attacked is not inspected. See :class:`~chessroom.core.rules.Rules`
    for the filtered, legal variant.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def pseudo_legal_moves(self, sq: Square) -> list[Square]:
        """Destinations for the piece on *sq*, in generation order."""
        piece = self._board.get(sq)
        if piece is None:
            return []

        moves: list[Square] = []
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            self._gen_pawn(sq, piece.color, moves)
        elif ptype == PieceType.KNIGHT:
            self._gen_steps(_KNIGHT_TARGETS[sq], piece.color, moves)
        elif ptype == PieceType.KING:
            self._gen_steps(_KING_TARGETS[sq], piece.color, moves)
        else:
            self._gen_sliding(_SLIDING_RAYS[ptype][sq], piece.color, moves)
        return moves

    # -- Check detection (public) ------------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king among the destinations of an opposing piece?"""
        king_sq = self._board.king_square(color)
        if king_sq is None:
            return False
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, target: Square, by_color: Color) -> bool:
        """Does any piece of *by_color* pseudo-legally reach *target*?"""
        for sq in self._board.pieces(by_color):
            if target in self.pseudo_legal_moves(sq):
                return True
        return False

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Square]) -> None:
        board = self._board
        dy, start_row = _PAWN_GEOMETRY[color]

        one_step = sq.offset(0, dy)
        if board.in_bounds(one_step) and board.is_empty(one_step):
            moves.append(one_step)
            two_step = sq.offset(0, 2 * dy)
            if sq.y == start_row and board.is_empty(two_step):
                moves.append(two_step)

        for dx in (-1, 1):
            cap_sq = sq.offset(dx, dy)
            target = board.get(cap_sq)
            if target is not None and target.color != color:
                moves.append(cap_sq)

    def _gen_steps(
        self,
        targets: tuple[Square, ...],
        color: Color,
        moves: list[Square],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board.get(to_sq)
            if target is None or target.color != color:
                moves.append(to_sq)

    def _gen_sliding(
        self,
        rays: tuple[tuple[Square, ...], ...],
        color: Color,
        moves: list[Square],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board.get(to_sq)
                if target is None:
                    moves.append(to_sq)
                    continue
                if target.color != color:
                    moves.append(to_sq)
                break


def in_check(board: Board, color: Color) -> bool:
    """Stateless check detector, equivalent to ``board.is_in_check(color)``."""
    return MoveGenerator(board).is_in_check(color)
