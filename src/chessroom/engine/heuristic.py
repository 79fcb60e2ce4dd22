"""Heuristic computer opponent: random, greedy and minimax pickers."""

from __future__ import annotations

import random

from chessroom.core.board import Board
from chessroom.core.enums import Color, Difficulty, PieceType
from chessroom.core.move_generator import in_check
from chessroom.core.rules import Rules
from chessroom.core.types import Square
from chessroom.engine.search import CancelCheck, IEngine, MoveChoice

_INF_SCORE = 1_000_000
_CHECK_PENALTY = 50

_PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 300,
    PieceType.BISHOP: 300,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 10_000,
}

# Indexed [y][x] from White's point of view; Black reads row 7 - y.
_PAWN_TABLE: tuple[tuple[int, ...], ...] = (
    (0, 0, 0, 0, 0, 0, 0, 0),
    (50, 50, 50, 50, 50, 50, 50, 50),
    (10, 10, 20, 30, 30, 20, 10, 10),
    (5, 5, 10, 25, 25, 10, 5, 5),
    (0, 0, 0, 20, 20, 0, 0, 0),
    (5, -5, -10, 0, 0, -10, -5, 5),
    (5, 10, 10, -20, -20, 10, 10, 5),
    (0, 0, 0, 0, 0, 0, 0, 0),
)

_KNIGHT_TABLE: tuple[tuple[int, ...], ...] = (
    (-50, -40, -30, -30, -30, -30, -40, -50),
    (-40, -20, 0, 0, 0, 0, -20, -40),
    (-30, 0, 10, 15, 15, 10, 0, -30),
    (-30, 5, 15, 20, 20, 15, 5, -30),
    (-30, 0, 15, 20, 20, 15, 0, -30),
    (-30, 5, 10, 15, 15, 10, 5, -30),
    (-40, -20, 0, 5, 5, 0, -20, -40),
    (-50, -40, -30, -30, -30, -30, -40, -50),
)

_BISHOP_TABLE: tuple[tuple[int, ...], ...] = (
    (-20, -10, -10, -10, -10, -10, -10, -20),
    (-10, 0, 0, 0, 0, 0, 0, -10),
    (-10, 0, 10, 10, 10, 10, 0, -10),
    (-10, 5, 5, 10, 10, 5, 5, -10),
    (-10, 0, 5, 10, 10, 5, 0, -10),
    (-10, 10, 10, 10, 10, 10, 10, -10),
    (-10, 5, 0, 0, 0, 0, 5, -10),
    (-20, -10, -10, -10, -10, -10, -10, -20),
)

_PLACEMENT_TABLES: dict[PieceType, tuple[tuple[int, ...], ...]] = {
    PieceType.PAWN: _PAWN_TABLE,
    PieceType.KNIGHT: _KNIGHT_TABLE,
    PieceType.BISHOP: _BISHOP_TABLE,
}

Move = tuple[Square, Square]


def _never_cancelled() -> bool:
    return False


def evaluate(board: Board, color: Color, side_to_move: Color) -> int:
    """Material plus placement score from *color*'s point of view."""
    score = 0
    for y, row in enumerate(board.rows()):
        for x, piece in enumerate(row):
            if piece is None:
                continue
            value = _PIECE_VALUES[piece.piece_type]
            table = _PLACEMENT_TABLES.get(piece.piece_type)
            if table is not None:
                value += table[y][x] if piece.color == Color.WHITE else table[7 - y][x]
            score += value if piece.color == color else -value

    if side_to_move == color and in_check(board, color):
        score -= _CHECK_PENALTY
    return score


class HeuristicEngine(IEngine):
    """Difficulty-driven move picker.

    * ``EASY``   - uniformly random legal move.
    * ``MEDIUM`` - a checking move if any, else a capture, else random.
    * ``HARD``   - fixed-depth minimax with alpha-beta pruning.
    """

    __slots__ = ("_rng", "_depth", "_cancel_check", "_nodes")

    def __init__(self, rng: random.Random | None = None, depth: int = 3) -> None:
        if depth < 1:
            raise ValueError("Search depth must be >= 1")
        self._rng = rng or random.Random()
        self._depth = depth
        self._cancel_check: CancelCheck = _never_cancelled
        self._nodes = 0

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def nodes(self) -> int:
        """Positions visited by the last hard search."""
        return self._nodes

    def choose_move(
        self,
        board: Board,
        color: Color,
        difficulty: Difficulty,
        is_cancelled: CancelCheck | None = None,
    ) -> MoveChoice | None:
        self._cancel_check = is_cancelled or _never_cancelled
        moves = Rules.all_legal_moves(board, color)
        if not moves:
            return None

        if difficulty == Difficulty.EASY:
            move = self._rng.choice(moves)
        elif difficulty == Difficulty.MEDIUM:
            move = self._choose_greedy(board, color, moves)
        else:
            found = self._choose_minimax(board, color, moves)
            if found is None:
                return None
            move = found

        if self._cancel_check():
            return None
        return MoveChoice(*move)

    # -- Medium -------------------------------------------------------------

    def _choose_greedy(self, board: Board, color: Color, moves: list[Move]) -> Move:
        checks: list[Move] = []
        captures: list[Move] = []
        for from_sq, to_sq in moves:
            if board.get(to_sq) is not None:
                captures.append((from_sq, to_sq))
            scratch = board.copy()
            scratch.relocate(from_sq, to_sq)
            if in_check(scratch, color.opposite):
                checks.append((from_sq, to_sq))

        if checks:
            return self._rng.choice(checks)
        if captures:
            return self._rng.choice(captures)
        return self._rng.choice(moves)

    # -- Hard ---------------------------------------------------------------

    def _choose_minimax(
        self, board: Board, color: Color, moves: list[Move]
    ) -> Move | None:
        self._nodes = 0
        best_move: Move | None = None
        best_score = -_INF_SCORE
        alpha = -_INF_SCORE

        for from_sq, to_sq in moves:
            if self._cancel_check():
                return None
            child = board.copy()
            child.relocate(from_sq, to_sq)
            score = self._minimax(
                child, color, color.opposite, self._depth - 1, alpha, _INF_SCORE
            )
            if score > best_score:
                best_score = score
                best_move = (from_sq, to_sq)
            alpha = max(alpha, best_score)
        return best_move

    def _minimax(
        self,
        board: Board,
        color: Color,
        to_move: Color,
        depth: int,
        alpha: int,
        beta: int,
    ) -> int:
        self._nodes += 1
        if (
            depth == 0
            or Rules.is_king_captured(board, Color.WHITE)
            or Rules.is_king_captured(board, Color.BLACK)
            or self._cancel_check()
        ):
            return evaluate(board, color, to_move)

        moves = Rules.all_legal_moves(board, to_move)
        if not moves:
            return evaluate(board, color, to_move)

        maximizing = to_move == color
        best = -_INF_SCORE if maximizing else _INF_SCORE
        for from_sq, to_sq in moves:
            child = board.copy()
            child.relocate(from_sq, to_sq)
            score = self._minimax(child, color, to_move.opposite, depth - 1, alpha, beta)
            if maximizing:
                best = max(best, score)
                alpha = max(alpha, best)
            else:
                best = min(best, score)
                beta = min(beta, best)
            if beta <= alpha:
                break
        return best
