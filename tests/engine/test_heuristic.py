"""Tests for the heuristic computer opponent."""

import random

import pytest

from chessroom.core.board import Board
from chessroom.core.enums import Color, Difficulty, PieceType
from chessroom.core.piece import Piece
from chessroom.core.rules import Rules
from chessroom.core.types import Square
from chessroom.engine.heuristic import HeuristicEngine, evaluate
from chessroom.engine.search import MoveChoice

W, B = Color.WHITE, Color.BLACK


def _board(*pieces: tuple[int, int, Color, PieceType]) -> Board:
    board = Board()
    for x, y, color, ptype in pieces:
        board[Square(x, y)] = Piece(color, ptype)
    return board


class TestEvaluate:
    def test_initial_position_is_balanced(self) -> None:
        board = Board.initial()
        assert evaluate(board, W, W) == 0
        assert evaluate(board, B, W) == 0

    def test_material_advantage(self) -> None:
        board = Board.initial()
        board[Square(3, 0)] = None  # black queen gone
        assert evaluate(board, W, W) == 900
        assert evaluate(board, B, W) == -900

    def test_check_penalty_for_side_to_move(self) -> None:
        board = _board((4, 7, W, PieceType.KING), (4, 0, B, PieceType.ROOK))
        in_check_to_move = evaluate(board, W, W)
        in_check_waiting = evaluate(board, W, B)
        assert in_check_waiting - in_check_to_move == 50


class TestEasy:
    def test_returns_legal_move(self) -> None:
        board = Board.initial()
        choice = HeuristicEngine(random.Random(1)).choose_move(board, W, Difficulty.EASY)
        assert choice is not None
        assert (choice.from_sq, choice.to_sq) in Rules.all_legal_moves(board, W)

    def test_seeded_choice_is_repeatable(self) -> None:
        board = Board.initial()
        first = HeuristicEngine(random.Random(7)).choose_move(board, B, Difficulty.EASY)
        second = HeuristicEngine(random.Random(7)).choose_move(board, B, Difficulty.EASY)
        assert first == second


class TestMedium:
    def test_prefers_check_over_capture(self) -> None:
        board = _board(
            (0, 7, W, PieceType.ROOK),
            (7, 7, W, PieceType.KING),
            (3, 7, B, PieceType.KNIGHT),
            (4, 0, B, PieceType.KING),
        )
        for seed in range(5):
            choice = HeuristicEngine(random.Random(seed)).choose_move(
                board, W, Difficulty.MEDIUM
            )
            assert choice == MoveChoice(Square(0, 7), Square(0, 0))

    def test_prefers_capture_over_quiet_move(self) -> None:
        board = _board(
            (0, 7, W, PieceType.ROOK),
            (7, 7, W, PieceType.KING),
            (0, 3, B, PieceType.PAWN),
            (7, 0, B, PieceType.KING),
        )
        for seed in range(5):
            choice = HeuristicEngine(random.Random(seed)).choose_move(
                board, W, Difficulty.MEDIUM
            )
            assert choice == MoveChoice(Square(0, 7), Square(0, 3))


class TestHard:
    def test_takes_hanging_queen(self) -> None:
        board = _board(
            (0, 7, W, PieceType.ROOK),
            (4, 7, W, PieceType.KING),
            (0, 2, B, PieceType.QUEEN),
            (4, 0, B, PieceType.KING),
        )
        engine = HeuristicEngine(random.Random(0), depth=2)
        choice = engine.choose_move(board, W, Difficulty.HARD)
        assert choice == MoveChoice(Square(0, 7), Square(0, 2))
        assert engine.nodes > 0

    @pytest.mark.slow
    def test_default_depth_from_initial_position(self) -> None:
        board = Board.initial()
        engine = HeuristicEngine(random.Random(0))
        assert engine.depth == 3
        choice = engine.choose_move(board, W, Difficulty.HARD)
        assert choice is not None
        assert (choice.from_sq, choice.to_sq) in Rules.all_legal_moves(board, W)


class TestNoMove:
    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_no_pieces(self, difficulty: Difficulty) -> None:
        board = _board((4, 0, B, PieceType.KING))
        assert HeuristicEngine().choose_move(board, W, difficulty) is None

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_cancelled(self, difficulty: Difficulty) -> None:
        board = Board.initial()
        engine = HeuristicEngine(random.Random(0))
        assert engine.choose_move(board, W, difficulty, is_cancelled=lambda: True) is None

    def test_invalid_depth(self) -> None:
        with pytest.raises(ValueError):
            HeuristicEngine(depth=0)
