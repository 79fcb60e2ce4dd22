"""Tests for GameState: selection, moves and outcome."""

import pytest

from chessroom.core.board import Board
from chessroom.core.enums import Color, PieceType
from chessroom.core.errors import InvalidMoveError, NoPieceAtSourceError
from chessroom.core.piece import Piece
from chessroom.core.types import Square
from chessroom.game.interfaces import GameConfig, GameMode, GamePhase
from chessroom.game.state import GameState


def _state_with(*pieces: tuple[int, int, Color, PieceType]) -> GameState:
    board = Board()
    for x, y, color, ptype in pieces:
        board[Square(x, y)] = Piece(color, ptype)
    return GameState(board=board)


class TestInitialState:
    def test_defaults(self) -> None:
        state = GameState()
        assert state.board == Board.initial()
        assert state.current_player == Color.WHITE
        assert state.selected_square is None
        assert state.legal_moves == []
        assert state.move_history == []
        assert not state.is_check
        assert not state.game_over
        assert state.winner is None
        assert state.phase == GamePhase.IDLE


class TestSelection:
    def test_select_own_piece(self) -> None:
        state = GameState()
        moves = state.select(Square(4, 6))
        assert state.selected_square == Square(4, 6)
        assert moves == [Square(4, 5), Square(4, 4)]
        assert state.phase == GamePhase.SELECTED

    def test_select_twice_deselects(self) -> None:
        state = GameState()
        state.select(Square(4, 6))
        state.select(Square(4, 6))
        assert state.selected_square is None
        assert state.legal_moves == []

    def test_select_opponent_piece_clears(self) -> None:
        state = GameState()
        state.select(Square(4, 6))
        state.select(Square(4, 1))
        assert state.selected_square is None
        assert state.legal_moves == []

    def test_select_empty_square_clears(self) -> None:
        state = GameState()
        state.select(Square(4, 6))
        state.select(Square(4, 4))
        assert state.selected_square is None

    def test_reselect_other_own_piece(self) -> None:
        state = GameState()
        state.select(Square(4, 6))
        state.select(Square(6, 7))
        assert state.selected_square == Square(6, 7)
        assert state.legal_moves == [Square(7, 5), Square(5, 5)]

    def test_blocked_piece_selected_with_no_moves(self) -> None:
        state = GameState()
        state.select(Square(0, 7))
        assert state.selected_square == Square(0, 7)
        assert state.legal_moves == []


class TestMoves:
    def test_e2_e4(self) -> None:
        state = GameState()
        record = state.move_from_to(Square(4, 6), Square(4, 4))
        assert record is not None
        assert record.notation == "e2-e4"
        assert state.current_player == Color.BLACK
        assert state.move_history == ["e2-e4"]
        assert state.board[Square(4, 4)] == Piece(Color.WHITE, PieceType.PAWN)
        assert state.board[Square(4, 6)] is None

    def test_move_toggles_player_and_appends_history(self) -> None:
        state = GameState()
        sequence = [
            (Square(4, 6), Square(4, 4)),
            (Square(4, 1), Square(4, 3)),
            (Square(6, 7), Square(5, 5)),
        ]
        for i, (from_sq, to_sq) in enumerate(sequence, start=1):
            mover = state.current_player
            state.move_from_to(from_sq, to_sq)
            assert state.current_player == mover.opposite
            assert len(state.move_history) == i
        assert state.move_history == ["e2-e4", "e7-e5", "Ng1-f3"]

    def test_move_with_selection(self) -> None:
        state = GameState()
        state.select(Square(4, 6))
        state.move(Square(4, 5))
        assert state.move_history == ["e2-e3"]
        assert state.selected_square is None
        assert state.legal_moves == []

    def test_move_without_selection_rejected(self) -> None:
        state = GameState()
        with pytest.raises(InvalidMoveError):
            state.move(Square(4, 4))

    def test_move_to_unhighlighted_square_rejected(self) -> None:
        state = GameState()
        state.select(Square(4, 6))
        with pytest.raises(InvalidMoveError):
            state.move(Square(4, 3))
        assert state.move_history == []

    def test_no_piece_at_source(self) -> None:
        state = GameState()
        before = state.copy()
        with pytest.raises(NoPieceAtSourceError):
            state.move_from_to(Square(4, 3), Square(4, 2))
        assert state.board == before.board
        assert state.current_player == Color.WHITE

    def test_opponent_piece_rejected(self) -> None:
        state = GameState()
        with pytest.raises(InvalidMoveError):
            state.move_from_to(Square(4, 1), Square(4, 3))

    def test_capture_notation(self) -> None:
        state = GameState()
        for from_sq, to_sq in [
            (Square(4, 6), Square(4, 4)),
            (Square(3, 1), Square(3, 3)),
            (Square(4, 4), Square(3, 3)),
        ]:
            state.move_from_to(from_sq, to_sq)
        assert state.move_history[-1] == "e4xd5"
        assert state.board.captured_pieces == [Piece(Color.BLACK, PieceType.PAWN)]

    def test_check_flag(self) -> None:
        state = _state_with(
            (4, 7, Color.WHITE, PieceType.KING),
            (0, 5, Color.WHITE, PieceType.ROOK),
            (4, 0, Color.BLACK, PieceType.KING),
        )
        state.move_from_to(Square(0, 5), Square(0, 0))
        assert state.is_check
        assert state.current_player == Color.BLACK


class TestKingCapture:
    def _capturable(self) -> GameState:
        # The black king was left in the rook's line; White takes it.
        state = _state_with(
            (4, 7, Color.WHITE, PieceType.KING),
            (4, 5, Color.WHITE, PieceType.ROOK),
            (4, 0, Color.BLACK, PieceType.KING),
        )
        return state

    def test_king_capture_ends_game(self) -> None:
        state = self._capturable()
        record = state.move_from_to(Square(4, 5), Square(4, 0))
        assert record is not None
        assert record.captured == Piece(Color.BLACK, PieceType.KING)
        assert state.game_over
        assert state.winner == Color.WHITE
        assert not state.is_check
        assert state.phase == GamePhase.GAME_OVER
        assert state.move_history == ["Re3xe8"]

    def test_no_moves_after_game_over(self) -> None:
        state = self._capturable()
        state.move_from_to(Square(4, 5), Square(4, 0))
        board = state.board.copy()
        assert state.move_from_to(Square(4, 7), Square(4, 6)) is None
        assert state.select(Square(4, 7)) == []
        assert state.board == board
        assert state.selected_square is None


class TestLifecycle:
    def test_reset(self) -> None:
        state = GameState()
        state.move_from_to(Square(4, 6), Square(4, 4))
        state.reset()
        assert state.board == Board.initial()
        assert state.current_player == Color.WHITE
        assert state.move_history == []

    def test_new_game_replaces_config(self) -> None:
        state = GameState()
        config = GameConfig(mode=GameMode.AI)
        state.new_game(config)
        assert state.config is config

    def test_copy_is_independent(self) -> None:
        state = GameState()
        snapshot = state.copy()
        state.move_from_to(Square(4, 6), Square(4, 4))
        assert snapshot.move_history == []
        assert snapshot.board == Board.initial()
        assert snapshot.current_player == Color.WHITE

    def test_to_dict(self) -> None:
        state = GameState()
        state.move_from_to(Square(4, 6), Square(4, 4))
        data = state.to_dict()
        assert data["current_player"] == "black"
        assert data["move_history"] == ["e2-e4"]
        assert data["board"][4][4] == "P"
        assert data["board"][6][4] is None
        assert data["winner"] is None
        assert data["config"]["mode"] == "LOCAL"
