"""Game state machine: selection, move execution and history."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from chessroom.core.board import Board
from chessroom.core.enums import Color
from chessroom.core.errors import InvalidMoveError, NoPieceAtSourceError
from chessroom.core.move_generator import in_check
from chessroom.core.notation import notate
from chessroom.core.piece import Piece
from chessroom.core.rules import Rules
from chessroom.core.types import Square, square_name
from chessroom.game.interfaces import GameConfig, GamePhase


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single accepted move."""

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured: Piece | None
    notation: str


@dataclass
class GameState:
    """One match: board, side to move, selection, history and outcome.

    Mutated only through :meth:`select`, :meth:`move` /
    :meth:`move_from_to`, :meth:`reset` and :meth:`new_game`. Once
    ``game_over`` is set, selection and moves are ignored.
    """

    board: Board = field(default_factory=Board.initial)
    current_player: Color = Color.WHITE
    selected_square: Square | None = None
    legal_moves: list[Square] = field(default_factory=list)
    move_history: list[str] = field(default_factory=list)
    is_check: bool = False
    game_over: bool = False
    winner: Color | None = None
    config: GameConfig = field(default_factory=GameConfig)

    # ── Selection ────────────────────────────────────────────────────────

    def select(self, sq: Square) -> list[Square]:
        """Select *sq* and compute its legal moves; otherwise deselect.

        Selecting the already-selected square deselects it.
        """
        if self.game_over:
            return []

        piece = self.board.get(sq)
        if (
            sq != self.selected_square
            and piece is not None
            and piece.color == self.current_player
        ):
            self.selected_square = sq
            self.legal_moves = Rules.legal_moves(self.board, sq, self.current_player)
        else:
            self.clear_selection()
        return list(self.legal_moves)

    def clear_selection(self) -> None:
        self.selected_square = None
        self.legal_moves = []

    # ── Move application ─────────────────────────────────────────────────

    def move(self, to_sq: Square) -> MoveRecord | None:
        """Move the selected piece to *to_sq*."""
        if self.game_over:
            return None
        if self.selected_square is None or to_sq not in self.legal_moves:
            raise InvalidMoveError()
        return self._apply(self.selected_square, to_sq)

    def move_from_to(self, from_sq: Square, to_sq: Square) -> MoveRecord | None:
        """Move without a prior selection; legality is computed on the spot."""
        if self.game_over:
            return None
        if self.board.get(from_sq) is None:
            raise NoPieceAtSourceError()
        if to_sq not in Rules.legal_moves(self.board, from_sq, self.current_player):
            raise InvalidMoveError()
        return self._apply(from_sq, to_sq)

    def _apply(self, from_sq: Square, to_sq: Square) -> MoveRecord:
        piece = self.board.get(from_sq)
        assert piece is not None
        mover = self.current_player

        captured = self.board.relocate(from_sq, to_sq)
        if captured is not None and captured.is_king:
            self.game_over = True
            self.winner = mover
            self.is_check = False
        else:
            self.is_check = in_check(self.board, mover.opposite)

        record = MoveRecord(
            from_sq=from_sq,
            to_sq=to_sq,
            piece=piece,
            captured=captured,
            notation=notate(piece, from_sq, to_sq, captured is not None),
        )
        self.move_history.append(record.notation)
        self.current_player = mover.opposite
        self.clear_selection()
        return record

    # ── Lifecycle ────────────────────────────────────────────────────────

    def reset(self) -> None:
        """Fresh board with the current configuration."""
        self.new_game(self.config)

    def new_game(self, config: GameConfig) -> None:
        self.board = Board.initial()
        self.current_player = Color.WHITE
        self.clear_selection()
        self.move_history = []
        self.is_check = False
        self.game_over = False
        self.winner = None
        self.config = config

    def copy(self) -> GameState:
        """Independent snapshot (board, history and selection are copied)."""
        return GameState(
            board=self.board.copy(),
            current_player=self.current_player,
            selected_square=self.selected_square,
            legal_moves=list(self.legal_moves),
            move_history=list(self.move_history),
            is_check=self.is_check,
            game_over=self.game_over,
            winner=self.winner,
            config=self.config,
        )

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def phase(self) -> GamePhase:
        if self.game_over:
            return GamePhase.GAME_OVER
        if self.selected_square is not None:
            return GamePhase.SELECTED
        return GamePhase.IDLE

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly view for embeddings (board rows top row first)."""
        return {
            "board": [
                [str(p) if p is not None else None for p in row]
                for row in self.board.rows()
            ],
            "captured_pieces": [str(p) for p in self.board.captured_pieces],
            "current_player": str(self.current_player),
            "selected_square": (
                square_name(self.selected_square)
                if self.selected_square is not None
                else None
            ),
            "legal_moves": [square_name(sq) for sq in self.legal_moves],
            "move_history": list(self.move_history),
            "is_check": self.is_check,
            "game_over": self.game_over,
            "winner": str(self.winner) if self.winner is not None else None,
            "config": self.config.to_dict(),
        }
