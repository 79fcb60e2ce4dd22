"""GameController: the central orchestrator of a chess match.

Coordinates: players, GameState, the undo history and opponent tickets.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessroom.core.board import Board
from chessroom.core.enums import Color
from chessroom.core.errors import ChessError, InvalidMoveError
from chessroom.core.move_generator import in_check
from chessroom.core.rules import Rules
from chessroom.core.types import Square
from chessroom.game.history import DEFAULT_CAPACITY, UndoHistory
from chessroom.game.interfaces import Difficulty, GameConfig, GameMode, IPlayer
from chessroom.game.player import AIPlayer, HumanPlayer, RemotePlayer
from chessroom.game.relay import RelayMessage
from chessroom.game.state import GameState, MoveRecord

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class OpponentRequest:
    """Work order for the computer opponent.

    ``ticket`` is the controller generation at request time; a result
    carrying an older ticket is stale and gets dropped.
    """

    ticket: int
    board: Board
    color: Color
    difficulty: Difficulty


MoveCallback = Callable[[MoveRecord, GameState], None]
GameOverCallback = Callable[[Color | None], None]
StateCallback = Callable[[GameState], None]
OpponentCallback = Callable[[OpponentRequest], None]
RelayCallback = Callable[[RelayMessage], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_state_reset: list[StateCallback] = field(default_factory=list)
    on_opponent_turn: list[OpponentCallback] = field(default_factory=list)
    on_opponent_cancelled: list[Callable[[], None]] = field(default_factory=list)
    on_relay: list[RelayCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Runs one match: validates and applies moves, keeps undo snapshots,
    hands turns to the computer or the network peer, notifies listeners.

    Methods are not thread-safe; callers serialize access (see
    :class:`~chessroom.game.sessions.SessionManager`).
    """

    __slots__ = (
        "_state",
        "_history",
        "_players",
        "_generation",
        "_pending_request",
        "_default_difficulty",
        "events",
    )

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        undo_capacity: int = DEFAULT_CAPACITY,
        default_difficulty: Difficulty = Difficulty.MEDIUM,
    ) -> None:
        self._state = GameState(config=config or GameConfig())
        self._history = UndoHistory(undo_capacity)
        self._players: dict[Color, IPlayer] = {}
        self._generation = 0
        self._pending_request: OpponentRequest | None = None
        self._default_difficulty = default_difficulty
        self.events = GameEvents()
        self._assign_players()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def history(self) -> UndoHistory:
        return self._history

    @property
    def generation(self) -> int:
        """Bumped by every accepted move, reset, new game and undo."""
        return self._generation

    @property
    def pending_opponent_request(self) -> OpponentRequest | None:
        return self._pending_request

    @property
    def current_player(self) -> IPlayer:
        return self._players[self._state.current_player]

    def player(self, color: Color) -> IPlayer:
        return self._players[color]

    # ── Commands ─────────────────────────────────────────────────────────

    def get_state(self) -> GameState:
        return self._state

    def start(self) -> GameState:
        """Hand the first turn out (the computer may open the game)."""
        self._prompt_current_player()
        return self._state

    def select_square(self, x: int, y: int) -> GameState:
        """Select a piece of the local side to move; off-turn clicks deselect."""
        if not self.current_player.is_local:
            self._state.clear_selection()
            return self._state
        self._state.select(Square(x, y))
        return self._state

    def click_square(self, x: int, y: int) -> GameState:
        """Board click: move to a highlighted square, otherwise (re)select."""
        sq = Square(x, y)
        selected = self._state.selected_square
        if selected is not None and sq in self._state.legal_moves:
            return self.move_piece(selected.x, selected.y, x, y)
        return self.select_square(x, y)

    def move_piece(self, from_x: int, from_y: int, to_x: int, to_y: int) -> GameState:
        """Apply a move for the local side to move.

        Raises:
            NoPieceAtSourceError: *from* is empty.
            InvalidMoveError: *to* is not a legal destination, or the side
                to move is not controlled from this machine.
        """
        state = self._state
        if state.game_over:
            return state
        if not self.current_player.is_local:
            raise InvalidMoveError("not your turn")

        snapshot = state.copy()
        record = state.move_from_to(Square(from_x, from_y), Square(to_x, to_y))
        if record is None:
            return state

        # Undo is local-only; multiplayer boards are owned by both peers.
        if state.config.mode != GameMode.MULTIPLAYER:
            self._history.push(snapshot)

        mover = record.piece.color
        if state.config.mode == GameMode.MULTIPLAYER:
            message = RelayMessage.from_move(
                record.from_sq, record.to_sq, record.notation, state.board, mover
            )
            for cb in self.events.on_relay:
                cb(message)

        self._after_move(record)
        return state

    def reset_game(self) -> GameState:
        return self.start_new_game(self._state.config)

    def start_new_game(self, config: GameConfig) -> GameState:
        self._cancel_opponent()
        self._state.new_game(config)
        self._history.clear()
        self._assign_players()
        self._generation += 1
        _LOGGER.info("New %s game (generation %d)", config.mode.value, self._generation)
        self._emit_state_reset()
        self._prompt_current_player()
        return self._state

    def undo_move(self) -> GameState:
        """Restore the snapshot saved before the last local move.

        Raises:
            NoHistoryError: nothing to undo.
        """
        snapshot = self._history.pop()
        self._cancel_opponent()
        self._state = snapshot
        self._generation += 1
        _LOGGER.debug("Undo to ply %d", snapshot.ply_count)
        self._emit_state_reset()
        self._prompt_current_player()
        return self._state

    def close(self) -> None:
        """Cancel pending opponent work and drop all listeners."""
        self._cancel_opponent()
        self.events = GameEvents()

    # ── Computer opponent ────────────────────────────────────────────────

    def submit_opponent_move(self, ticket: int, from_sq: Square, to_sq: Square) -> bool:
        """Apply the computer's answer for *ticket*. Returns False if stale."""
        pending = self._pending_request
        if pending is None or pending.ticket != ticket or ticket != self._generation:
            _LOGGER.info(
                "Dropping stale opponent move %s-%s (ticket %d, generation %d)",
                from_sq,
                to_sq,
                ticket,
                self._generation,
            )
            return False
        if self._state.game_over or self._state.current_player != pending.color:
            self._pending_request = None
            return False

        try:
            record = self._state.move_from_to(from_sq, to_sq)
        except ChessError as exc:
            _LOGGER.warning("Opponent proposed an illegal move %s-%s: %s", from_sq, to_sq, exc)
            self._prompt_current_player()
            return False
        self._pending_request = None
        if record is None:
            return False
        self._after_move(record)
        return True

    # ── Network peer ─────────────────────────────────────────────────────

    def apply_remote_move(self, message: RelayMessage) -> GameState:
        """Adopt the peer's move and resulting board as authoritative.

        Raises:
            InvalidMoveError: not a multiplayer game, or the message is for
                the wrong side.
            ValueError: the payload board is malformed or inconsistent.
        """
        state = self._state
        if state.config.mode != GameMode.MULTIPLAYER:
            raise InvalidMoveError("not a multiplayer game")
        if state.game_over:
            return state
        if message.mover_color != state.current_player or self.current_player.is_local:
            raise InvalidMoveError("not your turn")

        board = message.resulting_board()
        piece = board.get(message.to_sq)
        if piece is None or piece.color != message.mover_color:
            raise ValueError(f"Relay board has no moved piece on {message.to_sq}")
        captured = None
        if len(board.captured_pieces) > len(state.board.captured_pieces):
            captured = board.captured_pieces[-1]

        mover = message.mover_color
        state.board = board
        state.move_history.append(message.notation)
        state.current_player = mover.opposite
        state.clear_selection()
        if Rules.is_king_captured(board, mover.opposite):
            state.game_over = True
            state.winner = mover
            state.is_check = False
        else:
            state.is_check = in_check(board, mover.opposite)

        record = MoveRecord(
            from_sq=message.from_sq,
            to_sq=message.to_sq,
            piece=piece,
            captured=captured,
            notation=message.notation,
        )
        self._after_move(record)
        return state

    # ── Internal helpers ─────────────────────────────────────────────────

    def _assign_players(self) -> None:
        config = self._state.config
        local = config.local_color
        if config.mode == GameMode.AI:
            self._players = {
                local: HumanPlayer(local),
                local.opposite: AIPlayer(
                    local.opposite,
                    on_request_move=self._on_ai_request,
                    on_cancel=self._on_ai_cancel,
                ),
            }
        elif config.mode == GameMode.MULTIPLAYER:
            self._players = {
                local: HumanPlayer(local),
                local.opposite: RemotePlayer(local.opposite),
            }
        else:
            self._players = {
                Color.WHITE: HumanPlayer(Color.WHITE),
                Color.BLACK: HumanPlayer(Color.BLACK),
            }

    def _after_move(self, record: MoveRecord) -> None:
        self._generation += 1
        _LOGGER.debug("Move %s (generation %d)", record.notation, self._generation)
        for cb in self.events.on_move:
            cb(record, self._state)

        if self._state.game_over:
            _LOGGER.info("Game over, %s wins", self._state.winner)
            for cb in self.events.on_game_over:
                cb(self._state.winner)
            return

        self._prompt_current_player()

    def _prompt_current_player(self) -> None:
        if self._state.game_over:
            return
        self.current_player.request_move(self._state.board.copy(), self._generation)

    def _cancel_opponent(self) -> None:
        for player in self._players.values():
            player.cancel()

    def _on_ai_request(self, board: Board, ticket: int) -> None:
        request = OpponentRequest(
            ticket=ticket,
            board=board,
            color=self._state.current_player,
            difficulty=self._state.config.difficulty or self._default_difficulty,
        )
        self._pending_request = request
        for cb in self.events.on_opponent_turn:
            cb(request)

    def _on_ai_cancel(self) -> None:
        if self._pending_request is None:
            return
        _LOGGER.debug("Cancelling opponent request %d", self._pending_request.ticket)
        self._pending_request = None
        for cb in self.events.on_opponent_cancelled:
            cb()

    def _emit_state_reset(self) -> None:
        for cb in self.events.on_state_reset:
            cb(self._state)
