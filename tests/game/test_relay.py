"""Tests for the relay message codec."""

import json

import pytest

from chessroom.core.board import Board
from chessroom.core.enums import Color
from chessroom.core.notation import STARTING_PLACEMENT
from chessroom.core.types import Square
from chessroom.game.relay import RelayMessage


def _after_e4() -> RelayMessage:
    board = Board.initial()
    board.relocate(Square(4, 6), Square(4, 4))
    return RelayMessage.from_move(Square(4, 6), Square(4, 4), "e2-e4", board, Color.WHITE)


class TestRelayMessage:
    def test_from_move(self) -> None:
        message = _after_e4()
        assert message.board == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR"
        assert message.captured == ""
        assert message.mover_color == Color.WHITE

    def test_json_fields(self) -> None:
        data = json.loads(_after_e4().to_json())
        assert data == {
            "from": "e2",
            "to": "e4",
            "notation": "e2-e4",
            "board": "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR",
            "captured": "",
            "mover_color": "white",
        }

    def test_from_json(self) -> None:
        message = _after_e4()
        assert RelayMessage.from_json(message.to_json()) == message

    def test_captured_survives_transport(self) -> None:
        board = Board.initial()
        board.relocate(Square(3, 7), Square(3, 1))
        message = RelayMessage.from_move(Square(3, 7), Square(3, 1), "Qd1xd7", board, Color.WHITE)
        decoded = RelayMessage.from_json(message.to_json())
        assert decoded.resulting_board() == board

    @pytest.mark.parametrize(
        "payload",
        [
            "not json",
            "[]",
            json.dumps({"from": "e2", "to": "e4"}),
            json.dumps(
                {
                    "from": "e2",
                    "to": "e9",
                    "notation": "e2-e9",
                    "board": STARTING_PLACEMENT,
                    "mover_color": "white",
                }
            ),
            json.dumps(
                {
                    "from": "e2",
                    "to": "e4",
                    "notation": "e2-e4",
                    "board": "8/8",
                    "mover_color": "white",
                }
            ),
            json.dumps(
                {
                    "from": "e2",
                    "to": "e4",
                    "notation": "e2-e4",
                    "board": STARTING_PLACEMENT,
                    "mover_color": "green",
                }
            ),
        ],
    )
    def test_malformed_payloads(self, payload: str) -> None:
        with pytest.raises(ValueError):
            RelayMessage.from_json(payload)
