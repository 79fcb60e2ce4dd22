"""Wire message exchanged between the two peers of a networked game."""

from __future__ import annotations

import json
from dataclasses import dataclass

from chessroom.core.board import Board
from chessroom.core.enums import Color
from chessroom.core.notation import (
    board_from_placement,
    board_to_placement,
    captured_to_text,
)
from chessroom.core.types import Square, parse_square, square_name

_COLORS: dict[str, Color] = {str(c): c for c in Color}


@dataclass(frozen=True, slots=True)
class RelayMessage:
    """A move plus the board it produced, as broadcast to the peer.

    The receiving side treats ``board`` as authoritative and does not
    replay the move.
    """

    from_sq: Square
    to_sq: Square
    notation: str
    board: str
    captured: str
    mover_color: Color

    @classmethod
    def from_move(
        cls,
        from_sq: Square,
        to_sq: Square,
        notation: str,
        board: Board,
        mover_color: Color,
    ) -> RelayMessage:
        return cls(
            from_sq=from_sq,
            to_sq=to_sq,
            notation=notation,
            board=board_to_placement(board),
            captured=captured_to_text(board),
            mover_color=mover_color,
        )

    def resulting_board(self) -> Board:
        return board_from_placement(self.board, self.captured)

    # ── JSON ─────────────────────────────────────────────────────────────

    def to_json(self) -> str:
        return json.dumps(
            {
                "from": square_name(self.from_sq),
                "to": square_name(self.to_sq),
                "notation": self.notation,
                "board": self.board,
                "captured": self.captured,
                "mover_color": str(self.mover_color),
            }
        )

    @classmethod
    def from_json(cls, payload: str) -> RelayMessage:
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Relay payload is not JSON: {exc}") from None
        if not isinstance(data, dict):
            raise ValueError("Relay payload must be a JSON object")

        try:
            message = cls(
                from_sq=parse_square(data["from"]),
                to_sq=parse_square(data["to"]),
                notation=str(data["notation"]),
                board=str(data["board"]),
                captured=str(data.get("captured", "")),
                mover_color=_COLORS[data["mover_color"]],
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Relay payload missing or invalid field: {exc}") from None
        # Validate the placement eagerly so bad payloads fail here.
        message.resulting_board()
        return message
