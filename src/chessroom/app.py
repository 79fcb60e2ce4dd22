"""Console entry point: hot-seat or vs-computer play in a terminal."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from chessroom.core.enums import Color, Difficulty, GameMode
from chessroom.core.errors import ChessError
from chessroom.core.types import parse_square
from chessroom.engine.heuristic import HeuristicEngine
from chessroom.engine.search import IEngine
from chessroom.game.controller import GameController
from chessroom.game.interfaces import GameConfig
from chessroom.game.state import GameState
from chessroom.settings import AppSettings

_LOGGER = logging.getLogger(__name__)

_HELP = "Commands: <from> <to> (e.g. 'e2 e4'), undo, reset, quit"


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging for the console app."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chessroom", description=__doc__)
    parser.add_argument(
        "--ai",
        choices=[d.value.lower() for d in Difficulty],
        default=None,
        help="play against the computer at this difficulty",
    )
    parser.add_argument(
        "--color",
        choices=[str(c) for c in Color],
        default="white",
        help="your side when playing the computer",
    )
    return parser


def _render(state: GameState) -> str:
    lines = [repr(state.board)]
    if state.move_history:
        lines.append("Moves: " + " ".join(state.move_history))
    if state.game_over:
        lines.append(f"Game over, {state.winner} wins.")
    else:
        suffix = " (check)" if state.is_check else ""
        lines.append(f"{state.current_player} to move{suffix}")
    return "\n".join(lines)


def _play_opponent(controller: GameController, engine: IEngine) -> None:
    """Answer the controller's pending computer turn, if any."""
    request = controller.pending_opponent_request
    if request is None:
        return
    choice = engine.choose_move(request.board, request.color, request.difficulty)
    if choice is None:
        _LOGGER.warning("Computer has no legal move")
        return
    controller.submit_opponent_move(request.ticket, choice.from_sq, choice.to_sq)


def _handle(controller: GameController, line: str) -> bool:
    """Run one command line. Returns False when the user quits."""
    words = line.replace("-", " ").split()
    if not words:
        return True
    command = words[0].lower()
    if command in ("quit", "exit"):
        return False
    if command == "undo":
        controller.undo_move()
    elif command == "reset":
        controller.reset_game()
    elif len(words) == 2:
        from_sq = parse_square(words[0].lower())
        to_sq = parse_square(words[1].lower())
        controller.move_piece(from_sq.x, from_sq.y, to_sq.x, to_sq.y)
    else:
        print(_HELP)
    return True


def main(argv: Sequence[str] | None = None) -> int:
    """Run the console game loop on stdin/stdout."""
    args = _build_parser().parse_args(argv)
    settings = AppSettings.from_env()
    configure_logging(settings.log_level)

    if args.ai is None:
        config = GameConfig()
    else:
        config = GameConfig(
            mode=GameMode.AI,
            difficulty=Difficulty(args.ai.upper()),
            player_color=Color.WHITE if args.color == "white" else Color.BLACK,
        )

    engine = HeuristicEngine(depth=settings.engine_depth)
    controller = GameController(
        config,
        undo_capacity=settings.undo_capacity,
        default_difficulty=settings.default_difficulty,
    )
    controller.start()
    _play_opponent(controller, engine)

    print(_HELP)
    print(_render(controller.state))
    for line in sys.stdin:
        try:
            if not _handle(controller, line):
                break
        except (ChessError, ValueError) as exc:
            print(f"Error: {exc}")
            continue
        _play_opponent(controller, engine)
        print(_render(controller.state))

    controller.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
