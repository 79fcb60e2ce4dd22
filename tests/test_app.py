"""Tests for the console entry point."""

import io
import sys

import pytest

from chessroom.app import main


def _run(monkeypatch: pytest.MonkeyPatch, script: str, *argv: str) -> int:
    monkeypatch.setattr(sys, "stdin", io.StringIO(script))
    monkeypatch.setenv("CHESSROOM_LOG_LEVEL", "WARNING")
    return main(list(argv))


class TestConsole:
    def test_hot_seat_moves(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run(monkeypatch, "e2 e4\ne7-e5\nquit\n") == 0
        out = capsys.readouterr().out
        assert "Moves: e2-e4 e7-e5" in out
        assert "white to move" in out

    def test_errors_are_reported(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run(monkeypatch, "e5 e4\ne2 e5\nz9 a1\nundo\n") == 0
        out = capsys.readouterr().out
        assert "Error: no piece at source" in out
        assert "Error: invalid move" in out
        assert "Error: Invalid square name" in out
        assert "Error: no moves to undo" in out

    def test_undo_and_reset(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run(monkeypatch, "e2 e4\nundo\nd2 d4\nreset\n") == 0
        out = capsys.readouterr().out
        assert "Moves: d2-d4" in out
        assert out.rstrip().endswith("white to move")

    def test_computer_replies(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run(monkeypatch, "e2 e4\n", "--ai", "easy") == 0
        out = capsys.readouterr().out
        assert "Moves: e2-e4 " in out
        assert "white to move" in out

    def test_computer_opens_for_black_player(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run(monkeypatch, "", "--ai", "medium", "--color", "black") == 0
        out = capsys.readouterr().out
        assert "black to move" in out
        assert "Moves: " in out

    def test_bad_option(self, monkeypatch: pytest.MonkeyPatch) -> None:
        with pytest.raises(SystemExit):
            _run(monkeypatch, "", "--ai", "godlike")
