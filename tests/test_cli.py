import builtins

import pytest

from formulatower.cli import build_parser, main


def test_eval_prints_value(capsys):
    assert main(["eval", "(2+3)*4"]) == 0
    assert capsys.readouterr().out.strip() == "20"


def test_eval_fraction(capsys):
    assert main(["eval", "7/2"]) == 0
    assert capsys.readouterr().out.strip() == "3.500000"


def test_eval_error_exit_code(capsys):
    assert main(["eval", "5/0"]) == 1
    assert "Division by zero" in capsys.readouterr().err


def test_rpn(capsys):
    assert main(["rpn", "2+3*4"]) == 0
    assert capsys.readouterr().out.strip() == "2 3 4 * +"


def test_rpn_error(capsys):
    assert main(["rpn", "(1+2"]) == 1
    assert "parentheses" in capsys.readouterr().err


def test_play_defaults():
    args = build_parser().parse_args(["play"])
    assert args.time == 300
    assert args.rounds == 60
    assert args.policy == "tower"


def test_play_rejects_bad_config(capsys):
    assert main(["play", "--rounds", "0"]) == 2
    assert "target_count" in capsys.readouterr().err


def test_play_session(monkeypatch, capsys):
    """Scripted session: remove, start, wrong answer, quit."""
    lines = iter(["r", "s", "1+2", "?", "q"])
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(lines))
    assert main(["play", "--seed", "0", "--policy", "uniform", "--rounds", "2"]) == 0
    out = capsys.readouterr().out
    assert "(+30s)" in out
    assert "Game started!" in out
    assert "Wrong (-20s). Computed: 3" in out
    assert "Game ended." in out
    assert any(line.split().count("x") == 1 for line in out.splitlines())


def test_play_eof_exits_cleanly(monkeypatch):
    def eof(prompt=""):
        raise EOFError

    monkeypatch.setattr(builtins, "input", eof)
    assert main(["play", "--seed", "0"]) == 0


def test_default_command_is_play(monkeypatch):
    monkeypatch.setattr(builtins, "input", lambda prompt="": "q")
    assert main([]) == 0
