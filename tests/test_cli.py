"""Test the command-line interface."""

import os
import subprocess
import sys
from pathlib import Path

import oops
from oops import __main__ as cli

PROGRAM_DIR = Path(__file__).parent / "programs"
SRC_DIR = Path(__file__).parent.parent / "src"


def test_cli_runs_program():
    """Run a sample program in a subprocess."""
    result = subprocess.run(
        [sys.executable, "-m", "oops", str(PROGRAM_DIR / "users.oops")],
        capture_output=True,
        text=True,
        env={**os.environ, "PYTHONPATH": str(SRC_DIR)},
    )
    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    assert "user 123 is ann" in result.stdout


def test_cli_reports_runtime_error(capsys):
    code = cli.main([str(PROGRAM_DIR / "broken.oops")])
    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == "10\n"
    assert "broken.oops:7:1:" in captured.err
    assert "DoesNotUnderstand" in captured.err
    # Not a tty, so no escape codes
    assert "\033[" not in captured.err


def test_cli_inline_code(capsys):
    assert cli.main(["-c", "[[1, 2] collect: |x:| { [x * 10] }]"]) == 0
    assert capsys.readouterr().out == "[10, 20]\n"


def test_cli_parse_error(tmp_path, capsys):
    path = tmp_path / "bad.oops"
    path.write_text("let x = [1 +;\n")
    assert cli.main([str(path)]) == 1
    err = capsys.readouterr().err
    assert "ParseError" in err
    assert "bad.oops:1:" in err


def test_cli_ast(capsys):
    assert cli.main(["-c", "[1 + 2]", "--ast"]) == 0
    out = capsys.readouterr().out
    assert "Program(1 statements)" in out
    assert "MessageSend(#+)" in out


def test_cli_lark(capsys):
    assert cli.main(["-c", "[x foo: 1]", "--lark"]) == 0
    out = capsys.readouterr().out
    assert "send" in out
    assert "keyword_arg" in out


def test_cli_max_depth(capsys):
    code = "[Object def: #loop do: { [self loop] }]; [[Object new] loop]"
    assert cli.main(["-c", code, "--max-depth", "100"]) == 1
    assert "StackOverflow" in capsys.readouterr().err


def test_format_error():
    error = oops.UnboundVariable("x")
    assert cli.format_error(error, "f.oops") == "\\-s-f.oops:\\-n- \\-r-UnboundVariable\\-n-: Variable x is not bound"


def test_colors_follow_no_color(monkeypatch):
    class Tty:
        def isatty(self):
            return True

    monkeypatch.delenv("NO_COLOR", raising=False)
    assert oops._colorize.render("\\-r-x\\-n-", Tty()).startswith("\033[31m")
    monkeypatch.setenv("NO_COLOR", "1")
    assert oops._colorize.render("\\-r-x\\-n-", Tty()) == "x"
