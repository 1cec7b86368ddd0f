"""Integration tests for CLI functionality."""

import json
import subprocess
import sys

import pytest

from saku_pkg import config
from saku_pkg.cli import main_entry


@pytest.fixture
def restore_config(monkeypatch):
    """Undo the module-level overrides main_entry applies."""
    monkeypatch.setattr(config, "OUTPUT_PRECISION", config.OUTPUT_PRECISION)
    monkeypatch.setattr(config, "STRICT_PARENTHESES", False)


def test_cli_version():
    """Test --version flag."""
    result = subprocess.run(
        [sys.executable, "-m", "saku_pkg.cli", "--version"],
        capture_output=True,
        text=True,
        timeout=30,
    )
    assert result.returncode == 0
    assert result.stdout.strip() != ""


def test_cli_eval_human():
    """Test CLI evaluation with human output."""
    result = subprocess.run(
        [sys.executable, "-m", "saku_pkg", "--eval", "2 + 3 * 4"],
        capture_output=True,
        text=True,
        timeout=30,
    )
    assert result.returncode == 0
    assert result.stdout.strip() == "14"


def test_cli_eval_json():
    """Test CLI evaluation with JSON output."""
    result = subprocess.run(
        [
            sys.executable,
            "-m",
            "saku_pkg.cli",
            "--eval",
            "log ( 0 )",
            "--format",
            "json",
        ],
        capture_output=True,
        text=True,
        timeout=30,
    )
    assert result.returncode == 1
    data = json.loads(result.stdout)
    assert data["ok"] is False
    assert data["error_code"] == "DOMAIN_ERROR"


def test_cli_keys():
    """Test keypad replay."""
    result = subprocess.run(
        [sys.executable, "-m", "saku_pkg", "--keys", "7 add 3 equals"],
        capture_output=True,
        text=True,
        timeout=30,
    )
    assert result.returncode == 0
    assert result.stdout.strip() == "10"


class TestMainEntry:
    """Run the CLI in-process."""

    def test_eval(self, capsys, restore_config):
        assert main_entry(["-e", "2 ^ 3 ^ 2"]) == 0
        assert capsys.readouterr().out.strip() == "512"

    def test_eval_error(self, capsys, restore_config):
        assert main_entry(["-e", "×"]) == 1
        assert capsys.readouterr().out.startswith("Error:")

    def test_empty_eval(self, capsys, restore_config):
        assert main_entry(["-e", "   "]) == 1
        assert "Empty input" in capsys.readouterr().out

    def test_rpn(self, capsys, restore_config):
        assert main_entry(["-e", "2 + 3 × 4", "--rpn"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == ["RPN: 2 3 4 × +", "14"]

    def test_rpn_json(self, capsys, restore_config):
        assert main_entry(["-e", "sin ( 90 )", "--rpn", "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["rpn"] == ["90", "sin"]
        assert data["value"] == 1.0

    def test_precision(self, capsys, restore_config):
        assert main_entry(["-e", "1 ÷ 3", "-p", "4"]) == 0
        assert capsys.readouterr().out.strip() == "0.3333"

    def test_strict_parens(self, capsys, restore_config):
        assert main_entry(["-e", "( 2 + 3", "--strict-parens"]) == 1
        assert "Unbalanced" in capsys.readouterr().out

    def test_keys_error(self, capsys, restore_config):
        assert main_entry(["-k", "1 divide 0 equals"]) == 1
        assert capsys.readouterr().out.strip() == "Error"

    def test_keys_json(self, capsys, restore_config):
        assert main_entry(["-k", "5 mplus", "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["memory"] == 5.0
        assert data["display"] == "5"

    def test_unknown_key(self, capsys, restore_config):
        assert main_entry(["-k", "7 percent"]) == 1
        assert "Unknown keypad action" in capsys.readouterr().out

    def test_repl(self, capsys, monkeypatch, restore_config):
        lines = iter(["help", "2 × 21", "", "quit"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
        assert main_entry([]) == 0
        out = capsys.readouterr().out
        assert "Functions:" in out
        assert "42" in out
        assert "Goodbye." in out

    def test_repl_eof(self, capsys, monkeypatch, restore_config):
        def raise_eof(prompt=""):
            raise EOFError

        monkeypatch.setattr("builtins.input", raise_eof)
        assert main_entry([]) == 0
        assert "Goodbye." in capsys.readouterr().out
