"""
Tests for the command-line interface.
"""

import importlib
import logging

import pytest

from ..cli import main


class TestSimulate:
    """Tests for the simulate command."""

    def test_simulate_prints_outcomes(self, capsys):
        main(["simulate", "--games", "3", "--seed", "1"])
        out = capsys.readouterr().out
        assert "Policy: CautiousPolicy  Games: 3" in out
        assert "Average turns" in out

    def test_simulate_random(self, capsys):
        main(["simulate", "--policy", "random", "--games", "2", "--seed", "7"])
        assert "RandomPolicy" in capsys.readouterr().out


class TestPlay:
    """Tests for the play command."""

    def test_quit_immediately(self, monkeypatch, capsys):
        monkeypatch.setattr("builtins.input", lambda prompt="": "q")
        main(["play", "--seed", "1"])
        out = capsys.readouterr().out
        assert "Semester 1, day 1" in out
        assert "Resume with --session" in out

    def test_unknown_then_quit(self, monkeypatch, capsys):
        answers = iter(["nap", "4", "q"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
        main(["play", "--seed", "1"])
        out = capsys.readouterr().out
        assert "Unknown action: 'nap'" in out
        assert "day 2" in out

    def test_non_ascii_digit_is_not_a_menu_number(self, monkeypatch, capsys):
        answers = iter(["\u00b2", "q"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
        main(["play", "--seed", "1"])
        out = capsys.readouterr().out
        assert "Unknown action" in out
        assert "Semester 1, day 1" in out

    def test_resume_missing_session(self, tmp_path):
        with pytest.raises(SystemExit):
            main(["play", "--store-dir", str(tmp_path), "--session", "missing"])


def test_no_command_exits():
    with pytest.raises(SystemExit):
        main([])


class TestLogging:
    """Tests for logging configuration."""

    def test_log_level_from_environment(self, monkeypatch):
        calls = []
        monkeypatch.setenv("GRADSURVIVAL_LOG_LEVEL", "DEBUG")
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        main(["simulate", "--games", "1", "--seed", "1"])
        assert calls[0]["level"] == logging.DEBUG

    def test_flag_overrides_environment(self, monkeypatch):
        calls = []
        monkeypatch.setenv("GRADSURVIVAL_LOG_LEVEL", "DEBUG")
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        main(["--log-level", "ERROR", "simulate", "--games", "1", "--seed", "1"])
        assert calls[0]["level"] == logging.ERROR

    def test_importing_app_leaves_logging_alone(self, monkeypatch):
        from ..api import app as app_module

        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        importlib.reload(app_module)
        assert calls == []
        assert app_module.app is not None
