"""Tests for the output system.

Covers:
- JSON data output to stdout and to an explicit stream
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Verbose mode debug output
- Logging configuration
- Global instance management
"""

from __future__ import annotations

import json
import logging
from io import StringIO

import pytest
from rich.logging import RichHandler

from apiary import output as output_module
from apiary.output import (
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("apiary.output._is_tty", lambda: False)


# ------------------------------------------------------------------ #
# Color control
# ------------------------------------------------------------------ #


class TestColorControl:
    def test_no_color_env(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_color_allowed(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# Data output
# ------------------------------------------------------------------ #


class TestWriteJson:
    def test_stdout_is_pretty_with_trailing_newline(self, capsys, non_tty):
        OutputManager().write_json({"name": "q", "state": "RUNNING"})
        captured = capsys.readouterr()
        assert captured.out == '{\n  "name": "q",\n  "state": "RUNNING"\n}\n'
        assert captured.err == ""

    def test_explicit_stream(self, capsys):
        stream = StringIO()
        OutputManager().write_json([1, {"a": None}], stream)
        assert json.loads(stream.getvalue()) == [1, {"a": None}]
        assert stream.getvalue().endswith("}\n]\n")
        assert capsys.readouterr().out == ""

    def test_non_ascii_kept(self, capsys, non_tty):
        OutputManager().write_json({"title": "Amélie"})
        assert "Amélie" in capsys.readouterr().out

    def test_empty_object(self, capsys, non_tty):
        OutputManager().write_json({})
        assert capsys.readouterr().out == "{}\n"


# ------------------------------------------------------------------ #
# Diagnostics
# ------------------------------------------------------------------ #


class TestDiagnostics:
    def test_error_goes_to_stderr(self, capsys):
        OutputManager(no_color=True).error("boom")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "Error: boom\n"

    def test_warning_goes_to_stderr(self, capsys):
        OutputManager(no_color=True).warning("careful")
        assert capsys.readouterr().err == "Warning: careful\n"

    def test_info_goes_to_stderr(self, capsys):
        OutputManager(no_color=True).info("hello")
        assert capsys.readouterr().err == "hello\n"

    def test_debug_hidden_unless_verbose(self, capsys):
        OutputManager(no_color=True).debug("hidden")
        assert capsys.readouterr().err == ""
        OutputManager(no_color=True, verbose=True).debug("shown")
        assert capsys.readouterr().err == "[debug] shown\n"


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _restore_logger(self):
        logger = logging.getLogger("apiary")
        handlers, level = list(logger.handlers), logger.level
        yield
        logger.handlers[:] = handlers
        logger.setLevel(level)

    def test_verbose_sets_debug_level(self):
        OutputManager(verbose=True).configure_logging()
        logger = logging.getLogger("apiary")
        assert logger.level == logging.DEBUG
        assert sum(isinstance(h, RichHandler) for h in logger.handlers) == 1

    def test_reconfiguring_replaces_handler(self):
        OutputManager(verbose=True).configure_logging()
        OutputManager().configure_logging()
        logger = logging.getLogger("apiary")
        assert logger.level == logging.WARNING
        assert sum(isinstance(h, RichHandler) for h in logger.handlers) == 1


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_lazy_default(self):
        reset_output()
        assert isinstance(get_output(), OutputManager)
        assert get_output() is get_output()

    def test_set_and_use(self, capsys):
        set_output(OutputManager(no_color=True, verbose=True))
        output_module.debug("via global")
        output_module.error("bad")
        err = capsys.readouterr().err
        assert "[debug] via global" in err
        assert "Error: bad" in err

    def test_convenience_write_json(self, capsys, non_tty):
        output_module.write_json({"ok": True})
        assert json.loads(capsys.readouterr().out) == {"ok": True}
