"""Tests for the output system.

Covers:
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet mode suppression rules
- Verbose mode debug output
- Global instance management
"""

from __future__ import annotations

import pytest

from hexcli import output as output_module
from hexcli.output import (
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


@pytest.fixture(autouse=True)
def _reset_global_output():
    """Ensure the global output instance is reset between tests."""
    reset_output()
    yield
    reset_output()


class TestColorDisabling:
    def test_no_color_env_disables_color(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb_disables_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term_keeps_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


class TestStreams:
    def test_print_data_goes_to_stdout(self, capsys):
        OutputManager(no_color=True).print_data("acme")
        captured = capsys.readouterr()
        assert captured.out == "acme\n"
        assert captured.err == ""

    def test_print_data_ignores_quiet(self, capsys):
        OutputManager(no_color=True, quiet=True).print_data("acme")
        assert capsys.readouterr().out == "acme\n"

    def test_info_goes_to_stderr(self, capsys):
        OutputManager(no_color=True).info("hello")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "hello\n"

    def test_error_prefix(self, capsys):
        OutputManager(no_color=True).error("bad")
        assert capsys.readouterr().err == "Error: bad\n"


class TestQuietAndVerbose:
    def test_quiet_suppresses_info(self, capsys):
        OutputManager(no_color=True, quiet=True).info("info")
        assert capsys.readouterr().err == ""

    def test_quiet_keeps_errors(self, capsys):
        OutputManager(no_color=True, quiet=True).error("bad")
        assert capsys.readouterr().err == "Error: bad\n"

    def test_debug_hidden_by_default(self, capsys):
        OutputManager(no_color=True).debug("trace")
        assert capsys.readouterr().err == ""

    def test_debug_shown_when_verbose(self, capsys):
        OutputManager(no_color=True, verbose=True).debug("trace")
        assert capsys.readouterr().err == "[debug] trace\n"


class TestGlobalInstance:
    def test_get_output_creates_default(self):
        assert output_module._output is None
        mgr = get_output()
        assert isinstance(mgr, OutputManager)
        assert get_output() is mgr

    def test_set_output_installs_instance(self, capsys):
        mgr = OutputManager(no_color=True)
        set_output(mgr)
        assert get_output() is mgr

        output_module.info("via module")
        output_module.print_data("data")
        captured = capsys.readouterr()
        assert captured.err == "via module\n"
        assert captured.out == "data\n"

    def test_reset_output(self):
        set_output(OutputManager())
        reset_output()
        assert output_module._output is None
