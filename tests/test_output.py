"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet and verbose modes
- JSON and plain rendering
- Global instance management
"""

from __future__ import annotations

import json

import pytest

from dgraph_admin import output as output_module
from dgraph_admin.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


@pytest.fixture()
def non_tty(monkeypatch):
    monkeypatch.setattr("dgraph_admin.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    monkeypatch.setattr("dgraph_admin.output._is_tty", lambda: True)


class TestOutputFormatResolution:
    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        assert OutputManager(format=OutputFormat.AUTO).format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch):
        monkeypatch.delenv("TERM", raising=False)
        assert OutputManager(format=OutputFormat.AUTO).format == OutputFormat.RICH

    def test_auto_resolves_to_plain_when_no_color(self, tty):
        assert OutputManager(format=OutputFormat.AUTO, no_color=True).format == OutputFormat.PLAIN

    def test_explicit_format_kept(self, tty):
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON


class TestColorDisabling:
    def test_no_color_env(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb(self, monkeypatch):
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_default(self, monkeypatch):
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


class TestStreams:
    def test_data_to_stdout_diagnostics_to_stderr(self, capsys):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.print_data("payload")
        mgr.info("status")
        mgr.warning("careful")
        mgr.error("broken")
        captured = capsys.readouterr()
        assert captured.out == "payload\n"
        assert captured.err.splitlines() == ["status", "Warning: careful", "Error: broken"]

    def test_quiet_suppresses_info_and_success_only(self, capsys):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.info("status")
        mgr.success("done")
        mgr.warning("careful")
        mgr.error("broken")
        mgr.raw_error("{}")
        assert capsys.readouterr().err.splitlines() == ["Warning: careful", "Error: broken", "{}"]

    def test_notice_not_suppressed_by_quiet(self, capsys):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.notice("[dry-run] GET x")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "[dry-run] GET x\n"

    def test_debug_only_when_verbose(self, capsys):
        OutputManager(no_color=True).debug("hidden")
        OutputManager(no_color=True, verbose=True).debug("shown")
        assert capsys.readouterr().err == "[debug] shown\n"


class TestFormatResponse:
    def test_json_pretty_prints(self, capsys):
        OutputManager(format=OutputFormat.JSON, no_color=True).format_response({"a": [1]})
        assert json.loads(capsys.readouterr().out) == {"a": [1]}

    def test_json_reformats_json_strings(self, capsys):
        OutputManager(format=OutputFormat.JSON, no_color=True).format_response('{"a":1}')
        assert capsys.readouterr().out == '{\n  "a": 1\n}\n'

    def test_json_passes_text_through(self, capsys):
        OutputManager(format=OutputFormat.JSON, no_color=True).format_response("name: string .")
        assert capsys.readouterr().out == "name: string .\n"

    def test_plain_text(self, capsys):
        OutputManager(format=OutputFormat.PLAIN, no_color=True).format_response("ok")
        assert capsys.readouterr().out == "ok\n"

    def test_plain_table(self, capsys):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.print_table(["Address", "Status"], [["alpha1:7080", "healthy"]])
        assert capsys.readouterr().out == "Address\tStatus\nalpha1:7080\thealthy\n"


class TestGlobalInstance:
    def test_lazy_default(self):
        reset_output()
        assert isinstance(get_output(), OutputManager)

    def test_set_and_convenience_functions(self, capsys):
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        output_module.print_data("data")
        output_module.error("bad")
        captured = capsys.readouterr()
        assert captured.out == "data\n"
        assert captured.err == "Error: bad\n"
