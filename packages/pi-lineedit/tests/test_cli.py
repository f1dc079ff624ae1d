"""Tests for pi.lineedit.cli -- the echo REPL and its click command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from pi.lineedit import cli

from virtual_terminal import VirtualTerminal


@pytest.fixture
def fake_terminal(monkeypatch, tmp_path):
    """Replace ProcessTerminal with a VirtualTerminal fed from ``terminals``."""
    monkeypatch.setenv("PI_CONFIG_DIR", str(tmp_path))
    terminals: list[VirtualTerminal] = []

    def _factory() -> VirtualTerminal:
        return terminals[-1]

    monkeypatch.setattr(cli, "ProcessTerminal", _factory)
    return terminals


# ---------------------------------------------------------------------------
# run_repl
# ---------------------------------------------------------------------------


class TestRunRepl:
    def test_echoes_lines_until_eof(self, make_editor) -> None:
        editor = make_editor("one\rtwo\r")
        assert cli.run_repl(editor, "> ") == 2
        writes = editor.terminal.writes
        assert "one\n" in writes
        assert "two\n" in writes
        assert writes[-1] == "\n"

    def test_ctrl_c_ends_session(self, make_editor) -> None:
        editor = make_editor("a\rb\x03c\r")
        assert cli.run_repl(editor, "> ") == 1
        assert editor.terminal.pending_keys == 2

    def test_no_input(self, make_editor) -> None:
        assert cli.run_repl(make_editor(""), "> ") == 0


# ---------------------------------------------------------------------------
# main
# ---------------------------------------------------------------------------


class TestMain:
    def test_lines_saved_to_history_file(self, fake_terminal, tmp_path) -> None:
        fake_terminal.append(VirtualTerminal("hello\r"))
        history_file = tmp_path / "hist"
        result = CliRunner().invoke(cli.main, ["--history-file", str(history_file)])
        assert result.exit_code == 0, result.output
        assert history_file.read_text() == "hello\n"

    def test_prompt_option(self, fake_terminal, tmp_path) -> None:
        terminal = VirtualTerminal("x\r")
        fake_terminal.append(terminal)
        result = CliRunner().invoke(
            cli.main, ["--prompt", "$ ", "--history-file", str(tmp_path / "h")]
        )
        assert result.exit_code == 0, result.output
        assert "$ x" in terminal.output

    def test_history_size_zero_disables_history(self, fake_terminal, tmp_path) -> None:
        fake_terminal.append(VirtualTerminal("secret\r"))
        history_file = tmp_path / "hist"
        result = CliRunner().invoke(
            cli.main,
            ["--history-file", str(history_file), "--history-size", "0"],
        )
        assert result.exit_code == 0, result.output
        assert not history_file.exists()

    def test_config_file_is_used(self, fake_terminal, tmp_path) -> None:
        history_file = tmp_path / "from-config"
        config_path = tmp_path / "settings.json"
        config_path.write_text(
            json.dumps(
                {
                    "historyFile": str(history_file),
                    "keybindings": {"cursorLineStart": "ctrl+g"},
                }
            )
        )
        fake_terminal.append(VirtualTerminal("bc\x07a\r"))
        result = CliRunner().invoke(cli.main, ["--config", str(config_path)])
        assert result.exit_code == 0, result.output
        assert history_file.read_text() == "abc\n"

    def test_rejects_unknown_log_level(self, fake_terminal) -> None:
        fake_terminal.append(VirtualTerminal())
        result = CliRunner().invoke(cli.main, ["--log-level", "verbose"])
        assert result.exit_code != 0
