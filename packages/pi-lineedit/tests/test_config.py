"""Tests for pi.lineedit.config -- settings file loading and keybinding parsing."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from pi.lineedit.buffer import DEFAULT_WORD_BOUNDARIES
from pi.lineedit.config import (
    CONFIG_FILE_NAME,
    HISTORY_FILE_NAME,
    LineEditorConfig,
    get_config_dir,
    load_config,
    parse_keybindings,
)
from pi.lineedit.history import DEFAULT_HISTORY_SIZE
from pi.lineedit.keybindings import Exact, default_handlers


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("PI_CONFIG_DIR", str(tmp_path))
    return tmp_path


def write_config(path: Path, data) -> Path:
    path.write_text(json.dumps(data))
    return path


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


class TestDefaults:
    def test_config_dir_from_env(self, config_dir) -> None:
        assert get_config_dir() == config_dir

    def test_config_dir_default(self, monkeypatch) -> None:
        monkeypatch.delenv("PI_CONFIG_DIR", raising=False)
        assert get_config_dir() == Path.home() / ".pi"

    def test_dataclass_defaults(self, config_dir) -> None:
        config = LineEditorConfig()
        assert config.word_boundaries == DEFAULT_WORD_BOUNDARIES
        assert config.history_size == DEFAULT_HISTORY_SIZE
        assert config.history_file == config_dir / HISTORY_FILE_NAME
        assert len(config.handlers) == len(default_handlers())
        assert config.transform("abc") == "abc"
        assert config.completion(None) == []

    def test_instances_do_not_share_lists(self, config_dir) -> None:
        first = LineEditorConfig()
        first.word_boundaries.append("/")
        first.handlers.clear()
        second = LineEditorConfig()
        assert "/" not in second.word_boundaries
        assert second.handlers


# ---------------------------------------------------------------------------
# parse_keybindings
# ---------------------------------------------------------------------------


class TestParseKeybindings:
    def test_single_key(self) -> None:
        handlers = parse_keybindings({"cursorLineStart": "ctrl+g"})
        assert len(handlers) == 1
        assert handlers[0].matcher == Exact("\x07")
        assert handlers[0].action == "cursorLineStart"

    def test_key_list(self) -> None:
        handlers = parse_keybindings({"cursorWordLeft": ["alt+b", "ctrl+o"]})
        assert [h.matcher for h in handlers] == [Exact("\x1bb"), Exact("\x0f")]

    def test_unknown_action(self) -> None:
        with pytest.raises(ValueError, match="Unknown action"):
            parse_keybindings({"selectAll": "ctrl+a"})

    def test_unknown_key(self) -> None:
        with pytest.raises(ValueError):
            parse_keybindings({"cursorLineStart": "hyper+a"})


# ---------------------------------------------------------------------------
# load_config
# ---------------------------------------------------------------------------


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, config_dir) -> None:
        config = load_config()
        assert config.word_boundaries == DEFAULT_WORD_BOUNDARIES
        assert config.history_size == DEFAULT_HISTORY_SIZE

    def test_reads_default_location(self, config_dir) -> None:
        write_config(config_dir / CONFIG_FILE_NAME, {"historySize": 10})
        assert load_config().history_size == 10

    def test_all_settings(self, tmp_path) -> None:
        path = write_config(
            tmp_path / "settings.json",
            {
                "wordBoundaries": [" ", "/"],
                "historyFile": str(tmp_path / "hist"),
                "historySize": 42,
            },
        )
        config = load_config(path)
        assert config.word_boundaries == [" ", "/"]
        assert config.history_file == tmp_path / "hist"
        assert config.history_size == 42

    def test_empty_history_file_disables_persistence(self, tmp_path) -> None:
        path = write_config(tmp_path / "s.json", {"historyFile": ""})
        assert load_config(path).history_file is None

    def test_history_file_expands_user(self, tmp_path) -> None:
        path = write_config(tmp_path / "s.json", {"historyFile": "~/hist"})
        assert load_config(path).history_file == Path.home() / "hist"

    def test_invalid_json_gives_defaults(self, tmp_path, caplog) -> None:
        path = tmp_path / "s.json"
        path.write_text("{not json")
        config = load_config(path)
        assert config.history_size == DEFAULT_HISTORY_SIZE
        assert "Error reading config" in caplog.text

    def test_non_object_gives_defaults(self, tmp_path, caplog) -> None:
        path = write_config(tmp_path / "s.json", ["historySize", 1])
        assert load_config(path).history_size == DEFAULT_HISTORY_SIZE
        assert "expected a JSON object" in caplog.text

    def test_invalid_history_size_is_ignored(self, tmp_path, caplog) -> None:
        path = write_config(tmp_path / "s.json", {"historySize": "lots"})
        assert load_config(path).history_size == DEFAULT_HISTORY_SIZE
        assert "historySize" in caplog.text

    @pytest.mark.parametrize(
        "data, message",
        [
            ({"keybindings": ["ctrl+a"]}, "Ignoring invalid keybindings"),
            ({"keybindings": {"cursorLeft": 5}}, "Skipping keybinding for cursorLeft"),
            ({"keybindings": {"cursorLeft": [None]}}, "Skipping keybinding for cursorLeft"),
            ({"wordBoundaries": 7}, "Ignoring invalid wordBoundaries"),
            ({"wordBoundaries": [" ", 3]}, "Ignoring invalid wordBoundaries"),
            ({"historyFile": 12}, "Ignoring invalid historyFile"),
        ],
    )
    def test_malformed_settings_are_logged(self, tmp_path, caplog, data, message) -> None:
        path = write_config(tmp_path / "s.json", data)
        config = load_config(path)
        assert message in caplog.text
        assert config.word_boundaries == DEFAULT_WORD_BOUNDARIES
        assert len(config.handlers) == len(default_handlers())

    def test_non_string_key_rejected(self) -> None:
        with pytest.raises(ValueError, match="must be a string"):
            parse_keybindings({"cursorLeft": 5})

    def test_keybindings_are_prepended(self, tmp_path) -> None:
        path = write_config(
            tmp_path / "s.json", {"keybindings": {"cursorLineEnd": "ctrl+a"}}
        )
        config = load_config(path)
        assert config.handlers[0].matcher == Exact("\x01")
        assert config.handlers[0].action == "cursorLineEnd"
        assert len(config.handlers) == len(default_handlers()) + 1

    def test_bad_keybinding_is_skipped(self, tmp_path, caplog) -> None:
        path = write_config(
            tmp_path / "s.json",
            {
                "keybindings": {
                    "nonsense": "ctrl+a",
                    "cursorLineEnd": "ctrl+g",
                }
            },
        )
        config = load_config(path)
        assert config.handlers[0].matcher == Exact("\x07")
        assert len(config.handlers) == len(default_handlers()) + 1
        assert "Skipping keybinding for nonsense" in caplog.text
