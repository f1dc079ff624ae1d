import pytest
from pi.lineedit.config import LineEditorConfig
from pi.lineedit.editor import LineEditor
from pi.lineedit.history import History

from virtual_terminal import VirtualTerminal


@pytest.fixture
def history_path(tmp_path):
    return tmp_path / "history"


@pytest.fixture
def make_editor(history_path):
    """Build a LineEditor over a VirtualTerminal with a temporary history file."""

    def _make(keys="", history_lines=(), columns=80, rows=24, **config_kwargs):
        if history_lines:
            history_path.write_text("".join(line + "\n" for line in history_lines))
        config_kwargs.setdefault("history_file", history_path)
        config = LineEditorConfig(**config_kwargs)
        terminal = VirtualTerminal(keys, rows=rows, columns=columns)
        history = History(config.history_file, config.history_size)
        return LineEditor(config, terminal=terminal, history=history)

    return _make
