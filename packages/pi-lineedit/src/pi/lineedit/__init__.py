"""pi-lineedit: interactive single-line input for terminals."""

# ANSI text measurement
from pi.lineedit.ansi import strip_ansi, take_columns, visible_width

# Edit buffer
from pi.lineedit.buffer import DEFAULT_WORD_BOUNDARIES, EditBuffer, compile_word_boundaries

# Configuration
from pi.lineedit.config import LineEditorConfig, load_config, parse_keybindings

# Editor
from pi.lineedit.editor import LineEditor

# History
from pi.lineedit.history import History, HistoryNavigator, HistorySearch, SearchResult

# Keybindings
from pi.lineedit.actions import ACTIONS, EditAction
from pi.lineedit.keybindings import (
    Exact,
    Handler,
    KeyDispatcher,
    Pattern,
    Range,
    default_handlers,
)

# Keys
from pi.lineedit.keys import EscapeScanner, ScannerState, key_sequence

# Menu overlay
from pi.lineedit.menu import Menu

# Rendering
from pi.lineedit.render import render_line

# Terminal
from pi.lineedit.terminal import ProcessTerminal, Terminal

__all__ = [
    # ANSI
    "strip_ansi",
    "take_columns",
    "visible_width",
    # Buffer
    "DEFAULT_WORD_BOUNDARIES",
    "EditBuffer",
    "compile_word_boundaries",
    # Config
    "LineEditorConfig",
    "load_config",
    "parse_keybindings",
    # Editor
    "LineEditor",
    # History
    "History",
    "HistoryNavigator",
    "HistorySearch",
    "SearchResult",
    # Keybindings
    "ACTIONS",
    "EditAction",
    "Exact",
    "Handler",
    "KeyDispatcher",
    "Pattern",
    "Range",
    "default_handlers",
    # Keys
    "EscapeScanner",
    "ScannerState",
    "key_sequence",
    # Menu
    "Menu",
    # Rendering
    "render_line",
    # Terminal
    "ProcessTerminal",
    "Terminal",
]
