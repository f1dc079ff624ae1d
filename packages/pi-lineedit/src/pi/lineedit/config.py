"""Line editor configuration.

A ``LineEditorConfig`` is built by the embedding application and handed to
``LineEditor``. ``load_config`` builds one from a JSON settings file stored
at ``~/.pi/lineedit.json`` (or under ``$PI_CONFIG_DIR``)::

    {
      "wordBoundaries": [" ", "-", "_", "/"],
      "historyFile": "~/.pi/lineedit_history",
      "historySize": 1000,
      "keybindings": {"cursorLineStart": ["ctrl+a", "home"]}
    }

Configured keybindings are placed ahead of the defaults, so they win.
"""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from pi.lineedit.actions import EDIT_ACTIONS, insert_text
from pi.lineedit.buffer import DEFAULT_WORD_BOUNDARIES
from pi.lineedit.history import DEFAULT_HISTORY_SIZE
from pi.lineedit.keybindings import FallbackFn, Handler, bind, default_handlers
from pi.lineedit.keys import key_sequence

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "lineedit.json"
HISTORY_FILE_NAME = "lineedit_history"


def get_config_dir() -> Path:
    return Path(os.environ.get("PI_CONFIG_DIR", Path.home() / ".pi"))


def _identity(line: str) -> str:
    return line


def _no_completions(editor: Any) -> list[str]:
    return []


@dataclass
class LineEditorConfig:
    """Everything a ``LineEditor`` can be configured with."""

    word_boundaries: list[str | re.Pattern[str]] = field(
        default_factory=lambda: list(DEFAULT_WORD_BOUNDARIES)
    )
    handlers: list[Handler] = field(default_factory=default_handlers)
    # Called with the editor and the raw key when no handler matches
    fallback: FallbackFn = insert_text
    # Turns the buffer text into the text that is displayed
    transform: Callable[[str], str] = _identity
    # Returns completion hints shown by the ``showCompletions`` action
    completion: Callable[[Any], list[str]] = _no_completions
    history_file: Path | None = field(
        default_factory=lambda: get_config_dir() / HISTORY_FILE_NAME
    )
    history_size: int = DEFAULT_HISTORY_SIZE


def parse_keybindings(config: dict[str, Any]) -> list[Handler]:
    """Build handlers from ``{action: keyId | [keyId, ...]}``.

    Raises ``ValueError`` for unknown actions or key identifiers.
    """
    handlers: list[Handler] = []
    for action, keys in config.items():
        if action not in EDIT_ACTIONS:
            raise ValueError(f"Unknown action: {action!r}")
        key_array = keys if isinstance(keys, list) else [keys]
        for key_id in key_array:
            if not isinstance(key_id, str):
                raise ValueError(f"Key identifier must be a string: {key_id!r}")
            handlers.append(bind(key_sequence(key_id), action))
    return handlers


def load_config(path: str | Path | None = None) -> LineEditorConfig:
    """Read a JSON settings file into a ``LineEditorConfig``.

    A missing file gives the defaults. A file that cannot be read or parsed
    is logged and also gives the defaults. Settings of the wrong shape and
    individual bad keybindings are logged and skipped.
    """
    config_path = Path(path) if path else get_config_dir() / CONFIG_FILE_NAME
    config = LineEditorConfig()
    if not config_path.exists():
        return config

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Error reading config %s: %s", config_path, e)
        return config

    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a JSON object", config_path)
        return config

    if "wordBoundaries" in data:
        boundaries = data["wordBoundaries"]
        if isinstance(boundaries, list) and all(isinstance(b, str) for b in boundaries):
            config.word_boundaries = list(boundaries)
        else:
            logger.warning("Ignoring invalid wordBoundaries: %r", boundaries)
    if "historyFile" in data:
        history_file = data["historyFile"]
        if not history_file:
            config.history_file = None
        elif isinstance(history_file, str):
            config.history_file = Path(history_file).expanduser()
        else:
            logger.warning("Ignoring invalid historyFile: %r", history_file)
    if "historySize" in data:
        try:
            config.history_size = int(data["historySize"])
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid historySize: %r", data["historySize"])

    keybindings = data.get("keybindings") or {}
    if not isinstance(keybindings, dict):
        logger.warning("Ignoring invalid keybindings: expected an object")
        keybindings = {}

    custom: list[Handler] = []
    for action, keys in keybindings.items():
        try:
            custom.extend(parse_keybindings({action: keys}))
        except ValueError as e:
            logger.warning("Skipping keybinding for %s: %s", action, e)
    config.handlers = custom + config.handlers

    return config
