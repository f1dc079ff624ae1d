"""The line editor: reads keys, edits the buffer, repaints, until Enter."""

from __future__ import annotations

import dataclasses
import logging

from pi.lineedit.buffer import EditBuffer, compile_word_boundaries
from pi.lineedit.config import LineEditorConfig
from pi.lineedit.history import History, HistoryNavigator, HistorySearch, SearchResult
from pi.lineedit.keybindings import KeyDispatcher
from pi.lineedit.menu import Menu
from pi.lineedit.render import LINE_START, layout_line, move_to_column
from pi.lineedit.terminal import ProcessTerminal, Terminal

logger = logging.getLogger(__name__)

ENTER = "\r"


class LineEditor:
    """Interactive single-line input with key bindings and history.

    One ``readline`` call runs a blocking loop: read a key, resolve it to a
    token, run the bound action (or the fallback), update the history browse
    position and repaint the line. Enter ends the loop and the line is added
    to history.

    Ctrl-C raises ``KeyboardInterrupt`` out of ``readline``; end of input
    raises ``EOFError``. Both are left to the caller.
    """

    def __init__(
        self,
        config: LineEditorConfig | None = None,
        terminal: Terminal | None = None,
        history: History | None = None,
    ) -> None:
        self.config = config if config is not None else LineEditorConfig()
        self.terminal = terminal if terminal is not None else ProcessTerminal()
        self.word_boundaries = compile_word_boundaries(self.config.word_boundaries)
        self.dispatcher = KeyDispatcher(self.config.handlers, self.config.fallback)
        if history is None:
            history = History(self.config.history_file, self.config.history_size)
        self.history = history
        self.navigator = HistoryNavigator(self.history)
        self.buffer = EditBuffer(word_boundaries=self.word_boundaries)
        self.menu = Menu(self.terminal)

    @property
    def line(self) -> str:
        return self.buffer.text

    @property
    def cursor(self) -> int:
        return self.buffer.cursor

    # -- reading --------------------------------------------------------------

    def readline(self, prompt: str = ">> ") -> str:
        """Read one line; returns it with a trailing newline."""
        self.buffer = EditBuffer(word_boundaries=self.word_boundaries)
        self.dispatcher.reset()
        self.navigator.reset()

        self.terminal.write(LINE_START + prompt)

        while True:
            key = self.terminal.read_key()
            self.menu.erase()
            if key == ENTER:
                break
            if not key:
                raise EOFError

            self.dispatcher.feed(key, self)
            self.navigator.settle()
            self.redraw(prompt)

        self.terminal.write("\n")
        self.history.append(self.buffer.text)
        return self.buffer.text + "\n"

    def gets(self) -> str:
        """Read a line with no prompt."""
        return self.readline("")

    # -- output ---------------------------------------------------------------

    def redraw(self, prompt: str) -> None:
        display = self.config.transform(self.buffer.text)
        body, column = layout_line(
            prompt, display, self.buffer.cursor, self.terminal.columns
        )
        self.terminal.write(LINE_START + body + move_to_column(column))

        if self.menu.text:
            self.menu.display()
            # The menu returns to the start of the edit row
            self.terminal.write(move_to_column(column))

    # -- actions needing the whole editor ---------------------------------------

    def show_completions(self) -> None:
        self.menu.text = "\n".join(self.config.completion(self))

    def interactive_search(self) -> SearchResult | None:
        """Search history backward with a nested prompt.

        The nested session has history disabled and no search binding. When
        it ends, the buffer shows the last line that matched; when nothing
        matched the buffer and browse position stay as they were.
        """
        search = HistorySearch(self.history, self.navigator.index)
        logger.debug("Starting history search from index %d", search.from_index)

        nested_config = dataclasses.replace(
            self.config,
            handlers=[
                h for h in self.dispatcher.handlers if h.action != "historySearch"
            ],
            transform=search.transform,
            history_file=None,
            history_size=0,
        )
        nested = LineEditor(nested_config, terminal=self.terminal, history=History(None, 0))
        nested.readline(search.PROMPT)

        if search.result is not None:
            self.navigator.jump(search.result.index, self.buffer)
        else:
            self.navigator.moved = True
        return search.result
