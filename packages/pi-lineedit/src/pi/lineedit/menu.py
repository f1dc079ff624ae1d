"""Menu overlay: information drawn in the rows below the edit line.

The menu shows a block of text (typically completion hints) until the next
key is handled, then erases it again. The edit line itself is never drawn
over: at most ``rows - 1`` lines are shown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pi.lineedit.ansi import take_columns

if TYPE_CHECKING:
    from pi.lineedit.terminal import Terminal

RESET = "\x1b[0m"
ERASE_LINE = "\x1b[0K"
NEXT_LINE = "\x1b[E"
PREVIOUS_LINE = "\x1b[F"


class Menu:
    """Draws and erases *text* below the current line.

    Erasing relies on the line count recorded by the last :meth:`display`
    and on the terminal size being unchanged since then; after a resize the
    erase may leave stale rows or clear the wrong ones.
    """

    def __init__(self, terminal: Terminal) -> None:
        self.terminal = terminal
        self.text: str = ""
        self.last_line_count: int = 0

    def display(self) -> None:
        # Empty text must not be drawn as one blank line
        if not self.text:
            return

        height = self.terminal.rows
        width = self.terminal.columns
        lines = self.text.split("\n")
        if lines[-1] == "":
            lines.pop()

        out: list[str] = []
        for line in lines[: max(height - 1, 0)]:
            out.append("\n\r")
            out.append(take_columns(line, width))
        out.append(RESET)
        out.append(PREVIOUS_LINE * min(len(lines), height))
        self.terminal.write("".join(out))

        self.last_line_count = max(min(height - 1, len(lines)), 0)

    def erase(self) -> None:
        if self.last_line_count == 0:
            return

        self.text = ""

        out = [(NEXT_LINE + ERASE_LINE) * self.last_line_count]
        out.append(RESET)
        out.append(PREVIOUS_LINE * self.last_line_count)
        self.terminal.write("".join(out))

        self.last_line_count = 0
