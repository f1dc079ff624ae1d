"""Single-line repaint with horizontal scrolling.

Every frame is a full redraw computed from scratch, so the same prompt, line,
cursor and width always produce the same bytes. When the line does not fit,
only a window of it around the cursor is printed; escape sequences inside
the line are always emitted so the colors stay right.
"""

from __future__ import annotations

from pi.lineedit.ansi import char_width, split_ansi, starts_with_ansi_code, visible_width

RESET = "\x1b[0m"
CLEAR_TO_END = "\x1b[0K"
LINE_START = "\r" + RESET + CLEAR_TO_END
_COLUMN_FMT = "\x1b[{}G"


def move_to_column(column: int) -> str:
    """Absolute cursor column, 1-based."""
    return _COLUMN_FMT.format(column)


def _visible_chars(line: str) -> list[str]:
    return [
        ch
        for part in split_ansi(line)
        if not starts_with_ansi_code(part)
        for ch in part
    ]


def _window_start(widths: list[int], cursor: int, window: int) -> int:
    """First visible index such that the cursor cell still fits in *window* columns."""
    cursor_cell = max(widths[cursor], 1) if cursor < len(widths) else 1
    start = cursor
    used = cursor_cell
    while start > 0 and used + widths[start - 1] <= window:
        start -= 1
        used += widths[start]
    return start


def render_line(prompt: str, line: str, cursor: int, width: int) -> str:
    """Return the escape output that repaints *prompt* + *line* on the current row.

    *line* is the display text (it may carry color codes); *cursor* indexes
    its visible characters. The output ends with the cursor placed on the
    row.
    """
    body, column = layout_line(prompt, line, cursor, width)
    return LINE_START + body + move_to_column(column)


def layout_line(prompt: str, line: str, cursor: int, width: int) -> tuple[str, int]:
    """Return the text to print after the row is cleared and the cursor column."""
    prompt_width = visible_width(prompt)
    line_width = visible_width(line)
    padded = line + " " * max(width - line_width - prompt_width, 0)

    if prompt_width + visible_width(padded) <= width:
        chars = _visible_chars(line)
        before = sum(char_width(ch) for ch in chars[:cursor])
        return prompt + padded, prompt_width + before + 1

    out = [prompt]

    window = max(width - prompt_width, 1)
    chars = _visible_chars(padded)
    widths = [char_width(ch) for ch in chars]
    cursor = max(0, min(cursor, len(chars)))
    start = _window_start(widths, cursor, window)

    index = 0
    used = 0
    full = False
    for part in split_ansi(padded):
        if starts_with_ansi_code(part):
            out.append(part)
            continue
        for ch in part:
            if not full and index >= start:
                w = widths[index]
                if used + w > window:
                    full = True
                else:
                    out.append(ch)
                    used += w
            index += 1

    before = sum(widths[start:cursor])
    return "".join(out), prompt_width + before + 1
