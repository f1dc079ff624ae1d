"""Single-line edit buffer with a cursor and word-aware operations."""

from __future__ import annotations

import re
from typing import Iterable

DEFAULT_WORD_BOUNDARIES: list[str] = [" ", "-", "_"]


def compile_word_boundaries(
    boundaries: Iterable[str | re.Pattern[str]],
) -> re.Pattern[str]:
    """Union *boundaries* into one pattern.

    Plain strings match literally; compiled patterns keep their own syntax.
    """
    parts: list[str] = []
    for boundary in boundaries:
        if isinstance(boundary, re.Pattern):
            parts.append(f"(?:{boundary.pattern})")
        else:
            parts.append(re.escape(boundary))
    if not parts:
        # Matches nothing
        return re.compile(r"(?!)")
    return re.compile("|".join(parts))


_DEFAULT_BOUNDARY_RE = compile_word_boundaries(DEFAULT_WORD_BOUNDARIES)


class EditBuffer:
    """Mutable text plus a cursor, with ``0 <= cursor <= len(text)`` at all times.

    Every operation is total: calling it at an edge where it cannot act is a
    no-op rather than an error.
    """

    def __init__(
        self,
        text: str = "",
        cursor: int | None = None,
        word_boundaries: re.Pattern[str] | None = None,
    ) -> None:
        self.text = text
        self.cursor = len(text) if cursor is None else max(0, min(cursor, len(text)))
        self._boundary_re = word_boundaries or _DEFAULT_BOUNDARY_RE

    def __len__(self) -> int:
        return len(self.text)

    def __repr__(self) -> str:
        return f"EditBuffer(text={self.text!r}, cursor={self.cursor})"

    def is_boundary(self, char: str) -> bool:
        return self._boundary_re.search(char) is not None

    # -- insertion / replacement -------------------------------------------

    def insert(self, s: str) -> None:
        self.text = self.text[: self.cursor] + s + self.text[self.cursor :]
        self.cursor += len(s)

    def replace(self, text: str) -> None:
        """Swap in new content, keeping the cursor where it was if it still fits."""
        self.text = text
        self.cursor = min(self.cursor, len(text))

    # -- character deletion ------------------------------------------------

    def delete_backward_char(self) -> None:
        if self.cursor == 0:
            return
        self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
        self.cursor -= 1

    def delete_forward_char(self) -> None:
        if self.cursor == len(self.text):
            return
        self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]

    def delete_to_end(self) -> None:
        self.text = self.text[: self.cursor]

    # -- cursor movement ---------------------------------------------------

    def move_start(self) -> None:
        self.cursor = 0

    def move_end(self) -> None:
        self.cursor = len(self.text)

    def move_forward_char(self) -> None:
        if self.cursor < len(self.text):
            self.cursor += 1

    def move_backward_char(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    # -- words -------------------------------------------------------------

    def _word_start_before(self, pos: int) -> int:
        """Scan backward from *pos*, return the index of the stopping boundary.

        One boundary character at *pos* is skipped first, so a word followed
        directly by punctuation or a space is still reached. Returns ``-1``
        when the scan runs off the start.
        """
        if pos >= 0 and self.is_boundary(self.text[pos]):
            pos -= 1
        while pos >= 0 and not self.is_boundary(self.text[pos]):
            pos -= 1
        return pos

    def delete_backward_word(self) -> None:
        if self.cursor == 0:
            return
        start = self._word_start_before(self.cursor - 1) + 1
        self.text = self.text[:start] + self.text[self.cursor :]
        self.cursor = start

    def move_backward_word(self) -> None:
        if self.cursor == 0:
            return
        self.cursor = self._word_start_before(self.cursor - 1) + 1

    def move_forward_word(self) -> None:
        size = len(self.text)
        if self.cursor == size:
            return
        pos = self.cursor + 1
        if pos != size and self.is_boundary(self.text[pos]):
            pos += 1
        while pos < size and not self.is_boundary(self.text[pos]):
            pos += 1
        self.cursor = pos

    # -- transposition -----------------------------------------------------

    def transpose_chars(self) -> None:
        if self.cursor < 2:
            return
        pos = self.cursor - 1 if self.cursor == len(self.text) else self.cursor
        chars = list(self.text)
        chars[pos - 1], chars[pos] = chars[pos], chars[pos - 1]
        self.text = "".join(chars)

    def transpose_words(self) -> None:
        """Swap the word before the cursor with the word preceding it."""
        second_end = self.cursor
        pos = self.cursor - 1
        if pos >= 0 and self.is_boundary(self.text[pos]):
            second_end -= 1
        pos = self._word_start_before(pos)
        second = self.text[pos + 1 : second_end]

        first_end = pos
        if not second or first_end < 0:
            return
        pos = self._word_start_before(pos)
        first = self.text[pos + 1 : first_end]
        if not first:
            return

        swapped = f"{second} {first}"
        self.text = self.text[: pos + 1] + swapped + self.text[second_end:]
        self.cursor = min(self.cursor, len(self.text))
