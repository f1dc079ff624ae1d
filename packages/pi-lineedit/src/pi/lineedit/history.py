"""Persisted command history, up/down browsing and incremental search."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from pi.lineedit.buffer import EditBuffer

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_SIZE = 5000


# ---------------------------------------------------------------------------
# History store
# ---------------------------------------------------------------------------


class History:
    """Accepted lines, oldest first, capped at *max_size*.

    Lines are stored newline-delimited in *path*. The file is read once at
    construction and appended to on every accepted line; when the cap is
    exceeded the file is rewritten with the retained lines only. Passing no
    path, or a *max_size* of zero, keeps history out of the filesystem.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        max_size: int = DEFAULT_HISTORY_SIZE,
    ) -> None:
        self.path = Path(path).expanduser() if path else None
        self.max_size = max(max_size, 0)
        self._lines: list[str] = []
        self._load()

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    @property
    def size(self) -> int:
        return len(self._lines)

    def get(self, index: int) -> str | None:
        """Return the line at *index*, or ``None`` outside ``[0, size)``."""
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return None

    def append(self, line: str) -> None:
        if self.max_size == 0:
            return

        self._lines.append(line)
        if len(self._lines) > self.max_size:
            del self._lines[: len(self._lines) - self.max_size]
            self._rewrite()
        else:
            self._persist(line)

    def search(
        self,
        pattern: re.Pattern[str],
        from_index: int | None = None,
    ) -> Iterator[tuple[str, int]]:
        """Yield ``(line, index)`` for matching lines, newest first.

        Scanning starts just before *from_index* (default: the end).
        """
        start = len(self._lines) if from_index is None else min(from_index, len(self._lines))
        for index in range(start - 1, -1, -1):
            line = self._lines[index]
            if pattern.search(line):
                yield line, index

    # -- persistence -------------------------------------------------------

    def _load(self) -> None:
        if self.path is None or self.max_size == 0 or not self.path.exists():
            return
        try:
            lines = self.path.read_text(encoding="utf-8").split("\n")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read history file %s: %s", self.path, e)
            return
        if lines[-1] == "":
            lines.pop()
        self._lines = lines[-self.max_size :]
        logger.debug("Loaded %d history lines from %s", len(self._lines), self.path)

    def _persist(self, line: str) -> None:
        if self.path is None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError as e:
            logger.warning("Could not write history file %s: %s", self.path, e)

    def _rewrite(self) -> None:
        if self.path is None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                "".join(line + "\n" for line in self._lines), encoding="utf-8"
            )
        except OSError as e:
            logger.warning("Could not write history file %s: %s", self.path, e)


# ---------------------------------------------------------------------------
# Browsing
# ---------------------------------------------------------------------------


class HistoryNavigator:
    """Tracks which history line the buffer currently shows.

    ``index == size`` means no history line is selected. Any keystroke that
    does not move through history puts the index back there (see
    :meth:`settle`).
    """

    def __init__(self, history: History) -> None:
        self.history = history
        self.index = history.size
        self.moved = False

    def reset(self) -> None:
        self.index = self.history.size
        self.moved = False

    def previous(self, buffer: EditBuffer) -> None:
        if self.index > 0:
            buffer.replace(self.history.get(self.index - 1) or "")
            self.index -= 1
        self.moved = True

    def next(self, buffer: EditBuffer) -> None:
        if self.index < self.history.size:
            buffer.replace(self.history.get(self.index + 1) or "")
            self.index += 1
        self.moved = True

    def jump(self, index: int, buffer: EditBuffer) -> None:
        """Show the line at *index*, as a search result does."""
        buffer.replace(self.history.get(index) or "")
        self.index = index
        self.moved = True

    def settle(self) -> None:
        """Run after every keystroke: forget the browse position unless it just moved."""
        if self.moved:
            self.moved = False
        else:
            self.index = self.history.size


# ---------------------------------------------------------------------------
# Incremental search
# ---------------------------------------------------------------------------


@dataclass
class SearchResult:
    line: str
    index: int


class HistorySearch:
    """Display transform for an interactive reverse search.

    The search prompt's own buffer is the pattern. Each repaint looks up the
    newest line before *from_index* that the pattern matches and renders
    ``"<pattern>): <line>"``. The latest hit is kept in :attr:`result`.
    """

    PROMPT = "(search:"
    NOT_FOUND = "[pattern not found]"

    def __init__(self, history: History, from_index: int) -> None:
        self.history = history
        self.from_index = from_index
        self.result: SearchResult | None = None

    def find(self, text: str) -> SearchResult | None:
        try:
            pattern = re.compile(text)
        except re.error:
            return None
        for line, index in self.history.search(pattern, self.from_index):
            return SearchResult(line, index)
        return None

    def transform(self, text: str) -> str:
        found = self.find(text)
        if found is None:
            return f"{text}): {self.NOT_FOUND}"
        self.result = found
        return f"{text}): {found.line}"
