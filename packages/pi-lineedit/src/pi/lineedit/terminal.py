"""Terminal abstraction for blocking key reads and output.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal`` backed
by ``sys.stdin``/``sys.stdout``. Each key is read in raw mode and the
previous terminal mode is restored straight after, so output written
between keys goes through the normal line discipline.
"""

from __future__ import annotations

import codecs
import os
import sys
import termios
import tty
from typing import Protocol

_DEFAULT_ROWS = 24
_DEFAULT_COLUMNS = 80


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface the line editor needs from a terminal."""

    def read_key(self) -> str:
        """Block until one key arrives; return ``""`` at end of input."""
        ...

    def write(self, data: str) -> None: ...

    @property
    def rows(self) -> int: ...

    @property
    def columns(self) -> int: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Terminal backed by the process's standard streams."""

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending: str = ""

    # -- properties ---------------------------------------------------------

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).columns
        except (ValueError, OSError):
            return _DEFAULT_COLUMNS

    @property
    def rows(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).lines
        except (ValueError, OSError):
            return _DEFAULT_ROWS

    # -- input ----------------------------------------------------------------

    def read_key(self) -> str:
        """Read one character from stdin in raw mode.

        Multi-byte UTF-8 characters are read byte by byte until they decode.
        Ctrl-C arrives as ``"\\x03"`` rather than as a signal.
        """
        fd = sys.stdin.fileno()
        if not os.isatty(fd):
            return self._read_char(fd)

        old_settings = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            return self._read_char(fd)
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)

    def _read_char(self, fd: int) -> str:
        if self._pending:
            char, self._pending = self._pending[0], self._pending[1:]
            return char
        while True:
            byte = os.read(fd, 1)
            if not byte:
                self._decoder.reset()
                return ""
            decoded = self._decoder.decode(byte)
            if decoded:
                # A broken sequence can decode to a replacement plus one char
                self._pending = decoded[1:]
                return decoded[0]

    # -- output -------------------------------------------------------------

    def write(self, data: str) -> None:
        """Write directly to stdout, bypassing buffering."""
        try:
            sys.stdout.write(data)
            sys.stdout.flush()
        except OSError:
            pass
