"""Key binding table: matchers, handlers and the default bindings.

A binding table is an ordered list of ``Handler`` objects. Each resolved
token is tested against the handlers in order and the first match fires.
Tokens nothing claims go to a fallback, which by default inserts the raw key.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Union

from pi.lineedit.actions import ACTIONS, EditAction, insert_text
from pi.lineedit.keys import EscapeScanner

if TYPE_CHECKING:
    from pi.lineedit.editor import LineEditor

logger = logging.getLogger(__name__)

FallbackFn = Callable[["LineEditor", str], None]


# ---------------------------------------------------------------------------
# Matchers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Exact:
    """Matches one exact token."""

    key: str

    def matches(self, token: str) -> bool:
        return token == self.key


@dataclass(frozen=True)
class Range:
    """Matches tokens between *first* and *last* inclusive.

    Only tokens of the same length as the bounds are considered, so
    ``Range("\\x01", "\\x1a")`` covers the control letters and nothing else.
    """

    first: str
    last: str

    def matches(self, token: str) -> bool:
        return len(token) == len(self.first) and self.first <= token <= self.last


@dataclass(frozen=True)
class Pattern:
    """Matches tokens the regular expression matches in full."""

    regex: re.Pattern[str]

    def matches(self, token: str) -> bool:
        return self.regex.fullmatch(token) is not None


Matcher = Union[Exact, Range, Pattern]


# ---------------------------------------------------------------------------
# Handler
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Handler:
    """A (matcher, action) pair.

    *action* is usually an ``EditAction`` tag; a callable taking the editor
    is accepted for bindings an embedding application defines itself.
    """

    matcher: Matcher
    action: EditAction | Callable[[LineEditor], None]

    def matches(self, token: str) -> bool:
        return self.matcher.matches(token)

    def invoke(self, editor: LineEditor) -> None:
        if callable(self.action):
            self.action(editor)
        else:
            ACTIONS[self.action](editor)


def bind(key: str, action: EditAction) -> Handler:
    return Handler(Exact(key), action)


def bind_range(first: str, last: str, action: EditAction) -> Handler:
    return Handler(Range(first, last), action)


def bind_pattern(pattern: str, action: EditAction) -> Handler:
    return Handler(Pattern(re.compile(pattern)), action)


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


def default_handlers() -> list[Handler]:
    """Return a fresh copy of the default binding table."""
    return [
        bind_pattern(r"\x08|\x7f", "deleteCharBackward"),
        bind("\x01", "cursorLineStart"),
        bind("\x05", "cursorLineEnd"),
        bind("\x0b", "deleteToLineEnd"),
        bind("\x06", "cursorRight"),
        bind("\x02", "cursorLeft"),
        bind("\x04", "deleteCharForward"),
        bind("\x03", "interrupt"),
        bind("\x17", "deleteWordBackward"),
        bind("\x14", "transposeChars"),
        bind("\x0e", "historyNext"),
        bind("\x10", "historyPrevious"),
        bind("\x12", "historySearch"),
        bind_range("\x01", "\x1a", "ignore"),
        bind_pattern(r"\x1b\x08|\x1b\x7f", "deleteWordBackward"),
        bind("\x1bb", "cursorWordLeft"),
        bind("\x1bf", "cursorWordRight"),
        # [C moves forward and [B moves backward
        bind("\x1b[C", "cursorRight"),
        bind("\x1b[B", "cursorLeft"),
        bind("\x1bt", "transposeWords"),
        bind_range("\x1ba", "\x1bz", "ignore"),
    ]


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------


class KeyDispatcher:
    """Feeds raw keys through an ``EscapeScanner`` and fires the matching handler."""

    def __init__(
        self,
        handlers: list[Handler],
        fallback: FallbackFn = insert_text,
    ) -> None:
        self.handlers = list(handlers)
        self.fallback = fallback
        self.scanner = EscapeScanner()

    def find_handler(self, token: str) -> Handler | None:
        for handler in self.handlers:
            if handler.matches(token):
                return handler
        return None

    def feed(self, key: str, editor: LineEditor) -> str | None:
        """Process one raw key; return the token it completed, if any."""
        token = self.scanner.feed(key)
        if token is None:
            return None

        handler = self.find_handler(token)
        if handler is not None:
            handler.invoke(editor)
        else:
            logger.debug("No binding for %r, passing %r to fallback", token, key)
            self.fallback(editor, key)
        return token

    def reset(self) -> None:
        self.scanner.reset()
