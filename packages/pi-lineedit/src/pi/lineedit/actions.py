"""Named edit actions that key bindings refer to by tag."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Literal, get_args

if TYPE_CHECKING:
    from pi.lineedit.editor import LineEditor

EditAction = Literal[
    # Cursor movement
    "cursorLeft",
    "cursorRight",
    "cursorWordLeft",
    "cursorWordRight",
    "cursorLineStart",
    "cursorLineEnd",
    # Deletion
    "deleteCharBackward",
    "deleteCharForward",
    "deleteWordBackward",
    "deleteToLineEnd",
    # Transposition
    "transposeChars",
    "transposeWords",
    # History
    "historyPrevious",
    "historyNext",
    "historySearch",
    # Completion
    "showCompletions",
    # Control
    "interrupt",
    "ignore",
]

EDIT_ACTIONS: tuple[str, ...] = get_args(EditAction)

ActionFn = Callable[["LineEditor"], None]


def _interrupt(editor: LineEditor) -> None:
    raise KeyboardInterrupt


def _ignore(editor: LineEditor) -> None:
    pass


ACTIONS: dict[EditAction, ActionFn] = {
    "cursorLeft": lambda e: e.buffer.move_backward_char(),
    "cursorRight": lambda e: e.buffer.move_forward_char(),
    "cursorWordLeft": lambda e: e.buffer.move_backward_word(),
    "cursorWordRight": lambda e: e.buffer.move_forward_word(),
    "cursorLineStart": lambda e: e.buffer.move_start(),
    "cursorLineEnd": lambda e: e.buffer.move_end(),
    "deleteCharBackward": lambda e: e.buffer.delete_backward_char(),
    "deleteCharForward": lambda e: e.buffer.delete_forward_char(),
    "deleteWordBackward": lambda e: e.buffer.delete_backward_word(),
    "deleteToLineEnd": lambda e: e.buffer.delete_to_end(),
    "transposeChars": lambda e: e.buffer.transpose_chars(),
    "transposeWords": lambda e: e.buffer.transpose_words(),
    "historyPrevious": lambda e: e.navigator.previous(e.buffer),
    "historyNext": lambda e: e.navigator.next(e.buffer),
    "historySearch": lambda e: e.interactive_search(),
    "showCompletions": lambda e: e.show_completions(),
    "interrupt": _interrupt,
    "ignore": _ignore,
}


def insert_text(editor: LineEditor, char: str) -> None:
    """Default fallback: insert the raw key that no binding claimed."""
    editor.buffer.insert(char)
