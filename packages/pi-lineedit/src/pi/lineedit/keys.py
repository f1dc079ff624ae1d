"""Raw key scanning and key identifier parsing.

``EscapeScanner`` turns the stream of raw keys read from the terminal into
*tokens*: single characters, or complete escape sequences such as ``"\\x1bb"``
(meta-b) or ``"\\x1b[5~"`` (page up). Every escape eventually resolves to a
token, so unknown sequences can never stall input.

``key_sequence`` maps readable key identifiers like ``"ctrl+a"`` or
``"alt+b"`` to the token the terminal sends for them.
"""

from __future__ import annotations

from enum import Enum

ESC = "\x1b"
CSI = "\x1b["

# Bytes that keep a CSI sequence open (page up / page down style keys)
_CSI_CONTINUATION = ("5", "6")


class ScannerState(Enum):
    IDLE = "idle"
    IN_ESCAPE = "in-escape"
    IN_CSI = "in-csi"


class EscapeScanner:
    """Accumulates partial escape sequences until they resolve to a token."""

    def __init__(self) -> None:
        self._pending: str = ""

    @property
    def pending(self) -> str:
        return self._pending

    @property
    def state(self) -> ScannerState:
        if not self._pending:
            return ScannerState.IDLE
        if self._pending == ESC:
            return ScannerState.IN_ESCAPE
        return ScannerState.IN_CSI

    def feed(self, key: str) -> str | None:
        """Consume one raw key; return the resolved token, or ``None`` if more is needed."""
        state = self.state

        if state is ScannerState.IDLE:
            if key == ESC:
                self._pending = ESC
                return None
            return key

        if state is ScannerState.IN_ESCAPE and key == "[":
            self._pending = CSI
            return None

        if state is ScannerState.IN_CSI and key in _CSI_CONTINUATION:
            self._pending += key
            return None

        token = self._pending + key
        self._pending = ""
        return token

    def reset(self) -> None:
        self._pending = ""


# ---------------------------------------------------------------------------
# Key identifiers
# ---------------------------------------------------------------------------

NAMED_KEYS: dict[str, str] = {
    "backspace": "\x7f",
    "tab": "\t",
    "space": " ",
    "up": "\x1b[A",
    "down": "\x1b[B",
    "right": "\x1b[C",
    "left": "\x1b[D",
    "home": "\x1b[H",
    "end": "\x1b[F",
    "pageUp": "\x1b[5~",
    "pageDown": "\x1b[6~",
}

_CTRL_SYMBOLS: dict[str, str] = {
    "\\": chr(28),
    "]": chr(29),
    "^": chr(30),
    "_": chr(31),
    "@": chr(0),
    "?": chr(127),
}


def raw_ctrl_char(key: str) -> str | None:
    """Return the control character for a key, or ``None`` if not applicable.

    For example, ``raw_ctrl_char("a")`` returns ``"\\x01"``.
    """
    if key == "backspace":
        return "\x08"
    if len(key) != 1:
        return None
    code = ord(key.lower())
    if ord("a") <= code <= ord("z"):
        return chr(code & 0x1F)
    return _CTRL_SYMBOLS.get(key)


def key_sequence(key_id: str) -> str:
    """Translate a key identifier into the token the terminal produces.

    Supported forms are single characters, the names in ``NAMED_KEYS``,
    ``ctrl+<key>``, ``alt+<key>`` and ``ctrl+alt+<key>``.

    Raises ``ValueError`` for identifiers that cannot be typed as a single
    token (``"enter"`` ends the line and a lone escape always starts a
    sequence).
    """
    if not key_id:
        raise ValueError("Empty key identifier")

    if len(key_id) == 1:
        if key_id in ("\r", ESC):
            raise ValueError(f"Key cannot be bound: {key_id!r}")
        return key_id

    parts = key_id.split("+")
    # "ctrl++" and "alt++" bind the plus key itself
    if key_id.endswith("++"):
        parts = parts[:-2] + ["+"]

    *modifiers, key = parts
    ctrl = alt = False
    for modifier in modifiers:
        lower = modifier.lower()
        if lower == "ctrl":
            ctrl = True
        elif lower in ("alt", "meta"):
            alt = True
        else:
            raise ValueError(f"Unknown modifier {modifier!r} in {key_id!r}")

    if ctrl:
        base = raw_ctrl_char(key)
        if base is None:
            raise ValueError(f"No control character for {key_id!r}")
    elif len(key) == 1:
        base = key
    elif key in NAMED_KEYS:
        base = NAMED_KEYS[key]
    else:
        raise ValueError(f"Unknown key {key!r} in {key_id!r}")

    if alt:
        if base.startswith(CSI):
            raise ValueError(f"Meta cannot be combined with {key!r}")
        return ESC + base
    return base
