"""Keyboard decoding for selection lists.

Raw readchar key strings are translated once into a small closed set of
intents. Everything downstream works with these intents instead of
comparing key strings; all mode-dependent interpretation happens in the
controller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import readchar


@dataclass(frozen=True)
class Cancel:
    """Ctrl+C: abandon the whole list."""


@dataclass(frozen=True)
class ClearOrCancel:
    """Escape: clear the query if any, otherwise cancel (or go back)."""


@dataclass(frozen=True)
class Accept:
    """Enter: select the item or run the focused action."""


@dataclass(frozen=True)
class MoveSelection:
    delta: int


@dataclass(frozen=True)
class MoveActionFocus:
    delta: int


@dataclass(frozen=True)
class DeleteQueryChar:
    """Backspace: drop the last query character."""


@dataclass(frozen=True)
class AppendQueryChar:
    char: str


Intent = Union[
    Cancel,
    ClearOrCancel,
    Accept,
    MoveSelection,
    MoveActionFocus,
    DeleteQueryChar,
    AppendQueryChar,
]


def is_cancel(key: str) -> bool:
    """Check if key is Ctrl+C."""
    return key in (readchar.key.CTRL_C, "\x03")


def is_enter(key: str) -> bool:
    """Check if key is Enter/Return."""
    return key in (readchar.key.ENTER, "\r", "\n")


def is_escape(key: str) -> bool:
    """Check if key is Escape (handles terminal variations)."""
    return key in (readchar.key.ESC, "\x1b", "\x1b\x1b")


def is_backspace(key: str) -> bool:
    """Check if key is backspace (handles terminal variations)."""
    return key in (readchar.key.BACKSPACE, "\x7f", "\b")


def is_printable(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


_ARROWS = {
    readchar.key.UP: MoveSelection(-1),
    readchar.key.DOWN: MoveSelection(+1),
    readchar.key.LEFT: MoveActionFocus(-1),
    readchar.key.RIGHT: MoveActionFocus(+1),
}


def decode(key: str | None) -> Intent | None:
    """Translate a raw key string into an intent.

    Unknown or malformed sequences return None and are ignored by callers.
    Letters such as j/k are query input here, never navigation.
    """
    if not key:
        return None
    if is_cancel(key):
        return Cancel()
    if is_escape(key):
        return ClearOrCancel()
    if is_enter(key):
        return Accept()
    if key in _ARROWS:
        return _ARROWS[key]
    if is_backspace(key):
        return DeleteQueryChar()
    if is_printable(key):
        return AppendQueryChar(key)
    return None
