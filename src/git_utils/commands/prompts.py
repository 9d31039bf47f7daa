"""Prompts used inside action handlers.

Handlers run with the list's live display stopped, so questionary owns the
terminal while they ask. Every prompt returns None when the user aborts
(Ctrl+C / Escape) instead of raising.
"""

from __future__ import annotations

from typing import Callable

import questionary
from questionary import Style

custom_style = Style(
    [
        ("qmark", "fg:cyan bold"),
        ("question", "fg:white bold"),
        ("answer", "fg:cyan"),
        ("pointer", "fg:cyan bold"),
        ("highlighted", "fg:cyan bold"),
        ("instruction", "fg:gray"),
    ]
)


def confirm(message: str, default: bool = False) -> bool | None:
    """Yes/no question. None when aborted."""
    return questionary.confirm(message, default=default, style=custom_style).ask()


def text(
    message: str,
    validate: Callable[[str], str | None] | None = None,
    default: str = "",
) -> str | None:
    """Free text input.

    Args:
        validate: Returns an error message for invalid input, else None.
    """
    def _check(value: str) -> bool | str:
        if validate is None:
            return True
        error = validate(value)
        return True if error is None else error

    return questionary.text(message, default=default, validate=_check, style=custom_style).ask()


def confirm_deletion(kind: str, name: str) -> bool:
    return bool(confirm(f"Delete {kind} '{name}'?", default=False))
