"""Shared pieces for the list commands."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Sequence, TypeVar

from rich.console import Console
from rich.markup import escape

from ..selection_list import Cancelled, SelectionConfig, SelectionResult, Success, run_selection_list

console = Console(highlight=False)

T = TypeVar("T")


@dataclass
class CommandResult:
    """What a list command tells its caller (the CLI or the command menu).

    Attributes:
        back: The user pressed Escape on an empty query and wants the menu.
        cancelled: The user pressed Ctrl+C.
    """

    back: bool = False
    cancelled: bool = False


@dataclass
class ListOptions:
    """Presentation options passed down from the CLI to every list."""

    allow_back: bool = False
    max_visible_rows: int | None = None
    console: Console | None = None
    read_key: Callable[[], str] | None = None

    @property
    def out(self) -> Console:
        return self.console or console


def show_list(config: SelectionConfig[T], options: ListOptions) -> SelectionResult[T]:
    """Run a selection list with the CLI-wide options applied."""
    config.allow_back = options.allow_back
    if options.max_visible_rows:
        config.max_visible_rows = options.max_visible_rows
    return run_selection_list(config, console=options.console, read_key=options.read_key)


def finish(result: SelectionResult, options: ListOptions, nothing_selected: str) -> CommandResult:
    """Report a list's outcome and turn it into a CommandResult."""
    out = options.out
    if result.back:
        return CommandResult(back=True)
    if result.cancelled:
        out.print(f"[yellow]{escape(result.message or 'Selection cancelled.')}[/yellow]")
        return CommandResult(cancelled=True)
    if not result.success:
        out.print(f"[yellow]{escape(nothing_selected)}[/yellow]")
    return CommandResult()


def ok(options: ListOptions, message: str) -> None:
    options.out.print(f"[green]✔ {escape(message)}[/green]")


def warn(options: ListOptions, message: str) -> None:
    options.out.print(f"[yellow]{escape(message)}[/yellow]")


def nested(options: ListOptions) -> ListOptions:
    """Options for a list opened from an action of another list.

    Escape on an empty query leaves the inner list and returns to the
    outer one.
    """
    return replace(options, allow_back=True)


def pick(
    items: Sequence[T],
    render_text: Callable[[T], str],
    options: ListOptions,
    header: str | None = None,
    search_text: Callable[[T], str] | None = None,
) -> T | None:
    """Choose one item from a plain list with no actions.

    Returns None when the user backs out or cancels.
    """
    result = show_list(
        SelectionConfig(items=items, render_text=render_text, search_text=search_text, header=header),
        nested(options),
    )
    return result.item if result.success else None


def outcome_of(result: SelectionResult):
    """Action outcome for a handler that ran an inner list to completion."""
    if result.success:
        return Success(result.message)
    return Cancelled(result.message)
