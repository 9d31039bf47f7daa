"""Landing menu shown when git-utils runs without a sub-command."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from rich.markup import escape

from ..selection_list import SelectionConfig, run_selection_list
from .core import CommandResult, ListOptions


@dataclass
class MenuCommand:
    name: str
    description: str
    run: Callable[[ListOptions], CommandResult]


def render_command(command: MenuCommand) -> str:
    return f"{command.name:<12} {command.description}"


def run_menu(commands: list[MenuCommand], options: ListOptions | None = None) -> CommandResult:
    """Pick a command, run it, and come back when it reports `back`."""
    options = options or ListOptions()
    out = options.out

    while True:
        result = run_selection_list(
            SelectionConfig(
                items=commands,
                render_text=render_command,
                search_text=lambda c: f"{c.name} {c.description}",
                header="Select a command to run:",
                max_visible_rows=options.max_visible_rows,
            ),
            console=options.console,
            read_key=options.read_key,
        )
        if result.cancelled or result.item is None:
            out.print("[yellow]Selection cancelled. Exiting.[/yellow]")
            return CommandResult(cancelled=True)

        command = result.item
        out.print(f"[dim]Executing: {escape(command.name)}[/dim]")
        sub_options = ListOptions(
            allow_back=True,
            max_visible_rows=options.max_visible_rows,
            console=options.console,
            read_key=options.read_key,
        )
        outcome = command.run(sub_options)
        if not outcome.back:
            return outcome
