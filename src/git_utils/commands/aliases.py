"""Global git alias list: execute, copy, edit, delete, create."""

from __future__ import annotations

from ..git import operations as ops
from ..git.aliases import delete_alias, get_aliases, set_alias, validate_alias_name
from ..git.executor import GitExecutor
from ..selection_list import Cancelled, Failure, GlobalAction, ItemAction, SelectionConfig, Success
from ..types import GitAlias
from . import prompts
from .core import CommandResult, ListOptions, finish, ok, show_list, warn


def render_alias(alias: GitAlias) -> str:
    return f"git {alias.name:<12} → {alias.command}"


def _validate_command(value: str) -> str | None:
    if not value or not value.strip():
        return "Alias command cannot be empty"
    return None


def create_alias(executor: GitExecutor, options: ListOptions):
    existing = {alias.name for alias in get_aliases(executor)}

    def _validate_name(value: str) -> str | None:
        error = validate_alias_name(value)
        if error is None and value.strip() in existing:
            return f"Alias '{value.strip()}' already exists"
        return error

    name = prompts.text("Alias name:", validate=_validate_name)
    if not name:
        return Cancelled("Alias creation cancelled")
    command = prompts.text(f"Command for 'git {name.strip()}':", validate=_validate_command)
    if not command:
        return Cancelled("Alias creation cancelled")
    set_alias(executor, name.strip(), command.strip())
    ok(options, f"Created alias 'git {name.strip()}'")
    return Success(f"Created alias '{name.strip()}'")


def alias_actions(executor: GitExecutor, options: ListOptions) -> list:

    def execute(alias: GitAlias):
        options.out.print(f"[yellow]Executing: git {alias.name}[/yellow]")
        code = executor.run_interactive([alias.name])
        if code != 0:
            return Failure(f"git {alias.name} exited with code {code}")
        ok(options, f"Executed: git {alias.name}")
        return Success(f"Executed 'git {alias.name}'")

    def copy(alias: GitAlias):
        ops.copy_to_clipboard(f"git {alias.name}")
        ok(options, f"Copied 'git {alias.name}' to clipboard")
        return Success("Copied alias")

    def edit(alias: GitAlias):
        command = prompts.text(
            f"Command for 'git {alias.name}':", validate=_validate_command, default=alias.command
        )
        if not command or command.strip() == alias.command:
            return Cancelled("Alias unchanged")
        set_alias(executor, alias.name, command.strip())
        ok(options, f"Updated alias 'git {alias.name}'")
        return Success(f"Updated alias '{alias.name}'")

    def delete(alias: GitAlias):
        if not prompts.confirm_deletion("alias", alias.name):
            return Cancelled("Deletion cancelled")
        delete_alias(executor, alias.name)
        ok(options, f"Deleted alias '{alias.name}'")
        return Success(f"Deleted alias '{alias.name}'")

    return [
        ItemAction(
            key="execute",
            label="Execute",
            description="Run the alias in the repository",
            exit_after_execution=True,
            handler=execute,
        ),
        ItemAction(
            key="copy",
            label="Copy",
            description="Copy 'git <alias>' to the clipboard",
            exit_after_execution=True,
            handler=copy,
        ),
        ItemAction(
            key="edit",
            label="Edit",
            description="Change the aliased command",
            exit_after_execution=True,
            handler=edit,
        ),
        ItemAction(
            key="delete",
            label="Delete",
            description="Remove the alias from the global config",
            exit_after_execution=True,
            handler=delete,
        ),
        GlobalAction(
            key="new",
            label="New alias",
            description="Add a global alias",
            exit_after_execution=True,
            handler=lambda: create_alias(executor, options),
        ),
    ]


def run(executor: GitExecutor, options: ListOptions | None = None) -> CommandResult:
    """Interactive alias list."""
    options = options or ListOptions()
    aliases = get_aliases(executor)
    if not aliases:
        warn(options, 'No git aliases found. Use the "New alias" action to create one.')

    result = show_list(
        SelectionConfig(
            items=aliases,
            render_text=render_alias,
            search_text=lambda a: f"{a.name} {a.command}",
            actions=alias_actions(executor, options),
            default_action_key="execute",
        ),
        options,
    )
    return finish(result, options, "No alias selected.")
