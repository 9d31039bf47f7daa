"""Worktree list: open in the editor, show info, remove."""

from __future__ import annotations

from typing import Any

from rich.markup import escape

from ..git import operations as ops
from ..git.executor import GitExecutor
from ..git.worktrees import count_changes, get_worktrees
from ..selection_list import Cancelled, Failure, ItemAction, SelectionConfig, Success
from ..types import GitWorktree
from . import prompts
from .core import CommandResult, ListOptions, finish, ok, show_list, warn

CREATE_HINT = "Create one with: git worktree add <path> <branch>"


def render_worktree(worktree: GitWorktree) -> str:
    suffix = " (main)" if worktree.is_main else ""
    return f"{worktree.branch or 'detached'} - {worktree.path}{suffix}"


def worktree_actions(
    executor: GitExecutor, options: ListOptions, editor: dict[str, Any] | None
) -> list:

    def open_in_editor(worktree: GitWorktree):
        ops.open_in_editor(worktree.path, editor)
        ok(options, f"Opened {worktree.path}")
        return Success(f"Opened {worktree.path}")

    def info(worktree: GitWorktree):
        out = options.out
        out.print(f"[bold]{escape(worktree.path)}[/bold]")
        out.print(f"  Branch: {escape(worktree.branch or 'detached')}")
        out.print(f"  Commit: {escape(worktree.commit[:7] or 'unknown')}")
        changes = count_changes(executor, worktree.path)
        if changes:
            out.print(f"  [yellow]{changes} uncommitted change(s)[/yellow]")
        else:
            out.print("  [green]Clean[/green]")
        return Success(f"Info for {worktree.path}")

    def remove(worktree: GitWorktree):
        if worktree.is_main:
            return Failure("The main worktree cannot be removed")
        question = f"Remove worktree at {worktree.path}? Its commits are kept, uncommitted changes are lost."
        if not prompts.confirm(question, default=False):
            return Cancelled("Removal cancelled")
        ops.remove_worktree(executor, worktree.path)
        ok(options, f"Removed worktree {worktree.path}")
        return Success(f"Removed {worktree.path}")

    return [
        ItemAction(
            key="open",
            label="Open",
            description="Open this worktree in the configured editor",
            exit_after_execution=True,
            handler=open_in_editor,
        ),
        ItemAction(
            key="info",
            label="Show info",
            description="Display worktree details",
            exit_after_execution=True,
            handler=info,
        ),
        ItemAction(
            key="remove",
            label="Remove",
            description="Remove this worktree (commits are preserved)",
            exit_after_execution=True,
            handler=remove,
        ),
    ]


def run(
    executor: GitExecutor,
    options: ListOptions | None = None,
    editor: dict[str, Any] | None = None,
) -> CommandResult:
    """Interactive worktree list. The main worktree is listed but cannot be removed."""
    options = options or ListOptions()
    worktrees = get_worktrees(executor)
    if len(worktrees) <= 1:
        warn(options, "Only the main worktree exists." if worktrees else "No worktrees found!")
        options.out.print(CREATE_HINT, markup=False)
        return CommandResult()

    result = show_list(
        SelectionConfig(
            items=worktrees,
            render_text=render_worktree,
            search_text=lambda w: f"{w.branch} {w.path}",
            actions=worktree_actions(executor, options, editor),
            default_action_key="open",
        ),
        options,
    )
    return finish(result, options, "No worktree selected.")
