"""Stash list and the non-interactive `save` command."""

from __future__ import annotations

from ..errors import GitError
from ..git import operations as ops
from ..git.branches import validate_branch_name
from ..git.executor import GitExecutor
from ..git.stashes import get_stashes
from ..selection_list import Cancelled, GlobalAction, ItemAction, SelectionConfig, Success
from ..types import GitStash
from . import prompts
from .core import CommandResult, ListOptions, finish, ok, show_list, warn


def render_stash(stash: GitStash) -> str:
    line = f"{stash.ref}: {stash.message} [{stash.branch}]"
    if stash.date:
        line += f" ({stash.date})"
    return line


def save(executor: GitExecutor, message: str | None, options: ListOptions | None = None) -> str:
    """Stash all local changes, untracked files included."""
    options = options or ListOptions()
    summary = ops.stash_push(executor, message or None)
    ok(options, summary or "Saved working directory")
    return summary


def create_new_stash(executor: GitExecutor, options: ListOptions):
    if not ops.has_changes(executor):
        return Cancelled("No local changes to stash")
    message = prompts.text("Stash message (optional):")
    if message is None:
        return Cancelled("Stash cancelled")
    save(executor, message.strip(), options)
    return Success("Stash created")


def stash_actions(executor: GitExecutor, options: ListOptions) -> list:

    def apply(stash: GitStash):
        ops.stash_apply(executor, stash.ref)
        ok(options, f"Applied {stash.ref}")
        return Success(f"Applied {stash.ref}")

    def show(stash: GitStash):
        code = executor.run_interactive(["stash", "show", "-p", stash.ref])
        if code != 0:
            raise GitError(f"git stash show exited with code {code}", returncode=code)
        return Success(f"Showed {stash.ref}")

    def copy_ref(stash: GitStash):
        ops.copy_to_clipboard(stash.ref)
        ok(options, f"Copied {stash.ref}")
        return Success("Reference copied")

    def create_branch(stash: GitStash):
        name = prompts.text(f"Name for the new branch from {stash.ref}:", validate=validate_branch_name)
        if not name:
            return Cancelled("Branch creation cancelled")
        ops.stash_branch(executor, name.strip(), stash.ref)
        ok(options, f"Created branch '{name.strip()}' from {stash.ref}")
        ok(options, "Stash has been applied and removed from the stash list")
        return Success("Branch created from stash")

    def drop(stash: GitStash):
        if not prompts.confirm_deletion("stash", f"{stash.ref}: {stash.message}"):
            return Cancelled("Drop cancelled")
        ops.stash_drop(executor, stash.ref)
        ok(options, f"Dropped {stash.ref}")
        return Success(f"Dropped {stash.ref}")

    return [
        ItemAction(
            key="apply",
            label="Apply",
            description="Apply the stash, keeping it in the list",
            exit_after_execution=True,
            handler=apply,
        ),
        ItemAction(key="show", label="Show", description="Show the stash diff", handler=show),
        ItemAction(
            key="copy",
            label="Copy ref",
            description="Copy the stash reference to the clipboard",
            exit_after_execution=True,
            handler=copy_ref,
        ),
        ItemAction(
            key="branch",
            label="Create branch",
            description="Check out a new branch with the stash applied (git stash branch)",
            exit_after_execution=True,
            handler=create_branch,
        ),
        ItemAction(
            key="drop",
            label="Drop",
            description="Delete the stash entry",
            exit_after_execution=True,
            handler=drop,
        ),
        GlobalAction(
            key="new-stash",
            label="New stash",
            description="Stash the working tree, untracked files included",
            exit_after_execution=True,
            handler=lambda: create_new_stash(executor, options),
        ),
    ]


def run(executor: GitExecutor, options: ListOptions | None = None) -> CommandResult:
    """Interactive stash list."""
    options = options or ListOptions()
    stashes = get_stashes(executor)
    if not stashes:
        warn(options, "No stashes found!")

    result = show_list(
        SelectionConfig(
            items=stashes,
            render_text=render_stash,
            search_text=lambda s: f"{s.message} {s.branch}",
            actions=stash_actions(executor, options),
            default_action_key="apply",
        ),
        options,
    )
    return finish(result, options, "No stash selected.")
