"""Branch list: switch, copy, branch off, set upstream, delete."""

from __future__ import annotations

from ..errors import GitError, GitUtilsError
from ..git import operations as ops
from ..git.branches import get_branches, sanitize_branch_name, validate_branch_name
from ..git.executor import GitExecutor
from ..git.remotes import get_remotes
from ..selection_list import (
    Cancelled,
    Failure,
    GlobalAction,
    ItemAction,
    SelectionConfig,
    Success,
)
from ..types import GitBranch
from . import prompts
from .core import CommandResult, ListOptions, finish, ok, pick, show_list, warn

UNSET_UPSTREAM = "Unset upstream (stop tracking)"


def render_branch(branch: GitBranch) -> str:
    suffix = " (current)" if branch.current else ""
    return f"{branch.date} - {branch.name}{suffix}"


def _validate_new_name(raw: str) -> str | None:
    return validate_branch_name(sanitize_branch_name(raw))


def prompt_branch_name(options: ListOptions, start_point: str | None = None) -> str | None:
    """Ask for a branch name and return it sanitized, or None if aborted."""
    question = f"New branch name (from {start_point}):" if start_point else "New branch name:"
    raw = prompts.text(question, validate=_validate_new_name)
    if not raw:
        return None
    name = sanitize_branch_name(raw)
    if name != raw.strip():
        warn(options, f"Using sanitized name '{name}'")
    return name


def create_new_branch(
    executor: GitExecutor, options: ListOptions, name: str | None = None
) -> Success | Failure | Cancelled:
    """Create and switch to a new branch at HEAD."""
    if name is None:
        name = prompt_branch_name(options)
        if name is None:
            return Cancelled("Branch creation cancelled")
    else:
        error = validate_branch_name(name)
        if error:
            return Failure(error)
    ops.create_branch(executor, name)
    ok(options, f"Created and switched to '{name}'")
    return Success(f"Created branch '{name}'")


def branch_actions(executor: GitExecutor, options: ListOptions) -> list:
    """Item and global actions for the branch list."""

    def switch(branch: GitBranch):
        if branch.current:
            return Failure(f"Already on '{branch.name}'")
        ops.checkout(executor, branch.name)
        ok(options, f"Switched to '{branch.name}'")
        return Success(f"Switched to '{branch.name}'")

    def copy_name(branch: GitBranch):
        ops.copy_to_clipboard(branch.name)
        ok(options, f"Copied '{branch.name}' to clipboard")
        return Success("Copied branch name")

    def create_from(branch: GitBranch):
        name = prompt_branch_name(options, start_point=branch.name)
        if name is None:
            return Cancelled("Branch creation cancelled")
        ops.create_branch(executor, name, start_point=branch.name)
        ok(options, f"Created '{name}' from '{branch.name}'")
        return Success(f"Created branch '{name}'")

    def force_delete(branch: GitBranch):
        question = f"Force delete '{branch.name}'? Unmerged changes will be lost."
        if not prompts.confirm(question, default=False):
            return Cancelled("Force deletion cancelled")
        ops.delete_branch(executor, branch.name, force=True)
        ok(options, f"Force deleted '{branch.name}'")
        return Success("Branch force deleted")

    force_delete_action = ItemAction(
        key="force-delete",
        label="Force delete",
        description="Force delete (WARNING: loses unmerged changes)",
        exit_after_execution=True,
        handler=force_delete,
    )

    def delete(branch: GitBranch):
        if not prompts.confirm_deletion("branch", branch.name):
            return Cancelled("Deletion cancelled")
        try:
            ops.delete_branch(executor, branch.name)
        except GitError as e:
            if ops.is_not_fully_merged(e):
                return Failure(
                    f"Cannot delete '{branch.name}' - not fully merged",
                    follow_up=force_delete_action,
                )
            raise
        ok(options, f"Deleted '{branch.name}'")
        return Success("Branch deleted")

    def set_upstream(branch: GitBranch):
        remotes = [remote.name for remote in get_remotes(executor)]
        if not remotes:
            return Failure("No remotes configured. Add a remote first.")
        choices = remotes + [UNSET_UPSTREAM] if branch.upstream else remotes
        header = (
            f"Select remote for '{branch.name}' (currently tracking {branch.upstream}):"
            if branch.upstream
            else f"Select remote for '{branch.name}' to track:"
        )
        choice = pick(choices, str, options, header=header)
        if choice is None:
            return Cancelled("Upstream unchanged")
        if choice == UNSET_UPSTREAM:
            ops.unset_upstream(executor, branch.name)
            ok(options, f"Removed upstream tracking for '{branch.name}'")
            return Success(f"Removed upstream for '{branch.name}'")
        upstream = f"{choice}/{branch.name}"
        ops.set_upstream(executor, branch.name, upstream)
        ok(options, f"Set '{branch.name}' to track '{upstream}'")
        return Success(f"Set upstream to '{upstream}'")

    return [
        ItemAction(
            key="checkout",
            label="Switch",
            description="Check out this branch",
            exit_after_execution=True,
            handler=switch,
        ),
        ItemAction(
            key="copy",
            label="Copy name",
            description="Copy the branch name to the clipboard",
            exit_after_execution=True,
            handler=copy_name,
        ),
        ItemAction(
            key="create-from",
            label="Branch from",
            description="Create a new branch starting at this one",
            exit_after_execution=True,
            handler=create_from,
        ),
        ItemAction(
            key="set-upstream",
            label="Set upstream",
            description="Choose the remote this branch tracks",
            exit_after_execution=True,
            handler=set_upstream,
        ),
        ItemAction(
            key="delete",
            label="Delete",
            description="Delete this branch (git branch -d)",
            exit_after_execution=True,
            handler=delete,
        ),
        GlobalAction(
            key="new-branch",
            label="New branch",
            description="Create a branch at HEAD and switch to it",
            exit_after_execution=True,
            handler=lambda: create_new_branch(executor, options),
        ),
    ]


def run(executor: GitExecutor, options: ListOptions | None = None) -> CommandResult:
    """Interactive branch list."""
    options = options or ListOptions()
    branches = get_branches(executor)
    if not branches:
        warn(options, "No branches found!")
        return CommandResult()

    result = show_list(
        SelectionConfig(
            items=branches,
            render_text=render_branch,
            search_text=lambda b: b.name,
            actions=branch_actions(executor, options),
            default_action_key="checkout",
        ),
        options,
    )
    return finish(result, options, "No branch selected.")


def run_new(executor: GitExecutor, name: str | None, options: ListOptions | None = None) -> CommandResult:
    """`branches --new [NAME]`: run the new-branch action directly."""
    options = options or ListOptions()
    outcome = create_new_branch(executor, options, sanitize_branch_name(name) if name else None)
    if isinstance(outcome, Failure):
        raise GitUtilsError(outcome.message)
    if isinstance(outcome, Cancelled):
        warn(options, outcome.message)
        return CommandResult(cancelled=True)
    return CommandResult()
