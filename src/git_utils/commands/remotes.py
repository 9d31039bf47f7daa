"""Remote list: browse branches, copy, set as default, rename, set URL, add, delete."""

from __future__ import annotations

from ..git import operations as ops
from ..git.branches import get_current_branch
from ..git.executor import GitExecutor
from ..git.remotes import (
    get_remote_branches,
    get_remotes,
    validate_remote_name,
    validate_remote_url,
)
from ..selection_list import Cancelled, Failure, GlobalAction, ItemAction, SelectionConfig, Success
from ..types import GitRemote, GitRemoteBranch
from . import prompts
from .core import CommandResult, ListOptions, finish, nested, ok, outcome_of, pick, show_list, warn


def render_remote(remote: GitRemote) -> str:
    return f"{remote.name} - {remote.url}"


def render_remote_branch(branch: GitRemoteBranch) -> str:
    line = branch.full_name
    if branch.hash:
        line += f" ({branch.hash})"
    if branch.date:
        line += f" - {branch.date}"
    return line


def add_remote(executor: GitExecutor, options: ListOptions):
    existing = {remote.name for remote in get_remotes(executor)}

    def _validate_name(value: str) -> str | None:
        error = validate_remote_name(value.strip())
        if error is None and value.strip() in existing:
            return f"Remote '{value.strip()}' already exists"
        return error

    name = prompts.text("Name for the new remote:", validate=_validate_name)
    if not name:
        return Cancelled("Add remote cancelled")
    url = prompts.text(f"URL for remote '{name.strip()}':", validate=validate_remote_url)
    if not url:
        return Cancelled("Add remote cancelled")
    ops.add_remote(executor, name.strip(), url.strip())
    ok(options, f"Added remote '{name.strip()}' with URL '{url.strip()}'")
    return Success(f"Added remote '{name.strip()}'")


def remote_branch_actions(executor: GitExecutor, options: ListOptions) -> list:
    """Actions for one branch of a remote."""

    def checkout(branch: GitRemoteBranch):
        # git creates a local tracking branch for a unique remote branch name
        ops.checkout(executor, branch.name)
        ok(options, f"Checked out '{branch.name}'")
        return Success(f"Checked out '{branch.name}'")

    def set_as_upstream(branch: GitRemoteBranch):
        current = get_current_branch(executor)
        ops.set_upstream(executor, current, branch.full_name)
        ok(options, f"Set '{branch.full_name}' as upstream for '{current}'")
        return Success(f"Upstream set to '{branch.full_name}'")

    def reset_to(branch: GitRemoteBranch):
        if ops.has_uncommitted_changes(executor):
            return Failure("You have uncommitted changes - commit or stash them first")
        current = get_current_branch(executor)
        question = f"Hard reset '{current}' to '{branch.full_name}'? Local commits not on it are lost."
        if not prompts.confirm(question, default=False):
            return Cancelled("Reset cancelled")
        ops.reset_hard(executor, branch.full_name)
        ok(options, f"Reset '{current}' to '{branch.full_name}'")
        return Success(f"Reset to '{branch.full_name}'")

    return [
        ItemAction(
            key="checkout",
            label="Checkout",
            description="Check out this branch (creates a tracking branch)",
            exit_after_execution=True,
            handler=checkout,
        ),
        ItemAction(
            key="set-upstream",
            label="Set as upstream",
            description="Track this branch from the current branch",
            exit_after_execution=True,
            handler=set_as_upstream,
        ),
        ItemAction(
            key="reset",
            label="Reset current branch",
            description="Reset the current branch to match this one (hard reset)",
            exit_after_execution=True,
            handler=reset_to,
        ),
    ]


def remote_actions(executor: GitExecutor, options: ListOptions) -> list:

    def show_branches(remote: GitRemote):
        options.out.print(f"Fetching branches from '{remote.name}'...")
        branches = get_remote_branches(executor, remote.name)
        if not branches:
            return Failure(f"No branches found on '{remote.name}'")
        inner = nested(options)
        result = show_list(
            SelectionConfig(
                items=branches,
                render_text=render_remote_branch,
                search_text=lambda b: b.name,
                header=f"Branches on {remote.name}",
                actions=remote_branch_actions(executor, inner),
                default_action_key="checkout",
            ),
            inner,
        )
        return outcome_of(result)

    def copy_name(remote: GitRemote):
        ops.copy_to_clipboard(remote.name)
        ok(options, f"Copied '{remote.name}' to clipboard")
        return Success("Copied remote name")

    def set_as_default(remote: GitRemote):
        current = get_current_branch(executor)
        branches = get_remote_branches(executor, remote.name)
        if not branches:
            return Failure(f"No branches found on '{remote.name}'")
        # Offer the branch of the same name first
        branches.sort(key=lambda b: b.name != current)
        branch = pick(
            branches,
            render_remote_branch,
            options,
            header=f"Select the branch of '{remote.name}' that '{current}' should track:",
        )
        if branch is None:
            return Cancelled("Upstream unchanged")
        ops.set_upstream(executor, current, branch.full_name)
        ok(options, f"'{current}' now tracks '{branch.full_name}'")
        return Success(f"Upstream set to '{branch.full_name}'")

    def rename(remote: GitRemote):
        def _validate(value: str) -> str | None:
            if value.strip() == remote.name:
                return "New name must be different"
            return validate_remote_name(value.strip())

        new_name = prompts.text(f"New name for '{remote.name}':", validate=_validate, default=remote.name)
        if not new_name:
            return Cancelled("Rename cancelled")
        ops.rename_remote(executor, remote.name, new_name.strip())
        ok(options, f"Renamed '{remote.name}' to '{new_name.strip()}'")
        return Success(f"Renamed remote to '{new_name.strip()}'")

    def set_url(remote: GitRemote):
        url = prompts.text(f"New URL for '{remote.name}':", validate=validate_remote_url, default=remote.url)
        if not url:
            return Cancelled("URL unchanged")
        ops.set_remote_url(executor, remote.name, url.strip())
        ok(options, f"Set URL of '{remote.name}' to '{url.strip()}'")
        return Success("Remote URL updated")

    def delete(remote: GitRemote):
        if not prompts.confirm_deletion("remote", remote.name):
            return Cancelled("Deletion cancelled")
        ops.remove_remote(executor, remote.name)
        ok(options, f"Deleted remote '{remote.name}'")
        return Success(f"Remote '{remote.name}' deleted")

    return [
        ItemAction(
            key="branches",
            label="Show branches",
            description="Fetch and browse the branches of this remote",
            exit_after_execution=True,
            handler=show_branches,
        ),
        ItemAction(
            key="copy",
            label="Copy",
            description="Copy the remote name to the clipboard",
            exit_after_execution=True,
            handler=copy_name,
        ),
        ItemAction(
            key="set-default",
            label="Set as default",
            description="Set as upstream for the current branch",
            exit_after_execution=True,
            handler=set_as_default,
        ),
        ItemAction(
            key="rename",
            label="Rename",
            description="Rename this remote",
            exit_after_execution=True,
            handler=rename,
        ),
        ItemAction(
            key="set-url",
            label="Set URL",
            description="Change the URL of this remote",
            exit_after_execution=True,
            handler=set_url,
        ),
        ItemAction(
            key="delete",
            label="Delete",
            description="Delete this remote",
            exit_after_execution=True,
            handler=delete,
        ),
        GlobalAction(
            key="add",
            label="Add remote",
            description="Add a new remote repository",
            exit_after_execution=True,
            handler=lambda: add_remote(executor, options),
        ),
    ]


def run(executor: GitExecutor, options: ListOptions | None = None) -> CommandResult:
    """Interactive remote list."""
    options = options or ListOptions()
    remotes = get_remotes(executor)
    if not remotes:
        warn(options, 'No remotes found! Use the "Add remote" action to add your first remote.')

    result = show_list(
        SelectionConfig(
            items=remotes,
            render_text=render_remote,
            search_text=lambda r: r.name,
            actions=remote_actions(executor, options),
            default_action_key="branches",
        ),
        options,
    )
    return finish(result, options, "No remote selected.")

