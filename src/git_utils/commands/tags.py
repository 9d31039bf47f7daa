"""Tag list: checkout, copy, show, move, delete, create."""

from __future__ import annotations

import logging

from ..errors import GitError
from ..git import operations as ops
from ..git.branches import validate_branch_name
from ..git.commits import DEFAULT_LIMIT, get_commits
from ..git.executor import GitExecutor
from ..git.tags import get_tags
from ..selection_list import Cancelled, Failure, GlobalAction, ItemAction, SelectionConfig, Success
from ..types import GitTag
from . import prompts
from .commits import commit_search_text, render_commit
from .core import CommandResult, ListOptions, finish, ok, pick, show_list, warn

logger = logging.getLogger(__name__)


def render_tag(tag: GitTag) -> str:
    line = f"{tag.date} - {tag.name}"
    if tag.hash:
        line += f" ({tag.hash})"
    if tag.subject:
        line += f" - {tag.subject}"
    return line


def tag_search_text(tag: GitTag) -> str:
    return f"{tag.name} {tag.subject} {tag.tagger}"


def validate_tag_name(name: str) -> str | None:
    """Tag names follow the branch ref rules and may not start with '-'."""
    error = validate_branch_name(name)
    if error:
        return error.replace("Branch", "Tag")
    if name.startswith("-"):
        return "Tag name cannot start with -"
    return None


def create_new_tag(executor: GitExecutor, options: ListOptions):
    name = prompts.text("Tag name:", validate=validate_tag_name)
    if not name:
        return Cancelled("Tag creation cancelled")
    message = prompts.text("Tag message (empty for a lightweight tag):")
    if message is None:
        return Cancelled("Tag creation cancelled")
    ops.create_tag(executor, name.strip(), message.strip() or None)
    ok(options, f"Created tag '{name.strip()}'")
    return Success(f"Created tag '{name.strip()}'")


def _remotes(executor: GitExecutor, options: ListOptions, skipped: str) -> list[str]:
    """Remote names for a remote follow-up step; warns and returns [] when there are none."""
    try:
        remotes = ops.list_remotes(executor)
    except GitError as e:
        logger.debug("Listing remotes failed: %s", e)
        warn(options, f"Could not list remotes: {e} - {skipped}")
        return []
    if not remotes:
        warn(options, f"No remotes found - {skipped}")
    return remotes


def tag_actions(executor: GitExecutor, options: ListOptions) -> list:

    def checkout(tag: GitTag):
        ops.checkout(executor, tag.name)
        ok(options, f"Checked out tag '{tag.name}'")
        return Success(f"Checked out '{tag.name}'")

    def copy_name(tag: GitTag):
        ops.copy_to_clipboard(tag.name)
        ok(options, f"Copied '{tag.name}' to clipboard")
        return Success("Copied tag name")

    def show(tag: GitTag):
        ops.show(executor, tag.name)
        return Success(f"Showed '{tag.name}'")

    def delete(tag: GitTag):
        if not prompts.confirm_deletion("tag", tag.name):
            return Cancelled("Tag deletion cancelled")
        from_remote = prompts.confirm(f"Also delete '{tag.name}' from remote repositories?")
        if from_remote is None:
            return Cancelled("Tag deletion cancelled")

        ops.delete_tag(executor, tag.name)
        ok(options, f"Deleted local tag '{tag.name}'")

        if from_remote:
            for remote in _remotes(executor, options, "skipping remote deletion"):
                try:
                    ops.delete_remote_tag(executor, remote, tag.name)
                    ok(options, f"Deleted tag '{tag.name}' from '{remote}'")
                except GitError as e:
                    logger.debug("Remote tag deletion failed: %s", e)
                    warn(options, f"Could not delete '{tag.name}' from '{remote}': {e}")
        return Success(f"Tag '{tag.name}' deleted")

    def move(tag: GitTag):
        commits = get_commits(executor, DEFAULT_LIMIT, all_refs=True)
        if not commits:
            return Failure("No commits found")
        commit = pick(
            commits,
            render_commit,
            options,
            header=f"Select commit to move tag '{tag.name}' to:",
            search_text=commit_search_text,
        )
        if commit is None:
            return Cancelled("Tag move cancelled")
        if not prompts.confirm(f"Move tag '{tag.name}' to {commit.hash} {commit.subject}?", default=False):
            return Cancelled("Tag move cancelled")

        ops.move_tag(executor, tag.name, commit.hash)
        ok(options, f"Moved tag '{tag.name}' to {commit.hash}")

        if prompts.confirm(f"Force push '{tag.name}' to remote repositories?", default=False):
            for remote in _remotes(executor, options, "tag moved locally only"):
                try:
                    ops.push_tag(executor, remote, tag.name, force=True)
                    ok(options, f"Updated tag '{tag.name}' on '{remote}'")
                except GitError as e:
                    logger.debug("Remote tag update failed: %s", e)
                    warn(options, f"Could not update '{tag.name}' on '{remote}': {e}")
        return Success(f"Tag '{tag.name}' moved")

    return [
        ItemAction(
            key="checkout",
            label="Checkout",
            description="Check out this tag (detached HEAD)",
            exit_after_execution=True,
            handler=checkout,
        ),
        ItemAction(
            key="copy",
            label="Copy name",
            description="Copy the tag name to the clipboard",
            exit_after_execution=True,
            handler=copy_name,
        ),
        ItemAction(key="show", label="Show", description="Show the tag with git show", handler=show),
        ItemAction(
            key="move",
            label="Move",
            description="Point the tag at another commit",
            exit_after_execution=True,
            handler=move,
        ),
        ItemAction(
            key="delete",
            label="Delete",
            description="Delete the tag locally and optionally on remotes",
            exit_after_execution=True,
            handler=delete,
        ),
        GlobalAction(
            key="new-tag",
            label="New tag",
            description="Tag HEAD",
            exit_after_execution=True,
            handler=lambda: create_new_tag(executor, options),
        ),
    ]


def run(executor: GitExecutor, options: ListOptions | None = None) -> CommandResult:
    """Interactive tag list."""
    options = options or ListOptions()
    tags = get_tags(executor)
    if not tags:
        warn(options, "No tags found!")

    # Global actions keep the list useful when there are no tags yet
    result = show_list(
        SelectionConfig(
            items=tags,
            render_text=render_tag,
            search_text=tag_search_text,
            actions=tag_actions(executor, options),
            default_action_key="checkout",
        ),
        options,
    )
    return finish(result, options, "No tag selected.")
