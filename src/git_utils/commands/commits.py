"""Commit list: current history, with cross-branch, reflog and file history views."""

from __future__ import annotations

from ..git import operations as ops
from ..git.commits import DEFAULT_LIMIT, get_commits, get_tracked_files
from ..git.executor import GitExecutor
from ..selection_list import Cancelled, GlobalAction, ItemAction, SelectionConfig, Success
from ..types import GitCommit
from . import prompts
from .core import CommandResult, ListOptions, finish, nested, ok, outcome_of, pick, show_list, warn


def render_commit(commit: GitCommit) -> str:
    return f"{commit.date} - {commit.subject} ({commit.hash})"


def commit_search_text(commit: GitCommit) -> str:
    return f"{commit.subject} {commit.hash}"


def commit_actions(executor: GitExecutor, options: ListOptions) -> list:

    def copy_hash(commit: GitCommit):
        ops.copy_to_clipboard(commit.hash)
        ok(options, f"Copied {commit.hash} to clipboard")
        return Success("Copied commit hash")

    def show(commit: GitCommit):
        ops.show(executor, commit.hash)
        return Success(f"Showed {commit.hash}")

    def checkout(commit: GitCommit):
        question = f"Check out {commit.hash}? This leaves you in detached HEAD state."
        if not prompts.confirm(question, default=False):
            return Cancelled("Checkout cancelled")
        ops.checkout(executor, commit.hash)
        ok(options, f"HEAD is now at {commit.hash} {commit.subject}")
        return Success(f"Checked out {commit.hash}")

    return [
        ItemAction(
            key="copy",
            label="Copy hash",
            description="Copy the short hash to the clipboard",
            exit_after_execution=True,
            handler=copy_hash,
        ),
        ItemAction(
            key="show",
            label="Show",
            description="Show the commit with git show",
            handler=show,
        ),
        ItemAction(
            key="checkout",
            label="Checkout",
            description="Check out this commit (detached HEAD)",
            exit_after_execution=True,
            handler=checkout,
        ),
    ]


def _commit_config(
    executor: GitExecutor, options: ListOptions, commits: list[GitCommit], header: str | None = None
) -> SelectionConfig[GitCommit]:
    return SelectionConfig(
        items=commits,
        render_text=render_commit,
        search_text=commit_search_text,
        header=header,
        actions=commit_actions(executor, options),
        default_action_key="copy",
    )


def browse(
    executor: GitExecutor,
    options: ListOptions,
    limit: int | None = DEFAULT_LIMIT,
    header: str | None = None,
    **scope,
):
    """Open a commit list for another scope from inside the main list.

    scope is passed to get_commits (all_refs, reflog, path).
    """
    commits = get_commits(executor, limit, **scope)
    if not commits:
        return Cancelled("No commits found")
    inner = nested(options)
    return outcome_of(show_list(_commit_config(executor, inner, commits, header), inner))


def file_history(executor: GitExecutor, options: ListOptions, limit: int | None = DEFAULT_LIMIT):
    files = get_tracked_files(executor)
    if not files:
        return Cancelled("No tracked files found in repository")
    path = pick(files, str, options, header="Select a file to view history:")
    if path is None:
        return Cancelled("File selection cancelled")
    return browse(executor, options, limit, header=f"History of {path}", path=path)


def global_actions(executor: GitExecutor, options: ListOptions, limit: int | None) -> list:
    return [
        GlobalAction(
            key="all",
            label="Cross-branch",
            description="Search commits across all branches",
            exit_after_execution=True,
            handler=lambda: browse(
                executor, options, limit, header="Commits on all branches", all_refs=True
            ),
        ),
        GlobalAction(
            key="reflog",
            label="Reflog",
            description="Search reflog entries (includes orphaned commits)",
            exit_after_execution=True,
            handler=lambda: browse(executor, options, limit, header="Reflog", reflog=True),
        ),
        GlobalAction(
            key="file",
            label="File history",
            description="Show commits for a specific file",
            exit_after_execution=True,
            handler=lambda: file_history(executor, options, limit),
        ),
    ]


def run(
    executor: GitExecutor,
    options: ListOptions | None = None,
    limit: int | None = DEFAULT_LIMIT,
    *,
    all_refs: bool = False,
    reflog: bool = False,
    path: str | None = None,
) -> CommandResult:
    """Interactive commit list.

    Without a scope the list shows the current history and offers the
    cross-branch, reflog and file history views as global actions.
    """
    options = options or ListOptions()
    commits = get_commits(executor, limit, all_refs=all_refs, reflog=reflog, path=path)
    if not commits:
        warn(options, "No commits found!")
        return CommandResult()

    config = _commit_config(executor, options, commits)
    if not (all_refs or reflog or path):
        config.actions = commit_actions(executor, options) + global_actions(executor, options, limit)
    result = show_list(config, options)
    return finish(result, options, "No commit selected.")
