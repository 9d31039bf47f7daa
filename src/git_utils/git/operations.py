"""Mutating and interactive git operations used by action handlers.

All functions take the GitExecutor explicitly and raise GitError (or
GitUtilsError) on failure; callers turn those into action outcomes.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Any

import pyperclip

from ..errors import GitError, GitUtilsError
from .executor import GitExecutor

logger = logging.getLogger(__name__)

NOT_FULLY_MERGED = "not fully merged"


# ── Branches ─────────────────────────────────────────────────────────────


def checkout(executor: GitExecutor, ref: str) -> None:
    executor.run(["checkout", ref])


def create_branch(executor: GitExecutor, name: str, start_point: str | None = None) -> None:
    """Create and check out a new branch."""
    args = ["checkout", "-b", name]
    if start_point:
        args.append(start_point)
    executor.run(args)


def delete_branch(executor: GitExecutor, name: str, force: bool = False) -> None:
    executor.run(["branch", "-D" if force else "-d", name])


def is_not_fully_merged(error: GitError) -> bool:
    """True when `git branch -d` refused because the branch is unmerged."""
    return NOT_FULLY_MERGED in error.stderr or NOT_FULLY_MERGED in str(error.args[0])


def set_upstream(executor: GitExecutor, branch: str, upstream: str) -> None:
    executor.run(["branch", f"--set-upstream-to={upstream}", branch])


def unset_upstream(executor: GitExecutor, branch: str) -> None:
    executor.run(["branch", "--unset-upstream", branch])


def reset_hard(executor: GitExecutor, ref: str) -> None:
    executor.run(["reset", "--hard", ref])


def has_uncommitted_changes(executor: GitExecutor) -> bool:
    """Staged or unstaged changes to tracked files (untracked files ignored)."""
    return bool(executor.lines(["status", "--porcelain", "--untracked-files=no"]))


# ── Tags ─────────────────────────────────────────────────────────────────


def create_tag(executor: GitExecutor, name: str, message: str | None = None) -> None:
    """Tag HEAD. A message makes it an annotated tag."""
    if message:
        executor.run(["tag", "-a", name, "-m", message])
    else:
        executor.run(["tag", name])


def delete_tag(executor: GitExecutor, name: str) -> None:
    executor.run(["tag", "-d", name])


def list_remotes(executor: GitExecutor) -> list[str]:
    return executor.lines(["remote"])


def delete_remote_tag(executor: GitExecutor, remote: str, name: str) -> None:
    executor.run(["push", remote, "--delete", name])


def move_tag(executor: GitExecutor, name: str, commit: str) -> None:
    """Point an existing tag at another commit."""
    executor.run(["tag", "-f", name, commit])


def push_tag(executor: GitExecutor, remote: str, name: str, force: bool = False) -> None:
    args = ["push", remote, f"refs/tags/{name}"]
    if force:
        args.append("--force")
    executor.run(args)


# ── Stashes ──────────────────────────────────────────────────────────────


def stash_apply(executor: GitExecutor, ref: str) -> None:
    executor.run(["stash", "apply", ref])


def stash_drop(executor: GitExecutor, ref: str) -> None:
    executor.run(["stash", "drop", ref])


def stash_push(
    executor: GitExecutor, message: str | None = None, include_untracked: bool = True
) -> str:
    """Stash the working tree. Returns git's summary line."""
    args = ["stash", "push"]
    if include_untracked:
        args.append("--include-untracked")
    if message:
        args.extend(["-m", message])
    result = executor.run(args)
    if result.stdout.startswith("No local changes"):
        raise GitUtilsError("No local changes to save")
    return result.stdout


def stash_branch(executor: GitExecutor, name: str, ref: str) -> None:
    """Create a branch at the stash's base, apply the stash and drop it."""
    executor.run(["stash", "branch", name, ref])


def has_changes(executor: GitExecutor) -> bool:
    return bool(executor.lines(["status", "--porcelain"]))


# ── Remotes ──────────────────────────────────────────────────────────────


def add_remote(executor: GitExecutor, name: str, url: str) -> None:
    executor.run(["remote", "add", name, url])


def remove_remote(executor: GitExecutor, name: str) -> None:
    executor.run(["remote", "remove", name])


def rename_remote(executor: GitExecutor, old: str, new: str) -> None:
    executor.run(["remote", "rename", old, new])


def set_remote_url(executor: GitExecutor, name: str, url: str) -> None:
    executor.run(["remote", "set-url", name, url])


def pull(executor: GitExecutor, remote: str, branch: str) -> str:
    """Pull a remote branch into the current branch. Returns git's output."""
    result = executor.run(["pull", remote, branch], timeout=300)
    return "\n".join(part for part in (result.stdout, result.stderr) if part)


# ── Worktrees ────────────────────────────────────────────────────────────


def remove_worktree(executor: GitExecutor, path: str, force: bool = True) -> None:
    """Remove a linked worktree. Its commits stay in the repository."""
    args = ["worktree", "remove"]
    if force:
        args.append("--force")
    args.append(path)
    executor.run(args)


# ── Viewing ──────────────────────────────────────────────────────────────


def show(executor: GitExecutor, ref: str, *extra: str) -> None:
    """Run `git show` attached to the terminal so the pager works."""
    code = executor.run_interactive(["show", *extra, ref])
    if code != 0:
        raise GitError(f"git show exited with code {code}", ["git", "show", ref], returncode=code)


# ── Clipboard / editor ───────────────────────────────────────────────────


def copy_to_clipboard(text: str) -> None:
    """Copy text to the system clipboard.

    Raises:
        GitUtilsError: When no clipboard mechanism is available.
    """
    logger.debug("Copying %d characters to the clipboard", len(text))
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        raise GitUtilsError(f"Clipboard unavailable: {e}") from e


def open_in_editor(path: str | Path, editor: dict[str, Any] | None) -> None:
    """Open a path with the configured editor (`editor.path` + `editor.args`).

    Raises:
        GitUtilsError: When no editor is configured or it cannot be started.
    """
    if not editor or not editor.get("path"):
        raise GitUtilsError(
            "No editor configured. Set one with: git-utils config --editor <path>"
        )
    command = [str(editor["path"]), *[str(a) for a in editor.get("args") or []], str(path)]
    logger.debug("Opening editor: %s", command)
    try:
        subprocess.Popen(command)
    except OSError as e:
        raise GitUtilsError(f"Failed to start editor {editor['path']}: {e}") from e
