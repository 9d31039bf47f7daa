"""Worktree listing."""

from __future__ import annotations

from ..types import GitWorktree
from .executor import GitExecutor

DETACHED = "HEAD (detached)"


def parse_worktrees(output: str) -> list[GitWorktree]:
    """Parse `git worktree list --porcelain` output.

    git lists the main worktree first. A bare repository entry is the main
    one instead when present.
    """
    worktrees: list[GitWorktree] = []
    bare: set[int] = set()
    for line in output.splitlines():
        line = line.strip()
        if line.startswith("worktree "):
            worktrees.append(GitWorktree(path=line[len("worktree "):]))
        elif not worktrees:
            continue
        elif line.startswith("HEAD "):
            worktrees[-1].commit = line[len("HEAD "):]
        elif line.startswith("branch "):
            worktrees[-1].branch = line[len("branch "):].removeprefix("refs/heads/")
        elif line == "detached":
            worktrees[-1].branch = DETACHED
        elif line == "bare":
            bare.add(len(worktrees) - 1)

    if worktrees:
        main = min(bare) if bare else 0
        worktrees[main].is_main = True
    return worktrees


def get_worktrees(executor: GitExecutor) -> list[GitWorktree]:
    return parse_worktrees(executor.run(["worktree", "list", "--porcelain"]).stdout)


def count_changes(executor: GitExecutor, path: str) -> int:
    """Number of changed or untracked paths in a worktree."""
    return len(executor.lines(["-C", path, "status", "--porcelain"]))
