"""Local branch listing and branch-name rules."""

from __future__ import annotations

import re

from ..errors import GitUtilsError
from ..types import GitBranch
from .executor import GitExecutor

BRANCH_FORMAT = "%(HEAD)|%(refname:short)|%(committerdate:relative)|%(upstream:short)"

_INVALID_CHARS_RE = re.compile(r"[~^:?*\[\]\\@{}<>|\"'`]+")


def parse_branches(output: str) -> list[GitBranch]:
    """Parse `git branch --format=BRANCH_FORMAT` output."""
    branches: list[GitBranch] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        head, _, rest = line.partition("|")
        name, _, rest = rest.partition("|")
        date, _, upstream = rest.partition("|")
        if not name.strip():
            continue
        branches.append(
            GitBranch(
                name=name.strip(),
                date=date.strip(),
                current=head.strip() == "*",
                upstream=upstream.strip(),
            )
        )
    return branches


def get_branches(executor: GitExecutor) -> list[GitBranch]:
    """List local branches, most recently committed first."""
    result = executor.run(
        ["branch", "--sort=-committerdate", f"--format={BRANCH_FORMAT}", "--list"]
    )
    return parse_branches(result.stdout)


def get_current_branch(executor: GitExecutor) -> str:
    """Name of the checked-out branch.

    Raises:
        GitUtilsError: When HEAD is detached.
    """
    name = executor.run(["rev-parse", "--abbrev-ref", "HEAD"]).stdout
    if not name or name == "HEAD":
        raise GitUtilsError("Could not determine current branch (detached HEAD?)")
    return name


def sanitize_branch_name(raw: str) -> str:
    """Turn free text into something git accepts as a branch name."""
    name = raw.strip()
    name = re.sub(r"\s+", "-", name)
    name = _INVALID_CHARS_RE.sub("-", name)
    name = re.sub(r"\.{2,}", ".", name)
    name = re.sub(r"/{2,}", "/", name)
    name = re.sub(r"-{2,}", "-", name)
    name = re.sub(r"^[./-]+", "", name)
    name = re.sub(r"[./-]+$", "", name)
    name = re.sub(r"\.lock$", "", name)
    return name


def validate_branch_name(name: str) -> str | None:
    """Return an error message for an invalid branch name, else None."""
    if not name or not name.strip():
        return "Branch name is required"
    if re.search(r"[\s~^:?*\[\]\\]", name):
        return "Branch name contains invalid characters"
    if name.startswith((".", "/")):
        return "Branch name cannot start with . or /"
    if name.endswith((".", "/", ".lock")):
        return "Branch name cannot end with ., /, or .lock"
    if ".." in name:
        return "Branch name cannot contain consecutive dots (..)"
    if "@{" in name:
        return "Branch name cannot contain @{"
    if name == "@":
        return "Branch name cannot be just @"
    if "//" in name:
        return "Branch name cannot contain consecutive slashes"
    return None
