"""Stash listing."""

from __future__ import annotations

import re

from ..types import GitStash
from .executor import GitExecutor

STASH_FORMAT = "%gd|%gs|%H|%cr|%s"

_INDEX_RE = re.compile(r"stash@\{(\d+)\}")
_BRANCH_RE = re.compile(r"^(?:WIP on|On) ([^:]+):")


def _branch_of(*texts: str) -> str:
    for text in texts:
        match = _BRANCH_RE.match(text)
        if match:
            return match.group(1).strip()
    return "unknown"


def parse_stashes(output: str) -> list[GitStash]:
    """Parse `git stash list --pretty=format:STASH_FORMAT` output."""
    stashes: list[GitStash] = []
    for line in output.splitlines():
        parts = line.strip().split("|", 4)
        if len(parts) < 5:
            continue
        ref, description, full_hash, date, message = parts
        match = _INDEX_RE.search(ref)
        stashes.append(
            GitStash(
                index=int(match.group(1)) if match else 0,
                ref=ref,
                message=message or description,
                branch=_branch_of(message, description),
                hash=full_hash[:7],
                date=date,
            )
        )
    return stashes


def get_stashes(executor: GitExecutor) -> list[GitStash]:
    """List stash entries, newest first."""
    result = executor.run(["stash", "list", f"--pretty=format:{STASH_FORMAT}"])
    return parse_stashes(result.stdout)
