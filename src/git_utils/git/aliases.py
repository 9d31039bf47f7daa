"""Global git aliases."""

from __future__ import annotations

import re

from ..errors import GitError
from ..types import GitAlias
from .executor import GitExecutor

_ALIAS_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9-]*$")


def parse_aliases(output: str) -> list[GitAlias]:
    """Parse `git config --get-regexp ^alias\\.` output ("alias.co checkout")."""
    aliases: list[GitAlias] = []
    for line in output.splitlines():
        key, _, command = line.strip().partition(" ")
        if not key.startswith("alias."):
            continue
        aliases.append(GitAlias(name=key[len("alias."):], command=command.strip()))
    return aliases


def get_aliases(executor: GitExecutor) -> list[GitAlias]:
    """List global aliases. No aliases at all is not an error."""
    try:
        result = executor.run(["config", "--global", "--get-regexp", r"^alias\."])
    except GitError as e:
        # git config exits 1 when nothing matches
        if e.returncode == 1:
            return []
        raise
    return parse_aliases(result.stdout)


def set_alias(executor: GitExecutor, name: str, command: str) -> None:
    executor.run(["config", "--global", f"alias.{name}", command])


def delete_alias(executor: GitExecutor, name: str) -> None:
    executor.run(["config", "--global", "--unset", f"alias.{name}"])


def validate_alias_name(name: str) -> str | None:
    if not name or not name.strip():
        return "Alias name cannot be empty"
    if not _ALIAS_NAME_RE.match(name.strip()):
        return "Alias name can only contain letters, numbers and hyphens"
    return None
