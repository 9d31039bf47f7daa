"""Remotes, their branches, and remote name/URL rules."""

from __future__ import annotations

import re
from urllib.parse import urlparse

from ..types import GitRemote, GitRemoteBranch
from .executor import GitExecutor

REMOTE_BRANCH_FORMAT = "%(refname:short)|%(objectname:short)|%(committerdate:relative)"

_REMOTE_LINE_RE = re.compile(r"^(\S+)\s+(\S+)\s+\((fetch|push)\)$")
_REMOTE_NAME_RE = re.compile(r"^[A-Za-z0-9._-]+$")
_SCP_URL_RE = re.compile(r"^[\w.-]+@[\w.-]+:[\w./~-]+$")


def parse_remotes(output: str) -> list[GitRemote]:
    """Parse `git remote -v`, one GitRemote per name in first-seen order."""
    remotes: dict[str, GitRemote] = {}
    for line in output.splitlines():
        match = _REMOTE_LINE_RE.match(line.strip())
        if not match:
            continue
        name, url, kind = match.groups()
        if kind == "fetch" or name not in remotes:
            remotes[name] = GitRemote(name=name, url=url, kind=kind)
    return list(remotes.values())


def get_remotes(executor: GitExecutor) -> list[GitRemote]:
    return parse_remotes(executor.run(["remote", "-v"]).stdout)


def parse_remote_branches(output: str, remote: str) -> list[GitRemoteBranch]:
    """Parse `git for-each-ref --format=REMOTE_BRANCH_FORMAT refs/remotes/<remote>`.

    The symbolic `<remote>/HEAD` ref (shown as just `<remote>` by newer
    git versions) is skipped.
    """
    prefix = f"{remote}/"
    branches: list[GitRemoteBranch] = []
    for line in output.splitlines():
        full_name, _, rest = line.strip().partition("|")
        hash_, _, date = rest.partition("|")
        if not full_name.startswith(prefix) or full_name == f"{remote}/HEAD":
            continue
        branches.append(
            GitRemoteBranch(
                name=full_name[len(prefix):],
                full_name=full_name,
                hash=hash_.strip(),
                date=date.strip(),
            )
        )
    return branches


def get_remote_branches(
    executor: GitExecutor, remote: str, fetch: bool = True
) -> list[GitRemoteBranch]:
    """List a remote's branches, most recently committed first.

    With fetch, the remote is fetched (and pruned) first so the list
    matches what actually exists on the server.
    """
    if fetch:
        executor.run(["fetch", remote, "--prune"], timeout=120)
    result = executor.run(
        [
            "for-each-ref",
            "--sort=-committerdate",
            f"--format={REMOTE_BRANCH_FORMAT}",
            f"refs/remotes/{remote}",
        ]
    )
    return parse_remote_branches(result.stdout, remote)


def validate_remote_name(name: str) -> str | None:
    if not name or not name.strip():
        return "Remote name cannot be empty"
    if " " in name:
        return "Remote name cannot contain spaces"
    if not _REMOTE_NAME_RE.match(name):
        return "Remote name can only contain letters, numbers, dots, hyphens, and underscores"
    return None


def validate_remote_url(url: str) -> str | None:
    """Accept scheme URLs (https://, ssh://, file://...) and scp-style user@host:path."""
    if not url or not url.strip():
        return "Remote URL cannot be empty"
    url = url.strip()
    parsed = urlparse(url)
    if parsed.scheme and (parsed.netloc or parsed.scheme == "file"):
        return None
    if _SCP_URL_RE.match(url):
        return None
    return "Please enter a valid URL or SSH format (user@host:path)"
