"""Type definitions for git-utils.

Records parsed from git output, shared by the git layer and the commands.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class GitResult:
    """Captured output of a successful git command."""

    stdout: str
    stderr: str = ""

    @property
    def lines(self) -> list[str]:
        return [line.strip() for line in self.stdout.splitlines() if line.strip()]


@dataclass
class GitBranch:
    """A local branch."""

    name: str
    date: str = ""
    current: bool = False
    upstream: str = ""  # "origin/main", empty when not tracking


@dataclass
class GitCommit:
    """A commit from `git log` (or a reflog entry)."""

    hash: str
    date: str
    subject: str
    branch: str = ""  # comma-separated branch refs pointing here
    tags: list[str] = field(default_factory=list)


@dataclass
class GitTag:
    """A lightweight or annotated tag."""

    name: str
    date: str = "Unknown"
    hash: str = ""
    subject: str = ""
    tagger: str = "Unknown"


@dataclass
class GitStash:
    """A stash entry."""

    index: int
    ref: str  # "stash@{0}"
    message: str
    branch: str = "unknown"
    hash: str = ""
    date: str = ""


@dataclass
class GitRemote:
    """A configured remote. The fetch URL wins over the push URL."""

    name: str
    url: str
    kind: str = "fetch"


@dataclass
class GitRemoteBranch:
    """A remote-tracking branch such as origin/main."""

    name: str  # "main"
    full_name: str  # "origin/main"
    hash: str = ""
    date: str = ""


@dataclass
class GitWorktree:
    """One entry of `git worktree list`."""

    path: str
    branch: str = ""
    commit: str = ""
    is_main: bool = False


@dataclass
class GitAlias:
    """A global git alias (`alias.<name>` in the global config)."""

    name: str
    command: str


@dataclass
class GitAuthor:
    """Commit statistics for one author email."""

    name: str
    email: str
    commit_count: int = 0
    last_hash: str = ""
    last_date: str = ""
    years: list[int] = field(default_factory=list)
