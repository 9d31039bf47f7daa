"""Commit listing: current history, all refs, the reflog, or one file."""

from __future__ import annotations

from ..types import GitCommit
from .executor import GitExecutor

COMMIT_FORMAT = "%h|%cd|%D|%s"
# Reflog entries carry the reflog message ("checkout: moving from a to b")
REFLOG_FORMAT = "%h|%cd|%D|%gs"
DEFAULT_LIMIT = 1000


def parse_commit_line(line: str) -> GitCommit | None:
    """Parse one `%h|%cd|%D|%s` line. The subject may itself contain '|'."""
    parts = line.split("|", 3)
    if len(parts) < 4 or not parts[0].strip():
        return None
    hash_, date, refs, subject = parts

    ref_list = [r.strip() for r in refs.split(",") if r.strip()]
    # "HEAD -> main" names the checked-out branch; a bare "HEAD" is detached
    ref_list = [r[len("HEAD -> "):] if r.startswith("HEAD -> ") else r for r in ref_list]
    branches = [r for r in ref_list if not r.startswith("tag:") and r != "HEAD"]
    tags = [r[len("tag:"):].strip() for r in ref_list if r.startswith("tag:")]

    return GitCommit(
        hash=hash_.strip(),
        date=date.strip(),
        subject=subject.strip(),
        branch=", ".join(branches),
        tags=tags,
    )


def parse_commits(output: str) -> list[GitCommit]:
    commits = []
    for line in output.splitlines():
        if not line.strip():
            continue
        commit = parse_commit_line(line)
        if commit is not None:
            commits.append(commit)
    return commits


def get_commits(
    executor: GitExecutor,
    limit: int | None = DEFAULT_LIMIT,
    *,
    all_refs: bool = False,
    reflog: bool = False,
    path: str | None = None,
) -> list[GitCommit]:
    """List commits, newest first.

    Args:
        limit: Maximum number of commits; 0 or None loads everything.
        all_refs: Walk every branch and tag instead of just HEAD.
        reflog: Walk HEAD's reflog, which still reaches commits that no
            ref points to any more. Takes precedence over all_refs.
        path: Only commits touching this file, following renames.
    """
    if reflog:
        args = ["log", "--walk-reflogs", "--date=relative", f"--pretty=format:{REFLOG_FORMAT}"]
    else:
        args = ["log", "--date=relative", f"--pretty=format:{COMMIT_FORMAT}"]
        if all_refs:
            args.append("--all")
    if limit:
        args.append(f"--max-count={limit}")
    if path:
        args.extend(["--follow", "--", path])
    return parse_commits(executor.run(args).stdout)


def get_tracked_files(executor: GitExecutor) -> list[str]:
    return sorted(executor.lines(["ls-files"]))
