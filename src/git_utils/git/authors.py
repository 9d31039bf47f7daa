"""Per-author commit statistics for the repository or one file."""

from __future__ import annotations

from ..types import GitAuthor
from .executor import GitExecutor

AUTHOR_FORMAT = "%an|%ae|%h|%ad"
DATE_FORMAT = "format:%Y-%m-%d %H:%M"


def parse_authors(output: str) -> list[GitAuthor]:
    """Aggregate `git log --pretty=format:AUTHOR_FORMAT` output by email.

    The log is newest first, so the first line seen for an author is their
    latest commit. Authors are returned by commit count, descending; ties
    keep the order of each author's latest commit.
    """
    authors: dict[str, GitAuthor] = {}
    for line in output.splitlines():
        parts = line.strip().split("|", 3)
        if len(parts) < 4:
            continue
        name, email, hash_, date = (p.strip() for p in parts)
        key = email.lower()
        author = authors.get(key)
        if author is None:
            author = authors[key] = GitAuthor(
                name=name, email=email, last_hash=hash_, last_date=date
            )
        author.commit_count += 1
        year = date[:4]
        if year.isdigit() and int(year) not in author.years:
            author.years.append(int(year))

    for author in authors.values():
        author.years.sort()
    return sorted(authors.values(), key=lambda a: -a.commit_count)


def get_authors(executor: GitExecutor, path: str | None = None) -> list[GitAuthor]:
    """Authors of the current history, or of one file's history when path is set."""
    args = ["log", f"--date={DATE_FORMAT}", f"--pretty=format:{AUTHOR_FORMAT}"]
    if path:
        args.extend(["--", path])
    return parse_authors(executor.run(args).stdout)


def year_span(authors: list[GitAuthor]) -> tuple[int, int] | None:
    """First and last year with any commit, across all authors."""
    years = [year for author in authors for year in author.years]
    if not years:
        return None
    return min(years), max(years)


def timeline(author: GitAuthor, span: tuple[int, int]) -> str:
    """One character per year of the span: ● active, ─ inactive."""
    first, last = span
    return "".join("●" if year in author.years else "─" for year in range(first, last + 1))
