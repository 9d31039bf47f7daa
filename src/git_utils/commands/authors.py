"""Top authors of the repository, or of one file."""

from __future__ import annotations

from rich.markup import escape

from ..git import operations as ops
from ..git.authors import get_authors, timeline, year_span
from ..git.executor import GitExecutor
from ..selection_list import ItemAction, SelectionConfig, Success
from ..types import GitAuthor
from .core import CommandResult, ListOptions, finish, ok, show_list, warn


def render_author(author: GitAuthor) -> str:
    commits = "commit" if author.commit_count == 1 else "commits"
    line = f"{author.name} ({author.commit_count} {commits})"
    if author.last_hash:
        line += f" | Last: #{author.last_hash} {author.last_date}"
    return line


def header_for(authors: list[GitAuthor], path: str | None) -> str:
    if not path:
        return "Repository-wide author statistics"
    latest = max(authors, key=lambda a: a.last_date)
    return (
        f"{latest.name} edited {path} with commit #{latest.last_hash} "
        f"on {latest.last_date} for the last time"
    )


def author_actions(options: ListOptions, span: tuple[int, int] | None) -> list:

    def copy(author: GitAuthor):
        ops.copy_to_clipboard(author.name)
        ok(options, f"Copied '{author.name}' to clipboard")
        return Success("Author name copied")

    def details(author: GitAuthor):
        out = options.out
        out.print(f"[bold]{escape(author.name)}[/bold] <{escape(author.email)}>")
        out.print(f"{author.commit_count} commits | Last: #{author.last_hash} on {author.last_date}")
        if span is None:
            warn(options, "No timeline data available.")
            return Success("Showed details")
        first, last = span
        out.print(f"[dim]Repository timeline: {first} - {last}[/dim]")
        out.print(f"{first} {timeline(author, span)} {last}", markup=False)
        out.print(f"Active in [green]{len(author.years)}[/green] of {last - first + 1} years")
        return Success("Showed details")

    return [
        ItemAction(
            key="details",
            label="Details",
            description="Show email, last commit and activity timeline",
            exit_after_execution=True,
            handler=details,
        ),
        ItemAction(
            key="copy",
            label="Copy",
            description="Copy the author name to the clipboard",
            exit_after_execution=True,
            handler=copy,
        ),
    ]


def run(
    executor: GitExecutor, options: ListOptions | None = None, path: str | None = None
) -> CommandResult:
    """Interactive author list, most commits first."""
    options = options or ListOptions()
    authors = get_authors(executor, path)
    if not authors:
        warn(options, f"No commit history found for {path}." if path else "No authors found!")
        return CommandResult()

    result = show_list(
        SelectionConfig(
            items=authors,
            render_text=render_author,
            search_text=lambda a: a.name,
            header=header_for(authors, path),
            actions=author_actions(options, year_span(authors)),
            default_action_key="details",
        ),
        options,
    )
    return finish(result, options, "No author selected.")
