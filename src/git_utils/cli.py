"""Command-line interface for git-utils."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from . import __version__, config
from .commands import aliases, authors, branches, commits, remotes, stashes, sync, tags, worktrees
from .commands.core import CommandResult, ListOptions
from .commands.menu import MenuCommand, run_menu
from .errors import GitUtilsError
from .git import operations as ops
from .git.executor import GitExecutor

logger = logging.getLogger(__name__)

_console = Console(highlight=False)
_err_console = Console(stderr=True, highlight=False)


def _print(msg: str = "") -> None:
    _console.print(msg)


def _list_options(cfg: dict) -> ListOptions:
    return ListOptions(max_visible_rows=config.get_ui_setting("max_visible_rows", cfg))


def _commit_limit(args, cfg: dict) -> int | None:
    if getattr(args, "limit", None) is not None:
        return args.limit
    return config.get_ui_setting("commit_limit", cfg)


def cmd_branches(args, executor: GitExecutor, cfg: dict) -> CommandResult:
    if args.new is not None:
        return branches.run_new(executor, args.new or None, _list_options(cfg))
    return branches.run(executor, _list_options(cfg))


def cmd_commits(args, executor: GitExecutor, cfg: dict) -> CommandResult:
    return commits.run(
        executor,
        _list_options(cfg),
        limit=_commit_limit(args, cfg),
        all_refs=args.all,
        reflog=args.reflog,
        path=args.file,
    )


def cmd_tags(args, executor: GitExecutor, cfg: dict) -> CommandResult:
    return tags.run(executor, _list_options(cfg))


def cmd_stashes(args, executor: GitExecutor, cfg: dict) -> CommandResult:
    return stashes.run(executor, _list_options(cfg))


def cmd_remotes(args, executor: GitExecutor, cfg: dict) -> CommandResult:
    return remotes.run(executor, _list_options(cfg))


def cmd_worktrees(args, executor: GitExecutor, cfg: dict) -> CommandResult:
    return worktrees.run(executor, _list_options(cfg), config.get_editor_config(cfg))


def cmd_aliases(args, executor: GitExecutor, cfg: dict) -> CommandResult:
    return aliases.run(executor, _list_options(cfg))


def cmd_top_authors(args, executor: GitExecutor, cfg: dict) -> CommandResult:
    return authors.run(executor, _list_options(cfg), path=args.path)


def cmd_sync(args, executor: GitExecutor, cfg: dict) -> CommandResult:
    return sync.run(executor, _list_options(cfg))


def cmd_save(args, executor: GitExecutor, cfg: dict) -> CommandResult:
    stashes.save(executor, args.message)
    return CommandResult()


def cmd_config(args, executor: GitExecutor | None, cfg: dict) -> CommandResult:
    """Show or change the stored configuration."""
    if args.editor:
        editor = config.set_editor_config(args.editor, _split_editor_args(args.editor_args))
        extra = f" {' '.join(editor['args'])}" if editor["args"] else ""
        _print(f"[green]✔ Editor configured: {escape(editor['path'])}{escape(extra)}[/green]")
        if not Path(editor["path"]).is_file():
            _print(f"[yellow]Warning: editor path does not exist yet: {escape(editor['path'])}[/yellow]")
        return CommandResult()

    if args.edit:
        path = config.get_config_path()
        if not path.exists():
            config.save_config(config.load_config())
        ops.open_in_editor(path, config.get_editor_config(cfg))
        return CommandResult()

    _print(f"Config file: {escape(str(config.get_config_path()))}")
    editor = config.get_editor_config(cfg)
    if editor is None:
        _print("No editor configured. Use: git-utils config --editor <path> [--args ARGS...]")
    else:
        _print(f"Current editor: {escape(editor['path'])}")
        if editor["args"]:
            _print(f"Args: {escape(' '.join(editor['args']))}")
    return CommandResult()


def _split_editor_args(values: list[str]) -> list[str]:
    """`--args` takes the rest of the command line; each value may hold several space-separated args."""
    return [part for value in values for part in value.split()]


def _menu_commands(executor: GitExecutor, cfg: dict) -> list[MenuCommand]:
    limit = config.get_ui_setting("commit_limit", cfg)
    editor = config.get_editor_config(cfg)
    return [
        MenuCommand("branches", "Interactive branch selection", lambda o: branches.run(executor, o)),
        MenuCommand("commits", "Search commits, the reflog or a file's history", lambda o: commits.run(executor, o, limit=limit)),
        MenuCommand("tags", "Browse, create, move and delete tags", lambda o: tags.run(executor, o)),
        MenuCommand("stashes", "Apply, show, branch and drop stashes", lambda o: stashes.run(executor, o)),
        MenuCommand("remotes", "Interactive remote management", lambda o: remotes.run(executor, o)),
        MenuCommand("worktrees", "Open and remove worktrees", lambda o: worktrees.run(executor, o, editor)),
        MenuCommand("list-aliases", "Run and manage global git aliases", lambda o: aliases.run(executor, o)),
        MenuCommand("top-authors", "Authors ranked by commit count", lambda o: authors.run(executor, o)),
        MenuCommand("sync", "Pull a remote branch into the current branch", lambda o: sync.run(executor, o)),
    ]


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="git-utils",
        description="git-utils: interactive fuzzy lists for everyday git",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"git-utils {__version__}")
    parser.add_argument("--debug", action="store_true", help="Log git commands and internals")
    parser.add_argument("-C", "--cwd", help="Run as if started in this directory")

    subparsers = parser.add_subparsers(dest="command")

    branches_p = subparsers.add_parser("branches", help="Interactive branch selection with fuzzy search")
    branches_p.add_argument(
        "--new", nargs="?", const="", default=None, metavar="NAME",
        help="Create a new branch at HEAD (prompts for a name if omitted)",
    )
    branches_p.set_defaults(func=cmd_branches)

    commits_p = subparsers.add_parser("commits", help="Search commits of the current branch")
    commits_p.add_argument("--limit", type=int, help="Maximum number of commits to load (0 for no limit)")
    scope = commits_p.add_mutually_exclusive_group()
    scope.add_argument("-a", "--all", action="store_true", help="Search commits across all branches")
    scope.add_argument("--reflog", action="store_true", help="Search reflog entries (includes orphaned commits)")
    scope.add_argument("--file", metavar="PATH", help="Show commits for a specific file")
    commits_p.set_defaults(func=cmd_commits)

    tags_p = subparsers.add_parser("tags", help="Browse, create, move and delete tags")
    tags_p.set_defaults(func=cmd_tags)

    stashes_p = subparsers.add_parser("stashes", help="Apply, show, branch and drop stashes")
    stashes_p.set_defaults(func=cmd_stashes)

    remotes_p = subparsers.add_parser("remotes", help="Interactive remote management with actions")
    remotes_p.set_defaults(func=cmd_remotes)

    worktrees_p = subparsers.add_parser("worktrees", help="Open and remove worktrees")
    worktrees_p.set_defaults(func=cmd_worktrees)

    aliases_p = subparsers.add_parser("list-aliases", help="Run and manage global git aliases")
    aliases_p.set_defaults(func=cmd_aliases)

    authors_p = subparsers.add_parser("top-authors", help="Authors ranked by commit count")
    authors_p.add_argument("path", nargs="?", help="Only count commits touching this file")
    authors_p.set_defaults(func=cmd_top_authors)

    sync_p = subparsers.add_parser("sync", help="Pull a branch of a remote into the current branch")
    sync_p.set_defaults(func=cmd_sync)

    save_p = subparsers.add_parser("save", help="Stash all local changes")
    save_p.add_argument("message", nargs="?", help="Stash message")
    save_p.set_defaults(func=cmd_save)

    config_p = subparsers.add_parser("config", help="Show or change configuration")
    config_p.add_argument("--editor", metavar="PATH", help="Editor binary or launcher")
    config_p.add_argument("--edit", action="store_true", help="Open config.yaml in the editor")
    # REMAINDER so dash-prefixed editor flags (--new-window) are taken as values
    config_p.add_argument(
        "--args", dest="editor_args", nargs=argparse.REMAINDER, default=[], metavar="ARGS",
        help="Default editor arguments; must come last (e.g. --args --new-window -w)",
    )
    config_p.set_defaults(func=cmd_config, needs_git=False)

    return parser


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    cfg = config.load_config()
    _setup_logging(args.debug or config.is_debug(cfg))

    try:
        if getattr(args, "needs_git", True) is False:
            args.func(args, None, cfg)
            return 0

        if args.cwd is not None and not Path(args.cwd).is_dir():
            raise GitUtilsError(f"Not a directory: {args.cwd}")
        executor = GitExecutor(cwd=args.cwd)
        if not executor.is_available():
            raise GitUtilsError("git is not installed or not on PATH")
        if not executor.is_repository():
            raise GitUtilsError(f"Not a git repository: {executor.working_directory}")

        if args.command is None:
            run_menu(_menu_commands(executor, cfg), _list_options(cfg))
        else:
            args.func(args, executor, cfg)
        return 0
    except GitUtilsError as e:
        logger.debug("Command failed", exc_info=True)
        _err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        return e.exit_code
    except KeyboardInterrupt:
        print()
        return 130


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
