"""Pull a branch of a chosen remote into the current branch."""

from __future__ import annotations

import logging

from ..git import operations as ops
from ..git.branches import get_current_branch
from ..git.executor import GitExecutor
from ..git.remotes import get_remote_branches, get_remotes
from ..selection_list import SelectionConfig
from .core import CommandResult, ListOptions, finish, nested, ok, show_list, warn
from .remotes import render_remote, render_remote_branch

logger = logging.getLogger(__name__)


def run(executor: GitExecutor, options: ListOptions | None = None) -> CommandResult:
    """Pick a remote, then one of its branches, and pull it.

    Escape in the branch list goes back to the remote list.
    """
    options = options or ListOptions()
    remotes = get_remotes(executor)
    if not remotes:
        warn(options, "No remotes found! Make sure you have configured remote repositories.")
        return CommandResult()

    current = get_current_branch(executor)
    while True:
        chosen = show_list(
            SelectionConfig(
                items=remotes,
                render_text=render_remote,
                search_text=lambda r: r.name,
                header="Select a remote to fetch from:",
            ),
            options,
        )
        if not chosen.success:
            return finish(chosen, options, "No remote selected.")
        remote = chosen.item

        options.out.print(f"Fetching branches from '{remote.name}'...")
        branches = get_remote_branches(executor, remote.name)
        if not branches:
            warn(options, f"No branches found on remote '{remote.name}'!")
            continue
        # The branch of the same name is the usual choice
        branches.sort(key=lambda b: b.name != current)

        chosen = show_list(
            SelectionConfig(
                items=branches,
                render_text=render_remote_branch,
                search_text=lambda b: b.name,
                header=f"Select a branch from '{remote.name}' to pull into '{current}':",
            ),
            nested(options),
        )
        if chosen.back:
            continue
        if not chosen.success:
            return finish(chosen, options, "No branch selected.")
        branch = chosen.item

        logger.debug("Pulling %s/%s into %s", remote.name, branch.name, current)
        output = ops.pull(executor, remote.name, branch.name)
        if output:
            options.out.print(output, markup=False, highlight=False)
        ok(options, f"Pulled {remote.name}/{branch.name} into {current}")
        return CommandResult()
