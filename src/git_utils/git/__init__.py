"""Thin git layer: command execution and output parsing."""

from .branches import get_branches, parse_branches, sanitize_branch_name, validate_branch_name
from .commits import get_commits, parse_commits
from .executor import GitExecutor
from .stashes import get_stashes, parse_stashes
from .tags import get_tags, parse_tags

__all__ = [
    "GitExecutor",
    "get_branches",
    "get_commits",
    "get_stashes",
    "get_tags",
    "parse_branches",
    "parse_commits",
    "parse_stashes",
    "parse_tags",
    "sanitize_branch_name",
    "validate_branch_name",
]
