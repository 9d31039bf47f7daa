"""Interactive list commands built on the selection list."""

from .core import CommandResult, ListOptions

__all__ = ["CommandResult", "ListOptions"]
