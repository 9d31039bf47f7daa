"""Keyboard-driven fuzzy selection list.

Type to filter, arrow keys to move, Enter to pick an item or open its
actions, Left/Right to choose an action, Esc to clear (or go back), Ctrl+C
to cancel.

Example:
    from git_utils.selection_list import (
        ItemAction, SelectionConfig, Success, run_selection_list,
    )

    result = run_selection_list(SelectionConfig(
        items=branches,
        render_text=lambda b: f"{b.date} - {b.name}",
        search_text=lambda b: b.name,
        actions=[ItemAction(key="copy", label="Copy", handler=copy_name)],
    ))
"""

from .actions import (
    Action,
    ActionDispatcher,
    ActionOutcome,
    ActionProvider,
    ActionScope,
    Cancelled,
    Failure,
    GlobalAction,
    ItemAction,
    Success,
)
from .controller import SelectionList, run_selection_list
from .keys import decode
from .ranking import MatchTier, RankedItem, filter_items, rank
from .render import compute_window, match_spans, render_row
from .themes import DEFAULT_THEME, Theme
from .types import ListState, Mode, SelectionConfig, SelectionResult

__all__ = [
    # Entry points
    "run_selection_list",
    "SelectionList",
    "SelectionConfig",
    "SelectionResult",
    "ListState",
    "Mode",
    # Actions
    "Action",
    "ActionDispatcher",
    "ActionOutcome",
    "ActionProvider",
    "ActionScope",
    "ItemAction",
    "GlobalAction",
    "Success",
    "Failure",
    "Cancelled",
    # Ranking and rendering
    "rank",
    "filter_items",
    "RankedItem",
    "MatchTier",
    "compute_window",
    "match_spans",
    "render_row",
    "decode",
    # Theming
    "Theme",
    "DEFAULT_THEME",
]
