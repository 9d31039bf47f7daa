"""Configurable themes for selection lists.

The Theme dataclass holds all configurable visual elements: rich styles for
rows and matches, icons, and the visible-row limits.
"""

from dataclasses import dataclass


@dataclass
class Theme:
    """Visual theme for the selection list.

    All styles use Rich style syntax (e.g., "bold bright_white on green").

    Attributes:
        selected_style: Full-line background for the selected row.
        match_style: Matched span in a non-selected row.
        selected_match_style: Matched span in the selected row.
        prompt_style: The "Search:" label.
        hint_style: Key hints and secondary text.
        empty_style: "No items found" line.
        action_style: Focused action in the action bar.
        error_style: Failure message shown above the list.
        success_style: Success message shown above the list.

        cursor_icon: Prefix for the selected row.
        bullet_icon: Prefix for the focused action.
        scroll_up_icon: Indicator for rows above the viewport.
        scroll_down_icon: Indicator for rows below the viewport.

        min_visible_rows: Lower bound for the derived row budget.
        max_visible_rows: Upper bound for the derived row budget.
        frame_padding: Lines reserved for prompt/hints/action bar.
    """

    # Styles
    selected_style: str = "bold bright_white on green"
    match_style: str = "bold bright_white on cyan"
    selected_match_style: str = "bold bright_white on magenta"
    prompt_style: str = "blue"
    hint_style: str = "dim"
    empty_style: str = "yellow"
    action_style: str = "blue"
    error_style: str = "red"
    success_style: str = "green"

    # Icons
    cursor_icon: str = ">"
    bullet_icon: str = "•"
    scroll_up_icon: str = "↑"
    scroll_down_icon: str = "↓"

    # Layout
    min_visible_rows: int = 5
    max_visible_rows: int = 15
    frame_padding: int = 10


# Default theme used when none is specified
DEFAULT_THEME = Theme()
