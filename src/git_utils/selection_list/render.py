"""Viewport and highlight rendering for selection lists.

Rows are built as rich Text objects: styles are attached as spans over the
unchanged display string, so `row.plain` is always exactly the caller's
render_text(item) output whatever the query.

Highlighting has two tiers:
- exact: the first case-insensitive occurrence of the query inside the
  searchable part of the display text is highlighted as one span
- fuzzy: otherwise each character matched by the separator-insensitive
  subsequence search is highlighted individually
"""

from __future__ import annotations

from typing import Sequence

from rich.text import Text

from .actions import Action
from .ranking import MatchTier, fold_case, is_blank_query, is_separator, strip_separators
from .themes import DEFAULT_THEME, Theme
from .types import ListState, Mode, SelectionConfig

Span = tuple[int, int]


def compute_window(total: int, selected: int, max_rows: int) -> tuple[int, int]:
    """Return the [start, end) slice of rows to draw.

    The window is centered on the selected row when possible and pulled
    back from the end so it stays full near the bottom of the list.
    """
    if total <= 0 or max_rows <= 0:
        return 0, 0
    selected = max(0, min(selected, total - 1))
    start = max(0, selected - max_rows // 2)
    end = min(total, start + max_rows)
    start = max(0, end - max_rows)
    return start, end


def visible_rows_for_height(height: int, theme: Theme = DEFAULT_THEME) -> int:
    """Derive a row budget from the terminal height, clamped to theme bounds."""
    calculated = height - theme.frame_padding
    return max(theme.min_visible_rows, min(theme.max_visible_rows, calculated))


def _searchable_region(display: str, search: str) -> Span:
    if search:
        offset = display.find(search)
        if offset != -1:
            return offset, offset + len(search)
    return 0, len(display)


def _fuzzy_char_spans(text: str, query: str, base: int) -> list[Span] | None:
    wanted = strip_separators(fold_case(query))
    folded = fold_case(text)
    spans: list[Span] = []
    qi = 0
    for i, char in enumerate(folded):
        if qi >= len(wanted):
            break
        if is_separator(char):
            continue
        if char == wanted[qi]:
            spans.append((base + i, base + i + 1))
            qi += 1
    if qi < len(wanted):
        return None
    return spans


def match_spans(display: str, search: str, query: str) -> tuple[MatchTier | None, list[Span]]:
    """Locate the query inside a display line.

    The searchable text is located inside the display text first; the
    query is then matched inside that region (or the whole line when the
    searchable text does not appear verbatim).

    Returns:
        (tier, spans): EXACT with a single span, FUZZY with one span per
        matched character, or (None, []) when nothing can be highlighted.
    """
    if is_blank_query(query):
        return None, []

    start, end = _searchable_region(display, search)
    region = display[start:end]

    offset = fold_case(region).find(fold_case(query))
    if offset != -1:
        return MatchTier.EXACT, [(start + offset, start + offset + len(query))]

    spans = _fuzzy_char_spans(region, query, start)
    if spans:
        return MatchTier.FUZZY, spans
    return None, []


def render_row(
    display: str,
    search: str,
    query: str,
    selected: bool = False,
    theme: Theme = DEFAULT_THEME,
) -> Text:
    """Colorize one row. The result's plain text equals `display`."""
    text = Text(display, style=theme.selected_style if selected else "")
    _, spans = match_spans(display, search, query)
    style = theme.selected_match_style if selected else theme.match_style
    for start, end in spans:
        text.stylize(style, start, end)
    return text


def render_action_bar(
    actions: Sequence[Action], focused: int, theme: Theme = DEFAULT_THEME
) -> list[Text]:
    """Render the action bar and the focused action's description."""
    if not actions:
        return []

    bar = Text()
    for i, action in enumerate(actions):
        if i:
            bar.append("  ")
        label = action.label.lower()
        if i == focused:
            bar.append(f"{theme.bullet_icon} {label}", style=theme.action_style)
        else:
            bar.append(f"  {label}", style=theme.hint_style)

    lines = [bar]
    if 0 <= focused < len(actions) and actions[focused].description:
        lines.append(Text(f"  {actions[focused].description}", style=theme.hint_style))
    return lines


def _key_hints(state: ListState, allow_back: bool) -> str:
    esc = "Esc back" if allow_back else "Esc clear"
    if state.mode is Mode.ACTION_FOCUS:
        parts = ["←→ choose action", "Enter run", "Esc close actions", "Ctrl+C exit"]
    else:
        parts = ["↑↓ navigate", "type to search", "Enter select", esc, "Ctrl+C exit"]
    return " · ".join(parts)


def _first_line(message: str) -> str:
    lines = message.strip().splitlines()
    return lines[0] if lines else ""


def render_frame(
    config: SelectionConfig,
    state: ListState,
    max_rows: int,
    theme: Theme = DEFAULT_THEME,
) -> Text:
    """Build the full screen for the current state."""
    lines: list[Text] = []

    if state.message:
        style = theme.error_style if state.message_is_error else theme.success_style
        lines.append(Text(_first_line(state.message), style=style))

    prompt = Text("Search:", style=theme.prompt_style)
    prompt.append(" ")
    if state.query:
        prompt.append(state.query)
    else:
        prompt.append("(type to search)", style=theme.hint_style)
    lines.append(prompt)
    lines.append(Text(_key_hints(state, config.allow_back), style=theme.hint_style))
    lines.append(Text())

    if config.header:
        lines.append(Text(config.header))
        lines.append(Text())

    total = len(state.filtered)
    if total == 0:
        if state.query:
            lines.append(Text(f'No items found matching "{state.query}"', style=theme.empty_style))
        else:
            lines.append(Text("No items", style=theme.empty_style))
    else:
        start, end = compute_window(total, state.selected_index, max_rows)
        if start > 0:
            lines.append(
                Text(f"  {theme.scroll_up_icon} {start} more above", style=theme.hint_style)
            )
        for pos in range(start, end):
            item = config.items[state.filtered[pos]]
            is_selected = pos == state.selected_index
            row = render_row(
                config.render_text(item),
                config.get_search_text(item),
                state.query,
                selected=is_selected,
                theme=theme,
            )
            if is_selected:
                prefix = Text(f"{theme.cursor_icon} ", style=theme.selected_style)
            else:
                prefix = Text("  ")
            lines.append(prefix + row)
        below = total - end
        if below > 0:
            lines.append(
                Text(f"  {theme.scroll_down_icon} {below} more below", style=theme.hint_style)
            )

    if state.mode is Mode.ACTION_FOCUS and state.actions:
        lines.append(Text())
        lines.extend(render_action_bar(state.actions, state.focused_action_index, theme))

    return Text("\n").join(lines)
