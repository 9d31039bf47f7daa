"""Interaction controller for selection lists.

Binds ranking, key decoding, rendering and action dispatch into one state
machine per invocation:

    Browsing -> ActionFocus -> Executing -> Browsing | Done
    Browsing -> Done                      (plain Enter when no actions exist)
    *        -> Done(cancelled)           (Ctrl+C)

The screen is a transient Rich.Live display with auto-refresh disabled: it
is redrawn once per handled key and never between keys. It is released on
every exit path, and stopped while an action handler runs so handlers can
print and prompt freely.

Example:
    from git_utils.selection_list import SelectionConfig, run_selection_list

    result = run_selection_list(SelectionConfig(
        items=["main", "feature/login"],
        render_text=str,
    ))
    if result.success:
        print(result.item)
"""

from __future__ import annotations

import contextlib
import logging
from typing import Callable, Generic, Iterator, TypeVar

import readchar
from rich.console import Console
from rich.live import Live
from rich.text import Text

from .actions import Action, ActionDispatcher, ActionScope, Cancelled, Failure, Success
from .keys import (
    Accept,
    AppendQueryChar,
    Cancel,
    ClearOrCancel,
    DeleteQueryChar,
    Intent,
    MoveActionFocus,
    MoveSelection,
    decode,
)
from .ranking import rank
from .render import render_frame, visible_rows_for_height
from .terminal import defer_interrupts, is_interactive_terminal, render_non_interactive
from .themes import DEFAULT_THEME, Theme
from .types import ListState, Mode, SelectionConfig, SelectionResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

CANCELLED_MESSAGE = "Selection cancelled."


class SelectionList(Generic[T]):
    """One interactive selection list invocation.

    Args:
        config: Items, render/search functions, actions and options.
        console: Rich Console to draw on (auto-created if not provided).
        read_key: Blocking key reader; defaults to readchar.readkey.
        theme: Visual theme.
    """

    def __init__(
        self,
        config: SelectionConfig[T],
        *,
        console: Console | None = None,
        read_key: Callable[[], str] | None = None,
        theme: Theme | None = None,
    ):
        self.config = config
        self.items = list(config.items)
        self.console = console or Console(highlight=False)
        self.theme = theme or DEFAULT_THEME
        self.read_key = read_key or readchar.readkey
        self.dispatcher: ActionDispatcher[T] = ActionDispatcher(
            config.actions, config.default_action_key
        )
        self.state = ListState()
        self._live: Live | None = None
        self._result: SelectionResult[T] | None = None
        self._rerank()

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def selected_item_index(self) -> int:
        """Original index of the highlighted item, or -1."""
        if 0 <= self.state.selected_index < len(self.state.filtered):
            return self.state.filtered[self.state.selected_index]
        return -1

    @property
    def selected_item(self) -> T | None:
        index = self.selected_item_index
        return self.items[index] if index >= 0 else None

    @property
    def focused_action(self) -> Action | None:
        if self.state.mode is Mode.ACTION_FOCUS and self.state.actions:
            return self.state.actions[self.state.focused_action_index]
        return None

    @property
    def max_rows(self) -> int:
        if self.config.max_visible_rows:
            return self.config.max_visible_rows
        return visible_rows_for_height(self.console.height, self.theme)

    @property
    def result(self) -> SelectionResult[T] | None:
        return self._result

    # ── State transitions ────────────────────────────────────────────────

    def _rerank(self, keep_selection: bool = False) -> None:
        previous = self.selected_item_index
        ranked = rank(self.items, self.state.query, self.config.get_search_text)
        self.state.filtered = [r.index for r in ranked]
        if not self.state.filtered:
            self.state.selected_index = -1
        elif keep_selection and previous in self.state.filtered:
            self.state.selected_index = self.state.filtered.index(previous)
        else:
            self.state.selected_index = 0
        self._refresh_actions()

    def _refresh_actions(self) -> None:
        """Re-resolve actions for the highlighted item, keeping focus by key."""
        focused = self.focused_action
        self.state.actions = self.dispatcher.resolve(self.selected_item, self.selected_item_index)

        if self.state.mode is not Mode.ACTION_FOCUS:
            self.state.focused_action_index = -1
            return
        if not self.state.actions:
            self._leave_action_focus()
            return
        self.state.focused_action_index = self.dispatcher.default_index(self.state.actions)
        if focused is not None:
            for i, action in enumerate(self.state.actions):
                if action.key == focused.key:
                    self.state.focused_action_index = i
                    break

    def _enter_action_focus(self, key: str | None = None) -> None:
        self.state.mode = Mode.ACTION_FOCUS
        self.state.focused_action_index = self.dispatcher.default_index(self.state.actions)
        if key is not None:
            for i, action in enumerate(self.state.actions):
                if action.key == key:
                    self.state.focused_action_index = i
                    break

    def _leave_action_focus(self) -> None:
        self.state.mode = Mode.BROWSING
        self.state.focused_action_index = -1

    def _finish(self, result: SelectionResult[T]) -> SelectionResult[T]:
        self.state.mode = Mode.DONE
        self.state.focused_action_index = -1
        self._result = result
        logger.debug(
            "Selection list done: success=%s back=%s cancelled=%s",
            result.success,
            result.back,
            result.cancelled,
        )
        return result

    def _set_message(self, message: str, is_error: bool = False) -> None:
        self.state.message = message
        self.state.message_is_error = is_error

    def _request_cancel(self) -> None:
        self.state.cancel_requested = True

    # ── Intent handling ──────────────────────────────────────────────────

    def handle_intent(self, intent: Intent) -> SelectionResult[T] | None:
        """Apply one decoded intent. Returns the result once the list is done."""
        if self._result is not None:
            return self._result

        if isinstance(intent, Cancel):
            return self._finish(SelectionResult.cancelled_result(CANCELLED_MESSAGE))

        if isinstance(intent, ClearOrCancel):
            if self.state.mode is Mode.ACTION_FOCUS:
                self._leave_action_focus()
            elif self.state.query:
                self.state.query = ""
                self._rerank()
            elif self.config.allow_back:
                return self._finish(SelectionResult.back_result())
            else:
                return self._finish(SelectionResult.cancelled_result(CANCELLED_MESSAGE))
            return None

        if isinstance(intent, Accept):
            return self._accept()

        if isinstance(intent, MoveSelection):
            total = len(self.state.filtered)
            if total:
                self.state.selected_index = (self.state.selected_index + intent.delta) % total
                self._refresh_actions()
            return None

        if isinstance(intent, MoveActionFocus):
            if self.state.mode is Mode.ACTION_FOCUS and self.state.actions:
                last = len(self.state.actions) - 1
                index = self.state.focused_action_index + intent.delta
                self.state.focused_action_index = max(0, min(last, index))
            return None

        if isinstance(intent, DeleteQueryChar):
            if self.state.query:
                self._leave_action_focus()
                self.state.query = self.state.query[:-1]
                self._rerank()
            return None

        if isinstance(intent, AppendQueryChar):
            self._leave_action_focus()
            self.state.query += intent.char
            self._rerank()
            return None

        return None

    def _accept(self) -> SelectionResult[T] | None:
        if self.state.mode is Mode.ACTION_FOCUS:
            action = self.focused_action
            if action is None:
                self._leave_action_focus()
                return None
            return self._execute(action)

        if self.state.actions:
            self._enter_action_focus()
            return None

        item = self.selected_item
        if item is None:
            return None
        return self._finish(SelectionResult(success=True, item=item))

    @contextlib.contextmanager
    def _suspended(self) -> Iterator[None]:
        """Release the screen while an action handler runs."""
        live = self._live
        if live is not None:
            live.stop()
        try:
            yield
        finally:
            if live is not None and self._live is live:
                live.start()

    def _execute(self, action: Action) -> SelectionResult[T] | None:
        if action.scope is ActionScope.ITEM:
            item, item_index = self.selected_item, self.selected_item_index
        else:
            item, item_index = None, -1

        self.state.mode = Mode.EXECUTING
        with self._suspended(), defer_interrupts(self._request_cancel):
            outcome = self.dispatcher.execute(action, item)

        if self.state.cancel_requested:
            return self._finish(SelectionResult.cancelled_result(CANCELLED_MESSAGE))

        if isinstance(outcome, Success):
            if action.exit_after_execution:
                return self._finish(
                    SelectionResult(success=True, item=item, action=action, message=outcome.message)
                )
            self._leave_action_focus()
            self._set_message(outcome.message)
            self._rerank(keep_selection=True)
            return None

        if isinstance(outcome, Failure):
            message = outcome.message or f"{action.label} failed"
            self._set_message(message, is_error=True)
            if outcome.follow_up is not None and item_index >= 0:
                self.dispatcher.inject_follow_up(item_index, outcome.follow_up)
                self._refresh_actions()
                self._enter_action_focus(outcome.follow_up.key)
                return None
            self._leave_action_focus()
            self._refresh_actions()
            return None

        if isinstance(outcome, Cancelled):
            self._leave_action_focus()
            self._refresh_actions()
        return None

    # ── Rendering / loop ─────────────────────────────────────────────────

    def render(self) -> Text:
        return render_frame(self.config, self.state, self.max_rows, self.theme)

    def _read(self) -> str:
        try:
            return self.read_key()
        except (KeyboardInterrupt, EOFError):
            return readchar.key.CTRL_C

    def run(self) -> SelectionResult[T]:
        """Display the list and block until it is done."""
        with Live(
            self.render(), console=self.console, auto_refresh=False, transient=True
        ) as live:
            self._live = live
            try:
                while self._result is None:
                    intent = decode(self._read())
                    if intent is None:
                        continue
                    if self.handle_intent(intent) is None:
                        live.update(self.render(), refresh=True)
            finally:
                self._live = None
        return self._result


def run_selection_list(
    config: SelectionConfig[T],
    *,
    console: Console | None = None,
    read_key: Callable[[], str] | None = None,
    theme: Theme | None = None,
) -> SelectionResult[T]:
    """Show an interactive selection list and return its result.

    Without a TTY (pipes, CI) a short preview is printed and the first item
    is returned as a plain selection.
    """
    if read_key is None and not is_interactive_terminal():
        return render_non_interactive(config, console)
    return SelectionList(config, console=console, read_key=read_key, theme=theme).run()
