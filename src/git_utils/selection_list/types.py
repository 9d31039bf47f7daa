"""State, configuration and result types for selection lists."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Sequence, TypeVar

from .actions import Action, ActionProvider

T = TypeVar("T")


class Mode(str, Enum):
    """Controller modes."""

    BROWSING = "browsing"
    ACTION_FOCUS = "action_focus"
    EXECUTING = "executing"
    DONE = "done"

    def __str__(self) -> str:
        return self.value


@dataclass
class SelectionConfig(Generic[T]):
    """Everything one selection list invocation needs.

    Attributes:
        items: Items to display, in their natural order.
        render_text: Full display line for an item.
        search_text: Text queries are matched against (defaults to render_text).
        header: Optional line shown above the list.
        actions: Action list, or a factory deriving actions from the item.
        default_action_key: Action focused first when entering action focus.
        allow_back: Escape on an empty query returns a "back" result.
        max_visible_rows: Row budget; None derives it from the terminal height.
    """

    items: Sequence[T]
    render_text: Callable[[T], str]
    search_text: Callable[[T], str] | None = None
    header: str | None = None
    actions: ActionProvider | None = None
    default_action_key: str | None = None
    allow_back: bool = False
    max_visible_rows: int | None = None

    def get_search_text(self, item: T) -> str:
        if self.search_text is None:
            return self.render_text(item)
        return self.search_text(item)


@dataclass
class ListState:
    """Mutable per-invocation state, owned by the controller.

    Attributes:
        filtered: Original indices of the items in the current ranked view.
        selected_index: Position in `filtered`, or -1 when it is empty.
        query: Current search text.
        focused_action_index: Position in `actions`, or -1 outside ActionFocus.
        actions: Actions resolved for the current selection.
        mode: Current controller mode.
        message: Single-line status shown above the list.
        message_is_error: Style the message as an error.
    """

    filtered: list[int] = field(default_factory=list)
    selected_index: int = -1
    query: str = ""
    focused_action_index: int = -1
    actions: list[Action] = field(default_factory=list)
    mode: Mode = Mode.BROWSING
    message: str = ""
    message_is_error: bool = False
    cancel_requested: bool = False


@dataclass
class SelectionResult(Generic[T]):
    """Terminal value of one selection list invocation.

    Exactly one of success, cancelled and back is true.
    """

    success: bool = False
    item: T | None = None
    action: Action | None = None
    back: bool = False
    cancelled: bool = False
    message: str = ""

    @classmethod
    def cancelled_result(cls, message: str = "") -> "SelectionResult[Any]":
        return cls(cancelled=True, message=message)

    @classmethod
    def back_result(cls) -> "SelectionResult[Any]":
        return cls(back=True)
