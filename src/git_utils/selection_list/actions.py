"""Actions, action outcomes and the action dispatcher.

Actions come in two scopes:
- ItemAction: runs against the highlighted item (checkout, copy, delete...)
- GlobalAction: runs without an item (new branch, new tag...), and is
  offered even when the filtered list is empty

Handlers return an outcome (Success, Failure or Cancelled). For convenience
they may also return True/None (success) or False (failure), and may be
async. A Failure can carry a follow-up action, which becomes available for
the same item without restarting the list.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import subprocess
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Sequence, TypeVar, Union

from ..errors import GitUtilsError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Exceptions a handler may raise that still count as an ordinary failure.
# Anything else is a programming defect and unwinds the list.
HANDLED_EXCEPTIONS: tuple[type[BaseException], ...] = (
    GitUtilsError,
    OSError,
    subprocess.SubprocessError,
)


class ActionScope(str, Enum):
    ITEM = "item"
    GLOBAL = "global"

    def __str__(self) -> str:
        return self.value


# ── Outcomes ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Success:
    message: str = ""


@dataclass(frozen=True)
class Failure:
    message: str = ""
    follow_up: ItemAction | None = None


@dataclass(frozen=True)
class Cancelled:
    message: str = ""


ActionOutcome = Union[Success, Failure, Cancelled]


# ── Actions ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class BaseAction:
    """Common action fields.

    Attributes:
        key: Identifier, unique within its scope.
        label: Short name shown in the action bar.
        description: One-line help shown under the bar when focused.
        exit_after_execution: Finish the whole list after a Success.
    """

    key: str
    label: str
    description: str = ""
    exit_after_execution: bool = False

    scope = ActionScope.ITEM

    def invoke(self, item: Any) -> Any:
        raise NotImplementedError


@dataclass(frozen=True)
class ItemAction(BaseAction, Generic[T]):
    """Action bound to the selected item."""

    handler: Callable[[T], Any] = field(default=lambda item: None, compare=False)

    scope = ActionScope.ITEM

    def invoke(self, item: T) -> Any:
        return self.handler(item)


@dataclass(frozen=True)
class GlobalAction(BaseAction):
    """Action that runs without an item."""

    handler: Callable[[], Any] = field(default=lambda: None, compare=False)

    scope = ActionScope.GLOBAL

    def invoke(self, item: Any = None) -> Any:
        return self.handler()


Action = Union[ItemAction, GlobalAction]

# Either a fixed action list or a factory deriving actions from the
# highlighted item (None when nothing is highlighted).
ActionProvider = Union[Sequence[Action], Callable[[Any], Sequence[Action]]]


def normalize_outcome(result: Any) -> ActionOutcome:
    """Map a handler's return value onto an ActionOutcome."""
    if isinstance(result, (Success, Failure, Cancelled)):
        return result
    if result is None or result is True:
        return Success()
    if result is False:
        return Failure()
    raise TypeError(f"Unsupported action handler result: {result!r}")


async def _settle(awaitable: Any) -> Any:
    return await awaitable


class ActionDispatcher(Generic[T]):
    """Resolves the available actions and runs the chosen one.

    Args:
        provider: Static list of actions, or a factory called with the
            highlighted item (or None).
        default_action_key: Key focused first when entering action focus.
    """

    def __init__(
        self,
        provider: ActionProvider | None = None,
        default_action_key: str | None = None,
    ):
        self.provider = provider
        self.default_action_key = default_action_key
        # Follow-up actions injected after a failure, per original item index
        self._follow_ups: dict[int, list[ItemAction]] = {}

    def _provided(self, item: T | None) -> list[Action]:
        if self.provider is None:
            return []
        if callable(self.provider):
            return list(self.provider(item))
        return list(self.provider)

    def resolve(self, item: T | None, item_index: int = -1) -> list[Action]:
        """Return the actions available for an item.

        Item actions come first (with injected follow-ups right after them),
        then global actions. Without an item only global actions remain.
        """
        provided = self._provided(item)
        globals_ = [a for a in provided if a.scope is ActionScope.GLOBAL]
        if item is None:
            return globals_

        item_actions = [a for a in provided if a.scope is ActionScope.ITEM]
        for follow_up in self._follow_ups.get(item_index, []):
            item_actions = [a for a in item_actions if a.key != follow_up.key]
            item_actions.append(follow_up)
        return item_actions + globals_

    def default_index(self, actions: Sequence[Action]) -> int:
        """Index of the default action key, else the first action."""
        if self.default_action_key:
            for i, action in enumerate(actions):
                if action.key == self.default_action_key:
                    return i
        return 0

    def inject_follow_up(self, item_index: int, action: ItemAction) -> None:
        """Offer a follow-up action for one item from now on."""
        existing = [a for a in self._follow_ups.get(item_index, []) if a.key != action.key]
        existing.append(action)
        self._follow_ups[item_index] = existing
        logger.debug("Injected follow-up action %r for item #%d", action.key, item_index)

    def execute(self, action: Action, item: T | None) -> ActionOutcome:
        """Run an action's handler and interpret its result.

        Expected failures are turned into a Failure outcome carrying the
        error message. Other exceptions propagate.
        """
        if action.scope is ActionScope.ITEM and item is None:
            return Failure(f"{action.label} needs a selected item")

        logger.debug("Executing action %r (%s)", action.key, action.scope)
        try:
            result = action.invoke(item)
            if inspect.isawaitable(result):
                result = asyncio.run(_settle(result))
        except HANDLED_EXCEPTIONS as e:
            logger.debug("Action %r failed: %s", action.key, e)
            return Failure(str(e) or f"{action.label} failed")
        except Exception:
            logger.exception("Action %r raised an unexpected error", action.key)
            raise

        outcome = normalize_outcome(result)
        logger.debug("Action %r finished: %s", action.key, type(outcome).__name__)
        return outcome
