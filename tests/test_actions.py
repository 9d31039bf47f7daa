"""Tests for action resolution and dispatch."""

import subprocess

import pytest

from git_utils.errors import GitError
from git_utils.selection_list.actions import (
    ActionDispatcher,
    ActionScope,
    Cancelled,
    Failure,
    GlobalAction,
    ItemAction,
    Success,
    normalize_outcome,
)


def _item(key, handler=lambda item: None, **kwargs):
    return ItemAction(key=key, label=key.title(), handler=handler, **kwargs)


def _global(key, handler=lambda: None, **kwargs):
    return GlobalAction(key=key, label=key.title(), handler=handler, **kwargs)


class TestResolve:
    def test_item_actions_before_globals(self):
        dispatcher = ActionDispatcher([_global("new"), _item("copy"), _item("delete")])
        keys = [a.key for a in dispatcher.resolve("main", 0)]
        assert keys == ["copy", "delete", "new"]

    def test_only_globals_without_item(self):
        dispatcher = ActionDispatcher([_item("copy"), _global("new")])
        assert [a.key for a in dispatcher.resolve(None)] == ["new"]

    def test_factory_receives_item(self):
        seen = []

        def factory(item):
            seen.append(item)
            return [_item("copy")] if item == "main" else []

        dispatcher = ActionDispatcher(factory)
        assert [a.key for a in dispatcher.resolve("main", 0)] == ["copy"]
        assert dispatcher.resolve("dev", 1) == []
        assert seen == ["main", "dev"]

    def test_no_provider(self):
        dispatcher = ActionDispatcher()
        assert dispatcher.resolve("main", 0) == []

    def test_follow_up_injected_for_one_item_only(self):
        dispatcher = ActionDispatcher([_item("delete"), _global("new")])
        dispatcher.inject_follow_up(2, _item("force-delete"))
        assert [a.key for a in dispatcher.resolve("x", 2)] == ["delete", "force-delete", "new"]
        assert [a.key for a in dispatcher.resolve("y", 1)] == ["delete", "new"]

    def test_follow_up_injected_twice_appears_once(self):
        dispatcher = ActionDispatcher([_item("delete")])
        dispatcher.inject_follow_up(0, _item("force-delete"))
        dispatcher.inject_follow_up(0, _item("force-delete"))
        assert [a.key for a in dispatcher.resolve("x", 0)] == ["delete", "force-delete"]


class TestDefaultIndex:
    def test_default_key(self):
        actions = [_item("copy"), _item("checkout")]
        assert ActionDispatcher(actions, "checkout").default_index(actions) == 1

    def test_missing_default_key_falls_back_to_first(self):
        actions = [_item("copy"), _item("checkout")]
        assert ActionDispatcher(actions, "nope").default_index(actions) == 0


class TestScope:
    def test_scope_is_class_level(self):
        assert _item("copy").scope is ActionScope.ITEM
        assert _global("new").scope is ActionScope.GLOBAL

    def test_global_handler_gets_no_item(self):
        calls = []
        action = _global("new", handler=lambda: calls.append("called"))
        ActionDispatcher([action]).execute(action, None)
        assert calls == ["called"]


class TestExecute:
    def test_item_handler_receives_item(self):
        received = []
        action = _item("copy", handler=lambda item: received.append(item))
        assert ActionDispatcher([action]).execute(action, "main") == Success()
        assert received == ["main"]

    def test_item_action_without_item_fails(self):
        action = _item("copy")
        outcome = ActionDispatcher([action]).execute(action, None)
        assert isinstance(outcome, Failure)

    def test_outcome_passed_through(self):
        follow_up = _item("force")
        action = _item("delete", handler=lambda item: Failure("nope", follow_up=follow_up))
        outcome = ActionDispatcher([action]).execute(action, "x")
        assert outcome == Failure("nope", follow_up=follow_up)

    def test_async_handler(self):
        async def handler(item):
            return Success(f"done {item}")

        action = _item("copy", handler=handler)
        assert ActionDispatcher([action]).execute(action, "x") == Success("done x")

    @pytest.mark.parametrize(
        "error",
        [
            GitError("git branch failed", ["git", "branch"], "error: boom\n", 1),
            OSError("no such file"),
            subprocess.CalledProcessError(1, ["xclip"]),
        ],
    )
    def test_expected_errors_become_failures(self, error):
        def handler(item):
            raise error

        action = _item("delete", handler=handler)
        outcome = ActionDispatcher([action]).execute(action, "x")
        assert isinstance(outcome, Failure)
        assert outcome.message == str(error)

    def test_defects_propagate(self):
        def handler(item):
            raise ZeroDivisionError

        action = _item("delete", handler=handler)
        with pytest.raises(ZeroDivisionError):
            ActionDispatcher([action]).execute(action, "x")


class TestNormalizeOutcome:
    def test_conveniences(self):
        assert normalize_outcome(None) == Success()
        assert normalize_outcome(True) == Success()
        assert normalize_outcome(False) == Failure()
        assert normalize_outcome(Cancelled("x")) == Cancelled("x")

    def test_rejects_other_values(self):
        with pytest.raises(TypeError):
            normalize_outcome("ok")
