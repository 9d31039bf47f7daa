"""Pytest fixtures for git-utils tests."""

import io
from typing import Iterable

import pytest
from rich.console import Console

from git_utils import config
from git_utils.errors import GitError
from git_utils.types import GitResult


class FakeExecutor:
    """Stands in for GitExecutor: canned output keyed by argument prefix.

    responses maps a tuple of leading git arguments to either stdout text or
    an exception instance to raise. Every call is recorded in `calls`.
    """

    def __init__(self, responses=None, cwd=None):
        self.responses = dict(responses or {})
        self.calls: list[list[str]] = []
        self.interactive_calls: list[list[str]] = []
        self.cwd = cwd

    @property
    def working_directory(self):
        return self.cwd

    def _lookup(self, args):
        best = None
        for prefix, value in self.responses.items():
            if tuple(args[: len(prefix)]) == prefix:
                if best is None or len(prefix) > len(best[0]):
                    best = (prefix, value)
        return best[1] if best else ""

    def run(self, args, *, timeout=None):
        self.calls.append(list(args))
        value = self._lookup(args)
        if isinstance(value, BaseException):
            raise value
        return GitResult(stdout=value.strip())

    def lines(self, args):
        return self.run(args).lines

    def run_interactive(self, args):
        self.interactive_calls.append(list(args))
        return 0

    def is_available(self):
        return True

    def is_repository(self):
        return True


class ScriptedKeys:
    """Key reader that replays a fixed list of readchar key strings."""

    def __init__(self, keys: Iterable[str]):
        self.keys = list(keys)
        self.read = 0

    def __call__(self) -> str:
        if self.read >= len(self.keys):
            raise AssertionError("selection list read more keys than scripted")
        key = self.keys[self.read]
        self.read += 1
        return key

    @property
    def remaining(self) -> int:
        return len(self.keys) - self.read


def git_error(stderr: str, *args: str) -> GitError:
    return GitError(
        f"git {args[0] if args else ''} failed with exit code 1",
        ["git", *args],
        stderr,
        1,
    )


@pytest.fixture
def fake_executor():
    return FakeExecutor()


@pytest.fixture
def keys():
    """Factory: keys("a", "\\r") -> ScriptedKeys."""
    return lambda *k: ScriptedKeys(k)


@pytest.fixture
def console():
    """Non-terminal console writing into a buffer (read with .file.getvalue())."""
    return Console(file=io.StringIO(), width=100, height=30, highlight=False, color_system=None)


@pytest.fixture
def config_env(tmp_path, monkeypatch):
    """Point the config layer at a temp directory."""
    config_dir = tmp_path / "git-utils"
    config_dir.mkdir()
    monkeypatch.setattr(config, "get_config_dir", lambda: config_dir)
    monkeypatch.delenv("GIT_UTILS_DEBUG", raising=False)
    return config_dir
