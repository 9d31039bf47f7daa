"""Tests for GitExecutor."""

import subprocess

import pytest

from git_utils.errors import GitError
from git_utils.git.executor import GitExecutor


class FakeCompleted:
    def __init__(self, returncode=0, stdout="", stderr=""):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


@pytest.fixture
def recorded(monkeypatch):
    calls = []
    result = {"value": FakeCompleted(stdout="ok\n")}

    def fake_run(command, **kwargs):
        calls.append((command, kwargs))
        value = result["value"]
        if isinstance(value, BaseException):
            raise value
        return value

    monkeypatch.setattr(subprocess, "run", fake_run)
    return calls, result


class TestRun:
    def test_argument_list_and_cwd(self, recorded, tmp_path):
        calls, _ = recorded
        out = GitExecutor(cwd=tmp_path, timeout=5).run(["branch", "--list"])
        command, kwargs = calls[0]
        assert command == ["git", "branch", "--list"]
        assert kwargs["cwd"] == str(tmp_path)
        assert kwargs["timeout"] == 5
        assert kwargs["capture_output"] is True
        assert out.stdout == "ok"

    def test_nonzero_exit_raises(self, recorded):
        _, result = recorded
        result["value"] = FakeCompleted(1, "", "error: branch 'x' not found.\n")
        with pytest.raises(GitError) as exc:
            GitExecutor().run(["branch", "-d", "x"])
        assert exc.value.returncode == 1
        assert exc.value.command == ["git", "branch", "-d", "x"]
        assert "not found" in str(exc.value)

    def test_git_status_kept_apart_from_cli_exit_code(self, recorded):
        _, result = recorded
        result["value"] = FakeCompleted(128, "", "fatal: not a git repository\n")
        with pytest.raises(GitError) as exc:
            GitExecutor().run(["status"])
        assert exc.value.returncode == 128
        assert exc.value.exit_code == 1

    def test_timeout_raises(self, recorded):
        _, result = recorded
        result["value"] = subprocess.TimeoutExpired(["git", "log"], 3)
        with pytest.raises(GitError, match="timed out"):
            GitExecutor().run(["log"])

    def test_missing_git_raises(self, recorded):
        _, result = recorded
        result["value"] = FileNotFoundError("git")
        with pytest.raises(GitError, match="Failed to execute git"):
            GitExecutor().run(["status"])

    def test_lines(self, recorded):
        _, result = recorded
        result["value"] = FakeCompleted(stdout="origin\n\n  upstream \n")
        assert GitExecutor().lines(["remote"]) == ["origin", "upstream"]


class TestAvailabilityChecks:
    def test_is_available(self, recorded):
        assert GitExecutor().is_available()

    def test_not_available(self, recorded):
        _, result = recorded
        result["value"] = FileNotFoundError("git")
        assert not GitExecutor().is_available()

    def test_is_repository(self, recorded):
        _, result = recorded
        result["value"] = FakeCompleted(stdout="true\n")
        assert GitExecutor().is_repository()

    def test_not_a_repository(self, recorded):
        _, result = recorded
        result["value"] = FakeCompleted(128, "", "fatal: not a git repository\n")
        assert not GitExecutor().is_repository()
