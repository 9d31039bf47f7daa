"""Tests for the CLI."""

import pytest

from conftest import FakeExecutor
from git_utils import cli, config
from git_utils.commands.core import CommandResult
from git_utils.errors import GitError


class TestArgParsing:
    def setup_method(self):
        self.parser = cli.build_parser()

    def test_no_command(self):
        args = self.parser.parse_args([])
        assert args.command is None
        assert args.debug is False

    def test_branches_new_without_name(self):
        args = self.parser.parse_args(["branches", "--new"])
        assert args.new == ""

    def test_branches_new_with_name(self):
        args = self.parser.parse_args(["branches", "--new", "feature/x"])
        assert args.new == "feature/x"

    def test_branches_default(self):
        assert self.parser.parse_args(["branches"]).new is None

    def test_commits_limit(self):
        assert self.parser.parse_args(["commits", "--limit", "20"]).limit == 20

    def test_save_message(self):
        assert self.parser.parse_args(["save", "wip"]).message == "wip"

    def test_config_editor_args_may_start_with_dashes(self):
        args = self.parser.parse_args(
            ["config", "--editor", "/usr/bin/code", "--args", "--new-window", "-w"]
        )
        assert args.editor == "/usr/bin/code"
        assert args.editor_args == ["--new-window", "-w"]

    def test_config_without_editor_args(self):
        assert self.parser.parse_args(["config", "--editor", "vim"]).editor_args == []

    def test_commits_scopes(self):
        args = self.parser.parse_args(["commits", "--file", "README.md"])
        assert (args.all, args.reflog, args.file) == (False, False, "README.md")
        assert self.parser.parse_args(["commits", "-a"]).all is True
        assert self.parser.parse_args(["commits", "--reflog"]).reflog is True

    def test_commits_scopes_are_exclusive(self):
        with pytest.raises(SystemExit):
            self.parser.parse_args(["commits", "--all", "--reflog"])

    def test_top_authors_path(self):
        assert self.parser.parse_args(["top-authors", "src/app.py"]).path == "src/app.py"
        assert self.parser.parse_args(["top-authors"]).path is None

    def test_global_options(self):
        args = self.parser.parse_args(["--debug", "-C", "/repo", "tags"])
        assert args.debug is True
        assert args.cwd == "/repo"
        assert args.command == "tags"

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            self.parser.parse_args(["--version"])
        assert exc.value.code == 0
        assert "git-utils" in capsys.readouterr().out


@pytest.fixture
def fake_git(monkeypatch, config_env):
    executor = FakeExecutor()
    monkeypatch.setattr(cli, "GitExecutor", lambda cwd=None: executor)
    return executor


class TestMain:
    def test_dispatches_to_command(self, fake_git, monkeypatch):
        seen = []
        monkeypatch.setattr(
            cli.tags, "run", lambda executor, options: seen.append(executor) or CommandResult()
        )
        assert cli.main(["tags"]) == 0
        assert seen == [fake_git]

    def test_commit_limit_from_config(self, fake_git, monkeypatch):
        seen = []
        config.update_config({"ui": {"commit_limit": 25}})
        monkeypatch.setattr(
            cli.commits, "run",
            lambda executor, options, limit, **scope: seen.append(limit) or CommandResult(),
        )
        cli.main(["commits"])
        cli.main(["commits", "--limit", "5"])
        cli.main(["commits", "--limit", "0"])
        assert seen == [25, 5, 0]

    def test_commit_scope_passed(self, fake_git, monkeypatch):
        seen = []
        monkeypatch.setattr(
            cli.commits, "run", lambda executor, options, limit, **scope: seen.append(scope) or CommandResult()
        )
        cli.main(["commits", "--reflog"])
        assert seen == [{"all_refs": False, "reflog": True, "path": None}]

    def test_missing_working_directory(self, fake_git, tmp_path, capsys):
        missing = tmp_path / "nope"
        assert cli.main(["-C", str(missing), "branches"]) == 1
        assert "Not a directory" in capsys.readouterr().err
        assert fake_git.calls == []

    def test_existing_working_directory(self, fake_git, tmp_path, monkeypatch):
        monkeypatch.setattr(cli.tags, "run", lambda executor, options: CommandResult())
        assert cli.main(["-C", str(tmp_path), "tags"]) == 0

    def test_git_error_exit_code(self, fake_git, capsys):
        fake_git.responses[("stash", "push")] = GitError("git stash failed", ["git"], "fatal: bad\n", 1)
        assert cli.main(["save"]) == 1
        assert "fatal: bad" in capsys.readouterr().err

    def test_not_a_repository(self, fake_git, monkeypatch):
        monkeypatch.setattr(fake_git, "is_repository", lambda: False)
        assert cli.main(["branches"]) == 1

    def test_keyboard_interrupt(self, fake_git, monkeypatch):
        def interrupted(executor, options):
            raise KeyboardInterrupt

        monkeypatch.setattr(cli.stashes, "run", interrupted)
        assert cli.main(["stashes"]) == 130

    def test_menu_when_no_command(self, fake_git, monkeypatch):
        seen = []
        monkeypatch.setattr(cli, "run_menu", lambda commands, options: seen.extend(c.name for c in commands))
        assert cli.main([]) == 0
        assert seen == [
            "branches", "commits", "tags", "stashes", "remotes",
            "worktrees", "list-aliases", "top-authors", "sync",
        ]


class TestConfigCommand:
    def test_set_editor_without_git(self, config_env, monkeypatch, tmp_path):
        def no_git(*args, **kwargs):
            raise AssertionError("config must not need git")

        monkeypatch.setattr(cli, "GitExecutor", no_git)
        editor = tmp_path / "code"
        editor.write_text("")
        assert cli.main(["config", "--editor", str(editor), "--args", "--new-window"]) == 0
        assert config.get_editor_config() == {"path": str(editor), "args": ["--new-window"]}

    def test_editor_args_as_one_string(self, config_env):
        assert cli.main(["config", "--editor", "/usr/bin/code", "--args", "--new-window -w"]) == 0
        assert config.get_editor_config()["args"] == ["--new-window", "-w"]

    def test_edit_without_editor_fails(self, config_env, monkeypatch):
        assert cli.main(["config", "--edit"]) == 1

    def test_show(self, config_env, capsys):
        assert cli.main(["config"]) == 0
        assert "No editor configured" in capsys.readouterr().out
