"""Tests for parsing git output into records."""

import pytest

from conftest import FakeExecutor, git_error
from git_utils.errors import GitError, GitUtilsError
from git_utils.git.aliases import get_aliases, parse_aliases
from git_utils.git.authors import get_authors, parse_authors, timeline, year_span
from git_utils.git.branches import (
    get_branches,
    get_current_branch,
    parse_branches,
    sanitize_branch_name,
    validate_branch_name,
)
from git_utils.git.commits import get_commits, parse_commit_line
from git_utils.git.remotes import (
    get_remote_branches,
    parse_remote_branches,
    parse_remotes,
    validate_remote_name,
    validate_remote_url,
)
from git_utils.git.stashes import parse_stashes
from git_utils.git.tags import parse_tags
from git_utils.git.worktrees import parse_worktrees
from git_utils.types import GitAlias, GitBranch


class TestBranches:
    def test_parse(self):
        output = "*|main|2 hours ago\n |feature/login|3 days ago\n"
        assert parse_branches(output) == [
            GitBranch(name="main", date="2 hours ago", current=True),
            GitBranch(name="feature/login", date="3 days ago", current=False),
        ]

    def test_blank_lines_skipped(self):
        assert parse_branches("\n\n") == []

    def test_upstream(self):
        branch = parse_branches("*|main|now|origin/main")[0]
        assert branch.upstream == "origin/main"

    def test_current_branch(self):
        assert get_current_branch(FakeExecutor({("rev-parse",): "main\n"})) == "main"

    def test_current_branch_detached(self):
        with pytest.raises(GitUtilsError):
            get_current_branch(FakeExecutor({("rev-parse",): "HEAD"}))

    def test_get_branches_command(self):
        executor = FakeExecutor({("branch",): "*|main|now"})
        assert get_branches(executor)[0].name == "main"
        args = executor.calls[0]
        assert "--sort=-committerdate" in args
        assert any(a.startswith("--format=%(HEAD)|") for a in args)


class TestBranchNames:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("my new feature", "my-new-feature"),
            ("fix: bug?", "fix-bug"),
            ("../weird..name.lock", "weird.name"),
            ("feature//x", "feature/x"),
            ("  -lead-and-trail-  ", "lead-and-trail"),
        ],
    )
    def test_sanitize(self, raw, expected):
        assert sanitize_branch_name(raw) == expected

    @pytest.mark.parametrize(
        "name", ["", "has space", "a~b", ".hidden", "/abs", "end.", "x.lock", "a..b", "a@{b", "@", "a//b"]
    )
    def test_invalid(self, name):
        assert validate_branch_name(name) is not None

    @pytest.mark.parametrize("name", ["main", "feature/login", "v1.2", "user@host"])
    def test_valid(self, name):
        assert validate_branch_name(name) is None


class TestCommits:
    def test_refs_split_into_branches_and_tags(self):
        commit = parse_commit_line(
            "abc1234|2 days ago|HEAD -> main, origin/main, tag: v1.0|Fix | pipe in subject"
        )
        assert commit.hash == "abc1234"
        assert commit.date == "2 days ago"
        assert commit.branch == "main, origin/main"
        assert commit.tags == ["v1.0"]
        assert commit.subject == "Fix | pipe in subject"

    def test_no_refs(self):
        commit = parse_commit_line("def5678|1 week ago||Initial commit")
        assert commit.branch == ""
        assert commit.tags == []

    def test_malformed_line(self):
        assert parse_commit_line("garbage") is None

    def test_limit_passed(self):
        executor = FakeExecutor({("log",): "abc|now||x"})
        commits = get_commits(executor, limit=50)
        assert len(commits) == 1
        assert "--max-count=50" in executor.calls[0]
        assert "--all" not in executor.calls[0]

    def test_zero_limit_loads_everything(self):
        executor = FakeExecutor({("log",): ""})
        get_commits(executor, limit=0)
        assert not any(a.startswith("--max-count") for a in executor.calls[0])

    def test_all_refs(self):
        executor = FakeExecutor({("log",): ""})
        get_commits(executor, all_refs=True)
        assert "--all" in executor.calls[0]

    def test_reflog_uses_reflog_subject(self):
        executor = FakeExecutor({("log",): "abc1234|5 minutes ago||checkout: moving from main to dev"})
        commits = get_commits(executor, reflog=True, all_refs=True)
        args = executor.calls[0]
        assert "--walk-reflogs" in args
        assert "--all" not in args
        assert any(a.endswith("%gs") for a in args)
        assert commits[0].subject == "checkout: moving from main to dev"

    def test_file_history(self):
        executor = FakeExecutor({("log",): ""})
        get_commits(executor, limit=None, path="src/app.py")
        assert executor.calls[0][-3:] == ["--follow", "--", "src/app.py"]


class TestTags:
    def test_annotated_fields_win(self):
        output = "v1.0|3 days ago|aaaaaaa|bbbbbbb|tag msg|Commit subject|Jane Doe\n"
        [tag] = parse_tags(output)
        assert tag.hash == "bbbbbbb"
        assert tag.subject == "Commit subject"
        assert tag.tagger == "Jane Doe"

    def test_lightweight_fallbacks(self):
        [tag] = parse_tags("v0.9||ccccccc||Subject||\n")
        assert tag.hash == "ccccccc"
        assert tag.subject == "Subject"
        assert tag.date == "Unknown"
        assert tag.tagger == "Unknown"


class TestStashes:
    def test_parse(self):
        output = (
            "stash@{0}|WIP on main: abc123 msg|0123456789abcdef|5 minutes ago|WIP on main: abc123 msg\n"
            "stash@{1}|On feature/x: my work|fedcba9876543210|2 days ago|On feature/x: my work\n"
            "stash@{2}|custom|1111111111|1 week ago|custom\n"
        )
        stashes = parse_stashes(output)
        assert [s.index for s in stashes] == [0, 1, 2]
        assert [s.branch for s in stashes] == ["main", "feature/x", "unknown"]
        assert stashes[0].hash == "0123456"
        assert stashes[1].ref == "stash@{1}"
        assert stashes[1].date == "2 days ago"

    def test_incomplete_lines_skipped(self):
        assert parse_stashes("stash@{0}|only|three") == []


class TestRemotes:
    def test_fetch_url_wins(self):
        output = (
            "origin\tgit@github.com:me/repo.git (fetch)\n"
            "origin\tgit@github.com:me/repo-push.git (push)\n"
            "upstream\thttps://github.com/them/repo.git (push)\n"
        )
        remotes = parse_remotes(output)
        assert [(r.name, r.url, r.kind) for r in remotes] == [
            ("origin", "git@github.com:me/repo.git", "fetch"),
            ("upstream", "https://github.com/them/repo.git", "push"),
        ]

    def test_remote_branches_skip_head(self):
        output = (
            "origin|abc1234|2 days ago\n"
            "origin/HEAD|abc1234|2 days ago\n"
            "origin/main|abc1234|2 days ago\n"
            "origin/feature/x|def5678|1 week ago\n"
        )
        branches = parse_remote_branches(output, "origin")
        assert [(b.name, b.full_name, b.hash) for b in branches] == [
            ("main", "origin/main", "abc1234"),
            ("feature/x", "origin/feature/x", "def5678"),
        ]

    def test_get_remote_branches_fetches_first(self):
        executor = FakeExecutor({("for-each-ref",): "origin/main|abc|now"})
        assert [b.name for b in get_remote_branches(executor, "origin")] == ["main"]
        assert executor.calls[0] == ["fetch", "origin", "--prune"]
        assert executor.calls[1][-1] == "refs/remotes/origin"

    @pytest.mark.parametrize(
        "url",
        [
            "https://github.com/me/repo.git",
            "ssh://git@host:22/repo.git",
            "file:///srv/git/repo.git",
            "git@github.com:me/repo.git",
        ],
    )
    def test_valid_urls(self, url):
        assert validate_remote_url(url) is None

    @pytest.mark.parametrize("url", ["", "not a url", "github.com/me/repo"])
    def test_invalid_urls(self, url):
        assert validate_remote_url(url) is not None

    def test_remote_names(self):
        assert validate_remote_name("upstream") is None
        assert validate_remote_name("my remote") == "Remote name cannot contain spaces"
        assert validate_remote_name("a/b") is not None


class TestWorktrees:
    def test_main_first_and_detached(self):
        output = (
            "worktree /repo\nHEAD 1111111\nbranch refs/heads/main\n\n"
            "worktree /repo-feature\nHEAD 2222222\nbranch refs/heads/feature/x\n\n"
            "worktree /repo-detached\nHEAD 3333333\ndetached\n"
        )
        worktrees = parse_worktrees(output)
        assert [(w.path, w.branch, w.is_main) for w in worktrees] == [
            ("/repo", "main", True),
            ("/repo-feature", "feature/x", False),
            ("/repo-detached", "HEAD (detached)", False),
        ]
        assert worktrees[1].commit == "2222222"

    def test_bare_repository_is_main(self):
        output = "worktree /repo.git\nbare\n\nworktree /work\nHEAD 1111111\nbranch refs/heads/main\n"
        assert [w.is_main for w in parse_worktrees(output)] == [True, False]

    def test_empty(self):
        assert parse_worktrees("") == []


class TestAliases:
    def test_parse(self):
        output = "alias.co checkout\nalias.lg log --oneline --graph\nnot.an alias\n"
        assert parse_aliases(output) == [
            GitAlias("co", "checkout"),
            GitAlias("lg", "log --oneline --graph"),
        ]

    def test_no_aliases_is_not_an_error(self):
        executor = FakeExecutor({("config",): git_error("", "config")})
        assert get_aliases(executor) == []

    def test_other_failures_propagate(self):
        broken = GitError("git config failed", ["git", "config"], "fatal: bad config", 128)
        with pytest.raises(GitError):
            get_aliases(FakeExecutor({("config",): broken}))


class TestAuthors:
    LOG = (
        "Ada|ada@example.com|aaa1111|2024-03-01 10:00\n"
        "Bob|bob@example.com|bbb2222|2024-02-01 09:00\n"
        "Ada|ADA@example.com|aaa0000|2021-05-01 08:00\n"
        "Cy|cy@example.com|ccc3333|2023-01-01 12:00\n"
        "Ada|ada@example.com|aaa0001|2021-04-01 08:00\n"
    )

    def test_aggregated_by_email(self):
        authors = parse_authors(self.LOG)
        assert [(a.name, a.commit_count) for a in authors] == [("Ada", 3), ("Bob", 1), ("Cy", 1)]
        ada = authors[0]
        assert (ada.last_hash, ada.last_date) == ("aaa1111", "2024-03-01 10:00")
        assert ada.years == [2021, 2024]

    def test_timeline(self):
        authors = parse_authors(self.LOG)
        span = year_span(authors)
        assert span == (2021, 2024)
        assert timeline(authors[0], span) == "●──●"

    def test_file_scope(self):
        executor = FakeExecutor({("log",): ""})
        assert get_authors(executor, "src/app.py") == []
        assert executor.calls[0][-2:] == ["--", "src/app.py"]
        assert year_span([]) is None
