"""Error types for git-utils.

Library code raises these; only the CLI entry point prints them and exits.
"""

from __future__ import annotations


class GitUtilsError(Exception):
    """Expected, user-facing failure.

    Attributes:
        exit_code: Process exit code the CLI should use.
    """

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class GitError(GitUtilsError):
    """A git command failed, timed out, or could not be started.

    Attributes:
        command: The full command line, "git" included.
        stderr: What git wrote to stderr.
        returncode: git's own exit status (None when it never ran). The
            inherited exit_code stays the CLI's exit code.
    """

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        stderr: str = "",
        returncode: int | None = None,
    ):
        super().__init__(message)
        self.command = list(command or [])
        self.stderr = stderr
        self.returncode = returncode

    def __str__(self) -> str:
        detail = self.stderr.strip().splitlines()
        if detail:
            return f"{self.args[0]}: {detail[-1]}"
        return self.args[0]
