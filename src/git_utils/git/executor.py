"""Git command execution.

GitExecutor is constructed once by the CLI and passed explicitly to the
code that needs it. Commands are argument lists, never shell strings.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from pathlib import Path

from ..errors import GitError
from ..types import GitResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class GitExecutor:
    """Runs git in a working directory with a timeout.

    Args:
        cwd: Repository directory (current directory if None).
        timeout: Seconds before a command is killed.
    """

    def __init__(self, cwd: str | Path | None = None, timeout: float = DEFAULT_TIMEOUT):
        self.cwd = Path(cwd) if cwd is not None else None
        self.timeout = timeout

    @property
    def working_directory(self) -> Path:
        return self.cwd or Path(os.getcwd())

    def run(self, args: list[str], *, timeout: float | None = None) -> GitResult:
        """Run `git <args>` and capture its output.

        Raises:
            GitError: On non-zero exit, timeout, or when git cannot be started.
        """
        command = ["git", *args]
        logger.debug("Running: %s", shlex.join(command))
        try:
            proc = subprocess.run(
                command,
                capture_output=True,
                text=True,
                cwd=str(self.cwd) if self.cwd else None,
                timeout=timeout or self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise GitError(
                f"git {args[0] if args else ''} timed out after {e.timeout}s", command
            ) from e
        except OSError as e:
            raise GitError(f"Failed to execute git: {e}", command, str(e)) from e

        if proc.returncode != 0:
            logger.debug("git exited %d: %s", proc.returncode, proc.stderr.strip())
            raise GitError(
                f"git {args[0] if args else ''} failed with exit code {proc.returncode}",
                command,
                proc.stderr,
                proc.returncode,
            )
        return GitResult(stdout=proc.stdout.strip(), stderr=proc.stderr.strip())

    def lines(self, args: list[str]) -> list[str]:
        """Run a command and return its non-empty, stripped output lines."""
        return self.run(args).lines

    def run_interactive(self, args: list[str]) -> int:
        """Run git attached to the terminal (pager, editor). Returns exit code."""
        command = ["git", *args]
        logger.debug("Running interactively: %s", shlex.join(command))
        try:
            return subprocess.run(command, cwd=str(self.cwd) if self.cwd else None).returncode
        except OSError as e:
            raise GitError(f"Failed to execute git: {e}", command, str(e)) from e

    def is_available(self) -> bool:
        """Check that git is installed."""
        try:
            self.run(["--version"])
            return True
        except GitError:
            return False

    def is_repository(self) -> bool:
        """Check that the working directory is inside a git work tree."""
        try:
            return self.run(["rev-parse", "--is-inside-work-tree"]).stdout == "true"
        except GitError:
            return False
