"""Git repository abstraction for the release flow.

Only the primitives the release needs: workspace detection, tag lookup,
staging, commit and push. Every method that can fail returns a Result.

Usage:
    repo = Repository(Path("."))

    match repo.tag_exists("v1.4.0"):
        case Ok(True):
            print("already tagged")
        case Ok(False):
            print("tag is free")
        case Err(e):
            print(f"git failed: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.platform.process import ProcessError
from relkit.platform.process import run as run_process
from relkit.release.timeouts import GIT_NETWORK_TIMEOUT_SECONDS, GIT_TIMEOUT_SECONDS

__all__ = ["GitError", "Repository"]

_NETWORK_COMMANDS = frozenset({"fetch", "pull", "push", "clone"})


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: git subcommand that failed (e.g. "push")
        message: stderr text, or a fallback description
        returncode: process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """A git working tree rooted at ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def is_work_tree(self) -> bool:
        """True if ``path`` is inside a git repository (``git rev-parse --git-dir``)."""
        return isinstance(self._run(["rev-parse", "--git-dir"]), Ok)

    def tag_exists(self, name: str) -> Result[bool, GitError]:
        """Check the local tag namespace for an exact ``name`` match."""
        result = self._run(["tag", "--list", name])
        match result:
            case Err(e):
                return Err(_git_error("tag --list", e, "git tag failed"))
            case Ok(stdout):
                return Ok(name in (line.strip() for line in stdout.splitlines()))

    def stage_all(self) -> Result[None, GitError]:
        """Stage every working-tree change (``git add -A``)."""
        result = self._run(["add", "-A"])
        if isinstance(result, Err):
            return Err(_git_error("add -A", result.error, "git add failed"))
        return Ok(None)

    def has_staged_changes(self) -> Result[bool, GitError]:
        """True if the index differs from HEAD.

        ``git diff --cached --quiet`` exits 1 when there are differences and
        0 when there are none; anything else is an error.
        """
        result = self._run(["diff", "--cached", "--quiet"])
        match result:
            case Ok(_):
                return Ok(False)
            case Err(e) if e.returncode == 1:
                return Ok(True)
            case Err(e):
                return Err(_git_error("diff --cached", e, "git diff failed"))

    def commit(self, message: str) -> Result[str, GitError]:
        result = self._run(["commit", "-m", message])
        match result:
            case Err(e):
                return Err(_git_error("commit", e, "git commit failed"))
            case Ok(stdout):
                return Ok(stdout.strip())

    def push(self) -> Result[str, GitError]:
        """Push the current branch to its configured upstream."""
        result = self._run(["push"])
        match result:
            case Err(e):
                return Err(_git_error("push", e, "git push failed"))
            case Ok(stdout):
                return Ok(stdout.strip())

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        command = args[0] if args else ""
        timeout = (
            GIT_NETWORK_TIMEOUT_SECONDS if command in _NETWORK_COMMANDS else GIT_TIMEOUT_SECONDS
        )
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)


def _git_error(command: str, error: ProcessError, fallback: str) -> GitError:
    return GitError(
        command=command,
        message=error.stderr.strip() or error.stdout.strip() or fallback,
        returncode=error.returncode,
    )
