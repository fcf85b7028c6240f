from __future__ import annotations

import shutil
from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.git.repository import Repository
from relkit.output.console import ConsoleProtocol
from relkit.release import gh
from relkit.release.errors import EnvError, NotAuthenticated, NotAVersionControlRoot, ToolMissing


def validate_environment(*, root: Path, console: ConsoleProtocol) -> Result[None, EnvError]:
    """Read-only preconditions: git checkout, gh installed, gh logged in."""
    if shutil.which("git") is None:
        return Err(ToolMissing(tool="git", hint="Install git: https://git-scm.com/downloads"))

    if not Repository(root).is_work_tree():
        return Err(NotAVersionControlRoot(path=root))

    if not gh.gh_available():
        return Err(ToolMissing(tool="gh", hint=gh.GH_INSTALL_HINT))

    if not gh.gh_authenticated(root=root):
        return Err(NotAuthenticated())

    console.success("environment: git repository, gh authenticated")
    return Ok(None)
