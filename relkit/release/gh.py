"""GitHub CLI (gh) adapter.

Read-only queries go through ``run_gh_read`` and are retried on transient
network failures. Mutating calls (release create, upload) run exactly once.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from time import sleep

from relkit.core.result import Err, Ok, Result
from relkit.platform.process import ProcessError
from relkit.platform.process import run as run_process
from relkit.release.timeouts import (
    GH_PUBLISH_TIMEOUT_SECONDS,
    GH_READ_RETRY_ATTEMPTS,
    GH_READ_RETRY_DELAY_SECONDS,
    GH_TIMEOUT_SECONDS,
)

GH_INSTALL_HINT = "Install it from: https://cli.github.com/"


def _is_transient_gh_error(error: ProcessError) -> bool:
    text = f"{error.stderr}\n{error.stdout}".lower()
    markers = (
        "timed out",
        "timeout",
        "connection reset",
        "connection refused",
        "temporarily unavailable",
        "service unavailable",
        "bad gateway",
        "gateway timeout",
        "tls handshake timeout",
        "network is unreachable",
        "http 429",
        "http 500",
        "http 502",
        "http 503",
        "http 504",
    )
    return any(marker in text for marker in markers)


def _is_release_not_found(error: ProcessError) -> bool:
    return "release not found" in f"{error.stderr}\n{error.stdout}".lower()


def run_gh_read(
    *,
    root: Path,
    cmd: list[str],
    timeout: float = GH_TIMEOUT_SECONDS,
    retry_attempts: int = GH_READ_RETRY_ATTEMPTS,
) -> Result[str, ProcessError]:
    """Run an idempotent gh query, retrying transient failures with linear backoff."""
    attempts = max(1, retry_attempts)
    result = run_process(cmd, cwd=root, timeout=timeout)
    for attempt in range(1, attempts):
        if isinstance(result, Ok) or not _is_transient_gh_error(result.error):
            break
        sleep(GH_READ_RETRY_DELAY_SECONDS * attempt)
        result = run_process(cmd, cwd=root, timeout=timeout)
    return result


def gh_available() -> bool:
    return shutil.which("gh") is not None


def gh_authenticated(*, root: Path) -> bool:
    result = run_process(["gh", "auth", "status"], cwd=root, timeout=GH_TIMEOUT_SECONDS)
    return isinstance(result, Ok)


def release_exists(*, root: Path, tag: str) -> Result[bool, ProcessError]:
    """Ask GitHub whether a release is published (or drafted) under ``tag``."""
    result = run_gh_read(root=root, cmd=["gh", "release", "view", tag, "--json", "tagName"])
    match result:
        case Ok(_):
            return Ok(True)
        case Err(e) if _is_release_not_found(e):
            return Ok(False)
        case Err(e):
            return Err(e)


def create_release(
    *,
    root: Path,
    tag: str,
    title: str,
    notes: str,
    draft: bool,
) -> Result[str, ProcessError]:
    """Create the release; returns the URL gh prints (may be empty)."""
    cmd = ["gh", "release", "create", tag, "--title", title, "--notes", notes]
    if draft:
        cmd.append("--draft")
    result = run_process(cmd, cwd=root, timeout=GH_PUBLISH_TIMEOUT_SECONDS)
    if isinstance(result, Err):
        return result
    return Ok(result.value.strip())


def upload_asset(*, root: Path, tag: str, path: Path) -> Result[None, ProcessError]:
    result = run_process(
        ["gh", "release", "upload", tag, str(path)],
        cwd=root,
        timeout=GH_PUBLISH_TIMEOUT_SECONDS,
    )
    if isinstance(result, Err):
        return result
    return Ok(None)


def release_url(*, root: Path, tag: str) -> Result[str, ProcessError]:
    result = run_gh_read(
        root=root,
        cmd=["gh", "release", "view", tag, "--json", "url", "--jq", ".url"],
    )
    if isinstance(result, Err):
        return result
    return Ok(result.value.strip())
