"""Error presentation.

Turns pipeline failures into one stage-identifying error line plus an
optional dim hint, and maps them to exit codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relkit.core.errors import ErrorCode
from relkit.output.console import Style
from relkit.release.errors import (
    ArtifactNotFound,
    BuildFailed,
    CommitFailed,
    MetadataInvalid,
    MetadataMissing,
    NotAuthenticated,
    NotAVersionControlRoot,
    PackagingFailed,
    PipelineError,
    PushFailed,
    ReleaseAlreadyExists,
    ReleaseCreateFailed,
    ReleaseLookupFailed,
    TagAlreadyExists,
    TagLookupFailed,
    ToolMissing,
    UnknownOption,
    UploadFailed,
)
from relkit.release.model import Stage

if TYPE_CHECKING:
    from relkit.output.console import ConsoleProtocol
    from relkit.release.model import Aborted

__all__ = ["describe_error", "pipeline_exit_code", "print_aborted"]

# Failures before anything was attempted; no "aborting" banner.
_PRECHECK_STAGES = frozenset({Stage.ARGUMENTS, Stage.ENVIRONMENT, Stage.METADATA})


def _exit_detail(returncode: int, detail: str) -> str:
    return detail.strip() or f"exit {returncode}"


def describe_error(error: PipelineError) -> tuple[str, str | None]:
    """Return (message, hint) for an error variant."""
    match error:
        case UnknownOption(token=token):
            return (f"Unknown option: {token}", "Run with --help for usage")
        case NotAVersionControlRoot(path=path):
            return (f"Not in a git repository: {path}", None)
        case ToolMissing(tool=tool, hint=hint):
            return (f"{tool}: not installed", hint)
        case NotAuthenticated(hint=hint):
            return ("GitHub CLI is not authenticated", hint)
        case MetadataMissing(path=path):
            return (f"Metadata file not found: {path}", "Set [project].metadata in relkit.toml")
        case MetadataInvalid(path=path, reason=reason):
            return (f"Cannot read version from {path.name}: {reason}", str(path))
        case TagAlreadyExists(tag=tag):
            return (
                f"Tag {tag} already exists",
                "Update the version in the metadata file or delete the existing tag",
            )
        case ReleaseAlreadyExists(tag=tag):
            return (f"Release {tag} already exists on GitHub", None)
        case TagLookupFailed(tag=tag, detail=detail):
            return (f"Could not check local tag {tag}", detail or None)
        case ReleaseLookupFailed(tag=tag, detail=detail):
            return (f"Could not check GitHub for release {tag}", detail or None)
        case BuildFailed(returncode=rc, detail=detail):
            return (f"Build failed ({_exit_detail(rc, detail)})", "See the build output above")
        case PackagingFailed(returncode=rc, detail=detail):
            return (
                f"Packaging failed ({_exit_detail(rc, detail)})",
                "See the packaging output above",
            )
        case ArtifactNotFound(path=path):
            return (
                f"Package file {path.name} not found",
                "The packaging tool exited 0 without producing it; check [project].artifact",
            )
        case CommitFailed(detail=detail):
            return ("git commit failed", detail or "Configure git user.name/user.email")
        case PushFailed(detail=detail):
            return ("Failed to push to GitHub", detail or None)
        case ReleaseCreateFailed(tag=tag, detail=detail):
            return (f"Failed to create GitHub release {tag}", detail or None)
        case UploadFailed(tag=tag, path=path, detail=detail):
            return (
                f"Failed to upload {path.name}; release {tag} exists without its package"
                + (f" ({detail})" if detail else ""),
                f"Retry: gh release upload {tag} {path.name} or remove: gh release delete {tag}",
            )
    return (str(error), None)


def print_aborted(aborted: Aborted, console: ConsoleProtocol) -> None:
    message, hint = describe_error(aborted.error)
    console.error(f"[{aborted.stage}] {message}")
    if hint:
        console.print(f"hint: {hint}", Style.DIM)
    if aborted.stage not in _PRECHECK_STAGES:
        console.print("Aborting release process", Style.ERROR)


def pipeline_exit_code(aborted: Aborted) -> int:
    """Every abort exits 1; the printed stage tells them apart."""
    del aborted
    return int(ErrorCode.FAILURE)
