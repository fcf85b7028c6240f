"""Tests for relkit.output.errors module."""

from __future__ import annotations

from pathlib import Path

import pytest

from relkit.output.console import MockConsole, Style
from relkit.output.errors import describe_error, pipeline_exit_code, print_aborted
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
from relkit.release.model import Aborted, Stage

ARTIFACT = Path("/work/artifact-1.4.0.pkg")

EVERY_VARIANT: list[PipelineError] = [
    UnknownOption(token="--force"),
    NotAVersionControlRoot(path=Path("/work")),
    ToolMissing(tool="gh", hint="Install it from: https://cli.github.com/"),
    NotAuthenticated(),
    MetadataMissing(path=Path("/work/package.json")),
    MetadataInvalid(path=Path("/work/package.json"), reason="missing version"),
    TagAlreadyExists(tag="v1.4.0"),
    ReleaseAlreadyExists(tag="v1.4.0"),
    TagLookupFailed(tag="v1.4.0", detail="fatal"),
    ReleaseLookupFailed(tag="v1.4.0", detail="HTTP 401"),
    BuildFailed(returncode=2),
    PackagingFailed(returncode=1, detail="ERROR  Missing publisher name"),
    ArtifactNotFound(path=ARTIFACT),
    CommitFailed(detail=""),
    PushFailed(detail="! [rejected]"),
    ReleaseCreateFailed(tag="v1.4.0", detail="HTTP 422"),
    UploadFailed(tag="v1.4.0", path=ARTIFACT, detail="EOF"),
]


@pytest.mark.parametrize("error", EVERY_VARIANT, ids=lambda e: type(e).__name__)
def test_every_variant_has_a_specific_message(error: PipelineError) -> None:
    message, _ = describe_error(error)
    assert message
    assert message != str(error)


def test_unknown_option_names_the_token() -> None:
    message, hint = describe_error(UnknownOption(token="--force"))
    assert message == "Unknown option: --force"
    assert hint is not None and "--help" in hint


def test_build_failure_falls_back_to_exit_code() -> None:
    message, _ = describe_error(BuildFailed(returncode=2))
    assert "exit 2" in message


def test_upload_failure_offers_retry_and_cleanup() -> None:
    message, hint = describe_error(UploadFailed(tag="v1.4.0", path=ARTIFACT, detail=""))
    assert "v1.4.0" in message
    assert hint is not None
    assert "gh release upload v1.4.0 artifact-1.4.0.pkg" in hint
    assert "gh release delete v1.4.0" in hint


def test_print_aborted_names_the_stage() -> None:
    console = MockConsole()

    print_aborted(Aborted(stage=Stage.BUILD, error=BuildFailed(returncode=1)), console)

    assert console.messages[0].startswith("error: [build and package] Build failed")
    assert console.find("hint: See the build output above")
    assert console.outputs[-1].message == "Aborting release process"
    assert console.outputs[-1].style == Style.ERROR


@pytest.mark.parametrize("stage", [Stage.ARGUMENTS, Stage.ENVIRONMENT, Stage.METADATA])
def test_prechecks_do_not_print_abort_banner(stage: Stage) -> None:
    console = MockConsole()

    print_aborted(Aborted(stage=stage, error=NotAuthenticated()), console)

    assert console.has_error()
    assert not console.find("Aborting")


@pytest.mark.parametrize("error", EVERY_VARIANT, ids=lambda e: type(e).__name__)
def test_every_abort_exits_one(error: PipelineError) -> None:
    assert pipeline_exit_code(Aborted(stage=Stage.UPLOAD, error=error)) == 1
