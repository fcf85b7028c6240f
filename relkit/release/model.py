from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from relkit.release.errors import PipelineError


class Stage(Enum):
    """Pipeline stages, in execution order. Values are operator-facing labels."""

    ARGUMENTS = "arguments"
    ENVIRONMENT = "environment"
    METADATA = "metadata"
    COLLISION = "collision guard"
    BUILD = "build and package"
    PUBLISH = "commit and push"
    RELEASE = "release creation"
    UPLOAD = "artifact upload"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class RunConfig:
    draft: bool = False
    dry_run: bool = False
    show_help: bool = False


@dataclass(frozen=True, slots=True)
class ReleaseDescriptor:
    """Everything a stage needs to know about the release being cut.

    Built once from project metadata and the parsed flags, then passed to
    every stage. Nothing else carries release state.
    """

    root: Path
    name: str
    version: str
    artifact_filename: str
    draft: bool = False
    dry_run: bool = False

    @property
    def tag(self) -> str:
        return f"v{self.version}"

    @property
    def title(self) -> str:
        return f"Release {self.tag}"

    @property
    def notes(self) -> str:
        return f"Release {self.tag}"

    @property
    def commit_message(self) -> str:
        return f"Release {self.tag}"

    @property
    def artifact_path(self) -> Path:
        return self.root / self.artifact_filename


@dataclass(frozen=True, slots=True)
class ReleaseHandle:
    """A release that exists remotely (possibly still without its asset)."""

    tag: str
    draft: bool
    url: str | None = None


@dataclass(frozen=True, slots=True)
class Aborted:
    """Terminal failure: which stage stopped the pipeline and why."""

    stage: Stage
    error: PipelineError
