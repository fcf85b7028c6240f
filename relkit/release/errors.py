"""Error variants of the release pipeline.

Each stage has a closed set of failures, modelled as frozen dataclasses and
grouped into a union alias per stage. ``PipelineError`` is the union of all
of them; ``relkit.output.errors`` renders every variant.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

# Arguments


@dataclass(frozen=True, slots=True)
class UnknownOption:
    token: str


ArgumentError = UnknownOption

# Environment


@dataclass(frozen=True, slots=True)
class NotAVersionControlRoot:
    path: Path


@dataclass(frozen=True, slots=True)
class ToolMissing:
    tool: str
    hint: str


@dataclass(frozen=True, slots=True)
class NotAuthenticated:
    hint: str = "Run: gh auth login"


EnvError = NotAVersionControlRoot | ToolMissing | NotAuthenticated

# Metadata


@dataclass(frozen=True, slots=True)
class MetadataMissing:
    path: Path


@dataclass(frozen=True, slots=True)
class MetadataInvalid:
    path: Path
    reason: str


MetadataError = MetadataMissing | MetadataInvalid

# Collision guard


@dataclass(frozen=True, slots=True)
class TagAlreadyExists:
    tag: str


@dataclass(frozen=True, slots=True)
class ReleaseAlreadyExists:
    tag: str


@dataclass(frozen=True, slots=True)
class ReleaseLookupFailed:
    """Neither "found" nor "not found": gh itself failed (network, API)."""

    tag: str
    detail: str


@dataclass(frozen=True, slots=True)
class TagLookupFailed:
    tag: str
    detail: str


CollisionError = (
    TagAlreadyExists | ReleaseAlreadyExists | TagLookupFailed | ReleaseLookupFailed
)

# Build and package


@dataclass(frozen=True, slots=True)
class BuildFailed:
    returncode: int
    detail: str = ""


@dataclass(frozen=True, slots=True)
class PackagingFailed:
    returncode: int
    detail: str = ""


@dataclass(frozen=True, slots=True)
class ArtifactNotFound:
    path: Path


BuildError = BuildFailed | PackagingFailed | ArtifactNotFound

# State publication


@dataclass(frozen=True, slots=True)
class CommitFailed:
    detail: str


@dataclass(frozen=True, slots=True)
class PushFailed:
    detail: str


PublishError = CommitFailed | PushFailed

# Remote release


@dataclass(frozen=True, slots=True)
class ReleaseCreateFailed:
    tag: str
    detail: str


ReleaseCreateError = ReleaseCreateFailed


@dataclass(frozen=True, slots=True)
class UploadFailed:
    tag: str
    path: Path
    detail: str


UploadError = UploadFailed


PipelineError = (
    ArgumentError
    | EnvError
    | MetadataError
    | CollisionError
    | BuildError
    | PublishError
    | ReleaseCreateError
    | UploadError
)
