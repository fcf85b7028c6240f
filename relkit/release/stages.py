"""Release stages after the descriptor exists.

Each stage prints the commands it runs (dimmed), then returns early when the
descriptor is a dry run. No collaborator is invoked before that check, so
a dry run never touches the workspace or GitHub. The architecture tests
enforce this for every function listed in ``STAGES``.
"""

from __future__ import annotations

import shlex
from pathlib import Path

from relkit.core.config import ReleaseSettings
from relkit.core.result import Err, Ok, Result
from relkit.git.repository import Repository
from relkit.output.console import ConsoleProtocol, Style
from relkit.platform.process import run_silent
from relkit.release import gh
from relkit.release.errors import (
    ArtifactNotFound,
    BuildError,
    BuildFailed,
    CollisionError,
    CommitFailed,
    PackagingFailed,
    PublishError,
    PushFailed,
    ReleaseAlreadyExists,
    ReleaseCreateError,
    ReleaseCreateFailed,
    ReleaseLookupFailed,
    TagAlreadyExists,
    TagLookupFailed,
    UploadError,
    UploadFailed,
)
from relkit.release.model import ReleaseDescriptor, ReleaseHandle


def _show(console: ConsoleProtocol, cmd: list[str] | tuple[str, ...]) -> None:
    console.print(f"$ {shlex.join(cmd)}", Style.DIM)


def check_collision(
    descriptor: ReleaseDescriptor,
    *,
    repo: Repository,
    console: ConsoleProtocol,
) -> Result[None, CollisionError]:
    tag = descriptor.tag
    console.header(f"Checking that {tag} is unused")
    if descriptor.dry_run:
        console.info(f"would verify no local tag or GitHub release named {tag}")
        return Ok(None)

    local = repo.tag_exists(tag)
    if isinstance(local, Err):
        return Err(TagLookupFailed(tag=tag, detail=local.error.message))
    if local.value:
        return Err(TagAlreadyExists(tag=tag))

    remote = gh.release_exists(root=descriptor.root, tag=tag)
    if isinstance(remote, Err):
        return Err(ReleaseLookupFailed(tag=tag, detail=remote.error.detail))
    if remote.value:
        return Err(ReleaseAlreadyExists(tag=tag))

    console.success(f"{tag} is free locally and on GitHub")
    return Ok(None)


def build_and_package(
    descriptor: ReleaseDescriptor,
    *,
    settings: ReleaseSettings,
    console: ConsoleProtocol,
) -> Result[Path, BuildError]:
    """Build, package, then make sure the artifact really exists."""
    build = settings.build
    package = settings.package
    artifact = descriptor.artifact_path

    console.header("Building")
    _show(console, build.command)
    _show(console, package.command)
    if descriptor.dry_run:
        console.info(f"would build, then package {descriptor.artifact_filename}")
        return Ok(artifact)

    built = run_silent(list(build.command), cwd=descriptor.root, timeout=build.timeout)
    if isinstance(built, Err):
        return Err(BuildFailed(returncode=built.error.returncode, detail=built.error.stderr))
    console.success("build succeeded")

    answer = f"{package.confirm}\n" if package.confirm is not None else None
    packaged = run_silent(
        list(package.command),
        cwd=descriptor.root,
        input=answer,
        timeout=package.timeout,
    )
    if isinstance(packaged, Err):
        return Err(
            PackagingFailed(returncode=packaged.error.returncode, detail=packaged.error.stderr)
        )

    # Some packagers exit 0 without writing anything.
    if not artifact.is_file():
        return Err(ArtifactNotFound(path=artifact))

    console.success(f"packaged {descriptor.artifact_filename}")
    return Ok(artifact)


def publish_state(
    descriptor: ReleaseDescriptor,
    *,
    repo: Repository,
    console: ConsoleProtocol,
) -> Result[bool, PublishError]:
    """Commit pending changes (if any) and push.

    Returns:
        Ok(True) if a commit was created, Ok(False) if there was nothing to commit.
    """
    console.header("Committing and pushing changes")
    _show(console, ["git", "add", "-A"])
    _show(console, ["git", "commit", "-m", descriptor.commit_message])
    _show(console, ["git", "push"])
    if descriptor.dry_run:
        console.info("would commit and push (only after a successful build)")
        return Ok(False)

    staged = repo.stage_all()
    if isinstance(staged, Err):
        return Err(CommitFailed(detail=staged.error.message))

    pending = repo.has_staged_changes()
    if isinstance(pending, Err):
        return Err(CommitFailed(detail=pending.error.message))

    committed = False
    if pending.value:
        commit = repo.commit(descriptor.commit_message)
        if isinstance(commit, Err):
            return Err(CommitFailed(detail=commit.error.message))
        committed = True
        console.success(f"committed: {descriptor.commit_message}")
    else:
        console.warning("No changes to commit")

    pushed = repo.push()
    if isinstance(pushed, Err):
        return Err(PushFailed(detail=pushed.error.message))
    console.success("pushed to upstream")
    return Ok(committed)


def create_release(
    descriptor: ReleaseDescriptor,
    *,
    console: ConsoleProtocol,
) -> Result[ReleaseHandle, ReleaseCreateError]:
    tag = descriptor.tag
    cmd = ["gh", "release", "create", tag, "--title", descriptor.title, "--notes", descriptor.notes]
    if descriptor.draft:
        cmd.append("--draft")

    console.header(f"Creating {'draft ' if descriptor.draft else ''}GitHub release {tag}")
    _show(console, cmd)
    if descriptor.dry_run:
        kind = "DRAFT GitHub release" if descriptor.draft else "GitHub release"
        console.info(f"would create {kind} with tag: {tag}")
        return Ok(ReleaseHandle(tag=tag, draft=descriptor.draft))

    created = gh.create_release(
        root=descriptor.root,
        tag=tag,
        title=descriptor.title,
        notes=descriptor.notes,
        draft=descriptor.draft,
    )
    if isinstance(created, Err):
        return Err(ReleaseCreateFailed(tag=tag, detail=created.error.detail))

    console.success("GitHub release created")
    return Ok(ReleaseHandle(tag=tag, draft=descriptor.draft, url=created.value or None))


def upload_artifact(
    descriptor: ReleaseDescriptor,
    handle: ReleaseHandle,
    *,
    console: ConsoleProtocol,
) -> Result[None, UploadError]:
    artifact = descriptor.artifact_path
    console.header("Uploading package to release")
    _show(console, ["gh", "release", "upload", handle.tag, descriptor.artifact_filename])
    if descriptor.dry_run:
        console.info(f"would upload {descriptor.artifact_filename} to the release")
        return Ok(None)

    uploaded = gh.upload_asset(root=descriptor.root, tag=handle.tag, path=artifact)
    if isinstance(uploaded, Err):
        return Err(UploadFailed(tag=handle.tag, path=artifact, detail=uploaded.error.detail))

    console.success("package uploaded")
    return Ok(None)


STAGES = (
    check_collision,
    build_and_package,
    publish_state,
    create_release,
    upload_artifact,
)
