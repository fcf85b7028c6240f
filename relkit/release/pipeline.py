"""Ordered, fail-fast release orchestration.

    ENVIRONMENT -> METADATA -> COLLISION -> BUILD -> PUBLISH -> RELEASE -> UPLOAD

The first failing stage ends the run with ``Aborted(stage, error)``; nothing
is retried and nothing is rolled back. Commit, push and release creation only
happen after the build produced the artifact, so a broken build never
consumes a tag or dirties history.

Known gaps:
- another actor can create the tag between COLLISION and RELEASE; the
  release call then fails with ReleaseCreateFailed.
- an UPLOAD failure leaves the release on GitHub without its asset.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from relkit.core.config import ReleaseSettings
from relkit.core.result import Err, Ok, Result
from relkit.git.repository import Repository
from relkit.output.console import ConsoleProtocol, Style
from relkit.release import gh
from relkit.release.environment import validate_environment
from relkit.release.errors import PipelineError
from relkit.release.metadata import read_release_descriptor
from relkit.release.model import Aborted, ReleaseDescriptor, ReleaseHandle, RunConfig, Stage
from relkit.release.stages import (
    build_and_package,
    check_collision,
    create_release,
    publish_state,
    upload_artifact,
)


def _at(stage: Stage) -> Callable[[PipelineError], Aborted]:
    def wrap(error: PipelineError) -> Aborted:
        return Aborted(stage=stage, error=error)

    return wrap


def run_release(
    *,
    root: Path,
    run: RunConfig,
    settings: ReleaseSettings,
    console: ConsoleProtocol,
) -> Result[ReleaseHandle, Aborted]:
    env = validate_environment(root=root, console=console)
    if isinstance(env, Err):
        return env.map_err(_at(Stage.ENVIRONMENT))

    desc = read_release_descriptor(root=root, run=run, project=settings.project)
    if isinstance(desc, Err):
        return desc.map_err(_at(Stage.METADATA))
    descriptor = desc.value

    console.header(f"Starting GitHub release process for version {descriptor.version}")
    if descriptor.dry_run:
        console.print("DRY RUN MODE - No changes will be made", Style.WARNING)

    repo = Repository(root)

    collision = check_collision(descriptor, repo=repo, console=console)
    if isinstance(collision, Err):
        return collision.map_err(_at(Stage.COLLISION))

    artifact = build_and_package(descriptor, settings=settings, console=console)
    if isinstance(artifact, Err):
        return artifact.map_err(_at(Stage.BUILD))

    published = publish_state(descriptor, repo=repo, console=console)
    if isinstance(published, Err):
        return published.map_err(_at(Stage.PUBLISH))

    created = create_release(descriptor, console=console)
    if isinstance(created, Err):
        return created.map_err(_at(Stage.RELEASE))
    handle = created.value

    uploaded = upload_artifact(descriptor, handle, console=console)
    if isinstance(uploaded, Err):
        return uploaded.map_err(_at(Stage.UPLOAD))

    _report_done(descriptor, handle, console=console)
    return Ok(handle)


def _report_done(
    descriptor: ReleaseDescriptor,
    handle: ReleaseHandle,
    *,
    console: ConsoleProtocol,
) -> None:
    console.newline()
    if descriptor.dry_run:
        console.success(f"Dry run for {descriptor.tag} complete, nothing was changed")
        return

    if handle.draft:
        console.success(f"Draft release {handle.tag} created successfully!")
    else:
        console.success(f"Release {handle.tag} created and published successfully!")

    url = gh.release_url(root=descriptor.root, tag=handle.tag)
    link = url.value if isinstance(url, Ok) and url.value else handle.url
    if link is None:
        console.warning(f"could not resolve the release URL; run: gh release view {handle.tag}")
        return

    label = "Review and publish at" if handle.draft else "View release at"
    console.info(f"{label}: {link}")
