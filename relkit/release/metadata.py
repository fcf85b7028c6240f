"""Read the release version from project metadata.

Supported metadata files:
- package.json: top-level ``name`` and ``version``
- pyproject.toml: ``[project] name`` and ``version`` (static only)
"""

from __future__ import annotations

import json
import re
from pathlib import Path

from relkit.core.config import ProjectConfig
from relkit.core.result import Err, Ok, Result
from relkit.core.structured import StrDict, as_str_dict, get_str, get_table
from relkit.release.errors import MetadataError, MetadataInvalid, MetadataMissing
from relkit.release.model import ReleaseDescriptor, RunConfig

_VERSION_RE = re.compile(r"^[0-9][0-9A-Za-z.+-]*$")


def read_release_descriptor(
    *,
    root: Path,
    run: RunConfig,
    project: ProjectConfig,
) -> Result[ReleaseDescriptor, MetadataError]:
    path = root / project.metadata
    fields = _read_name_version(path)
    if isinstance(fields, Err):
        return fields
    name, version = fields.value

    if not _VERSION_RE.match(version):
        return Err(
            MetadataInvalid(
                path=path,
                reason=f"version {version!r} is not a MAJOR.MINOR.PATCH-like token",
            )
        )

    return Ok(
        ReleaseDescriptor(
            root=root,
            name=name,
            version=version,
            artifact_filename=artifact_filename(project.artifact, name=name, version=version),
            draft=run.draft,
            dry_run=run.dry_run,
        )
    )


def artifact_filename(template: str, *, name: str, version: str) -> str:
    """Render the artifact name. npm scopes are dropped (``@org/ext`` -> ``ext``)."""
    return template.format(name=name.rsplit("/", 1)[-1], version=version)


def _read_name_version(path: Path) -> Result[tuple[str, str], MetadataError]:
    if not path.is_file():
        return Err(MetadataMissing(path=path))

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        return Err(MetadataInvalid(path=path, reason=f"cannot read: {e}"))
    except UnicodeDecodeError as e:
        return Err(MetadataInvalid(path=path, reason=f"not valid UTF-8: {e}"))

    if path.name == "package.json":
        return _from_package_json(path, text)
    if path.suffix == ".toml":
        return _from_pyproject(path, text)
    return Err(MetadataInvalid(path=path, reason="unsupported metadata file"))


def _from_package_json(path: Path, text: str) -> Result[tuple[str, str], MetadataError]:
    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(MetadataInvalid(path=path, reason=f"invalid JSON: {e}"))

    data = as_str_dict(obj)
    if data is None:
        return Err(MetadataInvalid(path=path, reason="JSON root is not an object"))
    return _name_and_version(path, data)


def _from_pyproject(path: Path, text: str) -> Result[tuple[str, str], MetadataError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        return Err(MetadataInvalid(path=path, reason=f"invalid TOML: {e}"))

    data = as_str_dict(data_obj)
    project = get_table(data, "project") if data is not None else None
    if project is None:
        return Err(MetadataInvalid(path=path, reason="missing [project] table"))
    return _name_and_version(path, project)


def _name_and_version(path: Path, table: StrDict) -> Result[tuple[str, str], MetadataError]:
    name = get_str(table, "name")
    if name is None:
        return Err(MetadataInvalid(path=path, reason="missing name"))
    version = get_str(table, "version")
    if version is None:
        return Err(MetadataInvalid(path=path, reason="missing version"))
    return Ok((name, version))
