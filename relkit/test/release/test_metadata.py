"""Tests for relkit.release.metadata."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from relkit.core.config import ProjectConfig
from relkit.core.result import Err, Ok
from relkit.release.errors import MetadataInvalid, MetadataMissing
from relkit.release.metadata import artifact_filename, read_release_descriptor
from relkit.release.model import RunConfig


def _write_package_json(root: Path, payload: object) -> None:
    (root / "package.json").write_text(json.dumps(payload), encoding="utf-8")


class TestPackageJson:
    def test_reads_name_and_version(self, tmp_path: Path) -> None:
        _write_package_json(tmp_path, {"name": "vscode-jest-runner", "version": "1.4.0"})

        result = read_release_descriptor(root=tmp_path, run=RunConfig(), project=ProjectConfig())

        assert isinstance(result, Ok)
        d = result.value
        assert d.version == "1.4.0"
        assert d.tag == "v1.4.0"
        assert d.artifact_filename == "vscode-jest-runner-1.4.0.vsix"
        assert d.artifact_path == tmp_path / "vscode-jest-runner-1.4.0.vsix"
        assert d.commit_message == "Release v1.4.0"
        assert d.title == d.notes == "Release v1.4.0"

    def test_flags_are_copied_into_descriptor(self, tmp_path: Path) -> None:
        _write_package_json(tmp_path, {"name": "x", "version": "2.0.0"})

        result = read_release_descriptor(
            root=tmp_path, run=RunConfig(draft=True, dry_run=True), project=ProjectConfig()
        )

        assert isinstance(result, Ok)
        assert result.value.draft is True
        assert result.value.dry_run is True

    def test_missing_file(self, tmp_path: Path) -> None:
        result = read_release_descriptor(root=tmp_path, run=RunConfig(), project=ProjectConfig())
        assert result == Err(MetadataMissing(path=tmp_path / "package.json"))

    def test_invalid_json(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text("{not json", encoding="utf-8")

        result = read_release_descriptor(root=tmp_path, run=RunConfig(), project=ProjectConfig())

        assert isinstance(result, Err)
        assert isinstance(result.error, MetadataInvalid)
        assert "invalid JSON" in result.error.reason

    def test_not_utf8(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_bytes(b'{"name": "x", "version": "1\xff"}')

        result = read_release_descriptor(root=tmp_path, run=RunConfig(), project=ProjectConfig())

        assert isinstance(result, Err)
        assert isinstance(result.error, MetadataInvalid)
        assert "not valid UTF-8" in result.error.reason

    def test_missing_version(self, tmp_path: Path) -> None:
        _write_package_json(tmp_path, {"name": "x"})

        result = read_release_descriptor(root=tmp_path, run=RunConfig(), project=ProjectConfig())

        assert isinstance(result, Err)
        assert isinstance(result.error, MetadataInvalid)
        assert result.error.reason == "missing version"

    @pytest.mark.parametrize("version", ["v1.0.0", "1.0 beta", "latest"])
    def test_rejects_non_version_tokens(self, tmp_path: Path, version: str) -> None:
        _write_package_json(tmp_path, {"name": "x", "version": version})

        result = read_release_descriptor(root=tmp_path, run=RunConfig(), project=ProjectConfig())

        assert isinstance(result, Err)
        assert isinstance(result.error, MetadataInvalid)

    def test_prerelease_version_is_accepted(self, tmp_path: Path) -> None:
        _write_package_json(tmp_path, {"name": "x", "version": "1.0.0-beta.2"})

        result = read_release_descriptor(root=tmp_path, run=RunConfig(), project=ProjectConfig())

        assert isinstance(result, Ok)
        assert result.value.tag == "v1.0.0-beta.2"


class TestPyproject:
    def test_reads_project_table(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(
            '[project]\nname = "tool"\nversion = "0.3.1"\n', encoding="utf-8"
        )
        project = ProjectConfig(metadata="pyproject.toml", artifact="{name}-{version}.tar.gz")

        result = read_release_descriptor(root=tmp_path, run=RunConfig(), project=project)

        assert isinstance(result, Ok)
        assert result.value.artifact_filename == "tool-0.3.1.tar.gz"

    def test_dynamic_version_is_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(
            '[project]\nname = "tool"\ndynamic = ["version"]\n', encoding="utf-8"
        )
        project = ProjectConfig(metadata="pyproject.toml")

        result = read_release_descriptor(root=tmp_path, run=RunConfig(), project=project)

        assert isinstance(result, Err)
        assert isinstance(result.error, MetadataInvalid)

    def test_missing_project_table(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text("[tool.x]\n", encoding="utf-8")
        project = ProjectConfig(metadata="pyproject.toml")

        result = read_release_descriptor(root=tmp_path, run=RunConfig(), project=project)

        assert isinstance(result, Err)
        assert isinstance(result.error, MetadataInvalid)
        assert "[project]" in result.error.reason


def test_unsupported_metadata_file(tmp_path: Path) -> None:
    (tmp_path / "VERSION").write_text("1.0.0\n", encoding="utf-8")

    result = read_release_descriptor(
        root=tmp_path, run=RunConfig(), project=ProjectConfig(metadata="VERSION")
    )

    assert isinstance(result, Err)
    assert isinstance(result.error, MetadataInvalid)


def test_artifact_filename_drops_npm_scope() -> None:
    assert artifact_filename("{name}-{version}.vsix", name="@acme/ext", version="1.2.3") == (
        "ext-1.2.3.vsix"
    )
