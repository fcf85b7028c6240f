"""Shared fixtures for relkit tests."""

from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest

from relkit.core.config import CommandConfig, ProjectConfig, ReleaseSettings
from relkit.test.fakes import BUILD_CMD, PACKAGE_CMD, FakeTools


@pytest.fixture
def project(tmp_path: Path) -> Path:
    (tmp_path / "package.json").write_text(
        json.dumps({"name": "artifact", "version": "1.4.0"}), encoding="utf-8"
    )
    return tmp_path


@pytest.fixture
def settings() -> ReleaseSettings:
    return ReleaseSettings(
        project=ProjectConfig(metadata="package.json", artifact="{name}-{version}.pkg"),
        build=CommandConfig(BUILD_CMD),
        package=CommandConfig(PACKAGE_CMD, confirm="y"),
    )


@pytest.fixture
def tools(monkeypatch: pytest.MonkeyPatch, project: Path) -> FakeTools:
    from relkit.git import repository as repo_mod
    from relkit.release import gh as gh_mod
    from relkit.release import stages as stages_mod

    fake = FakeTools(root=project)
    monkeypatch.setattr(repo_mod, "run_process", fake.run)
    monkeypatch.setattr(gh_mod, "run_process", fake.run)
    monkeypatch.setattr(gh_mod, "sleep", lambda seconds: None)
    monkeypatch.setattr(stages_mod, "run_silent", fake.run_silent)
    monkeypatch.setattr(shutil, "which", lambda name: f"/usr/bin/{name}")
    return fake
