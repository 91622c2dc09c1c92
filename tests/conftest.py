from __future__ import annotations

from pathlib import Path

import pytest

from addon_blueprint.options import BlueprintOptions, Entity
from addon_blueprint.project import Project


@pytest.fixture()
def project(tmp_path: Path) -> Project:
    return Project(tmp_path)


@pytest.fixture()
def make_options(tmp_path: Path):
    def factory(name: str = "my-addon", **kwargs) -> BlueprintOptions:
        kwargs.setdefault("target", str(tmp_path / "out"))
        kwargs.setdefault("skip_npm", True)
        kwargs.setdefault("skip_git", True)
        return BlueprintOptions(entity=Entity(name=name), **kwargs)

    return factory


@pytest.fixture()
def commands(monkeypatch: pytest.MonkeyPatch) -> list[tuple[str, list[str], str]]:
    """Record external commands instead of running them."""
    calls: list[tuple[str, list[str], str]] = []

    async def fake_run_command(cmd, args, cwd, prefer_local=False, local_dir=None):
        calls.append((cmd, list(args), str(cwd)))
        return ""

    monkeypatch.setattr("addon_blueprint.blueprint.run_command", fake_run_command)
    monkeypatch.setattr("addon_blueprint.blueprints.addon.run_command", fake_run_command)
    return calls
