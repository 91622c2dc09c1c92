from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from addon_blueprint import __version__
from addon_blueprint.cli import app

runner = CliRunner()


@pytest.fixture()
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_version() -> None:
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_new_dry_run_writes_nothing(workdir: Path) -> None:
    result = runner.invoke(app, ["new", "my-addon", "--addon-location", "packages/my-addon", "--dry-run"])

    assert result.exit_code == 0, result.output
    assert "packages/my-addon/package.json" in result.output
    assert "test-app/package.json" in result.output
    assert "test-app-overrides" not in result.output
    assert not (workdir / "my-addon").exists()


def test_new_generates_project(workdir: Path, commands) -> None:
    result = runner.invoke(
        app,
        ["new", "MyAddon", "--skip-npm", "--skip-git", "--yarn", "--ci-provider", "github"],
    )

    assert result.exit_code == 0, result.output
    out = workdir / "my-addon"
    assert (out / "my-addon" / "package.json").exists()
    pkg = json.loads((out / "test-app" / "package.json").read_text())
    assert pkg["devDependencies"]["my-addon"] == "^0.0.0"
    config = json.loads((out / "config" / "ember-cli-update.json").read_text())
    assert config["packages"][0]["blueprints"][0]["options"] == ["--yarn", "--ci-provider=github"]
    assert commands == []


def test_new_reads_config_file(workdir: Path, commands) -> None:
    config = workdir / "options.yaml"
    config.write_text("skipNpm: true\nskipGit: true\ntestAppName: docs\n")
    target = workdir / "generated"

    result = runner.invoke(app, ["new", "my-addon", "--config", str(config), "--target", str(target)])

    assert result.exit_code == 0, result.output
    assert (target / "docs" / "package.json").exists()


def test_new_inside_app_project_fails(workdir: Path) -> None:
    (workdir / "package.json").write_text(json.dumps({"devDependencies": {"ember-cli": "~5.4.0"}}))

    result = runner.invoke(app, ["new", "my-addon", "--skip-npm", "--skip-git"])

    assert result.exit_code == 1
    assert "not supported" in " ".join(result.output.split())
    assert not (workdir / "my-addon").exists()


def test_new_rejects_trailing_slash(workdir: Path) -> None:
    result = runner.invoke(app, ["new", "my-addon/", "--skip-npm", "--skip-git"])

    assert result.exit_code == 1
    assert "trailing slash" in " ".join(result.output.split())


def test_new_uses_target_from_config_file(workdir: Path, commands) -> None:
    target = workdir / "from-config"
    config = workdir / "options.yaml"
    config.write_text(f"target: {target}\nskipNpm: true\nskipGit: true\n")

    result = runner.invoke(app, ["new", "my-addon", "--config", str(config)])

    assert result.exit_code == 0, result.output
    assert (target / "my-addon" / "package.json").exists()
    assert not (workdir / "my-addon").exists()


def test_new_target_option_beats_config_file(workdir: Path, commands) -> None:
    config = workdir / "options.yaml"
    config.write_text(f"target: {workdir / 'from-config'}\nskipNpm: true\nskipGit: true\n")
    target = workdir / "from-cli"

    result = runner.invoke(app, ["new", "my-addon", "--config", str(config), "--target", str(target)])

    assert result.exit_code == 0, result.output
    assert (target / "my-addon" / "package.json").exists()
    assert not (workdir / "from-config").exists()
