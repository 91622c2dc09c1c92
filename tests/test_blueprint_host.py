from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest
from jinja2 import meta, nodes

from addon_blueprint import blueprint as host
from addon_blueprint.blueprints import AddonBlueprint, AppBlueprint


def test_lookup_blueprint(project) -> None:
    assert isinstance(host.lookup_blueprint("app", project), AppBlueprint)
    assert isinstance(host.lookup_blueprint("addon", project), AddonBlueprint)
    assert host.lookup_blueprint("missing", project) is None


def test_lookup_blueprint_shares_project(project) -> None:
    assert host.lookup_blueprint("app", project).project is project


def test_map_path_renames_dotfiles(project) -> None:
    app = AppBlueprint(project=project)

    assert app.map_path("gitignore", {}) == ".gitignore"
    assert app.map_path("app/app.js", {}) == "app/app.js"


def test_app_blueprint_renders_named_app(project, make_options, tmp_path: Path) -> None:
    result = AppBlueprint(project=project).render(make_options("DummyApp", ci_provider="travis"))

    out = tmp_path / "out"
    pkg = json.loads((out / "package.json").read_text())
    assert pkg["name"] == "dummy-app"
    assert "ember-welcome-page" not in pkg["devDependencies"]
    assert "modulePrefix: 'dummy-app'" in (out / "config" / "environment.js").read_text()
    assert (out / ".gitignore").exists()
    assert (out / ".travis.yml").exists()
    assert ".travis.yml" in result.paths


def test_app_blueprint_welcome_page(project, make_options, tmp_path: Path) -> None:
    AppBlueprint(project=project).render(make_options("test-app", welcome=True))

    pkg = json.loads((tmp_path / "out" / "package.json").read_text())
    assert "ember-welcome-page" in pkg["devDependencies"]
    assert not (tmp_path / "out" / ".travis.yml").exists()


def test_app_blueprint_github_ci(project, make_options, tmp_path: Path) -> None:
    AppBlueprint(project=project).render(make_options("test-app", ci_provider="github", yarn=True))

    workflow = (tmp_path / "out" / ".github" / "workflows" / "ci.yml").read_text()
    assert "yarn install --frozen-lockfile" in workflow


def test_bootstrap_runs_git_and_package_manager(project, make_options, commands) -> None:
    options = make_options("test-app", skip_git=False, skip_npm=False, yarn=True)

    asyncio.run(AppBlueprint(project=project).install(options))

    assert [(cmd, args) for cmd, args, _ in commands] == [
        ("git", ["init", "--quiet"]),
        ("yarn", ["install"]),
    ]
    assert all(cwd == options.target for _, _, cwd in commands)


def test_bootstrap_skipped(project, make_options, commands) -> None:
    asyncio.run(AppBlueprint(project=project).install(make_options("test-app")))

    assert commands == []


@pytest.mark.parametrize("blueprint_cls", [AddonBlueprint, AppBlueprint])
def test_templates_only_use_locals(blueprint_cls, project, make_options) -> None:
    blueprint = blueprint_cls(project=project)
    locals_ = blueprint.locals(make_options())

    for template_path in blueprint.template_paths():
        source = blueprint.env.loader.get_source(blueprint.env, template_path)[0]
        ast = blueprint.env.parse(source)

        assert meta.find_undeclared_variables(ast) <= set(locals_), template_path
        assert not list(ast.find_all(nodes.Filter)), template_path
