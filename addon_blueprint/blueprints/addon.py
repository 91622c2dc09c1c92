"""
Addon Blueprint - The default blueprint for Embroider v2 addons

Renders the addon monorepo, then composes the app blueprint to generate a
test app next to the addon and adapts it for testing the addon.
"""

from __future__ import annotations

import asyncio
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

from addon_blueprint import __version__
from addon_blueprint.blueprint import (
    TEMPLATES_DIR,
    Blueprint,
    GenerationResult,
    register_blueprint,
)
from addon_blueprint.ci import ci_config
from addon_blueprint.errors import SilentError
from addon_blueprint.manifest import update_test_app_package_json
from addon_blueprint.options import (
    BlueprintOptions,
    CIProvider,
    Entity,
    TestAppInfo,
    addon_info_from_options,
    test_app_info_from_options,
    test_app_path,
    without_addon_options,
)
from addon_blueprint.overrides import override_test_app_files
from addon_blueprint.process import run_command
from addon_blueprint.project import Project

logger = logging.getLogger(__name__)

OVERRIDES_DIR = "test-app-overrides"

# The nested app writes its CI config here; the real one lives at the root.
TEST_APP_CI_PROVIDER = CIProvider.TRAVIS
TEST_APP_CI_CONFIG = ".travis.yml"

# Used for the root CI config when no provider was chosen
DEFAULT_CI_PROVIDER = CIProvider.GITHUB

INDENT = "\n            "
OUTDENT = "\n          "


# ═══════════════════════════════════════════════════════════════════════════
# TEMPLATE VARIABLES
# ═══════════════════════════════════════════════════════════════════════════


def format_blueprint_options(options: BlueprintOptions) -> str:
    """
    The options list recorded in config/ember-cli-update.json.

    Empty unless welcome, yarn or a CI provider was chosen. The leading
    indent and trailing outdent line the flags up inside the template's
    "options": [...] array.
    """
    if not (options.welcome or options.yarn or options.ci_provider):
        return ""

    flags = [
        options.welcome and '"--welcome"',
        options.yarn and '"--yarn"',
        options.vitest and '"--vitest"',
        options.ci_provider and f'"--ci-provider={CIProvider(options.ci_provider).value}"',
        options.addon_location and f'"--addon-location={options.addon_location}"',
        options.test_app_location and f'"--test-app-location={options.test_app_location}"',
        options.test_app_name and f'"--test-app-name={options.test_app_name}"',
        options.release_it and '"--release-it"',
    ]
    return INDENT + f",{INDENT}".join(flag for flag in flags if flag) + OUTDENT


def path_from_addon_to_root(location: str) -> str:
    """'packages/my-addon' -> '../..'"""
    return "/".join(".." for _ in location.split("/"))


def build_locals(
    options: BlueprintOptions,
    now: datetime | None = None,
    blueprint_version: str = __version__,
) -> dict[str, Any]:
    """Template variables for the addon blueprint's files."""
    now = now or datetime.now()
    addon_info = addon_info_from_options(options)
    test_app_info = test_app_info_from_options(options)

    return {
        "addonInfo": addon_info,
        "testAppInfo": test_app_info,
        "addonName": addon_info.name.dashed,
        "addonNamespace": addon_info.name.classified,
        "blueprintVersion": blueprint_version,
        "year": now.year,
        "yarn": options.yarn,
        "packageManager": options.package_manager,
        "vitest": options.vitest,
        "welcome": options.welcome,
        "releaseIt": options.release_it,
        "blueprint": "addon",
        "blueprintOptions": format_blueprint_options(options),
        "ciProvider": options.ci_provider,
        "pathFromAddonToRoot": path_from_addon_to_root(addon_info.location),
    }


def file_map_tokens(locals_: dict[str, Any]) -> dict[str, Callable[[], str]]:
    addon_info = locals_["addonInfo"]
    test_app_info = locals_["testAppInfo"]

    return {
        "__addonLocation__": lambda: addon_info.location,
        "__testAppLocation__": lambda: test_app_info.location,
    }


def app_options_for(
    options: BlueprintOptions,
    test_app_info: TestAppInfo,
    app_path: Path,
) -> BlueprintOptions:
    """Options for the nested app blueprint."""
    return without_addon_options(
        options,
        target=str(app_path),
        skip_npm=True,
        skip_git=True,
        entity={"name": test_app_info.name.raw},
        name=test_app_info.name.raw,
        raw_name=test_app_info.name.raw,
        ci_provider=TEST_APP_CI_PROVIDER,
        welcome=False,
    )


# ═══════════════════════════════════════════════════════════════════════════
# BLUEPRINT
# ═══════════════════════════════════════════════════════════════════════════


@register_blueprint("addon")
class AddonBlueprint(Blueprint):
    """
    Generates a v2 addon monorepo: the addon, a root workspace and a
    test app produced by the app blueprint.
    """

    description = "The default blueprint for Embroider v2 addons."
    files_dir = TEMPLATES_DIR / "addon"

    def normalize_entity_name(self, entity_name: str | None) -> str:
        entity_name = super().normalize_entity_name(entity_name)

        if self.project.is_ember_cli_project() and not self.project.is_ember_cli_addon():
            raise SilentError("Generating an addon in an existing ember-cli project is not supported.")

        return entity_name

    def locals(self, options: BlueprintOptions, now: datetime | None = None) -> dict[str, Any]:
        return build_locals(options, now)

    def file_map_tokens(self, locals_: dict[str, Any]) -> dict[str, Callable[[], str]]:
        return file_map_tokens(locals_)

    def extra_files(self, options: BlueprintOptions) -> list[tuple[str, str]]:
        provider = options.ci_provider or DEFAULT_CI_PROVIDER
        return [ci_config(provider, options.package_manager)]

    def plan_files(self, options: BlueprintOptions) -> list[str]:
        """
        Paths install() leaves behind, test app included.

        Override files are listed at their place in the test app, and the
        test app's own CI config is left out.
        """
        prefix = f"{OVERRIDES_DIR}/"
        planned = super().plan_files(options)
        paths = [p for p in planned if not p.startswith(prefix)]

        app_blueprint = self.lookup_blueprint("app")
        if app_blueprint is None:
            return paths

        test_app_info = test_app_info_from_options(options)
        nested = app_options_for(options, test_app_info, test_app_path(options))
        test_app_files = {p for p in app_blueprint.plan_files(nested) if p != TEST_APP_CI_CONFIG}
        test_app_files.update(p[len(prefix):] for p in planned if p.startswith(prefix))

        return paths + [f"{test_app_info.location}/{p}" for p in sorted(test_app_files)]

    async def after_install(self, options: BlueprintOptions) -> None:
        app_blueprint = self.lookup_blueprint("app")

        if app_blueprint is None:
            raise SilentError("Cannot find app blueprint for generating test-app!")

        test_app_info = test_app_info_from_options(options)
        app_path = test_app_path(options)

        await app_blueprint.install(app_options_for(options, test_app_info, app_path))

        addon_name = addon_info_from_options(options).name.dashed
        tasks = [
            self.update_test_app_package_json(app_path / "package.json", addon_name),
            self.override_test_app_files(app_path, Path(options.target) / OVERRIDES_DIR),
            asyncio.to_thread(os.unlink, app_path / TEST_APP_CI_CONFIG),
        ]

        if options.vitest:
            # not a registered blueprint, so it is installed through the ember CLI
            tasks.append(
                run_command(
                    "ember",
                    ["new", "tests", "-b", "vitest-blueprint", "--skip-git", "--skip-npm"],
                    cwd=options.target,
                )
            )

        if options.release_it:
            tasks.append(self.setup_release_it(options.target))

        await asyncio.gather(*tasks)
        logger.info("Test app ready in %s", app_path)

    async def update_test_app_package_json(self, package_json_path: Path, addon_name: str) -> None:
        await asyncio.to_thread(update_test_app_package_json, package_json_path, addon_name)

    async def override_test_app_files(self, app_path: Path, overrides_path: Path) -> None:
        await asyncio.to_thread(override_test_app_files, app_path, overrides_path)

    async def setup_release_it(self, root_path: str | Path) -> None:
        await run_command(
            "create-rwjblue-release-it-setup",
            ["--no-install"],
            cwd=root_path,
            prefer_local=True,
            local_dir=Path(__file__).parent,
        )


# ═══════════════════════════════════════════════════════════════════════════
# PUBLIC API
# ═══════════════════════════════════════════════════════════════════════════


def generate_addon(
    options: BlueprintOptions,
    project: Project | None = None,
) -> GenerationResult:
    """
    Generate an addon monorepo into options.target.

    Args:
        options: Blueprint options; entity.name is the addon name
        project: Project the command runs in. Defaults to the working directory

    Returns:
        GenerationResult with the files rendered by the addon blueprint
    """
    blueprint = AddonBlueprint(project=project)
    name = blueprint.normalize_entity_name(options.entity.name)
    options = options.model_copy(update={"entity": Entity(name=name)})
    return asyncio.run(blueprint.install(options))
