"""
App Blueprint - Minimal application used as the addon's test app
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from addon_blueprint import __version__
from addon_blueprint.blueprint import TEMPLATES_DIR, Blueprint, register_blueprint
from addon_blueprint.ci import ci_config
from addon_blueprint.options import BlueprintOptions
from addon_blueprint.strings import classify, dasherize


@register_blueprint("app")
class AppBlueprint(Blueprint):
    description = "The default blueprint for ember-cli projects."
    files_dir = TEMPLATES_DIR / "app"

    def locals(self, options: BlueprintOptions, now: datetime | None = None) -> dict[str, Any]:
        now = now or datetime.now()
        raw_name = options.raw_name or options.entity.name
        name = dasherize(raw_name)

        return {
            "name": name,
            "namespace": classify(raw_name),
            "modulePrefix": name,
            "blueprintVersion": __version__,
            "year": now.year,
            "welcome": options.welcome,
            "yarn": options.yarn,
            "packageManager": options.package_manager,
            "ciProvider": options.ci_provider,
        }

    def extra_files(self, options: BlueprintOptions) -> list[tuple[str, str]]:
        if options.ci_provider is None:
            return []
        return [ci_config(options.ci_provider, options.package_manager)]
