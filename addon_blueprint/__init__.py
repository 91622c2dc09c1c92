"""
Addon Blueprint - Scaffolding for Embroider v2 addons

Generates an addon monorepo with a nested test app, composed from an app
blueprint and patched for testing the addon.
"""

__version__ = "0.1.0"

from addon_blueprint.errors import CommandError, SilentError
from addon_blueprint.options import BlueprintOptions, AddonInfo, TestAppInfo
from addon_blueprint.blueprint import Blueprint, GenerationResult, lookup_blueprint
from addon_blueprint.blueprints import AddonBlueprint, AppBlueprint
from addon_blueprint.blueprints.addon import generate_addon

__all__ = [
    "AddonBlueprint",
    "AddonInfo",
    "AppBlueprint",
    "Blueprint",
    "BlueprintOptions",
    "CommandError",
    "GenerationResult",
    "SilentError",
    "TestAppInfo",
    "generate_addon",
    "lookup_blueprint",
]
