"""Built-in blueprints. Importing this package registers them."""

from addon_blueprint.blueprints.addon import AddonBlueprint
from addon_blueprint.blueprints.app import AppBlueprint

__all__ = ["AddonBlueprint", "AppBlueprint"]
