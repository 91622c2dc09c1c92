"""
Addon Blueprint Options - Pydantic models for blueprint input

Defines every option the blueprints accept, plus the addon/test-app
records derived from them. Pydantic handles validation, defaults and
the camelCase aliases used by option files.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from addon_blueprint.strings import classify, dasherize


DEFAULT_TEST_APP_NAME = "test-app"

# Options that only make sense for the addon blueprint; the nested app
# blueprint never sees them.
ADDON_OPTIONS = frozenset(
    {"addon_location", "test_app_location", "test_app_name", "release_it", "vitest"}
)


# ═══════════════════════════════════════════════════════════════════════════
# ENUMS
# ═══════════════════════════════════════════════════════════════════════════


class CIProvider(str, Enum):
    GITHUB = "github"
    TRAVIS = "travis"


# ═══════════════════════════════════════════════════════════════════════════
# OPTIONS
# ═══════════════════════════════════════════════════════════════════════════


class Entity(BaseModel):
    """Entity the blueprint is generating"""

    name: str

    model_config = {"frozen": True}


class BlueprintOptions(BaseModel):
    """Options passed to Blueprint.install"""

    entity: Entity
    target: str = "."
    name: str | None = None
    raw_name: str | None = Field(None, alias="rawName")

    # Shared with the app blueprint
    welcome: bool = False
    yarn: bool = False
    ci_provider: CIProvider | None = Field(None, alias="ciProvider")
    skip_npm: bool = Field(False, alias="skipNpm")
    skip_git: bool = Field(False, alias="skipGit")

    # Addon blueprint only
    addon_location: str | None = Field(None, alias="addonLocation")
    test_app_location: str | None = Field(None, alias="testAppLocation")
    test_app_name: str | None = Field(None, alias="testAppName")
    release_it: bool = Field(False, alias="releaseIt")
    vitest: bool = False

    model_config = {"populate_by_name": True, "frozen": True}

    @classmethod
    def from_yaml(cls, yaml_content: str, **overrides) -> "BlueprintOptions":
        """Parse YAML content into BlueprintOptions. Keyword overrides win."""
        import yaml

        aliases = {f.alias: name for name, f in cls.model_fields.items() if f.alias}
        data = yaml.safe_load(yaml_content) or {}
        data = {aliases.get(key, key): value for key, value in data.items()}
        data.update(overrides)
        return cls.model_validate(data)

    @classmethod
    def from_file(cls, path: str | Path, **overrides) -> "BlueprintOptions":
        """Load options from a YAML file"""
        content = Path(path).read_text()
        return cls.from_yaml(content, **overrides)

    def to_yaml(self) -> str:
        """Export options to YAML"""
        import yaml

        return yaml.dump(
            self.model_dump(mode="json", by_alias=True, exclude_none=True),
            default_flow_style=False,
            sort_keys=False,
        )

    @property
    def package_manager(self) -> str:
        return "yarn" if self.yarn else "npm"


# ═══════════════════════════════════════════════════════════════════════════
# DERIVED INFO
# ═══════════════════════════════════════════════════════════════════════════


class AddonName(BaseModel):
    dashed: str
    classified: str
    raw: str

    model_config = {"frozen": True}


class AddonInfo(BaseModel):
    """Addon naming and location derived from the options"""

    name: AddonName
    entity: Entity
    location: str

    model_config = {"frozen": True}


class TestAppName(BaseModel):
    dashed: str
    raw: str

    model_config = {"frozen": True}


class TestAppInfo(BaseModel):
    """Test app naming and location derived from the options"""

    name: TestAppName
    location: str

    model_config = {"frozen": True}


def addon_info_from_options(options: BlueprintOptions) -> AddonInfo:
    addon_entity = options.entity
    raw_name = addon_entity.name
    dashed_name = dasherize(raw_name)

    return AddonInfo(
        name=AddonName(dashed=dashed_name, classified=classify(raw_name), raw=raw_name),
        entity=addon_entity,
        location=options.addon_location or dashed_name,
    )


def test_app_info_from_options(options: BlueprintOptions) -> TestAppInfo:
    name = options.test_app_name or DEFAULT_TEST_APP_NAME
    dashed_name = dasherize(name)

    return TestAppInfo(
        name=TestAppName(dashed=dashed_name, raw=name),
        location=options.test_app_location or dashed_name,
    )


def test_app_path(options: BlueprintOptions) -> Path:
    """Absolute-or-relative path of the nested test app inside the target."""
    return Path(options.target) / test_app_info_from_options(options).location


def without_addon_options(options: BlueprintOptions, **overrides) -> BlueprintOptions:
    """Copy of options with the addon-only options reset, then overrides applied."""
    data = options.model_dump(exclude=set(ADDON_OPTIONS))
    data.update(overrides)
    return BlueprintOptions.model_validate(data)
