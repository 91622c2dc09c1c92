from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from addon_blueprint import options as opts
from addon_blueprint.options import BlueprintOptions, CIProvider, Entity


def test_addon_info_defaults_location_to_dashed_name() -> None:
    info = opts.addon_info_from_options(BlueprintOptions(entity=Entity(name="MyAddon")))

    assert info.name.raw == "MyAddon"
    assert info.name.dashed == "my-addon"
    assert info.name.classified == "MyAddon"
    assert info.entity.name == "MyAddon"
    assert info.location == "my-addon"


def test_addon_info_uses_location_verbatim() -> None:
    options = BlueprintOptions(entity=Entity(name="my-addon"), addon_location="packages/Thing")

    assert opts.addon_info_from_options(options).location == "packages/Thing"


def test_addon_info_is_deterministic() -> None:
    options = BlueprintOptions(entity=Entity(name="@scope/my_addon"))

    assert opts.addon_info_from_options(options) == opts.addon_info_from_options(options)


def test_addon_info_is_frozen() -> None:
    info = opts.addon_info_from_options(BlueprintOptions(entity=Entity(name="my-addon")))

    with pytest.raises(ValidationError):
        info.location = "elsewhere"


def test_test_app_info_defaults() -> None:
    info = opts.test_app_info_from_options(BlueprintOptions(entity=Entity(name="my-addon")))

    assert info.name.raw == "test-app"
    assert info.name.dashed == "test-app"
    assert info.location == "test-app"


def test_test_app_info_dashes_custom_name() -> None:
    options = BlueprintOptions(entity=Entity(name="my-addon"), test_app_name="DummyApp")
    info = opts.test_app_info_from_options(options)

    assert info.name.raw == "DummyApp"
    assert info.name.dashed == "dummy-app"
    assert info.location == "dummy-app"


def test_test_app_info_location_override() -> None:
    options = BlueprintOptions(
        entity=Entity(name="my-addon"), test_app_name="docs", test_app_location="apps/docs-site"
    )

    assert opts.test_app_info_from_options(options).location == "apps/docs-site"


def test_test_app_path_is_inside_target() -> None:
    options = BlueprintOptions(entity=Entity(name="my-addon"), target="/tmp/x", test_app_name=None)

    assert opts.test_app_path(options) == Path("/tmp/x/test-app")


def test_without_addon_options_resets_addon_only_options() -> None:
    options = BlueprintOptions(
        entity=Entity(name="my-addon"),
        yarn=True,
        addon_location="packages/my-addon",
        test_app_location="apps/test",
        test_app_name="tests-app",
        release_it=True,
        vitest=True,
    )

    stripped = opts.without_addon_options(options, welcome=True)

    assert stripped.addon_location is None
    assert stripped.test_app_location is None
    assert stripped.test_app_name is None
    assert stripped.release_it is False
    assert stripped.vitest is False
    assert stripped.yarn is True
    assert stripped.welcome is True
    assert stripped.entity.name == "my-addon"


def test_from_yaml_accepts_aliases_and_overrides_win() -> None:
    content = """
entity:
  name: from-file
ciProvider: travis
addonLocation: packages/from-file
yarn: true
"""
    options = BlueprintOptions.from_yaml(content, ci_provider="github", entity={"name": "cli"})

    assert options.entity.name == "cli"
    assert options.ci_provider == CIProvider.GITHUB
    assert options.addon_location == "packages/from-file"
    assert options.yarn is True
    assert options.package_manager == "yarn"


def test_to_yaml_uses_aliases() -> None:
    options = BlueprintOptions(entity=Entity(name="my-addon"), ci_provider="github", release_it=True)
    content = options.to_yaml()

    assert "ciProvider: github" in content
    assert "releaseIt: true" in content
    assert "addonLocation" not in content
