"""
Addon Blueprint Manifest - package.json patching for the generated test app

Merges the bundled additions into the test app's package.json, adds the
addon itself as a devDependency and writes the result in canonical order.
"""

from __future__ import annotations

import copy
import json
import logging
import re
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

ADDITIONS_PATH = Path(__file__).parent / "additional-test-app-package.json"

# Version range used for the addon's own entry in the test app. Any
# workspace version satisfies it.
ADDON_VERSION_RANGE = "^0.0.0"


# ═══════════════════════════════════════════════════════════════════════════
# MERGING
# ═══════════════════════════════════════════════════════════════════════════


def deep_merge(dest: Any, src: Any) -> Any:
    """
    Recursively merge src into dest, in place, and return dest.

    Dicts merge key by key, lists merge index by index, any other value
    from src replaces the one in dest.
    """
    if isinstance(dest, dict) and isinstance(src, dict):
        for key, value in src.items():
            if key in dest:
                dest[key] = deep_merge(dest[key], value)
            else:
                dest[key] = copy.deepcopy(value)
        return dest

    if isinstance(dest, list) and isinstance(src, list):
        for index, value in enumerate(src):
            if index < len(dest):
                dest[index] = deep_merge(dest[index], value)
            else:
                dest.append(copy.deepcopy(value))
        return dest

    return copy.deepcopy(src)


# ═══════════════════════════════════════════════════════════════════════════
# SORTING
# ═══════════════════════════════════════════════════════════════════════════


PACKAGE_JSON_FIELD_ORDER = [
    "$schema",
    "name",
    "displayName",
    "version",
    "private",
    "description",
    "categories",
    "keywords",
    "homepage",
    "bugs",
    "repository",
    "funding",
    "license",
    "qna",
    "author",
    "maintainers",
    "contributors",
    "publisher",
    "sideEffects",
    "type",
    "imports",
    "exports",
    "main",
    "svelte",
    "umd:main",
    "jsdelivr",
    "unpkg",
    "module",
    "source",
    "jsnext:main",
    "browser",
    "react-native",
    "types",
    "typesVersions",
    "typings",
    "style",
    "example",
    "examplestyle",
    "assets",
    "bin",
    "man",
    "directories",
    "files",
    "workspaces",
    "binary",
    "scripts",
    "betterScripts",
    "contributes",
    "activationEvents",
    "husky",
    "simple-git-hooks",
    "pre-commit",
    "commitlint",
    "lint-staged",
    "config",
    "nodemonConfig",
    "browserify",
    "babel",
    "browserslist",
    "xo",
    "prettier",
    "eslintConfig",
    "eslintIgnore",
    "npmpkgjsonlint",
    "npmPackageJsonLintConfig",
    "npmpackagejsonlint",
    "release",
    "remarkConfig",
    "stylelint",
    "ava",
    "jest",
    "mocha",
    "nyc",
    "c8",
    "tap",
    "oclif",
    "resolutions",
    "dependencies",
    "devDependencies",
    "dependenciesMeta",
    "peerDependencies",
    "peerDependenciesMeta",
    "optionalDependencies",
    "bundledDependencies",
    "bundleDependencies",
    "extensionPack",
    "extensionDependencies",
    "flat",
    "packageManager",
    "engines",
    "engineStrict",
    "volta",
    "languageName",
    "os",
    "cpu",
    "preferGlobal",
    "publishConfig",
    "icon",
    "badges",
    "galleryBanner",
    "preview",
    "markdown",
    "pnpm",
]

SORTED_BY_NAME_FIELDS = {
    "dependencies",
    "devDependencies",
    "dependenciesMeta",
    "peerDependencies",
    "peerDependenciesMeta",
    "optionalDependencies",
    "resolutions",
    "engines",
}

# npm lifecycle scripts that may have pre/post hooks without being defined
DEFAULT_NPM_SCRIPTS = {
    "install",
    "pack",
    "prepare",
    "publish",
    "restart",
    "shrinkwrap",
    "start",
    "stop",
    "test",
    "uninstall",
    "version",
}

PRE_POST_REGEXP = re.compile(r"^(?:pre|post)")


def sort_scripts(scripts: dict[str, Any], pkg: dict[str, Any]) -> dict[str, Any]:
    """
    Sort scripts by name, keeping each pre<x>/post<x> hook next to <x>.

    When npm-run-all is a dependency, names keep their original order
    apart from the grouping.
    """
    names = list(scripts)
    prefixable: set[str] = set()
    keys: list[str] = []
    for name in names:
        omitted = PRE_POST_REGEXP.sub("", name)
        if omitted in DEFAULT_NPM_SCRIPTS or omitted in names:
            prefixable.add(omitted)
            keys.append(omitted)
        else:
            keys.append(name)

    uses_run_all = "npm-run-all" in (pkg.get("dependencies") or {}) or "npm-run-all" in (
        pkg.get("devDependencies") or {}
    )
    if not uses_run_all:
        keys.sort()

    order: list[str] = []
    for key in keys:
        group = [f"pre{key}", key, f"post{key}"] if key in prefixable else [key]
        order += [name for name in group if name in scripts and name not in order]
    order += sorted(name for name in scripts if name not in order)

    return {name: scripts[name] for name in order}


def sort_package_json(pkg: dict[str, Any]) -> dict[str, Any]:
    """
    Return pkg with keys in canonical package.json order.

    Known fields come first in their usual order, unknown fields follow
    alphabetically, and fields starting with '_' go last. Dependency maps
    are sorted by package name, scripts by sort_scripts.
    """
    order = {key: index for index, key in enumerate(PACKAGE_JSON_FIELD_ORDER)}
    known = sorted((k for k in pkg if k in order), key=order.__getitem__)
    unknown = sorted(k for k in pkg if k not in order and not k.startswith("_"))
    private = sorted(k for k in pkg if k not in order and k.startswith("_"))

    result: dict[str, Any] = {}
    for key in known + unknown + private:
        value = pkg[key]
        if key in SORTED_BY_NAME_FIELDS and isinstance(value, dict):
            value = dict(sorted(value.items()))
        elif key == "scripts" and isinstance(value, dict):
            value = sort_scripts(value, pkg)
        result[key] = value
    return result


# ═══════════════════════════════════════════════════════════════════════════
# TEST APP PACKAGE.JSON
# ═══════════════════════════════════════════════════════════════════════════


def load_additions(path: Path = ADDITIONS_PATH) -> dict[str, Any]:
    """Load the bundled package.json additions for the test app."""
    return json.loads(path.read_text())


def update_test_app_package_json(
    package_json_path: Path,
    addon_name: str,
    additions: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Patch the test app's package.json in place and return the new content."""
    pkg = json.loads(Path(package_json_path).read_text())
    if additions is None:
        additions = load_additions()

    deep_merge(pkg, additions)

    # the addon is a sibling workspace package, so it must be listed explicitly
    pkg.setdefault("devDependencies", {})[addon_name] = ADDON_VERSION_RANGE

    pkg = sort_package_json(pkg)
    Path(package_json_path).write_text(json.dumps(pkg, indent=2))
    logger.debug("Patched %s with %d additional fields", package_json_path, len(additions))
    return pkg
