"""
Addon Blueprint CI - CI configuration for generated projects
"""

from __future__ import annotations

from typing import Any

import yaml

from addon_blueprint.options import CIProvider


def _install_command(package_manager: str) -> str:
    return "yarn install --frozen-lockfile" if package_manager == "yarn" else "npm ci"


def _github_actions(package_manager: str, working_directory: str | None) -> dict[str, Any]:
    steps: list[dict[str, Any]] = [
        {"uses": "actions/checkout@v4"},
        {
            "name": "Setup Node.js",
            "uses": "actions/setup-node@v4",
            "with": {"node-version": "18", "cache": package_manager},
        },
        {"name": "Install dependencies", "run": _install_command(package_manager)},
        {"name": "Lint", "run": f"{package_manager} run lint"},
        {"name": "Test", "run": f"{package_manager} run test"},
    ]

    job: dict[str, Any] = {"runs-on": "ubuntu-latest", "timeout-minutes": 10, "steps": steps}
    if working_directory:
        job["defaults"] = {"run": {"working-directory": working_directory}}

    return {
        "name": "CI",
        "on": {
            "push": {"branches": ["main", "master"]},
            "pull_request": {},
        },
        "concurrency": {
            "group": "ci-${{ github.head_ref || github.ref }}",
            "cancel-in-progress": True,
        },
        "jobs": {"test": job},
    }


def _travis(package_manager: str, working_directory: str | None) -> dict[str, Any]:
    before = [f"cd {working_directory}"] if working_directory else []
    return {
        "language": "node_js",
        "node_js": ["18"],
        "dist": "focal",
        "cache": {package_manager: True},
        "branches": {"only": ["main", "master", "/^v\\d+\\.\\d+\\.\\d+/"]},
        "install": before + [_install_command(package_manager)],
        "script": [f"{package_manager} run lint", f"{package_manager} run test"],
    }


CI_PATHS = {
    CIProvider.GITHUB: ".github/workflows/ci.yml",
    CIProvider.TRAVIS: ".travis.yml",
}


def ci_config(
    provider: CIProvider | str,
    package_manager: str = "npm",
    working_directory: str | None = None,
) -> tuple[str, str]:
    """Return (relative path, YAML content) of the CI config for provider."""
    provider = CIProvider(provider)

    if provider == CIProvider.GITHUB:
        data = _github_actions(package_manager, working_directory)
    else:
        data = _travis(package_manager, working_directory)

    return CI_PATHS[provider], yaml.dump(data, default_flow_style=False, sort_keys=False)
