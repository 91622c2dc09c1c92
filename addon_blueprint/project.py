"""
Addon Blueprint Project - Detection of the project the CLI runs in
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


class Project:
    """The package found in the working directory, if any."""

    def __init__(self, root: Path, pkg: dict[str, Any] | None = None):
        self.root = root
        self.pkg = pkg or {}

    @classmethod
    def from_dir(cls, root: str | Path | None = None) -> "Project":
        root = Path(root) if root is not None else Path.cwd()
        package_json = root / "package.json"
        pkg = json.loads(package_json.read_text()) if package_json.exists() else None
        return cls(root, pkg)

    def has_dependency(self, name: str) -> bool:
        return name in (self.pkg.get("dependencies") or {}) or name in (
            self.pkg.get("devDependencies") or {}
        )

    def is_ember_cli_project(self) -> bool:
        return self.has_dependency("ember-cli")

    def is_ember_cli_addon(self) -> bool:
        return "ember-addon" in (self.pkg.get("keywords") or [])
