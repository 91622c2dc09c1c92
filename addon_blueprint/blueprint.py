"""
Addon Blueprint Host - Template-based blueprint installation

Renders a blueprint's files/ directory with Jinja2, renames paths through
file map tokens, then runs the blueprint's post-install hook and the
git/package-manager bootstrap.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

from jinja2 import Environment, FileSystemLoader, select_autoescape

from addon_blueprint.options import BlueprintOptions
from addon_blueprint.process import run_command
from addon_blueprint.project import Project
from addon_blueprint.strings import normalize_entity_name

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


# ═══════════════════════════════════════════════════════════════════════════
# GENERATED FILE TRACKING
# ═══════════════════════════════════════════════════════════════════════════


@dataclass
class GeneratedFile:
    """Represents a generated file."""

    path: str  # Relative path from the target directory
    content: str
    template: str | None = None  # Source template path


@dataclass
class GenerationResult:
    """Result of a blueprint installation."""

    files: list[GeneratedFile] = field(default_factory=list)

    @property
    def paths(self) -> list[str]:
        return [f.path for f in self.files]


# ═══════════════════════════════════════════════════════════════════════════
# JINJA ENVIRONMENT SETUP
# ═══════════════════════════════════════════════════════════════════════════


def create_jinja_env(templates_dir: Path) -> Environment:
    """Create the Jinja2 environment blueprints render with."""

    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )

    return env


# ═══════════════════════════════════════════════════════════════════════════
# REGISTRY
# ═══════════════════════════════════════════════════════════════════════════


_REGISTRY: dict[str, type["Blueprint"]] = {}


def register_blueprint(name: str) -> Callable[[type["Blueprint"]], type["Blueprint"]]:
    """Class decorator making a blueprint discoverable by name."""

    def decorator(cls: type["Blueprint"]) -> type["Blueprint"]:
        cls.name = name
        _REGISTRY[name] = cls
        return cls

    return decorator


def lookup_blueprint(name: str, project: Project | None = None) -> "Blueprint | None":
    """Return an instance of the blueprint registered as name, or None."""
    import addon_blueprint.blueprints  # noqa: F401  (registers built-in blueprints)

    cls = _REGISTRY.get(name)
    if cls is None:
        return None
    return cls(project=project)


# ═══════════════════════════════════════════════════════════════════════════
# BLUEPRINT
# ═══════════════════════════════════════════════════════════════════════════


class Blueprint:
    """
    Base class for blueprints.

    Subclasses point files_dir at a directory of Jinja2 templates and
    override locals(), file_map_tokens() and after_install() as needed.
    """

    name = "blueprint"
    description = ""
    files_dir: Path = TEMPLATES_DIR

    # Files shipped under another name so packaging keeps them
    renamed_files = {"gitignore": ".gitignore"}

    def __init__(self, project: Project | None = None):
        self.project = project if project is not None else Project.from_dir()
        self.env = create_jinja_env(self.files_dir)

    def lookup_blueprint(self, name: str) -> "Blueprint | None":
        return lookup_blueprint(name, self.project)

    def normalize_entity_name(self, entity_name: str | None) -> str:
        return normalize_entity_name(entity_name)

    def locals(self, options: BlueprintOptions, now: datetime | None = None) -> dict[str, Any]:
        """Template variables. Override to add blueprint-specific ones."""
        return {"options": options}

    def file_map_tokens(self, locals_: dict[str, Any]) -> dict[str, Callable[[], str]]:
        """Path tokens replaced in generated file paths."""
        return {}

    def extra_files(self, options: BlueprintOptions) -> list[tuple[str, str]]:
        """(relative path, content) pairs generated in code rather than templates."""
        return []

    # ═══════════════════════════════════════════════════════════════════════
    # RENDERING
    # ═══════════════════════════════════════════════════════════════════════

    def template_paths(self) -> list[str]:
        return sorted(
            p.relative_to(self.files_dir).as_posix()
            for p in self.files_dir.rglob("*")
            if p.is_file()
        )

    def map_path(self, template_path: str, locals_: dict[str, Any]) -> str:
        """Output path for a template: tokens substituted, renamed files applied."""
        path = template_path
        for token, resolve in self.file_map_tokens(locals_).items():
            path = path.replace(token, resolve())

        parent, _, basename = path.rpartition("/")
        basename = self.renamed_files.get(basename, basename)
        return f"{parent}/{basename}" if parent else basename

    def plan_files(self, options: BlueprintOptions) -> list[str]:
        """Relative paths install() would write, without writing anything."""
        locals_ = self.locals(options)
        paths = [self.map_path(t, locals_) for t in self.template_paths()]
        paths += [path for path, _ in self.extra_files(options)]
        return paths

    def _render_template(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a Jinja2 template."""
        template = self.env.get_template(template_path)
        return template.render(**context)

    def _write_file(
        self,
        output_dir: Path,
        relative_path: str,
        content: str,
        result: GenerationResult,
        template: str | None = None,
    ) -> None:
        """Write a generated file and track it."""
        full_path = output_dir / relative_path
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text(content)

        result.files.append(GeneratedFile(path=relative_path, content=content, template=template))

    def render(self, options: BlueprintOptions) -> GenerationResult:
        """Render every template and extra file into options.target."""
        result = GenerationResult()
        locals_ = self.locals(options)
        output_dir = Path(options.target)
        output_dir.mkdir(parents=True, exist_ok=True)

        for template_path in self.template_paths():
            content = self._render_template(template_path, locals_)
            relative_path = self.map_path(template_path, locals_)
            self._write_file(output_dir, relative_path, content, result, template_path)

        for relative_path, content in self.extra_files(options):
            self._write_file(output_dir, relative_path, content, result)

        logger.debug("%s blueprint rendered %d files into %s", self.name, len(result.files), output_dir)
        return result

    # ═══════════════════════════════════════════════════════════════════════
    # INSTALL
    # ═══════════════════════════════════════════════════════════════════════

    async def install(self, options: BlueprintOptions) -> GenerationResult:
        """Render files, run after_install, then bootstrap git and packages."""
        logger.info("Installing %s blueprint into %s", self.name, options.target)
        result = self.render(options)
        await self.after_install(options)
        await self.bootstrap(options)
        return result

    async def after_install(self, options: BlueprintOptions) -> None:
        """Hook run once every file is rendered."""

    async def bootstrap(self, options: BlueprintOptions) -> None:
        if not options.skip_git:
            await run_command("git", ["init", "--quiet"], cwd=options.target)
        if not options.skip_npm:
            await run_command(options.package_manager, ["install"], cwd=options.target)
