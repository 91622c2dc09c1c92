"""
Addon Blueprint CLI - Command-line interface for addon generation

Usage:
    addon-blueprint new <addon_name> [--target DIR] [options]
    addon-blueprint version
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.tree import Tree

from addon_blueprint.blueprints.addon import AddonBlueprint, generate_addon
from addon_blueprint.options import BlueprintOptions, CIProvider
from addon_blueprint.strings import dasherize

app = typer.Typer(
    name="addon-blueprint",
    help="Generate Embroider v2 addon projects with a nested test app",
    add_completion=False,
)
console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def new(
    addon_name: str = typer.Argument(..., help="Name of the addon"),
    target: Optional[Path] = typer.Option(
        None,
        "--target", "-t",
        help="Output directory (defaults to ./<addon-name>)",
        resolve_path=True,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="YAML file with default options",
        exists=True,
        dir_okay=False,
        resolve_path=True,
    ),
    yarn: Optional[bool] = typer.Option(None, "--yarn/--npm", help="Package manager to use"),
    welcome: Optional[bool] = typer.Option(None, "--welcome/--no-welcome"),
    ci_provider: Optional[CIProvider] = typer.Option(None, "--ci-provider"),
    addon_location: Optional[str] = typer.Option(None, "--addon-location"),
    test_app_location: Optional[str] = typer.Option(None, "--test-app-location"),
    test_app_name: Optional[str] = typer.Option(None, "--test-app-name"),
    release_it: Optional[bool] = typer.Option(None, "--release-it/--no-release-it"),
    vitest: Optional[bool] = typer.Option(None, "--vitest/--no-vitest"),
    skip_npm: Optional[bool] = typer.Option(None, "--skip-npm/--no-skip-npm"),
    skip_git: Optional[bool] = typer.Option(None, "--skip-git/--no-skip-git"),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be generated without writing files",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Generate an addon monorepo with a nested test app."""
    _configure_logging(verbose)

    flags = {
        "yarn": yarn,
        "welcome": welcome,
        "ci_provider": ci_provider,
        "addon_location": addon_location,
        "test_app_location": test_app_location,
        "test_app_name": test_app_name,
        "release_it": release_it,
        "vitest": vitest,
        "skip_npm": skip_npm,
        "skip_git": skip_git,
    }
    overrides = {key: value for key, value in flags.items() if value is not None}
    overrides["entity"] = {"name": addon_name}
    if target is not None:
        overrides["target"] = str(target)

    try:
        if config is not None:
            options = BlueprintOptions.from_file(config, **overrides)
        else:
            options = BlueprintOptions.model_validate(overrides)

        # a config file may name the target; otherwise ./<addon-name>
        if "target" not in options.model_fields_set:
            options = options.model_copy(update={"target": str(Path.cwd() / dasherize(addon_name))})

        if dry_run:
            rprint(f"\n[yellow]Dry run - would generate to: {options.target}[/yellow]\n")
            _show_preview(options)
            return

        result = generate_addon(options)
        rprint(f"[green]✓[/green] Generated {len(result.files)} files to {options.target}")
        _show_next_steps(options)

    except Exception as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show version."""
    from addon_blueprint import __version__
    rprint(f"addon-blueprint {__version__}")


def _show_preview(options: BlueprintOptions) -> None:
    """Show what would be generated."""
    blueprint = AddonBlueprint()
    tree = Tree(f"[bold]{options.target}[/bold]")
    for path in blueprint.plan_files(options):
        tree.add(path)
    rprint(tree)


def _show_next_steps(options: BlueprintOptions) -> None:
    """Show next steps."""
    steps = f"""
[bold]Next:[/bold]
  cd {options.target}
  {options.package_manager} install
  {options.package_manager} run start
"""
    rprint(Panel(steps, title="Done"))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
