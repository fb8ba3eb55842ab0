"""Init command implementation.

Writes a starter provision.toml for this machine.
"""

from pathlib import Path
from typing import Annotated

import typer

from winprov.cli.types import get_manifest_option
from winprov.core.manifest import (
    ManifestError,
    create_starter_manifest,
    manifest_exists,
    save_manifest,
)
from winprov.core.paths import ensure_config_dir, get_manifest_path
from winprov.models.manifest import Manifest
from winprov.utils.formatting import console, print_error, print_info, print_success, print_warning

app = typer.Typer(
    name="init",
    help="Create a starter manifest.",
    invoke_without_command=True,
)


def _show_manifest_summary(manifest: Manifest, output_path: Path) -> None:
    console.print()
    console.print("[bold]Manifest Summary[/bold]")
    console.print(f"  Machine: [info]{manifest.machine.name}[/info]")
    console.print(f"  Output: [muted]{output_path}[/muted]")
    if manifest.dotfiles is not None:
        console.print(f"  Dotfiles: [muted]{manifest.dotfiles.repository}[/muted]")
    console.print(f"  Links: [bold]{len(manifest.links.entries)}[/bold]")
    console.print(f"  Purge patterns: [bold]{len(manifest.purge.patterns)}[/bold]")
    console.print(f"  Packages: [bold]{manifest.package_count}[/bold]")
    console.print()


@app.callback(invoke_without_command=True)
def init_manifest(
    ctx: typer.Context,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output path for manifest file."),
    ] = None,
    repository: Annotated[
        str | None,
        typer.Option("--repository", "-r", help="Git URL of your dotfiles repository."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite existing manifest without prompting."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Show what would be created without writing files."),
    ] = False,
) -> None:
    """Create a starter manifest to edit by hand.

    The starter links the starship prompt configuration out of the
    dotfiles clone, purges the usual temporary directories and installs
    git and starship.

    Examples:
        winprov init                                  # Default location
        winprov init -r https://github.com/me/dotfiles
        winprov init --output my.toml --force
    """
    if ctx.invoked_subcommand is not None:
        return

    output_path = output or get_manifest_option(ctx) or get_manifest_path()

    if manifest_exists(output_path):
        if dry_run:
            print_warning(f"Manifest already exists: {output_path}")
            print_info("Would be overwritten with --force.")
        elif not force:
            print_error(f"Manifest already exists: {output_path}")
            print_info("Use --force to overwrite or specify a different path with --output.")
            raise typer.Exit(code=1)
        else:
            print_warning(f"Overwriting existing manifest: {output_path}")

    manifest = create_starter_manifest(repository)
    _show_manifest_summary(manifest, output_path)

    if dry_run:
        print_info("[DRY-RUN] No files were written.")
        return

    try:
        if output is None:
            ensure_config_dir()
        saved_path = save_manifest(manifest, output_path)
    except (ManifestError, RuntimeError) as e:
        print_error(f"Failed to save manifest: {e}")
        raise typer.Exit(code=1) from e

    print_success(f"Manifest created: {saved_path}")
    if repository is None:
        print_info("Add a [dotfiles] section so relative link targets resolve.")
