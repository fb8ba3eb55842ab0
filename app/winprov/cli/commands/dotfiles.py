"""Dotfiles command for cloning or updating the dotfiles repository."""

from typing import Annotated

import typer

from winprov.cli.display import print_repository_result
from winprov.cli.types import get_manifest_option
from winprov.core.history import record_dotfiles_result
from winprov.core.manifest import require_manifest
from winprov.dotfiles.repository import ensure_repository
from winprov.models.manifest import Manifest
from winprov.utils.formatting import print_info, print_warning

app = typer.Typer(
    name="dotfiles",
    help="Clone or update the dotfiles repository.",
    invoke_without_command=True,
)


def run_dotfiles_step(
    manifest: Manifest,
    *,
    dry_run: bool = False,
    command: str = "winprov dotfiles",
) -> bool:
    """Ensure the dotfiles checkout exists and is current.

    Args:
        manifest: Loaded manifest.
        dry_run: Report without running git.
        command: Command recorded in history.

    Returns:
        True if the checkout is (or would be) up to date.
    """
    if manifest.dotfiles is None:
        print_info("No dotfiles repository configured in manifest.")
        return True

    result = ensure_repository(
        manifest.dotfiles.repository,
        manifest.dotfiles.path,
        branch=manifest.dotfiles.branch,
        dry_run=dry_run,
    )
    print_repository_result(result)

    if not dry_run:
        try:
            record_dotfiles_result(result, command=command)
        except (OSError, RuntimeError) as e:
            print_warning(f"Could not record to history: {e}")

    return result.success


@app.callback(invoke_without_command=True)
def dotfiles(
    ctx: typer.Context,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Show what git would do."),
    ] = False,
) -> None:
    """Clone the dotfiles repository, or fast-forward an existing clone."""
    if ctx.invoked_subcommand is not None:
        return

    manifest = require_manifest(get_manifest_option(ctx))
    if not run_dotfiles_step(manifest, dry_run=dry_run):
        raise typer.Exit(code=1)
