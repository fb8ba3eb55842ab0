"""Provision command running every step in order.

Installs packages, fetches dotfiles, reconciles links and purges
temporary directories, continuing past failed steps.
"""

import logging
from typing import Annotated

import typer

from winprov.cli.commands.dotfiles import run_dotfiles_step
from winprov.cli.commands.install import run_install_step
from winprov.cli.commands.link import run_link_step
from winprov.cli.commands.purge import run_purge_step
from winprov.cli.types import get_manifest_option
from winprov.core.manifest import require_manifest
from winprov.core.privilege import is_elevated
from winprov.utils.formatting import console, print_error, print_success, print_warning

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="provision",
    help="Run every provisioning step.",
    invoke_without_command=True,
)

_COMMAND = "winprov provision"


@app.callback(invoke_without_command=True)
def provision(
    ctx: typer.Context,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Show what every step would do."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip the purge confirmation prompt."),
    ] = False,
    skip_install: Annotated[
        bool,
        typer.Option("--skip-install", help="Do not install packages."),
    ] = False,
    skip_dotfiles: Annotated[
        bool,
        typer.Option("--skip-dotfiles", help="Do not clone or update dotfiles."),
    ] = False,
    skip_links: Annotated[
        bool,
        typer.Option("--skip-links", help="Do not reconcile links."),
    ] = False,
    skip_purge: Annotated[
        bool,
        typer.Option("--skip-purge", help="Do not purge temporary directories."),
    ] = False,
    require_admin: Annotated[
        bool,
        typer.Option("--require-admin", help="Abort unless running elevated."),
    ] = False,
) -> None:
    """Provision this machine from the manifest.

    Steps run in order: install, dotfiles, links, purge. A failed step
    is reported and the remaining steps still run; the exit code is 1
    if any step failed.

    Examples:
        winprov provision                  # Everything
        winprov provision --dry-run        # Preview
        winprov provision --skip-install   # Dotfiles, links and purge only
    """
    if ctx.invoked_subcommand is not None:
        return

    if require_admin and not is_elevated():
        print_error("Administrator privileges are required. Re-run from an elevated shell.")
        raise typer.Exit(code=1)

    manifest = require_manifest(get_manifest_option(ctx))
    failed: list[str] = []

    if not skip_install:
        console.rule("Packages")
        if not run_install_step(manifest, dry_run=dry_run, command=_COMMAND):
            failed.append("install")

    if not skip_dotfiles:
        console.rule("Dotfiles")
        if not run_dotfiles_step(manifest, dry_run=dry_run, command=_COMMAND):
            failed.append("dotfiles")

    if not skip_links:
        console.rule("Links")
        if not run_link_step(manifest, dry_run=dry_run, command=_COMMAND):
            failed.append("links")

    if not skip_purge:
        console.rule("Cleanup")
        requests = manifest.get_purge_requests()
        if not run_purge_step(requests, dry_run=dry_run, yes=yes, command=_COMMAND):
            failed.append("purge")

    console.print()
    if failed:
        logger.warning("Provisioning finished with failed steps: %s", ", ".join(failed))
        print_warning(f"Provisioning finished with failures in: {', '.join(failed)}")
        raise typer.Exit(code=1)
    print_success("Provisioning complete.")
