"""Link command for reconciling dotfiles links.

Makes every link mapping in the manifest point into the dotfiles clone.
"""

from typing import Annotated

import typer

from winprov.cli.display import print_link_results
from winprov.cli.types import get_manifest_option
from winprov.core.history import record_link_results
from winprov.core.manifest import require_manifest
from winprov.core.paths import get_link_backup_dir
from winprov.links.reconciler import LinkReconciler
from winprov.models.manifest import Manifest
from winprov.utils.formatting import print_info, print_warning

app = typer.Typer(
    name="link",
    help="Link dotfiles into place.",
    invoke_without_command=True,
)


def run_link_step(
    manifest: Manifest,
    *,
    dry_run: bool = False,
    overwrite: bool | None = None,
    backup: bool | None = None,
    command: str = "winprov link",
) -> bool:
    """Reconcile the manifest's links and display the results.

    Args:
        manifest: Loaded manifest.
        dry_run: Report without touching the filesystem.
        overwrite: Override the manifest's overwrite policy.
        backup: Override the manifest's backup policy.
        command: Command recorded in history.

    Returns:
        True if no mapping failed.
    """
    specs = manifest.get_link_specs()
    if not specs:
        print_info("No links configured in manifest.")
        return True

    use_overwrite = manifest.links.overwrite if overwrite is None else overwrite
    use_backup = manifest.links.backup if backup is None else backup

    reconciler = LinkReconciler(
        overwrite=use_overwrite,
        dry_run=dry_run,
        backup_dir=get_link_backup_dir() if use_backup else None,
    )
    results = reconciler.reconcile_all(specs)
    print_link_results(results)

    if not dry_run:
        try:
            record_link_results(results, command=command)
        except (OSError, RuntimeError) as e:
            print_warning(f"Could not record to history: {e}")

    return not any(r.failed for r in results)


@app.callback(invoke_without_command=True)
def link(
    ctx: typer.Context,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Show what would be linked."),
    ] = False,
    overwrite: Annotated[
        bool | None,
        typer.Option(
            "--overwrite/--no-overwrite",
            help="Replace existing files at link paths (default: from manifest).",
        ),
    ] = None,
    backup: Annotated[
        bool | None,
        typer.Option(
            "--backup/--no-backup",
            help="Back up replaced entries (default: from manifest).",
        ),
    ] = None,
) -> None:
    """Create links from live config paths into the dotfiles clone.

    Mappings whose target does not exist are skipped; existing files
    are left alone unless --overwrite is given.

    Examples:
        winprov link               # Reconcile all links
        winprov link --dry-run     # Preview
        winprov link --overwrite   # Replace existing files (backed up)
    """
    if ctx.invoked_subcommand is not None:
        return

    manifest = require_manifest(get_manifest_option(ctx))
    ok = run_link_step(manifest, dry_run=dry_run, overwrite=overwrite, backup=backup)
    if not ok:
        raise typer.Exit(code=1)
