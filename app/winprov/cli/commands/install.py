"""Install command for manifest packages.

Installs every package listed in the manifest through its package
manager, one package at a time.
"""

from typing import Annotated

import typer

from winprov.cli.display import print_install_results
from winprov.cli.types import ManagerChoice, get_manifest_option, selected_managers
from winprov.core.history import record_install_results
from winprov.core.manifest import require_manifest
from winprov.models.action import ActionResult
from winprov.models.manifest import Manifest
from winprov.operators import get_operator
from winprov.utils.formatting import print_error, print_info, print_warning

app = typer.Typer(
    name="install",
    help="Install packages from the manifest.",
    invoke_without_command=True,
)


def run_install_step(
    manifest: Manifest,
    *,
    manager: ManagerChoice = ManagerChoice.ALL,
    dry_run: bool = False,
    command: str = "winprov install",
) -> bool:
    """Install manifest packages, grouped by manager.

    A missing package manager fails its packages and the remaining
    managers still run.

    Args:
        manifest: Loaded manifest.
        manager: Which manager(s) to run.
        dry_run: Report without installing.
        command: Command recorded in history.

    Returns:
        True if every package installed and every manager was available.
    """
    results: list[ActionResult] = []
    ok = True

    for package_manager in selected_managers(manager):
        packages = manifest.get_packages(package_manager)
        if not packages:
            continue
        operator = get_operator(package_manager, dry_run=dry_run)
        try:
            results.extend(operator.install(packages))
        except RuntimeError as e:
            print_error(f"{e}; skipping {len(packages)} package(s)")
            ok = False

    if not results:
        if ok:
            print_info("No packages to install.")
        return ok

    print_install_results(results)

    if not dry_run:
        try:
            record_install_results(results, command=command)
        except (OSError, RuntimeError) as e:
            print_warning(f"Could not record to history: {e}")

    return ok and not any(r.failed for r in results)


@app.callback(invoke_without_command=True)
def install(
    ctx: typer.Context,
    manager: Annotated[
        ManagerChoice,
        typer.Option(
            "--manager",
            "-m",
            help="Only install packages of this manager.",
            case_sensitive=False,
        ),
    ] = ManagerChoice.ALL,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Show what would be installed."),
    ] = False,
) -> None:
    """Install packages listed in the manifest.

    Examples:
        winprov install                   # All managers
        winprov install --manager winget  # winget packages only
        winprov install --dry-run         # Preview
    """
    if ctx.invoked_subcommand is not None:
        return

    manifest = require_manifest(get_manifest_option(ctx))
    if not run_install_step(manifest, manager=manager, dry_run=dry_run):
        raise typer.Exit(code=1)
