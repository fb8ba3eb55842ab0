"""Purge command for cleaning temporary directories.

Deletes everything matching the manifest's cleanup patterns, or the
patterns given on the command line.
"""

from typing import Annotated

import typer

from winprov.cli.display import print_purge_summaries
from winprov.cli.types import get_manifest_option
from winprov.core.history import record_purge_summaries
from winprov.core.manifest import require_manifest
from winprov.purge.engine import PurgeEngine
from winprov.purge.models import PurgeRequest
from winprov.utils.formatting import console, print_info, print_warning

app = typer.Typer(
    name="purge",
    help="Delete temporary and cache directories.",
    invoke_without_command=True,
)


def run_purge_step(
    requests: list[PurgeRequest],
    *,
    dry_run: bool = False,
    yes: bool = False,
    command: str = "winprov purge",
) -> bool:
    """Purge requests in order and display the summaries.

    Args:
        requests: Cleanup requests.
        dry_run: Only enumerate, do not delete.
        yes: Skip the confirmation prompt.
        command: Command recorded in history.

    Returns:
        True if every request completed without failures.

    Raises:
        typer.Exit: If the user declines the confirmation prompt.
    """
    if not requests:
        print_info("No cleanup patterns configured.")
        return True

    if not dry_run and not yes:
        console.print("Patterns to purge:")
        for request in requests:
            console.print(f"  [removed]{request.pattern}[/]")
        confirmed = typer.confirm(
            f"\nDelete everything matching {len(requests)} pattern(s)?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    engine = PurgeEngine(dry_run=dry_run)
    summaries = engine.purge_all(requests)
    print_purge_summaries(summaries, dry_run=dry_run)

    if not dry_run:
        try:
            record_purge_summaries(summaries, command=command)
        except (OSError, RuntimeError) as e:
            print_warning(f"Could not record to history: {e}")

    return all(s.success for s in summaries)


@app.callback(invoke_without_command=True)
def purge(
    ctx: typer.Context,
    patterns: Annotated[
        list[str] | None,
        typer.Option(
            "--pattern",
            "-p",
            help="Pattern to purge instead of the manifest's list (repeatable).",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Show how many entries would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Delete every entry matching the cleanup patterns.

    A bare directory purges its contents; glob patterns are used as-is.
    Locked files are reported and skipped.

    Examples:
        winprov purge                        # Patterns from the manifest
        winprov purge -p "%TEMP%" --yes      # Ad-hoc pattern
        winprov purge --dry-run              # Count without deleting
    """
    if ctx.invoked_subcommand is not None:
        return

    if patterns:
        requests = [PurgeRequest(pattern=p) for p in patterns]
    else:
        requests = require_manifest(get_manifest_option(ctx)).get_purge_requests()

    if not run_purge_step(requests, dry_run=dry_run, yes=yes):
        raise typer.Exit(code=1)
