"""Shared Rich display functions for results.

Provides reusable table builders and summary printers for link,
purge, install and dotfiles results across CLI commands.
"""

from winprov.dotfiles.repository import RepositoryResult
from winprov.links.models import LinkOutcome, LinkResult, LinkSummary
from winprov.models.action import ActionResult
from winprov.purge.models import PurgeSummary
from winprov.utils.formatting import (
    console,
    create_table,
    print_error,
    print_info,
    print_success,
    print_warning,
)

_OUTCOME_LABELS: dict[LinkOutcome, str] = {
    LinkOutcome.CREATED: "[created]created[/]",
    LinkOutcome.ALREADY_CORRECT: "[unchanged]ok[/]",
    LinkOutcome.SKIPPED_TARGET_MISSING: "[muted]no target[/]",
    LinkOutcome.SKIPPED_EXISTS: "[skipped]exists[/]",
    LinkOutcome.FAILED: "[error]failed[/]",
}


def print_link_results(results: list[LinkResult]) -> None:
    """Display link results as a table followed by a summary line.

    Args:
        results: Results of a reconcile batch.
    """
    dry_run = any(r.dry_run for r in results)
    table = create_table("Links (Dry Run)" if dry_run else "Links")
    table.add_column("Status", width=10, justify="center")
    table.add_column("Path", no_wrap=True)
    table.add_column("Target")
    table.add_column("Details", style="muted")

    for r in results:
        if r.error:
            detail = r.error
        elif r.backup_path:
            detail = f"backup: {r.backup_path}"
        elif r.kind is not None:
            detail = r.kind.value
        else:
            detail = ""
        table.add_row(_OUTCOME_LABELS[r.outcome], r.path, r.target, detail)

    console.print(table)

    summary = LinkSummary.from_results(results)
    parts = [
        f"{summary.count(LinkOutcome.CREATED)} created",
        f"{summary.count(LinkOutcome.ALREADY_CORRECT)} unchanged",
        f"{summary.count(LinkOutcome.SKIPPED_EXISTS)} skipped (exists)",
        f"{summary.count(LinkOutcome.SKIPPED_TARGET_MISSING)} skipped (no target)",
    ]
    if summary.has_failures:
        print_warning(", ".join(parts) + f", {summary.count(LinkOutcome.FAILED)} failed")
    else:
        print_success(", ".join(parts))
    if summary.count(LinkOutcome.SKIPPED_EXISTS):
        print_info("Use --overwrite to replace existing entries.")


def print_purge_summaries(summaries: list[PurgeSummary], dry_run: bool = False) -> None:
    """Display purge summaries, one row per pattern.

    Args:
        summaries: Summaries of a purge batch.
        dry_run: Whether the batch only enumerated entries.
    """
    table = create_table("Cleanup (Dry Run)" if dry_run else "Cleanup")
    table.add_column("Pattern", no_wrap=True)
    table.add_column("Found", justify="right")
    table.add_column("Deleted", justify="right", style="removed")
    table.add_column("Already gone", justify="right", style="muted")
    table.add_column("Failed", justify="right")

    for s in summaries:
        failed = f"[error]{s.failed}[/]" if s.failed else "0"
        if s.refused:
            failed = "[error]refused[/]"
        table.add_row(s.pattern, str(s.requested), str(s.deleted), str(s.already_gone), failed)

    console.print(table)

    for s in summaries:
        if s.refused:
            print_error(s.refused)
        for error in s.errors:
            console.print(f"  [muted]{error}[/]")

    if dry_run:
        found = sum(s.requested for s in summaries)
        print_info(f"Dry-run: {found} entries would be deleted.")
        return

    removed = sum(s.removed_total for s in summaries)
    failed_total = sum(s.failed for s in summaries)
    if failed_total or any(s.refused for s in summaries):
        print_warning(f"{removed} entries removed, {failed_total} could not be deleted")
    else:
        print_success(f"{removed} entries removed.")


def print_install_results(results: list[ActionResult]) -> None:
    """Display package install results.

    Args:
        results: Results of an install batch.
    """
    table = create_table("Packages")
    table.add_column("Status", width=8, justify="center")
    table.add_column("Manager", width=8)
    table.add_column("Package", no_wrap=True)
    table.add_column("Message", style="muted")

    for r in results:
        if r.dry_run:
            status = "[info]dry-run[/]"
            message = r.message or ""
        elif r.success:
            status = "[success]OK[/]"
            message = r.message or ""
        else:
            status = "[error]FAIL[/]"
            message = r.error or "Unknown error"
        table.add_row(status, r.manager.value, r.package.id, message)

    console.print(table)

    success_count = sum(1 for r in results if r.success)
    fail_count = sum(1 for r in results if r.failed)
    if fail_count == 0:
        print_success(f"All {success_count} package(s) processed successfully.")
    else:
        print_warning(f"{success_count} succeeded, {fail_count} failed")


def print_repository_result(result: RepositoryResult) -> None:
    """Display the outcome of a dotfiles clone or pull.

    Args:
        result: Result of ensuring the repository.
    """
    if result.dry_run and result.success:
        print_info(f"Dry-run: would {result.action.value} {result.repository} into {result.path}")
    elif result.success:
        print_success(f"Dotfiles {result.action.value} complete: {result.path}")
    else:
        print_error(f"Dotfiles {result.action.value} failed: {result.error}")
