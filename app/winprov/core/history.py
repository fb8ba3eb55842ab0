"""History recording for provisioning batches.

Each non-dry-run batch (links, purge, install, dotfiles) becomes one
entry in the shared history file.
"""

from collections.abc import Sequence

from winprov.core.state import StateManager
from winprov.dotfiles.repository import RepositoryResult
from winprov.links.models import LinkOutcome, LinkResult, LinkSummary
from winprov.models.action import ActionResult
from winprov.models.history import HistoryActionType, HistoryItem, create_history_entry
from winprov.purge.models import PurgeSummary


def record_link_results(
    results: Sequence[LinkResult],
    command: str = "winprov link",
    state: StateManager | None = None,
) -> None:
    """Record created and failed links to history.

    Unchanged and skipped mappings are not recorded.

    Args:
        results: Results of a reconcile batch.
        command: Command that triggered the batch.
        state: Optional StateManager (defaults to the user state dir).
    """
    changed = [r for r in results if r.outcome in (LinkOutcome.CREATED, LinkOutcome.FAILED)]
    if not changed:
        return

    summary = LinkSummary.from_results(results)
    items = [HistoryItem(name=r.path, detail=r.outcome.value) for r in changed]
    entry = create_history_entry(
        action_type=HistoryActionType.LINK,
        items=items,
        success=not summary.has_failures,
        metadata={
            "command": command,
            "counts": {outcome.value: count for outcome, count in summary.counts.items()},
        },
    )
    (state or StateManager()).record_action(entry)


def record_purge_summaries(
    summaries: Sequence[PurgeSummary],
    command: str = "winprov purge",
    state: StateManager | None = None,
) -> None:
    """Record purge summaries to history, one item per pattern.

    Args:
        summaries: Summaries of a purge batch.
        command: Command that triggered the batch.
        state: Optional StateManager (defaults to the user state dir).
    """
    if not summaries:
        return

    items = [
        HistoryItem(
            name=s.pattern,
            detail=f"{s.deleted} deleted, {s.already_gone} already gone, {s.failed} failed",
        )
        for s in summaries
    ]
    entry = create_history_entry(
        action_type=HistoryActionType.PURGE,
        items=items,
        success=all(s.success for s in summaries),
        metadata={
            "command": command,
            "deleted": sum(s.deleted for s in summaries),
            "already_gone": sum(s.already_gone for s in summaries),
            "failed": sum(s.failed for s in summaries),
        },
    )
    (state or StateManager()).record_action(entry)


def record_install_results(
    results: Sequence[ActionResult],
    command: str = "winprov install",
    state: StateManager | None = None,
) -> None:
    """Record package installs to history.

    Args:
        results: Results of an install batch.
        command: Command that triggered the batch.
        state: Optional StateManager (defaults to the user state dir).
    """
    if not results:
        return

    items = [
        HistoryItem(
            name=f"{r.manager.value}:{r.package.id}",
            detail="installed" if r.success else "failed",
        )
        for r in results
    ]
    entry = create_history_entry(
        action_type=HistoryActionType.INSTALL,
        items=items,
        success=not any(r.failed for r in results),
        metadata={"command": command},
    )
    (state or StateManager()).record_action(entry)


def record_dotfiles_result(
    result: RepositoryResult,
    command: str = "winprov dotfiles",
    state: StateManager | None = None,
) -> None:
    """Record a dotfiles clone or update to history.

    Args:
        result: Result of ensuring the repository.
        command: Command that triggered the operation.
        state: Optional StateManager (defaults to the user state dir).
    """
    entry = create_history_entry(
        action_type=HistoryActionType.DOTFILES,
        items=[HistoryItem(name=result.path, detail=result.action.value)],
        success=result.success,
        metadata={"command": command, "repository": result.repository},
    )
    (state or StateManager()).record_action(entry)
