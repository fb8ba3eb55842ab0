"""History command for viewing past provisioning runs."""

import json
from datetime import datetime
from typing import Annotated

import typer

from winprov.core.state import StateManager
from winprov.models.history import HistoryEntry
from winprov.utils.formatting import console, create_table, print_info

app = typer.Typer(
    name="history",
    help="View history of provisioning runs.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def history(
    ctx: typer.Context,
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", min=1, help="Maximum number of entries to show."),
    ] = 20,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON."),
    ] = False,
) -> None:
    """Show recorded link, purge, install and dotfiles batches.

    Examples:
        winprov history             # Last 20 entries
        winprov history -n 50       # Last 50 entries
        winprov history --json      # JSON output for scripting
    """
    if ctx.invoked_subcommand is not None:
        return

    entries = StateManager().get_history(limit=limit)
    if not entries:
        print_info("No history entries found.")
        return

    if json_output:
        console.print_json(json.dumps([entry.to_dict() for entry in entries]))
    else:
        _print_table(entries)


def _print_table(entries: list[HistoryEntry]) -> None:
    table = create_table("History")
    table.add_column("ID", style="muted")
    table.add_column("Timestamp")
    table.add_column("Action")
    table.add_column("Items")
    table.add_column("Result", justify="center")

    for entry in entries:
        names = ", ".join(item.name for item in entry.items[:3])
        if len(entry.items) > 3:
            names += f" (+{len(entry.items) - 3} more)"
        table.add_row(
            entry.id[:8],
            _format_timestamp(entry.timestamp),
            entry.action_type.value,
            names,
            "[success]OK[/]" if entry.success else "[error]FAIL[/]",
        )

    console.print(table)


def _format_timestamp(iso_timestamp: str) -> str:
    """Format an ISO 8601 timestamp as YYYY-MM-DD HH:MM."""
    dt = datetime.fromisoformat(iso_timestamp.replace("Z", "+00:00"))
    return dt.strftime("%Y-%m-%d %H:%M")
