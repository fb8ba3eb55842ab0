"""Shared Rich consoles and message helpers.

Regular output goes to stdout; warnings and errors go to stderr so
``--json`` output stays parseable.
"""

import sys

from rich.console import Console
from rich.table import Table

from winprov.core.theme import get_theme

# Full hex colors on a real terminal, Rich's own detection otherwise
_COLOR_SYSTEM = "truecolor" if sys.stdout.isatty() else None

console = Console(theme=get_theme(), color_system=_COLOR_SYSTEM)
err_console = Console(theme=get_theme(), stderr=True, color_system=_COLOR_SYSTEM)


def create_table(title: str) -> Table:
    """Empty table in the house style; callers add the columns."""
    return Table(
        title=title,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],
    )


def print_info(message: str) -> None:
    console.print(f"[info]{message}[/]")


def print_success(message: str) -> None:
    console.print(f"[success]{message}[/]")


def print_warning(message: str) -> None:
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    err_console.print(f"[error]Error:[/] {message}")
