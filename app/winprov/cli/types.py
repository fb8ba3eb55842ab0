"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum
from pathlib import Path

import typer

from winprov.models.package import PackageManager


class ManagerChoice(str, Enum):
    """Package manager selection for CLI commands."""

    WINGET = "winget"
    CHOCO = "choco"
    SCOOP = "scoop"
    ALL = "all"


def selected_managers(choice: ManagerChoice = ManagerChoice.ALL) -> list[PackageManager]:
    """Get package managers for a CLI selection.

    Args:
        choice: The selection (a single manager or all).

    Returns:
        Package managers in installation order.
    """
    if choice == ManagerChoice.ALL:
        return list(PackageManager)
    return [PackageManager(choice.value)]


def get_manifest_option(ctx: typer.Context) -> Path | None:
    """Return the global --manifest path, if given."""
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    return obj.get("manifest")
