"""CLI package for winprov.

This package contains the Typer application and all subcommands.
"""

from winprov.cli.main import app

__all__ = ["app"]
