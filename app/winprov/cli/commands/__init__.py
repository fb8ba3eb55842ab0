"""CLI commands for winprov.

This package contains all subcommand implementations.
"""

from winprov.cli.commands import dotfiles, history, init, install, link, provision, purge

__all__ = ["dotfiles", "history", "init", "install", "link", "provision", "purge"]
