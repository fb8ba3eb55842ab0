"""Dotfiles repository management."""

from winprov.dotfiles.repository import RepositoryAction, RepositoryResult, ensure_repository

__all__ = ["RepositoryAction", "RepositoryResult", "ensure_repository"]
