"""Dotfiles link reconciliation.

This module provides the link mapping models and the reconciler that
makes the filesystem match them.
"""

from winprov.links.models import LinkKind, LinkOutcome, LinkResult, LinkSpec, LinkSummary
from winprov.links.reconciler import LinkReconciler, is_link

__all__ = [
    "LinkKind",
    "LinkOutcome",
    "LinkReconciler",
    "LinkResult",
    "LinkSpec",
    "LinkSummary",
    "is_link",
]
