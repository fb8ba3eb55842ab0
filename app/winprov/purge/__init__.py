"""Glob purge of temporary directories.

This module provides the cleanup request models, the protected-root
guard and the deepest-first purge engine.
"""

from winprov.purge.engine import PurgeEngine, force_delete, is_glob_pattern, normalize_pattern
from winprov.purge.models import PurgeItem, PurgeRequest, PurgeSummary
from winprov.purge.protected import PROTECTED_ROOTS, is_protected_root

__all__ = [
    "PROTECTED_ROOTS",
    "PurgeEngine",
    "PurgeItem",
    "PurgeRequest",
    "PurgeSummary",
    "force_delete",
    "is_glob_pattern",
    "is_protected_root",
    "normalize_pattern",
]
