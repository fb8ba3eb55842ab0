"""Data models for winprov.

This module exports the core data structures used throughout the application.
"""

from winprov.models.action import ActionResult
from winprov.models.history import (
    HistoryActionType,
    HistoryEntry,
    HistoryItem,
    create_history_entry,
)
from winprov.models.manifest import (
    DotfilesConfig,
    LinkEntry,
    LinksConfig,
    MachineConfig,
    Manifest,
    ManifestMeta,
    PackageEntry,
    PurgeConfig,
)
from winprov.models.package import PackageManager, PackageSpec

__all__ = [
    "ActionResult",
    "DotfilesConfig",
    "HistoryActionType",
    "HistoryEntry",
    "HistoryItem",
    "LinkEntry",
    "LinksConfig",
    "MachineConfig",
    "Manifest",
    "ManifestMeta",
    "PackageEntry",
    "PackageManager",
    "PackageSpec",
    "PurgeConfig",
    "create_history_entry",
]
