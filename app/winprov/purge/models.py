"""Glob purge domain models.

This module defines the cleanup request, the transient entries it
expands to, and the aggregate summary reported per request.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PurgeRequest:
    """A single directory-glob cleanup pattern.

    Attributes:
        pattern: Glob pattern or bare directory, possibly with
            unexpanded placeholders (e.g., ``%TEMP%`` or ``C:\\Windows\\Prefetch\\*``).
    """

    pattern: str

    def __post_init__(self) -> None:
        """Validate request data after initialization."""
        if not self.pattern or not self.pattern.strip():
            msg = "Purge pattern cannot be empty"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class PurgeItem:
    """A filesystem entry discovered by expanding a PurgeRequest.

    Attributes:
        absolute_path: Absolute path of the entry.
        is_directory: True for real directories (links count as files).
        path_length: Length of the path string, used only for ordering.
    """

    absolute_path: str
    is_directory: bool
    path_length: int


@dataclass(frozen=True, slots=True)
class PurgeSummary:
    """Aggregate result of purging one request.

    ``deleted`` and ``already_gone`` are tracked separately; callers
    that report "removed" totals use :attr:`removed_total`.

    Attributes:
        pattern: Normalized, expanded pattern that was purged.
        requested: Number of distinct entries enumerated.
        deleted: Entries this run removed.
        failed: Entries whose deletion raised an error.
        already_gone: Entries that vanished before their turn came.
        errors: Native error messages, one per failed entry.
        refused: Reason the request was refused without enumerating, if any.
    """

    pattern: str
    requested: int = 0
    deleted: int = 0
    failed: int = 0
    already_gone: int = 0
    errors: tuple[str, ...] = ()
    refused: str | None = None

    @property
    def removed_total(self) -> int:
        """Entries no longer present: deleted now or already gone."""
        return self.deleted + self.already_gone

    @property
    def success(self) -> bool:
        """Check if the request completed without failures."""
        return self.failed == 0 and self.refused is None
