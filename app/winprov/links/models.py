"""Link reconciliation domain models.

This module defines the declarative link mapping consumed by the
reconciler and the per-entry results it reports back.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum


class LinkOutcome(str, Enum):
    """Outcome of reconciling a single link mapping.

    Attributes:
        CREATED: The link was created (or would be, in dry-run mode).
        ALREADY_CORRECT: The link already points at the target.
        SKIPPED_TARGET_MISSING: The target does not exist; nothing to link.
        SKIPPED_EXISTS: Something else occupies the path and overwrite is off.
        FAILED: A filesystem operation was attempted and reported an error.
    """

    CREATED = "created"
    ALREADY_CORRECT = "already_correct"
    SKIPPED_TARGET_MISSING = "skipped_target_missing"
    SKIPPED_EXISTS = "skipped_exists"
    FAILED = "failed"


class LinkKind(str, Enum):
    """Kind of filesystem link created for a target.

    Attributes:
        FILE_SYMLINK: Symbolic link to a file.
        DIRECTORY_SYMLINK: Symbolic link to a directory (non-Windows).
        JUNCTION: NTFS directory junction (Windows).
    """

    FILE_SYMLINK = "file_symlink"
    DIRECTORY_SYMLINK = "directory_symlink"
    JUNCTION = "junction"


@dataclass(frozen=True, slots=True)
class LinkSpec:
    """A declarative link mapping.

    Attributes:
        path: Location where the link must exist (the live config path).
        target: Location the link must resolve to (inside the dotfiles store).
    """

    path: str
    target: str

    def __post_init__(self) -> None:
        """Validate link mapping after initialization."""
        if not self.path:
            msg = "Link path cannot be empty"
            raise ValueError(msg)
        if not self.target:
            msg = "Link target cannot be empty"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class LinkResult:
    """Result of reconciling a single LinkSpec.

    Attributes:
        path: Expanded link path.
        target: Expanded target path.
        outcome: What happened to this mapping.
        error: Native error message when the outcome is FAILED.
        kind: Kind of link created, None when nothing was created.
        backup_path: Where a replaced entry was moved to, if backed up.
        dry_run: Whether this was a dry-run (no filesystem change).
    """

    path: str
    target: str
    outcome: LinkOutcome
    error: str | None = None
    kind: LinkKind | None = None
    backup_path: str | None = None
    dry_run: bool = False

    @property
    def failed(self) -> bool:
        """Check if reconciliation failed."""
        return self.outcome == LinkOutcome.FAILED


@dataclass(frozen=True, slots=True)
class LinkSummary:
    """Counts per outcome over a batch of link results."""

    counts: dict[LinkOutcome, int] = field(default_factory=lambda: {})

    @classmethod
    def from_results(cls, results: Iterable[LinkResult]) -> LinkSummary:
        """Aggregate a batch of results into per-outcome counts."""
        counter = Counter(r.outcome for r in results)
        return cls(counts={outcome: counter.get(outcome, 0) for outcome in LinkOutcome})

    def count(self, outcome: LinkOutcome) -> int:
        """Number of results with the given outcome."""
        return self.counts.get(outcome, 0)

    @property
    def total(self) -> int:
        """Total number of results in the batch."""
        return sum(self.counts.values())

    @property
    def has_failures(self) -> bool:
        """Check if any mapping failed."""
        return self.count(LinkOutcome.FAILED) > 0
