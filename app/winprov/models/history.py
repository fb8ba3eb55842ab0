"""History records for provisioning batches.

Every non-dry-run link, purge, install or dotfiles batch is written as
one JSON object per line to ``history.jsonl`` in the state directory.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class HistoryActionType(str, Enum):
    """Kind of batch a history entry describes."""

    LINK = "link"
    PURGE = "purge"
    INSTALL = "install"
    DOTFILES = "dotfiles"


@dataclass(frozen=True, slots=True)
class HistoryItem:
    """One path, pattern or package touched by a batch.

    Attributes:
        name: Link path, purge pattern, ``manager:id`` or checkout path.
        detail: Short outcome such as ``created`` or ``3 deleted``.
    """

    name: str
    detail: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("History item name cannot be empty")

    def to_dict(self) -> dict[str, Any]:
        if self.detail is None:
            return {"name": self.name}
        return {"name": self.name, "detail": self.detail}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryItem:
        return cls(name=data["name"], detail=data.get("detail"))


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """A recorded batch.

    Attributes:
        id: Short random hex identifier.
        timestamp: ISO 8601 time the batch was recorded, in UTC.
        action_type: Which command family produced the batch.
        items: Everything the batch touched, in batch order.
        success: False if any item in the batch failed.
        metadata: Free-form context, always including the command.
    """

    id: str
    timestamp: str
    action_type: HistoryActionType
    items: tuple[HistoryItem, ...]
    success: bool = True
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id or not self.timestamp:
            raise ValueError("History entry needs an id and a timestamp")
        if not self.items:
            raise ValueError("History entry must have at least one item")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "action_type": self.action_type.value,
            "items": [item.to_dict() for item in self.items],
            "success": self.success,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryEntry:
        """Rebuild an entry from its stored form.

        Entries written without a ``success`` flag load as successful.

        Raises:
            KeyError: A required key is missing.
            ValueError: The action type or an item is invalid.
        """
        return cls(
            id=data["id"],
            timestamp=data["timestamp"],
            action_type=HistoryActionType(data["action_type"]),
            items=tuple(map(HistoryItem.from_dict, data["items"])),
            success=data.get("success", True),
            metadata=data.get("metadata", {}),
        )

    def to_json_line(self) -> str:
        """Compact single-line JSON, without the trailing newline."""
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_json_line(cls, line: str) -> HistoryEntry:
        """Parse one line of the history file.

        Raises:
            json.JSONDecodeError: The line is not JSON.
            KeyError: A required key is missing.
            ValueError: The data is invalid.
        """
        return cls.from_dict(json.loads(line))


def create_history_entry(
    action_type: HistoryActionType,
    items: list[HistoryItem],
    success: bool = True,
    metadata: dict[str, Any] | None = None,
) -> HistoryEntry:
    """Stamp a new entry with a fresh id and the current UTC time.

    Raises:
        ValueError: ``items`` is empty.
    """
    if not items:
        raise ValueError("Cannot create history entry with no items")

    return HistoryEntry(
        id=uuid.uuid4().hex[:12],
        timestamp=datetime.now(UTC).isoformat(),
        action_type=action_type,
        items=tuple(items),
        success=success,
        metadata=dict(metadata or {}),
    )
