"""Unit tests for history models."""

import json

import pytest
from winprov.models.history import (
    HistoryActionType,
    HistoryEntry,
    HistoryItem,
    create_history_entry,
)


class TestHistoryItem:
    """Tests for HistoryItem."""

    def test_empty_name_rejected(self) -> None:
        """Items need a name."""
        with pytest.raises(ValueError, match="cannot be empty"):
            HistoryItem(name="")

    def test_detail_omitted_when_none(self) -> None:
        """to_dict leaves out an unset detail."""
        assert HistoryItem(name="C:\\Temp\\*").to_dict() == {"name": "C:\\Temp\\*"}


class TestHistoryEntry:
    """Tests for HistoryEntry."""

    def test_requires_items(self) -> None:
        """Entries need at least one item."""
        with pytest.raises(ValueError, match="at least one item"):
            HistoryEntry(
                id="abc",
                timestamp="2026-01-15T10:00:00+00:00",
                action_type=HistoryActionType.PURGE,
                items=(),
            )

    def test_json_line_is_compact(self) -> None:
        """Entries serialize to a single compact line."""
        entry = create_history_entry(
            HistoryActionType.INSTALL,
            [HistoryItem(name="winget:Git.Git", detail="installed")],
            metadata={"command": "winprov install"},
        )

        line = entry.to_json_line()

        assert "\n" not in line
        assert ", " not in line
        assert json.loads(line)["action_type"] == "install"
        assert HistoryEntry.from_json_line(line) == entry

    def test_unknown_action_type_rejected(self) -> None:
        """An unknown action type raises ValueError."""
        data = {
            "id": "abc",
            "timestamp": "2026-01-15T10:00:00+00:00",
            "action_type": "remove",
            "items": [{"name": "x"}],
        }
        with pytest.raises(ValueError):
            HistoryEntry.from_dict(data)

    def test_success_defaults_to_true(self) -> None:
        """Older entries without a success flag load as successful."""
        data = {
            "id": "abc",
            "timestamp": "2026-01-15T10:00:00+00:00",
            "action_type": "link",
            "items": [{"name": "x"}],
        }
        assert HistoryEntry.from_dict(data).success is True


class TestCreateHistoryEntry:
    """Tests for create_history_entry."""

    def test_generates_id_and_timestamp(self) -> None:
        """A 12-character id and a timezone-aware timestamp are generated."""
        entry = create_history_entry(HistoryActionType.DOTFILES, [HistoryItem(name="d")])
        assert len(entry.id) == 12
        assert entry.timestamp.endswith("+00:00")
        assert entry.metadata == {}

    def test_empty_items_rejected(self) -> None:
        """No items, no entry."""
        with pytest.raises(ValueError, match="no items"):
            create_history_entry(HistoryActionType.LINK, [])
