"""Append-only history file in the state directory."""

import json
import logging
from pathlib import Path

from winprov.core.paths import ensure_state_dir, get_state_dir
from winprov.models.history import HistoryEntry

logger = logging.getLogger(__name__)


class StateManager:
    """Reads and appends ``history.jsonl``.

    One JSON object per line; existing lines are never rewritten.

    Args:
        state_dir: Directory holding the history file. Defaults to the
            user state directory, resolved on every access so tests can
            redirect it through the environment.
    """

    HISTORY_FILENAME = "history.jsonl"

    def __init__(self, state_dir: Path | None = None) -> None:
        self._state_dir = state_dir

    @property
    def state_dir(self) -> Path:
        return self._state_dir or get_state_dir()

    @property
    def history_path(self) -> Path:
        return self.state_dir / self.HISTORY_FILENAME

    def record_action(self, entry: HistoryEntry) -> None:
        """Append one entry, creating the state directory on first use.

        Raises:
            RuntimeError: The default state directory cannot be created.
            OSError: The history file cannot be written.
        """
        if self._state_dir is None:
            ensure_state_dir()
        else:
            self._state_dir.mkdir(parents=True, exist_ok=True)

        with self.history_path.open("a", encoding="utf-8") as f:
            print(entry.to_json_line(), file=f)

    def get_history(self, limit: int | None = None) -> list[HistoryEntry]:
        """Return recorded entries, newest first.

        Lines that do not parse are logged and skipped.

        Args:
            limit: Return at most this many entries.
        """
        try:
            lines = self.history_path.read_text(encoding="utf-8").splitlines()
        except FileNotFoundError:
            return []

        entries: list[HistoryEntry] = []
        for number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                entries.append(HistoryEntry.from_json_line(line))
            except (json.JSONDecodeError, KeyError, ValueError) as e:
                logger.warning("Skipping corrupt history line %d: %s", number, e)

        entries.reverse()
        return entries if limit is None else entries[:limit]
