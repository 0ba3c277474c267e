"""Deletion history storage.

This module provides the HistoryStore class for persisting and querying
deletion records in a JSONL file.
"""

import json
import logging
import os
import threading
from pathlib import Path
from tempfile import NamedTemporaryFile

from appscrub.core.paths import ensure_state_dir, get_state_dir
from appscrub.models.history import DeletionRecord

logger = logging.getLogger(__name__)


class HistoryStore:
    """Manages deletion history in a JSONL file.

    Storage location: ~/.local/state/appscrub/history.jsonl

    Each line is a complete JSON object representing a DeletionRecord.
    New records are appended; reads return them newest first. Removing
    records rewrites the file through a temporary file and os.replace().

    All reads and writes on one store instance are serialized by a lock,
    so concurrent callers never observe a half-rewritten file.

    Attributes:
        state_dir: Directory containing the history file.
    """

    HISTORY_FILENAME = "history.jsonl"

    def __init__(self, state_dir: Path | None = None) -> None:
        """Initialize HistoryStore.

        Args:
            state_dir: Optional override for state directory.
                      Default: ~/.local/state/appscrub
        """
        self._state_dir = state_dir if state_dir is not None else get_state_dir()
        self._lock = threading.Lock()

    @property
    def history_path(self) -> Path:
        """Path to the history.jsonl file."""
        return self._state_dir / self.HISTORY_FILENAME

    def append(self, record: DeletionRecord) -> None:
        """Append a record to the history file.

        Creates the file and parent directories if they don't exist.

        Raises:
            RuntimeError: If the state directory cannot be created.
            OSError: If the file cannot be written.
        """
        with self._lock:
            self._ensure_dir()
            with self.history_path.open(mode="a", encoding="utf-8") as f:
                f.write(record.to_json_line() + "\n")
                f.flush()
        logger.debug("Recorded deletion %s (%d files)", record.id, record.file_count)

    def get_history(self, limit: int | None = None) -> list[DeletionRecord]:
        """Read history records, newest first.

        Args:
            limit: Maximum number of records to return. None returns all.

        Returns:
            List of DeletionRecord, newest first. Empty if the file doesn't exist.
        """
        with self._lock:
            records = self._read_all()

        records.reverse()

        if limit is not None:
            return records[:limit]
        return records

    def get_record(self, record_id: str) -> DeletionRecord | None:
        """Find a record by ID or unique ID prefix.

        Args:
            record_id: Full record ID or a prefix of it (as shown by ``history``).

        Returns:
            The matching record, or None if zero or several records match.
        """
        matches = [r for r in self.get_history() if r.id.startswith(record_id)]
        exact = [r for r in matches if r.id == record_id]
        if exact:
            return exact[0]
        if len(matches) == 1:
            return matches[0]
        return None

    def get_most_recent(self) -> DeletionRecord | None:
        """Return the newest record, or None if the history is empty."""
        history = self.get_history(limit=1)
        return history[0] if history else None

    def delete_record(self, record_id: str) -> bool:
        """Remove a single record.

        Args:
            record_id: Exact ID of the record to remove.

        Returns:
            True if a record was removed, False if no record had that ID.
        """
        with self._lock:
            records = self._read_all()
            remaining = [r for r in records if r.id != record_id]
            if len(remaining) == len(records):
                return False
            self._rewrite(remaining)
        logger.debug("Deleted history record %s", record_id)
        return True

    def clear(self) -> int:
        """Remove all records.

        Returns:
            Number of records removed.
        """
        with self._lock:
            count = len(self._read_all())
            if self.history_path.exists():
                self._rewrite([])
        logger.debug("Cleared %d history records", count)
        return count

    def _ensure_dir(self) -> None:
        if self._state_dir == get_state_dir():
            ensure_state_dir()
        else:
            self._state_dir.mkdir(parents=True, exist_ok=True)

    def _read_all(self) -> list[DeletionRecord]:
        """Read all records in file order (oldest first)."""
        if not self.history_path.exists():
            return []

        records: list[DeletionRecord] = []

        with self.history_path.open(encoding="utf-8") as f:
            for line_num, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue

                try:
                    records.append(DeletionRecord.from_json_line(line))
                except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                    logger.warning("Skipping corrupt history line %d: %s", line_num, str(e))
                    continue

        return records

    def _rewrite(self, records: list[DeletionRecord]) -> None:
        """Atomically replace the history file with the given records."""
        self._ensure_dir()
        tmp_path: Path | None = None
        try:
            with NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self._state_dir,
                delete=False,
                suffix=".tmp",
            ) as f:
                tmp_path = Path(f.name)
                for record in records:
                    f.write(record.to_json_line() + "\n")
            os.replace(str(tmp_path), str(self.history_path))
        except OSError:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise
