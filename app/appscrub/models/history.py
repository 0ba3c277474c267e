"""Deletion history models.

A ``DeletionRecord`` is written once per completed deletion and never
mutated afterwards. Records are stored as JSON lines so the history
file stays append-only.
"""

import json
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from appscrub.models.files import FileCategory


@dataclass(frozen=True, slots=True)
class DeletedFileDescriptor:
    """A file that was moved to the trash.

    Restoration matches by path, so the scan-time file id is not kept.

    Attributes:
        original_path: Absolute path the file was deleted from.
        category: Location category of the file.
        size_bytes: Size at scan time.
        trash_path: Where the mover put the file, if known.
    """

    original_path: str
    category: FileCategory
    size_bytes: int
    trash_path: str | None = None

    def __post_init__(self) -> None:
        """Validate descriptor data after initialization."""
        if not self.original_path:
            msg = "Original path cannot be empty"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        result: dict[str, Any] = {
            "path": self.original_path,
            "category": self.category.value,
            "size": self.size_bytes,
        }
        if self.trash_path is not None:
            result["trash_path"] = self.trash_path
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DeletedFileDescriptor":
        """Deserialize from dictionary.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If the category is unknown.
        """
        return cls(
            original_path=data["path"],
            category=FileCategory(data["category"]),
            size_bytes=int(data["size"]),
            trash_path=data.get("trash_path"),
        )


@dataclass(frozen=True, slots=True)
class DeletionRecord:
    """Record of one completed deletion.

    Attributes:
        id: Unique identifier (12-character hex string from UUID).
        timestamp: When the deletion happened (ISO 8601 with timezone).
        app_display_name: Name of the removed application.
        bundle_identifier: Bundle identifier of the removed application.
        deleted_files: Files that were moved to the trash.
    """

    id: str
    timestamp: str
    app_display_name: str
    bundle_identifier: str
    deleted_files: tuple[DeletedFileDescriptor, ...]

    def __post_init__(self) -> None:
        """Validate record data after initialization."""
        if not self.id:
            msg = "Deletion record ID cannot be empty"
            raise ValueError(msg)
        if not self.timestamp:
            msg = "Timestamp cannot be empty"
            raise ValueError(msg)

    @property
    def total_size_bytes(self) -> int:
        return sum(d.size_bytes for d in self.deleted_files)

    @property
    def file_count(self) -> int:
        return len(self.deleted_files)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "app_name": self.app_display_name,
            "bundle_id": self.bundle_identifier,
            "files": [d.to_dict() for d in self.deleted_files],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DeletionRecord":
        """Deserialize from dictionary.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If file data is invalid.
        """
        return cls(
            id=data["id"],
            timestamp=data["timestamp"],
            app_display_name=data["app_name"],
            bundle_identifier=data["bundle_id"],
            deleted_files=tuple(DeletedFileDescriptor.from_dict(f) for f in data["files"]),
        )

    def to_json_line(self) -> str:
        """Serialize to a single JSON line (no trailing newline)."""
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_json_line(cls, line: str) -> "DeletionRecord":
        """Deserialize from a JSON line.

        Raises:
            json.JSONDecodeError: If line is not valid JSON.
            KeyError: If required fields are missing.
            ValueError: If data is invalid.
        """
        return cls.from_dict(json.loads(line.strip()))


def create_deletion_record(
    app_display_name: str,
    bundle_identifier: str,
    deleted_files: list[DeletedFileDescriptor],
) -> DeletionRecord:
    """Create a new DeletionRecord with a generated ID and current timestamp.

    Raises:
        ValueError: If deleted_files is empty.
    """
    if not deleted_files:
        msg = "Cannot create deletion record with no files"
        raise ValueError(msg)

    return DeletionRecord(
        id=uuid.uuid4().hex[:12],
        timestamp=datetime.now(UTC).isoformat(),
        app_display_name=app_display_name,
        bundle_identifier=bundle_identifier,
        deleted_files=tuple(deleted_files),
    )
