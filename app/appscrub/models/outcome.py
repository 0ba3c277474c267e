"""Outcome models for deletion and restore batches.

Each batch call returns exactly one outcome. Per-file errors are kept
as ``FileFailure`` entries so callers can render a reason per item.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

from appscrub.models.files import DiscoveredFile
from appscrub.models.history import DeletedFileDescriptor

T = TypeVar("T")


class OutcomeStatus(str, Enum):
    """Overall result of a batch.

    Attributes:
        COMPLETE: Every item succeeded (also used for empty batches).
        PARTIAL: Some items succeeded and some did not.
        FAILED: No item succeeded.
    """

    COMPLETE = "complete"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class FileFailure(Generic[T]):
    """An item that could not be processed, with its cause.

    Attributes:
        item: The file or descriptor that failed.
        error: Exception describing the failure.
    """

    item: T
    error: Exception

    @property
    def message(self) -> str:
        """Human-readable failure reason."""
        return str(self.error) or type(self.error).__name__


def _status(succeeded: int, unsuccessful: int) -> OutcomeStatus:
    if unsuccessful == 0:
        return OutcomeStatus.COMPLETE
    if succeeded == 0:
        return OutcomeStatus.FAILED
    return OutcomeStatus.PARTIAL


@dataclass(frozen=True, slots=True)
class PrivilegedOutcome:
    """Result of a privileged deletion batch.

    Attributes:
        succeeded: Files moved to the trash.
        failed: Files that could not be moved.
        trash_paths: Trash location of each moved file, keyed by file id.
    """

    succeeded: tuple[DiscoveredFile, ...] = ()
    failed: tuple[FileFailure[DiscoveredFile], ...] = ()
    trash_paths: dict[str, str] = field(default_factory=lambda: {})

    @property
    def size_reclaimed(self) -> int:
        """Bytes moved to the trash."""
        return sum(f.size_bytes for f in self.succeeded)


@dataclass(frozen=True, slots=True)
class DeletionOutcome:
    """Result of a deletion batch.

    Attributes:
        succeeded: Files moved to the trash.
        failed: Files that could not be moved, with causes.
        skipped_privileged: Files that need administrator rights and were not attempted.
        trash_paths: Trash location of each moved file, keyed by file id.
    """

    succeeded: tuple[DiscoveredFile, ...] = ()
    failed: tuple[FileFailure[DiscoveredFile], ...] = ()
    skipped_privileged: tuple[DiscoveredFile, ...] = ()
    trash_paths: dict[str, str] = field(default_factory=lambda: {})

    @property
    def total_deleted(self) -> int:
        return len(self.succeeded)

    @property
    def total_failed(self) -> int:
        return len(self.failed)

    @property
    def total_skipped(self) -> int:
        return len(self.skipped_privileged)

    @property
    def size_reclaimed(self) -> int:
        """Bytes moved to the trash."""
        return sum(f.size_bytes for f in self.succeeded)

    @property
    def is_complete(self) -> bool:
        """True if nothing failed and nothing was skipped."""
        return not self.failed and not self.skipped_privileged

    @property
    def status(self) -> OutcomeStatus:
        return _status(self.total_deleted, self.total_failed + self.total_skipped)

    def merge(self, other: "DeletionOutcome") -> "DeletionOutcome":
        """Concatenate two outcomes (e.g., user pass followed by privileged pass)."""
        return DeletionOutcome(
            succeeded=self.succeeded + other.succeeded,
            failed=self.failed + other.failed,
            skipped_privileged=self.skipped_privileged + other.skipped_privileged,
            trash_paths={**self.trash_paths, **other.trash_paths},
        )


@dataclass(frozen=True, slots=True)
class RestoreOutcome:
    """Result of a restore batch.

    Attributes:
        restored: Descriptors moved back to their original path.
        failed: Descriptors whose restore failed, with causes.
        not_found_in_trash: Descriptors with no matching trash item.
    """

    restored: tuple[DeletedFileDescriptor, ...] = ()
    failed: tuple[FileFailure[DeletedFileDescriptor], ...] = ()
    not_found_in_trash: tuple[DeletedFileDescriptor, ...] = ()

    @property
    def total_restored(self) -> int:
        return len(self.restored)

    @property
    def total_failed(self) -> int:
        return len(self.failed)

    @property
    def total_not_found(self) -> int:
        return len(self.not_found_in_trash)

    @property
    def restored_size(self) -> int:
        """Bytes moved back out of the trash."""
        return sum(d.size_bytes for d in self.restored)

    @property
    def is_complete(self) -> bool:
        return not self.failed and not self.not_found_in_trash

    @property
    def status(self) -> OutcomeStatus:
        return _status(self.total_restored, self.total_failed + self.total_not_found)
