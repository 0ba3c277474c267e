"""Restore previously deleted files from the trash.

Trash items are looked up by the descriptor's recorded trash path,
then by their original name, then by the "name N.ext" pattern the trash
uses when a name is already taken. Nothing is ever overwritten.
"""

import logging
import os
import re
from collections.abc import Sequence
from pathlib import Path

from appscrub.errors import (
    DestinationOccupiedError,
    FileNotInTrashError,
    MoveFailedError,
    ParentDirectoryMissingError,
    PermissionDeniedError,
    RestoreError,
)
from appscrub.models.history import DeletedFileDescriptor
from appscrub.models.outcome import FileFailure, RestoreOutcome
from appscrub.uninstall.trash import move_item, split_name

logger = logging.getLogger(__name__)


class TrashRestorer:
    """Moves trashed files back to where they were deleted from.

    Args:
        trash_dir: Trash directory to look in.
    """

    def __init__(self, trash_dir: Path) -> None:
        self._trash_dir = trash_dir

    def find_in_trash(self, descriptor: DeletedFileDescriptor) -> Path | None:
        """Locate the trash item for a deleted file.

        Lookup order: the recorded trash path if it still exists, the
        original name, then collision variants ("Widget 2.app" for
        "Widget.app"). Among variants the lowest counter wins.

        Args:
            descriptor: The deleted file.

        Returns:
            Path of the trash item, or None if nothing matches.
        """
        if descriptor.trash_path and os.path.lexists(descriptor.trash_path):
            return Path(descriptor.trash_path)

        name = Path(descriptor.original_path).name
        direct = self._trash_dir / name
        if os.path.lexists(direct):
            return direct

        return self._find_collision_variant(name)

    def _find_collision_variant(self, name: str) -> Path | None:
        stem, ext = split_name(name)
        variant = re.compile(re.escape(stem) + r" (\d+)")

        try:
            with os.scandir(self._trash_dir) as it:
                entries = list(it)
        except OSError as e:
            logger.debug("Cannot list trash %s: %s", self._trash_dir, e)
            return None

        best: tuple[int, Path] | None = None
        for entry in entries:
            if entry.name.startswith("."):
                continue
            entry_stem, entry_ext = split_name(entry.name)
            if entry_ext != ext:
                continue
            match = variant.fullmatch(entry_stem)
            if match is None:
                continue
            counter = int(match.group(1))
            if best is None or counter < best[0]:
                best = (counter, Path(entry.path))

        return best[1] if best is not None else None

    def can_restore(self, descriptor: DeletedFileDescriptor) -> bool:
        """Check whether a file is in the trash and its original path is free."""
        if os.path.lexists(descriptor.original_path):
            return False
        return self.find_in_trash(descriptor) is not None

    def can_restore_any(self, descriptors: Sequence[DeletedFileDescriptor]) -> bool:
        return any(self.can_restore(d) for d in descriptors)

    def restore(self, descriptors: Sequence[DeletedFileDescriptor]) -> RestoreOutcome:
        """Move deleted files back to their original locations.

        Each file is handled independently; failures are collected.

        Args:
            descriptors: Files to restore, typically from a DeletionRecord.

        Returns:
            RestoreOutcome with restored, failed and not-found files.
        """
        restored: list[DeletedFileDescriptor] = []
        failed: list[FileFailure[DeletedFileDescriptor]] = []
        not_found: list[DeletedFileDescriptor] = []

        for descriptor in descriptors:
            try:
                self._restore_one(descriptor)
            except FileNotInTrashError:
                logger.info("Not in trash: %s", descriptor.original_path)
                not_found.append(descriptor)
                continue
            except RestoreError as e:
                logger.warning("Could not restore %s: %s", descriptor.original_path, e)
                failed.append(FileFailure(descriptor, e))
                continue
            restored.append(descriptor)

        logger.info(
            "Restore finished: %d restored, %d failed, %d not in trash",
            len(restored),
            len(failed),
            len(not_found),
        )
        return RestoreOutcome(
            restored=tuple(restored),
            failed=tuple(failed),
            not_found_in_trash=tuple(not_found),
        )

    def _restore_one(self, descriptor: DeletedFileDescriptor) -> None:
        """Restore a single file.

        Raises:
            FileNotInTrashError: No matching trash item.
            DestinationOccupiedError: Something exists at the original path.
            ParentDirectoryMissingError: The parent could not be recreated.
            PermissionDeniedError: The move was refused.
            MoveFailedError: The move failed for another reason.
        """
        original = descriptor.original_path

        source = self.find_in_trash(descriptor)
        if source is None:
            raise FileNotInTrashError(original)

        if os.path.lexists(original):
            raise DestinationOccupiedError(original)

        parent = Path(original).parent
        if not parent.is_dir():
            try:
                parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ParentDirectoryMissingError(original) from e

        try:
            move_item(source, Path(original))
        except PermissionError as e:
            raise PermissionDeniedError(original) from e
        except OSError as e:
            raise MoveFailedError(original, str(e)) from e

        logger.debug("Restored %s from %s", original, source)
