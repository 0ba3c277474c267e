"""Deletion pipeline.

Moves a user-selected set of discovered files to the trash. Files the
user can write are moved directly; files that need administrator
rights are either skipped or handed to the PrivilegedDeleter.
"""

import logging
import os
from collections.abc import Sequence
from pathlib import Path

from appscrub.errors import DeletionError, PrivilegedDeletionError, VerificationFailedError
from appscrub.models.files import DiscoveredFile
from appscrub.models.outcome import DeletionOutcome, FileFailure
from appscrub.uninstall.privileged import PrivilegedDeleter
from appscrub.uninstall.trash import TrashBin

logger = logging.getLogger(__name__)


class Deleter:
    """Moves discovered files to the trash, best-effort per file.

    Files are processed sequentially; a failure is recorded and the
    batch continues. Sizes and existence are not re-checked between scan
    and delete, so a file that vanished in the meantime fails verification.

    Args:
        trash: Trash used for user-writable files.
        privileged_deleter: Handles files that need administrator rights.
            Without one, elevated files can only be skipped.
    """

    def __init__(
        self,
        trash: TrashBin,
        privileged_deleter: PrivilegedDeleter | None = None,
    ) -> None:
        self._trash = trash
        self._privileged_deleter = privileged_deleter

    def delete(
        self,
        files: Sequence[DiscoveredFile],
        include_elevated: bool = False,
    ) -> DeletionOutcome:
        """Move files to the trash.

        Args:
            files: Files selected for removal.
            include_elevated: Also move files that need administrator
                rights. When False they are reported as skipped.

        Returns:
            DeletionOutcome for the whole batch.
        """
        user_files = [f for f in files if not f.requires_elevated_privilege]
        elevated_files = [f for f in files if f.requires_elevated_privilege]

        outcome = self._delete_user_files(user_files)

        if not elevated_files:
            return outcome

        if not include_elevated:
            logger.info("Skipping %d file(s) that need administrator rights", len(elevated_files))
            return outcome.merge(DeletionOutcome(skipped_privileged=tuple(elevated_files)))

        return outcome.merge(self._delete_elevated_files(elevated_files))

    def _delete_user_files(self, files: list[DiscoveredFile]) -> DeletionOutcome:
        succeeded: list[DiscoveredFile] = []
        failed: list[FileFailure[DiscoveredFile]] = []
        trash_paths: dict[str, str] = {}

        for discovered in files:
            try:
                trash_path = self._move_one(discovered)
            except DeletionError as e:
                logger.warning("Could not delete %s: %s", discovered.path, e)
                failed.append(FileFailure(discovered, e))
                continue
            succeeded.append(discovered)
            trash_paths[discovered.id] = str(trash_path)

        return DeletionOutcome(
            succeeded=tuple(succeeded),
            failed=tuple(failed),
            trash_paths=trash_paths,
        )

    def _move_one(self, discovered: DiscoveredFile) -> Path:
        """Move one file to the trash and verify the move.

        Raises:
            VerificationFailedError: If the file is missing before the move,
                or the move left the trash item missing or the original in place.
            TrashFailedError: If the move itself failed.
        """
        source = Path(discovered.path)
        if not os.path.lexists(source):
            raise VerificationFailedError(discovered.path, "file no longer exists")

        trash_path = self._trash.move_in(source)

        if not os.path.lexists(trash_path):
            raise VerificationFailedError(discovered.path, f"not found in trash at {trash_path}")
        if os.path.lexists(source):
            raise VerificationFailedError(discovered.path, "file still exists after move")

        logger.debug("Deleted %s", discovered.path)
        return trash_path

    def _delete_elevated_files(self, files: list[DiscoveredFile]) -> DeletionOutcome:
        """Hand files to the privileged deleter.

        A batch-level failure (no authorization, no trash directory) marks
        every file as failed with that cause.
        """
        if self._privileged_deleter is None:
            error = PrivilegedDeletionError("No privileged deleter configured")
            return DeletionOutcome(failed=tuple(FileFailure(f, error) for f in files))

        try:
            privileged = self._privileged_deleter.delete_with_privileges(files)
        except PrivilegedDeletionError as e:
            logger.error("Privileged deletion failed: %s", e)
            return DeletionOutcome(failed=tuple(FileFailure(f, e) for f in files))

        return DeletionOutcome(
            succeeded=privileged.succeeded,
            failed=privileged.failed,
            trash_paths=privileged.trash_paths,
        )
