"""Deletion history recording.

Turns a finished deletion into a DeletionRecord so it can be restored
later with ``appscrub restore``.
"""

import logging

from appscrub.core.state import HistoryStore
from appscrub.models.history import (
    DeletedFileDescriptor,
    DeletionRecord,
    create_deletion_record,
)
from appscrub.models.identity import ApplicationIdentity
from appscrub.models.outcome import DeletionOutcome

logger = logging.getLogger(__name__)


def record_deletion(
    identity: ApplicationIdentity,
    outcome: DeletionOutcome,
    store: HistoryStore | None = None,
) -> DeletionRecord | None:
    """Record the files a deletion moved to the trash.

    Only succeeded files are recorded, together with the trash path the
    mover reported for each of them.

    Args:
        identity: Application the files belonged to.
        outcome: Result of Deleter.delete().
        store: History store to append to. Defaults to HistoryStore().

    Returns:
        The appended record, or None if nothing was deleted.
    """
    if not outcome.succeeded:
        logger.debug("Nothing deleted for %s; no history record written", identity.display_name)
        return None

    descriptors = [
        DeletedFileDescriptor(
            original_path=f.path,
            category=f.category,
            size_bytes=f.size_bytes,
            trash_path=outcome.trash_paths.get(f.id),
        )
        for f in outcome.succeeded
    ]

    record = create_deletion_record(
        app_display_name=identity.display_name,
        bundle_identifier=identity.bundle_identifier,
        deleted_files=descriptors,
    )
    (store or HistoryStore()).append(record)
    return record
