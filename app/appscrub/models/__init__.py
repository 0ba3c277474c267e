"""Data models for appscrub.

This module exports the plain data structures shared by the engine,
the history store and the CLI.
"""

from appscrub.models.files import DiscoveredFile, FileCategory, ScanResult
from appscrub.models.history import (
    DeletedFileDescriptor,
    DeletionRecord,
    create_deletion_record,
)
from appscrub.models.identity import ApplicationIdentity
from appscrub.models.outcome import (
    DeletionOutcome,
    FileFailure,
    OutcomeStatus,
    PrivilegedOutcome,
    RestoreOutcome,
)

__all__ = [
    "ApplicationIdentity",
    "DeletedFileDescriptor",
    "DeletionOutcome",
    "DeletionRecord",
    "DiscoveredFile",
    "FileCategory",
    "FileFailure",
    "OutcomeStatus",
    "PrivilegedOutcome",
    "RestoreOutcome",
    "ScanResult",
    "create_deletion_record",
]
