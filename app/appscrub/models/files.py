"""Models for files discovered while scanning for application leftovers."""

import uuid
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from appscrub.models.identity import ApplicationIdentity


class FileCategory(str, Enum):
    """Kind of location a discovered file was found in."""

    APPLICATION = "application"
    PREFERENCES = "preferences"
    APPLICATION_SUPPORT = "applicationSupport"
    CACHES = "caches"
    LOGS = "logs"
    CONTAINERS = "containers"
    LAUNCH_AGENTS = "launchAgents"
    LAUNCH_DAEMONS = "launchDaemons"
    EXTENSIONS = "extensions"
    LOGIN_ITEMS = "loginItems"
    COOKIES = "cookies"
    WEBKIT_DATA = "webKitData"
    SAVED_STATE = "savedState"
    OTHER = "other"


def _new_file_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True, slots=True)
class DiscoveredFile:
    """A file or directory that belongs to the scanned application.

    Equality and hashing use only ``id`` so that copies of the same
    discovery stay equal even if a path string is normalized differently.

    Attributes:
        path: Absolute filesystem path.
        category: Location category the entry was found in.
        size_bytes: Size at scan time (allocated size for directories).
        requires_elevated_privilege: True if moving it needs administrator rights.
        id: Opaque unique token assigned at scan time.
    """

    path: str = field(compare=False)
    category: FileCategory = field(compare=False)
    size_bytes: int = field(default=0, compare=False)
    requires_elevated_privilege: bool = field(default=False, compare=False)
    id: str = field(default_factory=_new_file_id)

    def __post_init__(self) -> None:
        """Validate discovered file data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.size_bytes < 0:
            msg = f"Size cannot be negative, got {self.size_bytes}"
            raise ValueError(msg)

    @property
    def name(self) -> str:
        """Last path component."""
        return Path(self.path).name

    @property
    def display_path(self) -> str:
        """Path with the home directory abbreviated to ``~``."""
        home = str(Path.home())
        if self.path == home or self.path.startswith(home + "/"):
            return "~" + self.path[len(home) :]
        return self.path


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Result of scanning the system for one application.

    Attributes:
        identity: The application that was scanned.
        files: Discovered files, the application bundle first.
        total_size_bytes: Sum of ``size_bytes`` over all files.
        scan_duration_seconds: Wall-clock duration of the scan.
    """

    identity: ApplicationIdentity
    files: tuple[DiscoveredFile, ...]
    total_size_bytes: int
    scan_duration_seconds: float

    @property
    def files_by_category(self) -> dict[FileCategory, list[DiscoveredFile]]:
        """Group discovered files by category, preserving scan order."""
        grouped: dict[FileCategory, list[DiscoveredFile]] = defaultdict(list)
        for discovered in self.files:
            grouped[discovered.category].append(discovered)
        return dict(grouped)

    @property
    def elevated_files(self) -> list[DiscoveredFile]:
        """Files that need administrator rights to remove."""
        return [f for f in self.files if f.requires_elevated_privilege]
