"""Directories searched for application leftovers.

Each entry pairs a directory with the category its children belong to
and whether removing them needs administrator rights.
"""

from dataclasses import dataclass
from pathlib import Path

from appscrub.core.paths import get_user_library_dir
from appscrub.models.files import FileCategory

SYSTEM_LIBRARY = Path("/Library")


@dataclass(frozen=True, slots=True)
class CatalogDirectory:
    """A directory scanned for leftovers.

    Attributes:
        path: Directory whose immediate children are matched.
        category: Category assigned to matching children.
        requires_admin: True for system-wide locations.
    """

    path: Path
    category: FileCategory
    requires_admin: bool = False


# (relative path, category) under ~/Library
_USER_ENTRIES: tuple[tuple[str, FileCategory], ...] = (
    ("Application Support", FileCategory.APPLICATION_SUPPORT),
    ("Caches", FileCategory.CACHES),
    ("Preferences", FileCategory.PREFERENCES),
    ("Logs", FileCategory.LOGS),
    ("Containers", FileCategory.CONTAINERS),
    ("Group Containers", FileCategory.CONTAINERS),
    ("Saved Application State", FileCategory.SAVED_STATE),
    ("HTTPStorages", FileCategory.CACHES),
    ("WebKit", FileCategory.WEBKIT_DATA),
    ("Cookies", FileCategory.COOKIES),
    ("LaunchAgents", FileCategory.LAUNCH_AGENTS),
    ("Safari/Extensions", FileCategory.EXTENSIONS),
)

# (relative path, category) under /Library; all require admin
_SYSTEM_ENTRIES: tuple[tuple[str, FileCategory], ...] = (
    ("Application Support", FileCategory.APPLICATION_SUPPORT),
    ("Caches", FileCategory.CACHES),
    ("Preferences", FileCategory.PREFERENCES),
    ("LaunchAgents", FileCategory.LAUNCH_AGENTS),
    ("LaunchDaemons", FileCategory.LAUNCH_DAEMONS),
    ("PrivilegedHelperTools", FileCategory.OTHER),
    ("Extensions", FileCategory.EXTENSIONS),
    ("SystemExtensions", FileCategory.EXTENSIONS),
)


def build_catalog(
    user_library: Path | None = None,
    system_library: Path | None = None,
) -> tuple[CatalogDirectory, ...]:
    """Build the directory catalog.

    Args:
        user_library: Per-user Library directory. Defaults to ~/Library.
        system_library: System Library directory. Defaults to /Library.

    Returns:
        User directories first, then system-wide directories.
    """
    user_root = user_library if user_library is not None else get_user_library_dir()
    system_root = system_library if system_library is not None else SYSTEM_LIBRARY

    user_dirs = tuple(
        CatalogDirectory(user_root / relative, category) for relative, category in _USER_ENTRIES
    )
    system_dirs = tuple(
        CatalogDirectory(system_root / relative, category, requires_admin=True)
        for relative, category in _SYSTEM_ENTRIES
    )
    return user_dirs + system_dirs
