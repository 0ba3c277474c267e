"""User-level trash handling.

Items are moved into the trash directory under their own name; when
that name is taken, a counter is appended before the extension
("Widget.app" -> "Widget 1.app"). The restorer recognises the same
pattern when looking items up again.
"""

import errno
import logging
import os
import shutil
from pathlib import Path

from appscrub.errors import TrashFailedError

logger = logging.getLogger(__name__)

MAX_NAME_ATTEMPTS = 1000


def split_name(name: str) -> tuple[str, str]:
    """Split a file name into stem and extension (with its dot).

    >>> split_name("Widget.app")
    ('Widget', '.app')
    >>> split_name("Widget")
    ('Widget', '')
    """
    stem, ext = os.path.splitext(name)
    return stem, ext


def collision_name(name: str, counter: int) -> str:
    """Name used for the ``counter``-th collision of ``name``."""
    stem, ext = split_name(name)
    return f"{stem} {counter}{ext}"


def unique_trash_name(
    name: str,
    trash_dir: Path,
    *,
    max_attempts: int = MAX_NAME_ATTEMPTS,
) -> str:
    """Find a name that is free in the trash directory.

    Args:
        name: Original file name.
        trash_dir: Trash directory to check against.
        max_attempts: Counter values to try before giving up.

    Returns:
        ``name`` itself if free, otherwise the first free "stem N.ext".

    Raises:
        FileExistsError: If no free name was found within max_attempts.
    """
    if not os.path.lexists(trash_dir / name):
        return name

    for counter in range(1, max_attempts + 1):
        candidate = collision_name(name, counter)
        if not os.path.lexists(trash_dir / candidate):
            return candidate

    msg = f"No free name for {name!r} in {trash_dir} after {max_attempts} attempts"
    raise FileExistsError(msg)


def move_item(source: Path, destination: Path) -> None:
    """Move a file or directory to a path that does not exist yet.

    Within one volume this is a rename. Across volumes the item is copied
    and the source removed afterwards; a copy that fails partway is
    removed again, so the destination never holds a partial item.

    Raises:
        OSError: If the item could not be moved. The source is untouched.
    """
    try:
        os.rename(source, destination)
        return
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise

    logger.debug("Copying %s across volumes to %s", source, destination)
    is_tree = source.is_dir() and not source.is_symlink()
    try:
        if is_tree:
            shutil.copytree(source, destination, symlinks=True)
        else:
            shutil.copy2(source, destination, follow_symlinks=False)
    except OSError:
        _discard_partial(destination)
        raise

    try:
        if is_tree:
            shutil.rmtree(source)
        else:
            source.unlink()
    except OSError as e:
        # Copy is complete; only the source cleanup failed
        logger.warning(
            "Copied %s to %s but could not remove the source: %s", source, destination, e
        )


def _discard_partial(path: Path) -> None:
    if not os.path.lexists(path):
        return
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except OSError as e:
        logger.warning("Could not remove partial copy %s: %s", path, e)
    else:
        logger.debug("Removed partial copy %s", path)


class TrashBin:
    """Moves items into a trash directory with collision-free names.

    Attributes:
        directory: The trash directory (normally ~/.Trash).
    """

    def __init__(self, directory: Path) -> None:
        self._directory = directory

    @property
    def directory(self) -> Path:
        return self._directory

    def exists(self) -> bool:
        return self._directory.is_dir()

    def move_in(self, path: Path) -> Path:
        """Move an item into the trash.

        Args:
            path: File or directory to move.

        Returns:
            Path of the item inside the trash.

        Raises:
            TrashFailedError: If no free name exists or the move fails.
        """
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            name = unique_trash_name(path.name, self._directory)
        except OSError as e:
            raise TrashFailedError(str(path), str(e)) from e

        destination = self._directory / name
        try:
            move_item(path, destination)
        except OSError as e:
            raise TrashFailedError(str(path), str(e)) from e

        logger.debug("Moved %s to %s", path, destination)
        return destination
