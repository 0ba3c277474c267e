"""Scanner for application leftovers.

Walks the directory catalog, keeps the immediate children whose names
match the application's search terms, and measures each of them.
Directories that are missing or unreadable are skipped: most of the
catalog does not exist for any given application.
"""

import logging
import os
import stat
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from appscrub.models.files import DiscoveredFile, FileCategory, ScanResult
from appscrub.models.identity import ApplicationIdentity
from appscrub.uninstall.catalog import CatalogDirectory, build_catalog
from appscrub.uninstall.matcher import DEFAULT_MIN_TERM_LENGTH, build_search_terms, match_rule

logger = logging.getLogger(__name__)

# st_blocks is always counted in 512-byte units
_BLOCK_SIZE = 512


class FileScanner:
    """Finds the files an application left across the Library folders.

    Catalog directories are disjoint, so they are scanned concurrently by
    a small thread pool; sizing inside one directory tree stays sequential.

    Args:
        catalog: Directories to search. Defaults to build_catalog().
        max_workers: Threads used to scan catalog directories.
        min_term_length: Shortest search term kept by the matcher.
    """

    def __init__(
        self,
        *,
        catalog: tuple[CatalogDirectory, ...] | None = None,
        max_workers: int = 4,
        min_term_length: int = DEFAULT_MIN_TERM_LENGTH,
    ) -> None:
        self._catalog = catalog if catalog is not None else build_catalog()
        self._max_workers = max(1, max_workers)
        self._min_term_length = min_term_length

    @property
    def catalog(self) -> tuple[CatalogDirectory, ...]:
        return self._catalog

    def scan(self, identity: ApplicationIdentity) -> ScanResult:
        """Scan the system for everything belonging to an application.

        The application bundle itself is always the first entry. The scan
        runs to completion; it only reads the local filesystem.

        Args:
            identity: Application to scan for.

        Returns:
            ScanResult with the bundle and every matching leftover.
        """
        started = time.monotonic()

        search_terms = build_search_terms(identity, min_length=self._min_term_length)
        logger.debug("Search terms for %s: %s", identity.bundle_identifier, sorted(search_terms))

        files: list[DiscoveredFile] = [self._bundle_entry(identity)]
        seen: set[str] = {files[0].path}

        workers = min(self._max_workers, len(self._catalog)) or 1
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(self._scan_directory, directory, search_terms)
                for directory in self._catalog
            ]
            for future in futures:
                for discovered in future.result():
                    if discovered.path in seen:
                        continue
                    seen.add(discovered.path)
                    files.append(discovered)

        total = sum(f.size_bytes for f in files)
        duration = time.monotonic() - started
        logger.info(
            "Scanned %s: %d items, %d bytes in %.2fs",
            identity.display_name,
            len(files),
            total,
            duration,
        )

        return ScanResult(
            identity=identity,
            files=tuple(files),
            total_size_bytes=total,
            scan_duration_seconds=duration,
        )

    def _bundle_entry(self, identity: ApplicationIdentity) -> DiscoveredFile:
        """Describe the application bundle itself.

        Moving the bundle needs write access to its parent directory.
        """
        bundle = Path(identity.install_path)
        return DiscoveredFile(
            path=str(bundle),
            category=FileCategory.APPLICATION,
            size_bytes=measure_size(bundle),
            requires_elevated_privilege=not _is_writable(bundle.parent),
        )

    def _scan_directory(
        self,
        directory: CatalogDirectory,
        search_terms: frozenset[str],
    ) -> list[DiscoveredFile]:
        """Match the immediate children of one catalog directory.

        Args:
            directory: Catalog directory to list.
            search_terms: Terms from build_search_terms().

        Returns:
            Discovered files in name order; empty if the directory is
            missing or cannot be listed.
        """
        try:
            with os.scandir(directory.path) as it:
                entries = sorted(it, key=lambda e: e.name)
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", directory.path, e)
            return []

        results: list[DiscoveredFile] = []
        for entry in entries:
            if entry.name.startswith("."):
                continue

            rule = match_rule(entry.name, search_terms)
            if rule is None:
                continue

            entry_path = Path(entry.path)
            logger.debug("Matched %s (%s rule)", entry_path, rule.value)
            results.append(
                DiscoveredFile(
                    path=str(entry_path),
                    category=directory.category,
                    size_bytes=measure_size(entry_path),
                    requires_elevated_privilege=(
                        directory.requires_admin or not _is_writable(entry_path)
                    ),
                )
            )

        return results


def measure_size(path: Path) -> int:
    """Measure the on-disk size of a file or directory tree.

    Files report their byte size. Directories report the allocated size
    of everything below them, skipping hidden entries and without
    following symbolic links. Missing paths measure 0.

    Args:
        path: File or directory to measure.

    Returns:
        Size in bytes.
    """
    try:
        st = path.lstat()
    except OSError:
        return 0

    if not stat.S_ISDIR(st.st_mode):
        return st.st_size

    return _directory_allocated_size(path)


def _directory_allocated_size(root: Path) -> int:
    total = 0
    for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
        dirnames[:] = [d for d in dirnames if not d.startswith(".")]
        for name in dirnames + filenames:
            if name.startswith("."):
                continue
            try:
                st = os.lstat(os.path.join(dirpath, name))
            except OSError:
                continue
            if stat.S_ISDIR(st.st_mode):
                continue
            total += st.st_blocks * _BLOCK_SIZE
    return total


def _is_writable(path: Path) -> bool:
    return os.access(path, os.W_OK)
