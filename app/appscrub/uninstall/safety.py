"""Path checks for the privileged helper.

Every path handed to a privileged command must pass validate(). Paths
come from directory listings, i.e. from names other programs control,
so the checks are strict: no control characters, no traversal left
after resolving links, and confinement to a fixed set of prefixes.
"""

import os
from pathlib import Path

from appscrub.errors import PathValidationError

SYSTEM_ALLOWED_PREFIXES: tuple[str, ...] = ("/Library", "/Applications")


def default_allowed_prefixes(home: Path | None = None) -> tuple[str, ...]:
    """Allow-listed prefixes: the user's and the system's Library and Applications.

    Args:
        home: Home directory. Defaults to Path.home().

    Returns:
        Prefixes without trailing separators.
    """
    root = home if home is not None else Path.home()
    return (
        str(root / "Library"),
        str(root / "Applications"),
        *SYSTEM_ALLOWED_PREFIXES,
    )


def _normalize_prefix(prefix: str) -> str:
    resolved = os.path.realpath(os.path.expanduser(prefix))
    return resolved.rstrip(os.sep) + os.sep


class PathSafetyValidator:
    """Validates paths before they reach a privileged command.

    Args:
        allowed_prefixes: Directory prefixes paths must live under.
            Defaults to default_allowed_prefixes().
        extra_prefixes: Additional prefixes (e.g., from settings).
    """

    def __init__(
        self,
        allowed_prefixes: tuple[str, ...] | None = None,
        extra_prefixes: tuple[str, ...] | list[str] = (),
    ) -> None:
        base = allowed_prefixes if allowed_prefixes is not None else default_allowed_prefixes()
        # Prefixes are resolved too, so /tmp vs /private/tmp style links compare equal
        self._prefixes = tuple(_normalize_prefix(p) for p in (*base, *extra_prefixes))

    @property
    def allowed_prefixes(self) -> tuple[str, ...]:
        return self._prefixes

    def validate(self, path: str) -> str:
        """Check a path and return its normalized form.

        Args:
            path: Path to check.

        Returns:
            The path with symbolic links in its parent directories resolved.

        Raises:
            PathValidationError: If any check fails.
        """
        if not path:
            raise PathValidationError(path, "empty path")

        if any(ord(ch) < 32 or ord(ch) == 127 for ch in path):
            raise PathValidationError(path, "contains control characters")

        if not os.path.isabs(path):
            raise PathValidationError(path, "not an absolute path")

        if ".." in Path(path).parts:
            raise PathValidationError(path, "contains a traversal segment")

        # Resolve the parent only: a symlinked leaf is moved as the link itself
        parent, name = os.path.split(path.rstrip(os.sep))
        normalized = os.path.join(os.path.realpath(parent), name)
        if name in ("", ".") or ".." in Path(normalized).parts:
            raise PathValidationError(path, "contains a traversal segment")

        # Strict descendant: the prefix directory itself never qualifies
        if not any(normalized.startswith(prefix) for prefix in self._prefixes):
            raise PathValidationError(path, "outside the allowed directories")

        if not os.path.lexists(normalized):
            raise PathValidationError(path, "does not exist")

        return normalized

    def is_safe(self, path: str) -> bool:
        """Check a path without raising."""
        try:
            self.validate(path)
        except PathValidationError:
            return False
        return True
