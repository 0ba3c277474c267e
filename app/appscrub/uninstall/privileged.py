"""Privileged move-to-trash for files the user cannot write.

Administrator rights are obtained once per batch with ``sudo -v`` and
released with ``sudo -k`` when the batch ends. Each file is then moved
by a small fixed sh helper run through ``sudo -n``. Path arguments
travel base64-encoded and are decoded inside the helper, so no path
text is ever parsed by a shell.
"""

import base64
import logging
import os
import signal
import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path
from types import TracebackType

from appscrub.errors import (
    AuthorizationCancelledError,
    AuthorizationFailedError,
    PrivilegedDeletionError,
    ScriptExecutionError,
    TrashDirectoryNotFoundError,
)
from appscrub.models.files import DiscoveredFile
from appscrub.models.outcome import FileFailure, PrivilegedOutcome
from appscrub.uninstall.safety import PathSafetyValidator
from appscrub.uninstall.trash import MAX_NAME_ATTEMPTS, split_name, unique_trash_name
from appscrub.utils.shell import run_command, run_interactive

logger = logging.getLogger(__name__)

HELPER_NAME = "appscrub-helper"

DEFAULT_HELPER_TIMEOUT = 120.0

SUDO_PROMPT = "Administrator password for appscrub: "

# Exit status of a process interrupted by Ctrl-C
_CANCELLED_STATUSES = (130, -signal.SIGINT)

# $1 source, $2 trash dir, $3 chosen name, $4 stem, $5 extension (all base64),
# $6 attempt limit. The chosen name is re-checked since the trash may have
# changed after it was picked.
HELPER_SCRIPT = """\
set -eu
decode() { printf '%s' "$1" | base64 --decode; }
src=$(decode "$1")
trash=$(decode "$2")
name=$(decode "$3")
stem=$(decode "$4")
ext=$(decode "$5")
max=$6
if [ ! -d "$trash" ]; then
    echo "trash directory not found: $trash" >&2
    exit 3
fi
if [ ! -e "$src" ] && [ ! -L "$src" ]; then
    echo "no such file: $src" >&2
    exit 4
fi
dst="$trash/$name"
n=1
while [ -e "$dst" ] || [ -L "$dst" ]; do
    if [ "$n" -gt "$max" ]; then
        echo "no free name in trash for $name" >&2
        exit 5
    fi
    dst="$trash/$stem $n$ext"
    n=$((n + 1))
done
mv -- "$src" "$dst"
printf '%s\\n' "$dst"
"""


def encode_argument(value: str) -> str:
    """Base64-encode a helper argument (UTF-8, no line breaks)."""
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


def is_root() -> bool:
    """Check if the current process is running as root."""
    return os.geteuid() == 0


class SudoAuthorization:
    """Administrator rights held for the duration of a ``with`` block.

    Entering validates sudo credentials interactively; leaving always
    drops the cached credentials again. When already running as root no
    sudo call is made and commands run unprefixed.

    Raises (on enter):
        AuthorizationCancelledError: If the prompt was interrupted.
        AuthorizationFailedError: If sudo refused the credentials.
    """

    def __init__(self) -> None:
        self._active = False

    def __enter__(self) -> "SudoAuthorization":
        if is_root():
            logger.debug("Running as root; sudo not needed")
            return self

        try:
            returncode = run_interactive(["sudo", "-v", "-p", SUDO_PROMPT])
        except KeyboardInterrupt:
            raise AuthorizationCancelledError() from None
        except OSError as e:
            raise AuthorizationFailedError(str(e)) from e

        if returncode in _CANCELLED_STATUSES:
            raise AuthorizationCancelledError()
        if returncode != 0:
            raise AuthorizationFailedError(f"sudo exited with status {returncode}")

        self._active = True
        logger.debug("Administrator credentials obtained")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if not self._active:
            return
        self._active = False
        try:
            run_command(["sudo", "-k"], timeout=10.0)
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.warning("Could not drop sudo credentials: %s", e)
        else:
            logger.debug("Administrator credentials released")

    def command_prefix(self) -> list[str]:
        """Prefix for commands that must run with administrator rights."""
        return ["sudo", "-n"] if self._active else []


class PrivilegedDeleter:
    """Moves admin-only files to the trash with elevated rights.

    Args:
        trash_dir: Trash directory files are moved into.
        validator: Path checks applied to every file. Defaults to the
            standard allow-list.
        timeout: Seconds allowed per helper invocation.
        authorization_factory: Creates the context manager that holds
            administrator rights for a batch.
    """

    def __init__(
        self,
        trash_dir: Path,
        *,
        validator: PathSafetyValidator | None = None,
        timeout: float = DEFAULT_HELPER_TIMEOUT,
        authorization_factory: Callable[[], SudoAuthorization] = SudoAuthorization,
    ) -> None:
        self._trash_dir = trash_dir
        self._validator = validator if validator is not None else PathSafetyValidator()
        self._timeout = timeout
        self._authorization_factory = authorization_factory

    @property
    def trash_dir(self) -> Path:
        return self._trash_dir

    def delete_with_privileges(self, files: Sequence[DiscoveredFile]) -> PrivilegedOutcome:
        """Move files to the trash with administrator rights.

        Authorization is requested once; after that every file is tried
        and failures are recorded per file.

        Args:
            files: Files to move.

        Returns:
            PrivilegedOutcome with succeeded and failed files.

        Raises:
            TrashDirectoryNotFoundError: If the trash directory is missing.
            AuthorizationCancelledError: If the password prompt was cancelled.
            AuthorizationFailedError: If administrator rights were refused.
        """
        if not files:
            return PrivilegedOutcome()

        if not self._trash_dir.is_dir():
            raise TrashDirectoryNotFoundError(self._trash_dir)

        succeeded: list[DiscoveredFile] = []
        failed: list[FileFailure[DiscoveredFile]] = []
        trash_paths: dict[str, str] = {}

        with self._authorization_factory() as authorization:
            for discovered in files:
                try:
                    trash_paths[discovered.id] = self._move_to_trash(discovered, authorization)
                except PrivilegedDeletionError as e:
                    logger.warning("Privileged move failed for %s: %s", discovered.path, e)
                    failed.append(FileFailure(discovered, e))
                    continue
                succeeded.append(discovered)

        logger.info(
            "Privileged batch finished: %d moved, %d failed",
            len(succeeded),
            len(failed),
        )
        return PrivilegedOutcome(
            succeeded=tuple(succeeded),
            failed=tuple(failed),
            trash_paths=trash_paths,
        )

    def _move_to_trash(self, discovered: DiscoveredFile, authorization: SudoAuthorization) -> str:
        """Run the helper for one file.

        Returns:
            Path of the item inside the trash, as reported by the helper.

        Raises:
            PathValidationError: If the path fails validation.
            AuthorizationCancelledError: If the helper was interrupted.
            ScriptExecutionError: If the helper failed or timed out.
        """
        source = self._validator.validate(discovered.path)
        name = os.path.basename(source)

        try:
            chosen = unique_trash_name(name, self._trash_dir, max_attempts=MAX_NAME_ATTEMPTS)
        except FileExistsError as e:
            raise ScriptExecutionError(str(e)) from e

        stem, ext = split_name(name)
        encoded = [encode_argument(v) for v in (source, str(self._trash_dir), chosen, stem, ext)]
        args = [
            *authorization.command_prefix(),
            "/bin/sh",
            "-c",
            HELPER_SCRIPT,
            HELPER_NAME,
            *encoded,
            str(MAX_NAME_ATTEMPTS),
        ]

        try:
            result = run_command(args, timeout=self._timeout)
        except subprocess.TimeoutExpired as e:
            raise ScriptExecutionError(f"timed out after {self._timeout:g}s") from e
        except OSError as e:
            raise ScriptExecutionError(str(e)) from e

        if result.returncode in _CANCELLED_STATUSES:
            raise AuthorizationCancelledError()
        if not result.success:
            raise ScriptExecutionError(
                result.stderr.strip() or f"exit status {result.returncode}"
            )

        trash_path = result.last_line or str(self._trash_dir / chosen)
        logger.debug("Moved %s to %s with administrator rights", source, trash_path)
        return trash_path
