"""Exception hierarchy for appscrub.

Errors are grouped by the stage that raises them. Per-file errors are
collected into outcome failure lists; only batch-fatal errors (failed
authorization, missing trash directory) propagate out of a call.
"""

from pathlib import Path


class AppscrubError(Exception):
    """Base exception for all appscrub errors."""


# =============================================================================
# Identity resolution
# =============================================================================


class IdentityError(AppscrubError):
    """Base exception for application bundle inspection errors."""


class NotAnAppBundleError(IdentityError):
    """Raised when the given path is not an application bundle."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Not an application bundle: {path}")
        self.path = path


class MissingManifestError(IdentityError):
    """Raised when the bundle has no Contents/Info.plist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Application bundle is missing its Info.plist: {path}")
        self.path = path


class MissingIdentifierError(IdentityError):
    """Raised when the Info.plist has no usable CFBundleIdentifier."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Application bundle has no bundle identifier: {path}")
        self.path = path


class InvalidBundleError(IdentityError):
    """Raised when the Info.plist cannot be parsed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Application bundle is invalid ({reason}): {path}")
        self.path = path
        self.reason = reason


class ProtectedSystemAppError(IdentityError):
    """Raised when the application is part of macOS and must not be removed."""

    def __init__(self, name: str) -> None:
        super().__init__(f"{name} is a protected system application and cannot be deleted")
        self.name = name


# =============================================================================
# User-level deletion
# =============================================================================


class DeletionError(AppscrubError):
    """Base exception for per-file deletion errors."""


class VerificationFailedError(DeletionError):
    """Raised when a pre- or post-move existence check fails."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Verification failed for {path}: {reason}")
        self.path = path
        self.reason = reason


class TrashFailedError(DeletionError):
    """Raised when moving an item into the trash fails."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Could not move {path} to the Trash: {reason}")
        self.path = path
        self.reason = reason


# =============================================================================
# Privileged deletion
# =============================================================================


class PrivilegedDeletionError(AppscrubError):
    """Base exception for privileged deletion errors."""


class AuthorizationFailedError(PrivilegedDeletionError):
    """Raised when administrator privileges could not be obtained."""

    def __init__(self, reason: str | None = None) -> None:
        message = "Failed to obtain administrator privileges"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.reason = reason


class AuthorizationCancelledError(PrivilegedDeletionError):
    """Raised when the user cancelled the administrator prompt."""

    def __init__(self) -> None:
        super().__init__("Administrator authentication was cancelled")


class PathValidationError(PrivilegedDeletionError):
    """Raised when a path is unsafe to hand to the privileged helper."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Refusing privileged operation on {path!r}: {reason}")
        self.path = path
        self.reason = reason


class TrashDirectoryNotFoundError(PrivilegedDeletionError):
    """Raised when the trash directory does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Trash directory not found: {path}")
        self.path = path


class ScriptExecutionError(PrivilegedDeletionError):
    """Raised when the privileged helper exits with an error."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Privileged helper failed: {reason}")
        self.reason = reason


# =============================================================================
# Restore
# =============================================================================


class RestoreError(AppscrubError):
    """Base exception for per-file restore errors."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class FileNotInTrashError(RestoreError):
    """Raised when no trash item matches the original path."""

    def __init__(self, path: str) -> None:
        super().__init__(f"File no longer in Trash: {Path(path).name}", path)


class DestinationOccupiedError(RestoreError):
    """Raised when something already exists at the original path."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Original location is occupied: {path}", path)


class PermissionDeniedError(RestoreError):
    """Raised when the move back is refused by the filesystem."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Permission denied: {path}", path)


class ParentDirectoryMissingError(RestoreError):
    """Raised when the original parent directory cannot be recreated."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Parent directory missing: {Path(path).parent}", path)


class MoveFailedError(RestoreError):
    """Raised when the move back fails for any other reason."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to restore {Path(path).name}: {reason}", path)
        self.reason = reason
