"""Application identity model.

The identity is resolved once from the bundle on disk and consumed
read-only by the scanner, deleter and history recorder.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ApplicationIdentity:
    """Resolved identity of an application bundle.

    Attributes:
        install_path: Absolute path to the .app bundle.
        display_name: User-facing application name (e.g., 'Acme Widget').
        bundle_identifier: Reverse-DNS bundle identifier (e.g., 'com.acme.widget').
        is_protected_system_app: True for applications shipped with macOS.
        version: Optional version string read from the bundle.
    """

    install_path: str
    display_name: str
    bundle_identifier: str
    is_protected_system_app: bool = False
    version: str | None = None

    def __post_init__(self) -> None:
        """Validate identity data after initialization."""
        if not self.install_path:
            msg = "Install path cannot be empty"
            raise ValueError(msg)
        if not self.bundle_identifier:
            msg = "Bundle identifier cannot be empty"
            raise ValueError(msg)

    @property
    def bundle_stem(self) -> str:
        """Bundle file name without its extension (e.g., 'Acme Widget')."""
        return Path(self.install_path).stem
