"""Application bundle inspection.

Resolves an ``ApplicationIdentity`` from a .app bundle on disk by
reading its Info.plist, and lists the bundles installed in the
standard Applications folders.
"""

import logging
import plistlib
from pathlib import Path
from typing import Any

from appscrub.errors import (
    IdentityError,
    InvalidBundleError,
    MissingIdentifierError,
    MissingManifestError,
    NotAnAppBundleError,
    ProtectedSystemAppError,
)
from appscrub.models.identity import ApplicationIdentity

logger = logging.getLogger(__name__)

SYSTEM_APP_PREFIXES: tuple[str, ...] = (
    "/System/Applications/",
    "/System/Library/CoreServices/",
    "/System/Library/PreferencePanes/",
)

PROTECTED_BUNDLE_ID_PREFIXES: tuple[str, ...] = ("com.apple.",)

# Removing any of these leaves the session unusable
CRITICAL_BUNDLE_IDS: frozenset[str] = frozenset(
    {
        "com.apple.finder",
        "com.apple.dock",
        "com.apple.SystemPreferences",
        "com.apple.systempreferences",
        "com.apple.loginwindow",
        "com.apple.AppStore",
    }
)


def inspect_bundle(path: Path | str) -> ApplicationIdentity:
    """Resolve the identity of an application bundle.

    Args:
        path: Path to a .app bundle.

    Returns:
        ApplicationIdentity read from the bundle's Info.plist.

    Raises:
        NotAnAppBundleError: If the path is not a .app directory.
        MissingManifestError: If Contents/Info.plist is missing.
        InvalidBundleError: If the Info.plist cannot be parsed.
        MissingIdentifierError: If CFBundleIdentifier is missing or empty.
    """
    bundle = Path(path).expanduser()
    if bundle.suffix != ".app" or not bundle.is_dir():
        raise NotAnAppBundleError(str(bundle))

    info_plist = bundle / "Contents" / "Info.plist"
    if not info_plist.is_file():
        raise MissingManifestError(str(bundle))

    try:
        with info_plist.open("rb") as f:
            info = plistlib.load(f)
    except (plistlib.InvalidFileException, ValueError, OSError) as e:
        raise InvalidBundleError(str(bundle), str(e)) from e

    if not isinstance(info, dict):
        raise InvalidBundleError(str(bundle), "Info.plist is not a dictionary")

    bundle_id = info.get("CFBundleIdentifier")
    if not isinstance(bundle_id, str) or not bundle_id:
        raise MissingIdentifierError(str(bundle))

    install_path = str(bundle.absolute())
    return ApplicationIdentity(
        install_path=install_path,
        display_name=_display_name(info, bundle),
        bundle_identifier=bundle_id,
        is_protected_system_app=is_system_app(install_path, bundle_id),
        version=_version(info),
    )


def is_system_app(install_path: str, bundle_id: str) -> bool:
    """Check whether an application ships with macOS."""
    if install_path.startswith(SYSTEM_APP_PREFIXES):
        return True
    return bundle_id.startswith(PROTECTED_BUNDLE_ID_PREFIXES)


def ensure_removable(identity: ApplicationIdentity) -> None:
    """Refuse applications whose removal would break the system.

    Raises:
        ProtectedSystemAppError: For critical bundle ids and apps under /System.
    """
    if identity.bundle_identifier in CRITICAL_BUNDLE_IDS:
        raise ProtectedSystemAppError(identity.display_name)
    if identity.install_path.startswith(SYSTEM_APP_PREFIXES):
        raise ProtectedSystemAppError(identity.display_name)


def find_applications(directories: list[Path] | None = None) -> list[ApplicationIdentity]:
    """List application bundles installed in the Applications folders.

    Bundles that cannot be inspected are skipped. When the same bundle id
    appears twice, the first directory wins.

    Args:
        directories: Folders to search. Defaults to /Applications and ~/Applications.

    Returns:
        Identities sorted case-insensitively by display name.
    """
    if directories is None:
        directories = [Path("/Applications"), Path.home() / "Applications"]

    found: list[ApplicationIdentity] = []
    seen: set[str] = set()

    for directory in directories:
        try:
            candidates = sorted(directory.glob("*.app"))
        except OSError as e:
            logger.debug("Cannot list %s: %s", directory, e)
            continue

        for candidate in candidates:
            try:
                identity = inspect_bundle(candidate)
            except IdentityError as e:
                logger.debug("Skipping %s: %s", candidate, e)
                continue
            if identity.bundle_identifier in seen:
                continue
            seen.add(identity.bundle_identifier)
            found.append(identity)

    found.sort(key=lambda i: i.display_name.casefold())
    return found


def search_applications(
    query: str,
    applications: list[ApplicationIdentity],
) -> list[ApplicationIdentity]:
    """Filter applications by name or bundle identifier.

    An exact (case-insensitive) name or bundle id match wins outright;
    otherwise every application whose name or bundle id contains the
    query is returned.

    Args:
        query: Text typed by the user.
        applications: Candidates, typically from find_applications().

    Returns:
        Matching applications in input order.
    """
    needle = query.strip().casefold()
    if not needle:
        return list(applications)

    exact = [
        a
        for a in applications
        if needle in (a.display_name.casefold(), a.bundle_identifier.casefold())
    ]
    if exact:
        return exact

    return [
        a
        for a in applications
        if needle in a.display_name.casefold() or needle in a.bundle_identifier.casefold()
    ]


def _display_name(info: dict[str, Any], bundle: Path) -> str:
    for key in ("CFBundleDisplayName", "CFBundleName"):
        value = info.get(key)
        if isinstance(value, str) and value:
            return value
    return bundle.stem


def _version(info: dict[str, Any]) -> str | None:
    short = info.get("CFBundleShortVersionString")
    build = info.get("CFBundleVersion")
    if isinstance(short, str):
        if isinstance(build, str) and build != short:
            return f"{short} ({build})"
        return short
    return build if isinstance(build, str) else None
