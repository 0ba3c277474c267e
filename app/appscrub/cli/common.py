"""Helpers shared by CLI commands.

Commands resolve the target application and build the engine objects
from the settings loaded by the main callback.
"""

from pathlib import Path

import typer

from appscrub.core.bundle import find_applications, inspect_bundle, search_applications
from appscrub.core.settings import Settings
from appscrub.errors import IdentityError
from appscrub.models.identity import ApplicationIdentity
from appscrub.uninstall.deleter import Deleter
from appscrub.uninstall.privileged import PrivilegedDeleter
from appscrub.uninstall.safety import PathSafetyValidator
from appscrub.uninstall.scanner import FileScanner
from appscrub.uninstall.trash import TrashBin
from appscrub.utils.formatting import console, print_error


def get_settings(ctx: typer.Context) -> Settings:
    """Settings stored by the main callback, or defaults."""
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    settings = obj.get("settings")
    return settings if isinstance(settings, Settings) else Settings()


def resolve_application(target: str) -> ApplicationIdentity:
    """Resolve a bundle path or an application name to its identity.

    Paths (anything containing a slash or ending in .app) are inspected
    directly. Names are looked up among the installed applications and
    must match exactly one of them.

    Raises:
        typer.Exit: With code 1 if the application cannot be resolved.
    """
    if "/" in target or target.endswith(".app"):
        try:
            return inspect_bundle(Path(target).expanduser())
        except IdentityError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from None

    candidates = search_applications(target, find_applications())
    if not candidates:
        print_error(f"No installed application matches {target!r}.")
        raise typer.Exit(code=1)
    if len(candidates) > 1:
        print_error(f"{target!r} matches {len(candidates)} applications:")
        for candidate in candidates:
            console.print(f"  - {candidate.display_name} [muted]({candidate.bundle_identifier})[/]")
        raise typer.Exit(code=1)
    return candidates[0]


def build_scanner(settings: Settings) -> FileScanner:
    return FileScanner(
        max_workers=settings.scan_workers,
        min_term_length=settings.min_term_length,
    )


def build_deleter(settings: Settings) -> Deleter:
    """Create a Deleter wired to the configured trash and privileged helper."""
    trash_dir = settings.effective_trash_dir
    validator = PathSafetyValidator(extra_prefixes=settings.extra_allowed_prefixes)
    privileged = PrivilegedDeleter(
        trash_dir,
        validator=validator,
        timeout=float(settings.helper_timeout_seconds),
    )
    return Deleter(TrashBin(trash_dir), privileged)
