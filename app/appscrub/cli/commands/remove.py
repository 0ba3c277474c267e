"""Remove command for uninstalling an application.

This module provides the `appscrub remove` command: scan for an
application's files, confirm, move them to the Trash and record the
deletion so it can be restored later.
"""

import logging
from typing import Annotated

import typer

from appscrub.cli.common import build_deleter, build_scanner, get_settings, resolve_application
from appscrub.cli.display import create_files_table, print_deletion_outcome
from appscrub.core.bundle import ensure_removable
from appscrub.errors import ProtectedSystemAppError
from appscrub.models.files import DiscoveredFile, FileCategory
from appscrub.models.identity import ApplicationIdentity
from appscrub.uninstall.history import record_deletion
from appscrub.uninstall.running import is_running, terminate
from appscrub.utils.formatting import console, format_size, print_error, print_info, print_warning

logger = logging.getLogger(__name__)


def remove(
    ctx: typer.Context,
    target: Annotated[
        str,
        typer.Argument(help="Application name, bundle id or path to a .app bundle."),
    ],
    include_admin: Annotated[
        bool,
        typer.Option(
            "--include-admin",
            "-a",
            help="Also remove files that need administrator rights (asks for your password).",
        ),
    ] = False,
    categories: Annotated[
        list[FileCategory] | None,
        typer.Option(
            "--category",
            "-c",
            help="Only remove files of this category (repeatable).",
            case_sensitive=False,
        ),
    ] = None,
    force_quit: Annotated[
        bool,
        typer.Option(
            "--force-quit",
            help="Quit the application first if it is running.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be removed without changing anything.",
        ),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip confirmation prompt.",
        ),
    ] = False,
) -> None:
    """Move an application and its leftover files to the Trash.

    Files in system-wide locations need administrator rights and are
    skipped unless --include-admin is given.

    Examples:
        appscrub remove Slack --dry-run
        appscrub remove Slack -c caches -c logs
        appscrub remove /Applications/Slack.app --include-admin -y
        appscrub remove Slack --force-quit
    """
    settings = get_settings(ctx)
    identity = resolve_application(target)

    try:
        ensure_removable(identity)
    except ProtectedSystemAppError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    if identity.is_protected_system_app:
        print_warning(f"{identity.display_name} ships with macOS.")

    if not dry_run:
        _ensure_not_running(identity, force_quit=force_quit)
    elif is_running(identity):
        print_warning(f"{identity.display_name} is running; quit it before removing.")

    result = build_scanner(settings).scan(identity)
    files = _select(list(result.files), categories)

    if not files:
        print_info("Nothing to remove.")
        return

    title = f"Files to remove for {identity.display_name}"
    if dry_run:
        title += " (Dry Run)"
    console.print(create_files_table(files, title))

    total = sum(f.size_bytes for f in files)
    console.print(f"\n[dim]{len(files)} item(s), {format_size(total)}[/dim]")

    elevated = [f for f in files if f.requires_elevated_privilege]
    if elevated and not include_admin:
        print_warning(
            f"{len(elevated)} item(s) need administrator rights and will be skipped "
            "(use --include-admin)."
        )

    if dry_run:
        print_info("Dry run: no changes made.")
        return

    if not yes:
        confirm = typer.confirm(f"Move {len(files)} item(s) to the Trash?")
        if not confirm:
            print_info("Cancelled.")
            return

    outcome = build_deleter(settings).delete(files, include_elevated=include_admin)

    history_error: Exception | None = None
    try:
        record = record_deletion(identity, outcome)
    except (OSError, RuntimeError) as e:
        logger.warning("Could not record deletion of %s: %s", identity.display_name, e)
        record = None
        history_error = e

    print_deletion_outcome(outcome)
    if history_error is not None:
        print_warning(f"Could not record to history: {history_error}")
    elif record is not None:
        print_info(f"Recorded as {record.id[:8]}; undo with `appscrub restore {record.id[:8]}`.")

    if outcome.failed:
        raise typer.Exit(code=1)


def _select(
    files: list[DiscoveredFile],
    categories: list[FileCategory] | None,
) -> list[DiscoveredFile]:
    """Keep only files in the requested categories (all files if none given)."""
    if not categories:
        return files
    wanted = set(categories)
    return [f for f in files if f.category in wanted]


def _ensure_not_running(identity: ApplicationIdentity, *, force_quit: bool) -> None:
    """Refuse to continue while the application is running.

    Raises:
        typer.Exit: With code 1 if the application is (still) running.
    """
    if not is_running(identity):
        return

    if not force_quit:
        print_error(
            f"{identity.display_name} is running. Quit it first or use --force-quit."
        )
        raise typer.Exit(code=1)

    print_info(f"Quitting {identity.display_name}...")
    if not terminate(identity):
        print_error(f"{identity.display_name} did not quit; nothing was removed.")
        raise typer.Exit(code=1)
