"""Restore command for reverting a deletion.

This module provides the `appscrub restore` command, which moves the
files of a recorded deletion back out of the Trash.
"""

from typing import Annotated

import typer

from appscrub.cli.common import get_settings
from appscrub.cli.display import print_record_preview, print_restore_outcome
from appscrub.core.state import HistoryStore
from appscrub.models.outcome import OutcomeStatus
from appscrub.uninstall.restorer import TrashRestorer
from appscrub.utils.formatting import print_error, print_info


def restore(
    ctx: typer.Context,
    record_id: Annotated[
        str | None,
        typer.Argument(help="History record ID (or prefix). Defaults to the most recent."),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be restored without executing.",
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
    """Restore the files of a previous deletion from the Trash.

    Files are moved back to their original locations. Nothing is ever
    overwritten: if something already exists at the original path, that
    file stays in the Trash.

    Examples:
        appscrub restore              # Restore the most recent deletion
        appscrub restore 3f2a9c1b     # Restore a specific record
        appscrub restore --dry-run
    """
    settings = get_settings(ctx)
    store = HistoryStore()

    if record_id is None:
        record = store.get_most_recent()
        if record is None:
            print_info("No deletions in history.")
            return
    else:
        record = store.get_record(record_id)
        if record is None:
            print_error(f"No unique history record matches {record_id!r}.")
            raise typer.Exit(code=1)

    print_record_preview(record)

    restorer = TrashRestorer(settings.effective_trash_dir)
    if not restorer.can_restore_any(record.deleted_files):
        print_error("None of these files can be restored (Trash emptied or locations occupied).")
        raise typer.Exit(code=1)

    if dry_run:
        print_info("Dry run: no changes made.")
        return

    if not yes:
        confirm = typer.confirm("Restore these files?")
        if not confirm:
            print_info("Cancelled.")
            return

    outcome = restorer.restore(record.deleted_files)
    print_restore_outcome(outcome)

    # A fully restored record has nothing left to restore
    if outcome.status == OutcomeStatus.COMPLETE:
        store.delete_record(record.id)

    if outcome.failed:
        raise typer.Exit(code=1)
