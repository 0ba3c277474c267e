"""History command for viewing past deletions.

This module provides the `appscrub history` command and its `delete`
and `clear` subcommands.
"""

import json
from typing import Annotated

import typer

from appscrub.cli.display import create_history_table
from appscrub.core.state import HistoryStore
from appscrub.models.history import DeletionRecord
from appscrub.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    name="history",
    help="View and manage the deletion history.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def history(
    ctx: typer.Context,
    limit: Annotated[
        int,
        typer.Option(
            "--limit",
            "-n",
            help="Maximum number of records to show.",
        ),
    ] = 20,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Show past deletions, newest first.

    Examples:
        appscrub history            # Show last 20 deletions
        appscrub history -n 50      # Show last 50 deletions
        appscrub history --json     # JSON output for scripting
    """
    if ctx.invoked_subcommand is not None:
        return

    records = HistoryStore().get_history(limit=limit)

    if not records:
        print_info("No deletions in history.")
        return

    if json_output:
        _print_json(records)
    else:
        console.print(create_history_table(records))


@app.command()
def delete(
    record_id: Annotated[
        str,
        typer.Argument(help="Record ID (or unique prefix) to remove from history."),
    ],
) -> None:
    """Remove one record from the history. Files stay in the Trash."""
    store = HistoryStore()
    record = store.get_record(record_id)
    if record is None or not store.delete_record(record.id):
        print_error(f"No unique history record matches {record_id!r}.")
        raise typer.Exit(code=1)
    print_success(f"Removed record {record.id[:8]} ({record.app_display_name}).")


@app.command()
def clear(
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip confirmation prompt.",
        ),
    ] = False,
) -> None:
    """Remove all records. Deleted files remain in the Trash."""
    if not yes:
        confirm = typer.confirm("Remove the entire deletion history?")
        if not confirm:
            print_info("Cancelled.")
            return

    count = HistoryStore().clear()
    print_success(f"Removed {count} record(s).")


def _print_json(records: list[DeletionRecord]) -> None:
    """Print history records as JSON."""
    output = [record.to_dict() for record in records]
    console.print_json(json.dumps(output))
