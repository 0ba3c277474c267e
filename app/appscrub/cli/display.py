"""Shared Rich display functions for scans, outcomes and history.

Provides table builders and summary printers used by the scan, remove,
restore and history commands.
"""

from datetime import datetime

from rich.markup import escape
from rich.table import Table

from appscrub.models.files import DiscoveredFile, FileCategory, ScanResult
from appscrub.models.history import DeletionRecord
from appscrub.models.outcome import DeletionOutcome, OutcomeStatus, RestoreOutcome
from appscrub.utils.formatting import console, format_size, print_success, print_warning

CATEGORY_LABELS: dict[FileCategory, str] = {
    FileCategory.APPLICATION: "Application",
    FileCategory.PREFERENCES: "Preferences",
    FileCategory.APPLICATION_SUPPORT: "Application Support",
    FileCategory.CACHES: "Caches",
    FileCategory.LOGS: "Logs",
    FileCategory.CONTAINERS: "Containers",
    FileCategory.LAUNCH_AGENTS: "Launch Agents",
    FileCategory.LAUNCH_DAEMONS: "Launch Daemons",
    FileCategory.EXTENSIONS: "Extensions",
    FileCategory.LOGIN_ITEMS: "Login Items",
    FileCategory.COOKIES: "Cookies",
    FileCategory.WEBKIT_DATA: "WebKit Data",
    FileCategory.SAVED_STATE: "Saved State",
    FileCategory.OTHER: "Other",
}


def category_label(category: FileCategory) -> str:
    return CATEGORY_LABELS.get(category, category.value)


def create_files_table(files: list[DiscoveredFile], title: str) -> Table:
    """Create a Rich table listing discovered files.

    Files that need administrator rights are marked in the Admin column.

    Args:
        files: Files to list, in display order.
        title: Table title.

    Returns:
        Rich Table with Category, Path, Size and Admin columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Category", no_wrap=True)
    table.add_column("Path")
    table.add_column("Size", justify="right", no_wrap=True)
    table.add_column("Admin", justify="center", width=5)

    for discovered in files:
        table.add_row(
            category_label(discovered.category),
            escape(discovered.display_path),
            format_size(discovered.size_bytes),
            "[elevated]yes[/]" if discovered.requires_elevated_privilege else "",
        )

    return table


def print_scan_result(result: ScanResult) -> None:
    """Print the files found for an application and a one-line summary."""
    identity = result.identity
    version = f" {identity.version}" if identity.version else ""
    title = f"{identity.display_name}{version} ({identity.bundle_identifier})"

    console.print(create_files_table(list(result.files), title))

    elevated = len(result.elevated_files)
    summary = f"{len(result.files)} item(s), {format_size(result.total_size_bytes)}"
    if elevated:
        summary += f", [elevated]{elevated} need administrator rights[/]"
    console.print(f"\n[dim]{summary} (scanned in {result.scan_duration_seconds:.2f}s)[/dim]")


def print_deletion_outcome(outcome: DeletionOutcome) -> None:
    """Print the result of a deletion batch.

    Failures are listed with their reasons; skipped admin-only files are
    listed so the user can rerun with --include-admin.
    """
    if outcome.failed:
        table = Table(
            title="Failed",
            show_header=True,
            header_style="bold_header",
            border_style="border",
        )
        table.add_column("Path")
        table.add_column("Reason")
        for failure in outcome.failed:
            table.add_row(
                escape(failure.item.display_path), f"[muted]{escape(failure.message)}[/muted]"
            )
        console.print(table)

    if outcome.skipped_privileged:
        console.print("\n[warning]Skipped (administrator rights required):[/warning]")
        for skipped in outcome.skipped_privileged:
            console.print(f"  - {escape(skipped.display_path)}")

    size = format_size(outcome.size_reclaimed)
    moved = f"{outcome.total_deleted} item(s) moved to the Trash ({size})"
    if outcome.status == OutcomeStatus.COMPLETE:
        print_success(moved + ".")
        return

    console.print(
        f"\n[success]{moved}[/success], [error]{outcome.total_failed} failed[/error], "
        f"[warning]{outcome.total_skipped} skipped[/warning]"
    )


def print_restore_outcome(outcome: RestoreOutcome) -> None:
    """Print the result of a restore batch."""
    for failure in outcome.failed:
        path = escape(failure.item.original_path)
        console.print(f"  [error]FAIL[/error] {path}: {escape(failure.message)}")
    for missing in outcome.not_found_in_trash:
        path = escape(missing.original_path)
        console.print(f"  [warning]MISSING[/warning] {path} (no longer in Trash)")

    restored = f"{outcome.total_restored} item(s) restored ({format_size(outcome.restored_size)})"
    if outcome.status == OutcomeStatus.COMPLETE:
        print_success(restored + ".")
    elif outcome.status == OutcomeStatus.PARTIAL:
        print_warning(
            f"{restored}; {outcome.total_failed} failed, {outcome.total_not_found} not in Trash."
        )
    else:
        print_warning(
            f"Nothing restored: {outcome.total_failed} failed, "
            f"{outcome.total_not_found} not in Trash."
        )


def create_history_table(records: list[DeletionRecord]) -> Table:
    """Create a Rich table of deletion records, newest first."""
    table = Table(
        title="Deletion History",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("ID", style="dim")
    table.add_column("Date", style="info")
    table.add_column("Application")
    table.add_column("Files", justify="right")
    table.add_column("Size", justify="right")

    for record in records:
        table.add_row(
            record.id[:8],
            format_timestamp(record.timestamp),
            f"{record.app_display_name} [muted]({record.bundle_identifier})[/muted]",
            str(record.file_count),
            format_size(record.total_size_bytes),
        )

    return table


def print_record_preview(record: DeletionRecord, max_files: int = 10) -> None:
    """Show what a restore of this record would bring back."""
    console.print(f"\n[bold]Restore: {record.app_display_name}[/bold]")
    console.print(f"  ID: {record.id[:8]}")
    console.print(f"  Date: {format_timestamp(record.timestamp)}")
    console.print(f"  Files ({record.file_count}, {format_size(record.total_size_bytes)}):")
    for descriptor in record.deleted_files[:max_files]:
        console.print(f"    - {escape(descriptor.original_path)}")
    if record.file_count > max_files:
        console.print(f"    ... and {record.file_count - max_files} more")
    console.print()


def format_timestamp(iso_timestamp: str) -> str:
    """Format an ISO 8601 timestamp as local "YYYY-MM-DD HH:MM"."""
    try:
        dt = datetime.fromisoformat(iso_timestamp.replace("Z", "+00:00"))
    except ValueError:
        return iso_timestamp
    if dt.tzinfo is not None:
        dt = dt.astimezone()
    return dt.strftime("%Y-%m-%d %H:%M")
