"""Apps command for listing installed applications."""

from typing import Annotated

import typer
from rich.table import Table

from appscrub.core.bundle import find_applications, search_applications
from appscrub.utils.formatting import console, print_info


def apps(
    query: Annotated[
        str | None,
        typer.Argument(help="Only show applications whose name or bundle id contains this."),
    ] = None,
) -> None:
    """List applications installed in /Applications and ~/Applications."""
    found = find_applications()
    if query:
        found = search_applications(query, found)

    if not found:
        print_info("No applications found.")
        return

    table = Table(
        title="Applications",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Name", no_wrap=True)
    table.add_column("Bundle ID", style="muted")
    table.add_column("Version")
    table.add_column("Path", style="dim")

    for identity in found:
        name = identity.display_name
        if identity.is_protected_system_app:
            name += " [warning](system)[/warning]"
        table.add_row(
            name, identity.bundle_identifier, identity.version or "", identity.install_path
        )

    console.print(table)
