"""Config command for viewing and creating the settings file."""

from typing import Annotated

import typer
from rich.table import Table

from appscrub.cli.common import get_settings
from appscrub.core.paths import get_config_path
from appscrub.core.settings import Settings, SettingsError, save_settings
from appscrub.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    name="config",
    help="Show or create the appscrub settings file.",
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective settings."""
    settings = get_settings(ctx)
    config_path = get_config_path()

    table = Table(
        title="Settings",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Key", no_wrap=True)
    table.add_column("Value")

    table.add_row("trash_dir", str(settings.effective_trash_dir))
    table.add_row("scan_workers", str(settings.scan_workers))
    table.add_row("helper_timeout_seconds", str(settings.helper_timeout_seconds))
    table.add_row("extra_allowed_prefixes", ", ".join(settings.extra_allowed_prefixes) or "-")
    table.add_row("min_term_length", str(settings.min_term_length))
    table.add_row("log_file", str(settings.effective_log_file))
    table.add_row("log_level", settings.log_level)

    console.print(table)
    source = str(config_path) if config_path.exists() else f"{config_path} (not created, defaults)"
    console.print(f"\n[dim]Config file: {source}[/dim]")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing settings file.",
        ),
    ] = False,
) -> None:
    """Write a settings file with the default values."""
    config_path = get_config_path()
    if config_path.exists() and not force:
        print_info(f"Settings file already exists: {config_path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        path = save_settings(Settings(), config_path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    print_success(f"Wrote default settings to {path}")
