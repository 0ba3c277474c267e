"""Typer application for the ``appscrub`` command.

The root callback loads settings, configures logging and hands both to
the subcommands through ``ctx.obj``.
"""

from typing import Annotated

import typer

from appscrub import __version__
from appscrub.cli.commands import apps, config, history, remove, restore, scan
from appscrub.core.log import setup_logging
from appscrub.core.settings import Settings, SettingsError, load_settings
from appscrub.utils.formatting import err_console, print_warning

app = typer.Typer(
    name="appscrub",
    help="Uninstall macOS applications together with the files they leave behind.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f"appscrub version {__version__}")
        raise typer.Exit()


def _load_settings_or_defaults() -> tuple[Settings, SettingsError | None]:
    """Load config.toml, falling back to defaults when it is invalid."""
    try:
        return load_settings(), None
    except SettingsError as e:
        return Settings(), e


VersionOption = Annotated[
    bool | None,
    typer.Option(
        "--version",
        "-V",
        callback=_show_version,
        is_eager=True,
        help="Print the version and exit.",
    ),
]
VerboseOption = Annotated[
    bool, typer.Option("--verbose", "-v", help="Show debug messages on the console.")
]
QuietOption = Annotated[bool, typer.Option("--quiet", "-q", help="Only show errors.")]


@app.callback()
def main(
    ctx: typer.Context,
    version: VersionOption = None,
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """appscrub - Uninstall macOS applications without leaving leftovers.

    Finds an application's preferences, caches, containers, launch agents
    and other support files, and moves them to the Trash together with
    the application. Every removal is recorded and can be restored.
    """
    settings, settings_error = _load_settings_or_defaults()

    setup_logging(
        verbose=verbose,
        quiet=quiet,
        log_file=settings.effective_log_file,
        file_level=settings.log_level,
        console=err_console,
    )
    if settings_error is not None:
        print_warning(f"{settings_error} (using defaults)")

    ctx.obj = {"verbose": verbose, "quiet": quiet, "settings": settings}


app.command(name="scan")(scan.scan)
app.command(name="remove")(remove.remove)
app.command(name="restore")(restore.restore)
app.command(name="apps")(apps.apps)
app.add_typer(history.app, name="history")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
