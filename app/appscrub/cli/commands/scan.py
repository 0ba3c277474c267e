"""Scan command for listing an application's files.

This module provides the `appscrub scan` command, which shows every
file that would be removed together with an application.
"""

import json
from enum import Enum
from typing import Annotated

import typer

from appscrub.cli.common import build_scanner, get_settings, resolve_application
from appscrub.cli.display import print_scan_result
from appscrub.models.files import ScanResult
from appscrub.utils.formatting import console


class OutputFormat(str, Enum):
    """Output format options for scan."""

    TABLE = "table"
    JSON = "json"


def scan(
    ctx: typer.Context,
    target: Annotated[
        str,
        typer.Argument(help="Application name, bundle id or path to a .app bundle."),
    ],
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show the files an application has left on this Mac.

    Nothing is changed; use `appscrub remove` to move the files to the Trash.

    Examples:
        appscrub scan Slack
        appscrub scan /Applications/Slack.app --format json
    """
    settings = get_settings(ctx)
    identity = resolve_application(target)

    result = build_scanner(settings).scan(identity)

    if output_format == OutputFormat.JSON:
        _print_json(result)
        return

    print_scan_result(result)


def _print_json(result: ScanResult) -> None:
    """Print a scan result as JSON for scripting."""
    output = {
        "app_name": result.identity.display_name,
        "bundle_id": result.identity.bundle_identifier,
        "install_path": result.identity.install_path,
        "total_size": result.total_size_bytes,
        "files": [
            {
                "path": f.path,
                "category": f.category.value,
                "size": f.size_bytes,
                "requires_admin": f.requires_elevated_privilege,
            }
            for f in result.files
        ],
    }
    console.print_json(json.dumps(output))
