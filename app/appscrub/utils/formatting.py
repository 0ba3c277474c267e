"""Shared Rich consoles and message helpers.

Results go to ``console`` (stdout) so they can be piped; warnings and
errors go to ``err_console`` (stderr).
"""

import sys

from rich.console import Console

from appscrub.core.theme import get_theme

_SIZE_UNITS = ("KB", "MB", "GB", "TB")


def _make_console(*, stderr: bool) -> Console:
    stream = sys.stderr if stderr else sys.stdout
    # Hex theme colors need truecolor; plain text when piped
    color_system = "truecolor" if stream.isatty() else None
    return Console(theme=get_theme(), stderr=stderr, color_system=color_system)


console = _make_console(stderr=False)
err_console = _make_console(stderr=True)


def format_size(size_bytes: int | None) -> str:
    """Format a byte count with decimal units, as Finder does.

    >>> format_size(999)
    '999 B'
    >>> format_size(1500)
    '1.5 KB'
    """
    if not size_bytes:
        return "0 B"
    if abs(size_bytes) < 1000:
        return f"{size_bytes} B"
    size = size_bytes / 1000
    for unit in _SIZE_UNITS[:-1]:
        if abs(size) < 1000:
            return f"{size:.1f} {unit}"
        size /= 1000
    return f"{size:.1f} {_SIZE_UNITS[-1]}"


def print_info(message: str) -> None:
    console.print(f"[info]{message}[/]")


def print_success(message: str) -> None:
    console.print(f"[success]{message}[/]")


def print_warning(message: str) -> None:
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    err_console.print(f"[error]Error:[/] {message}")
