"""Console and subprocess helpers shared by the engine and the CLI."""

from appscrub.utils.formatting import (
    console,
    err_console,
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from appscrub.utils.shell import CommandResult, run_command, run_interactive

__all__ = [
    "CommandResult",
    "console",
    "err_console",
    "format_size",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
    "run_interactive",
]
