"""Subprocess helpers.

Commands are always given as argument lists and never pass through a
shell command line built from user data.
"""

import subprocess
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured output and exit status of a finished command."""

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def last_line(self) -> str:
        """Last non-empty line of stdout, or "" if there is none."""
        lines = [line for line in self.stdout.splitlines() if line]
        return lines[-1] if lines else ""


def run_command(args: list[str], *, timeout: float | None = 60.0) -> CommandResult:
    """Run a command with captured output.

    A non-zero exit status is reported in the result, not raised.

    Args:
        args: Program and arguments.
        timeout: Seconds to wait before giving up. None waits forever.

    Raises:
        subprocess.TimeoutExpired: If the command exceeds the timeout.
        OSError: If the program cannot be started.
    """
    completed = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=False,
        timeout=timeout,
    )
    return CommandResult(completed.stdout, completed.stderr, completed.returncode)


def run_interactive(args: list[str]) -> int:
    """Run a command attached to the terminal and return its exit status.

    Output is not captured, so the command can prompt the user (sudo
    asking for a password).

    Raises:
        OSError: If the program cannot be started.
    """
    return subprocess.run(args, check=False).returncode
