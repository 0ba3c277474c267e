"""CLI commands for appscrub.

This package contains all subcommand implementations.
"""

from appscrub.cli.commands import apps, config, history, remove, restore, scan

__all__ = ["apps", "config", "history", "remove", "restore", "scan"]
