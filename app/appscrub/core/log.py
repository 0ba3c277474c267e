"""Logging setup for the appscrub CLI.

Library modules only create module loggers; handlers are attached here
once, by the CLI entry point.
"""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "appscrub"

_FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
    file_level: str = "INFO",
    console: Console | None = None,
) -> logging.Logger:
    """Configure the ``appscrub`` logger hierarchy.

    Args:
        verbose: Show DEBUG messages on the console.
        quiet: Only show errors on the console.
        log_file: Optional file receiving a plain-text copy of the log.
        file_level: Level name for the file handler.
        console: Console for the Rich handler (defaults to stderr).

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # Clear existing handlers to avoid duplicates when invoked repeatedly
    if logger.handlers:
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

    if verbose:
        console_level = logging.DEBUG
    elif quiet:
        console_level = logging.ERROR
    else:
        console_level = logging.WARNING

    console_handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    console_handler.setLevel(console_level)
    logger.addHandler(console_handler)

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            logger.warning("Cannot open log file %s: %s", log_file, e)
        else:
            file_handler.setLevel(getattr(logging, file_level.upper(), logging.INFO))
            file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
            logger.addHandler(file_handler)

    return logger
