"""Unit tests for logging setup."""

import io
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from appscrub.core.log import ROOT_LOGGER_NAME, setup_logging
from rich.console import Console
from rich.logging import RichHandler


@pytest.fixture(autouse=True)
def _reset_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()


def _console_handler(logger: logging.Logger) -> RichHandler:
    return next(h for h in logger.handlers if isinstance(h, RichHandler))


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.mark.parametrize(
        ("verbose", "quiet", "level"),
        [
            (False, False, logging.WARNING),
            (True, False, logging.DEBUG),
            (False, True, logging.ERROR),
        ],
    )
    def test_console_level(self, verbose: bool, quiet: bool, level: int) -> None:
        logger = setup_logging(verbose=verbose, quiet=quiet)

        assert _console_handler(logger).level == level

    def test_file_handler(self, tmp_path: Path) -> None:
        log_file = tmp_path / "Logs" / "appscrub.log"

        logger = setup_logging(log_file=log_file, file_level="DEBUG")
        logging.getLogger("appscrub.uninstall.deleter").debug("Moved %s", "/a")
        for handler in logger.handlers:
            handler.flush()

        content = log_file.read_text()
        assert "DEBUG | appscrub.uninstall.deleter | Moved /a" in content

    def test_repeated_setup_does_not_duplicate(self) -> None:
        setup_logging()
        logger = setup_logging()

        assert len(logger.handlers) == 1

    def test_unwritable_log_file(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        stream = io.StringIO()

        logger = setup_logging(log_file=blocker / "appscrub.log", console=Console(file=stream))

        assert len(logger.handlers) == 1
        assert "Cannot open log file" in stream.getvalue()
