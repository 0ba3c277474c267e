"""User settings for appscrub.

Settings are stored in ~/.config/appscrub/config.toml. Every field has
a default, so a missing file simply means default behaviour.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from appscrub.core.paths import get_config_path, get_default_log_file, get_default_trash_dir
from appscrub.errors import AppscrubError

logger = logging.getLogger(__name__)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class Settings(BaseModel):
    """Validated appscrub settings.

    Attributes:
        trash_dir: Trash directory files are moved to. None means ~/.Trash.
        scan_workers: Number of threads scanning catalog directories.
        helper_timeout_seconds: Timeout for each privileged helper call.
        extra_allowed_prefixes: Extra prefixes the privileged path validator accepts.
        min_term_length: Search terms shorter than this are dropped.
        log_file: Log file path. None means ~/Library/Logs/appscrub.log.
        log_level: Level for the log file handler.
    """

    model_config = ConfigDict(extra="forbid")

    trash_dir: Annotated[
        Path | None,
        Field(description="Trash directory (None = ~/.Trash)"),
    ] = None
    scan_workers: Annotated[
        int,
        Field(ge=1, le=16, description="Parallel directory scans (1-16)"),
    ] = 4
    helper_timeout_seconds: Annotated[
        int,
        Field(ge=10, le=3600, description="Privileged helper timeout in seconds"),
    ] = 120
    extra_allowed_prefixes: Annotated[
        list[str],
        Field(description="Additional allow-listed prefixes for privileged moves"),
    ] = []
    min_term_length: Annotated[
        int,
        Field(ge=1, le=10, description="Shortest search term kept"),
    ] = 3
    log_file: Annotated[
        Path | None,
        Field(description="Log file (None = ~/Library/Logs/appscrub.log)"),
    ] = None
    log_level: LogLevel = "INFO"

    @property
    def effective_trash_dir(self) -> Path:
        """Configured trash directory, or ~/.Trash."""
        return self.trash_dir.expanduser() if self.trash_dir else get_default_trash_dir()

    @property
    def effective_log_file(self) -> Path:
        """Configured log file, or the default under ~/Library/Logs."""
        return self.log_file.expanduser() if self.log_file else get_default_log_file()


class SettingsError(AppscrubError):
    """Raised when the settings file cannot be read or is invalid."""


class SettingsParseError(SettingsError):
    """Raised when the settings file is not valid TOML."""


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default location.

    Returns:
        Validated Settings; defaults if the file does not exist.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the file cannot be read or fails validation.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No settings file at %s, using defaults", config_path)
        return Settings()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings in {config_path}: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file atomically.

    Args:
        settings: Settings to save.
        path: Destination. If None, uses the default location.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = _settings_to_dict(settings)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return config_path


def _settings_to_dict(settings: Settings) -> dict[str, object]:
    """Convert Settings to a TOML-serializable dictionary.

    TOML has no null, so unset optional paths are left out.
    """
    result: dict[str, object] = {
        "scan_workers": settings.scan_workers,
        "helper_timeout_seconds": settings.helper_timeout_seconds,
        "extra_allowed_prefixes": list(settings.extra_allowed_prefixes),
        "min_term_length": settings.min_term_length,
        "log_level": settings.log_level,
    }
    if settings.trash_dir is not None:
        result["trash_dir"] = str(settings.trash_dir)
    if settings.log_file is not None:
        result["log_file"] = str(settings.log_file)
    return result
