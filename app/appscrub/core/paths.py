"""Filesystem locations used by appscrub.

Configuration and state follow the XDG Base Directory layout:

- Config: ~/.config/appscrub/ (config.toml, theme.toml)
- State: ~/.local/state/appscrub/ (history.jsonl)

The macOS locations the engine works on (the user Library, the Trash)
are derived from ``HOME`` so tests can redirect them.
"""

import os
from pathlib import Path

APP_NAME = "appscrub"


def _xdg_app_dir(env_var: str, fallback: str) -> Path:
    """``$env_var/appscrub``, or ``~/<fallback>/appscrub`` when unset or empty."""
    base = os.environ.get(env_var)
    root = Path(base) if base else Path.home() / fallback
    return root / APP_NAME


def get_config_dir() -> Path:
    return _xdg_app_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Directory for data that must survive between runs (the deletion history)."""
    return _xdg_app_dir("XDG_STATE_HOME", ".local/state")


def get_config_path() -> Path:
    return get_config_dir() / "config.toml"


def get_user_library_dir() -> Path:
    """Per-user Library directory (~/Library)."""
    return Path.home() / "Library"


def get_default_trash_dir() -> Path:
    """Per-user Trash directory (~/.Trash)."""
    return Path.home() / ".Trash"


def get_default_log_file() -> Path:
    return get_user_library_dir() / "Logs" / f"{APP_NAME}.log"


def ensure_state_dir() -> Path:
    """Create the state directory if needed and return it.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    state_dir = get_state_dir()
    try:
        state_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        msg = f"Cannot create state directory {state_dir}: {e.strerror or e}"
        raise RuntimeError(msg) from e
    return state_dir
