"""Console color theme.

The bundled ``data/theme.toml`` defines every color. A ``theme.toml`` in
the config directory may override any subset of them; an invalid
override is logged and the bundled colors are used instead.
"""

import logging
import re
import tomllib
from functools import cache
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from appscrub.core.paths import get_config_dir

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")


class ThemeColors(BaseModel):
    """Hex color for each console style.

    ``elevated`` marks files that need administrator rights; ``removed``
    and ``restored`` color outcome lines.
    """

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    removed: str = "#f53263"
    restored: str = "#c1ff62"
    elevated: str = "#d44ebc"

    @field_validator("*", mode="before")
    @classmethod
    def _check_hex(cls, value: object) -> str:
        if not isinstance(value, str):
            msg = "color must be a string"
            raise ValueError(msg)
        color = value.strip()
        if not _HEX_COLOR.fullmatch(color):
            msg = f"expected #RGB or #RRGGBB, got {color!r}"
            raise ValueError(msg)
        return color


def get_user_theme_path() -> Path:
    """Path of the optional user override (~/.config/appscrub/theme.toml)."""
    return get_config_dir() / "theme.toml"


def _read_colors(source: Path | Traversable) -> dict[str, object]:
    """Read the ``[colors]`` table of a theme file.

    A missing file, unparsable TOML or a non-table ``colors`` key all
    yield an empty mapping.
    """
    try:
        with source.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", source, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", source)
        return {}
    return colors


def load_theme_colors(user_path: Path | None = None) -> ThemeColors:
    """Merge the bundled colors with the user's overrides.

    Args:
        user_path: Override file. Defaults to get_user_theme_path().

    Returns:
        Validated colors; the bundled set if the overrides are invalid.
    """
    bundled = _read_colors(resources.files("appscrub.data").joinpath("theme.toml"))
    overrides = _read_colors(user_path or get_user_theme_path())

    if overrides:
        try:
            return ThemeColors.model_validate({**bundled, **overrides})
        except ValidationError as e:
            logger.warning("Invalid theme overrides, using bundled colors: %s", e)

    return ThemeColors.model_validate(bundled)


def build_rich_theme(colors: ThemeColors) -> Theme:
    """Map colors to the Rich style names used by the CLI."""
    styles: dict[str, str] = colors.model_dump()
    styles["error"] = f"bold {colors.error}"
    styles["bold_header"] = f"bold {colors.header}"
    styles["dim"] = colors.muted
    return Theme(styles)


@cache
def get_theme() -> Theme:
    """Theme for the shared consoles, built once per process."""
    return build_rich_theme(load_theme_colors())
