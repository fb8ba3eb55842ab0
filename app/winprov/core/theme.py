"""Console color theme.

Colors come from the bundled ``data/theme.toml``; a ``theme.toml`` in the
user config directory may override any subset of them.
"""

import logging
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationError
from rich.theme import Theme

from winprov.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)


def _hex_color(value: object) -> str:
    if not isinstance(value, str):
        raise ValueError("color must be a string")
    color = value.strip()
    digits = color.removeprefix("#")
    if digits == color or len(digits) not in (3, 6):
        raise ValueError(f"'{color}' is not a #RGB or #RRGGBB color")
    try:
        int(digits, 16)
    except ValueError:
        raise ValueError(f"'{color}' is not a hex color") from None
    return color


HexColor = Annotated[str, BeforeValidator(_hex_color)]


class ThemeColors(BaseModel):
    """Named colors used by winprov output."""

    model_config = ConfigDict(extra="forbid", validate_default=True)

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"

    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    # Link and purge outcomes
    created: HexColor = "#c1ff62"
    unchanged: HexColor = "#69B9A1"
    skipped: HexColor = "#faf870"
    removed: HexColor = "#f53263"


def get_bundled_theme_path() -> Path:
    """Location of the theme shipped inside the package."""
    return Path(str(resources.files("winprov.data").joinpath("theme.toml")))


def _read_colors(path: Path) -> dict[str, str]:
    """Read the ``[colors]`` table of a theme file.

    Missing or unreadable files yield an empty mapping; problems other
    than a missing file are logged.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return {}
    return {str(k): v for k, v in colors.items() if isinstance(v, str)}


def load_theme() -> ThemeColors:
    """Merge user overrides onto the bundled colors.

    Returns:
        Validated colors; the built-in defaults if the merge is invalid.
    """
    bundled = _read_colors(get_bundled_theme_path())
    if not bundled:
        logger.error("Bundled theme is missing or empty; using built-in colors")

    overrides = _read_colors(get_user_theme_path())
    if overrides:
        logger.debug("Applying %d user theme color(s)", len(overrides))

    try:
        return ThemeColors.model_validate(bundled | overrides)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme; every color name is also a style name."""
    colors = colors or load_theme()
    styles = colors.model_dump()
    styles["error"] = f"bold {colors.error}"
    styles["bold_header"] = f"bold {colors.header}"
    styles["dim"] = colors.muted
    return Theme(styles)


@cache
def get_theme() -> Theme:
    """Rich theme shared by the console instances, loaded once."""
    return get_rich_theme()
