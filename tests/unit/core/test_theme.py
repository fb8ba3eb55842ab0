"""Unit tests for theme loading."""

from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError
from winprov.core.theme import ThemeColors, get_bundled_theme_path, get_rich_theme, load_theme


class TestThemeColors:
    """Tests for ThemeColors validation."""

    def test_defaults_are_valid(self) -> None:
        """The default colors pass validation."""
        assert ThemeColors().created.startswith("#")

    @pytest.mark.parametrize("color", ["red", "#12", "#ggg", "#1234567"])
    def test_invalid_colors_rejected(self, color: str) -> None:
        """Non-hex colors raise ValidationError."""
        with pytest.raises(ValidationError):
            ThemeColors(success=color)

    def test_unknown_key_rejected(self) -> None:
        """Extra color names are forbidden."""
        with pytest.raises(ValidationError):
            ThemeColors(sparkle="#ffffff")  # type: ignore[call-arg]


class TestLoadTheme:
    """Tests for load_theme."""

    def test_bundled_theme_exists(self) -> None:
        """The bundled theme ships with the package."""
        assert get_bundled_theme_path().is_file()

    def test_user_override_is_merged(self, tmp_path: Path) -> None:
        """User colors override individual bundled colors."""
        user = tmp_path / "theme.toml"
        user.write_text('[colors]\nsuccess = "#00ff00"\n')

        with patch("winprov.core.theme.get_user_theme_path", return_value=user):
            colors = load_theme()

        assert colors.success == "#00ff00"
        assert colors.error == ThemeColors().error

    def test_invalid_override_falls_back(self, tmp_path: Path) -> None:
        """An invalid user theme falls back to the defaults."""
        user = tmp_path / "theme.toml"
        user.write_text('[colors]\nsuccess = "green"\n')

        with patch("winprov.core.theme.get_user_theme_path", return_value=user):
            colors = load_theme()

        assert colors == ThemeColors()

    def test_rich_theme_has_outcome_styles(self) -> None:
        """The Rich theme defines the outcome styles used by tables."""
        theme = get_rich_theme(ThemeColors())
        for name in ("created", "unchanged", "skipped", "removed", "bold_header"):
            assert name in theme.styles
