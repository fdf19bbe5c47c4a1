"""Unit tests for theme module.

Tests for theme loading, validation, and Rich theme generation.
"""

# pyright: reportPrivateUsage=false

from pathlib import Path
from unittest.mock import patch

import brewaudit.core.theme as theme_module
import pytest
from brewaudit.core.theme import (
    ThemeColors,
    _load_toml_colors,
    get_rich_theme,
    get_theme,
    load_theme,
)
from rich.theme import Theme


class TestThemeColors:
    """Tests for ThemeColors Pydantic model."""

    def test_default_values(self) -> None:
        """ThemeColors has sensible defaults."""
        colors = ThemeColors()
        assert colors.text == "#ffffff"
        assert colors.success == "#03b971"
        assert colors.error == "#f53263"

    def test_valid_hex_colors(self) -> None:
        """ThemeColors accepts #RGB and #RRGGBB."""
        colors = ThemeColors(text="#AABBCC", muted="#abc")
        assert colors.text == "#AABBCC"
        assert colors.muted == "#abc"

    def test_invalid_hex_no_hash(self) -> None:
        """ThemeColors rejects colors without # prefix."""
        with pytest.raises(ValueError, match="must start with '#'"):
            ThemeColors(text="ffffff")

    def test_invalid_hex_wrong_length(self) -> None:
        """ThemeColors rejects colors of the wrong length."""
        with pytest.raises(ValueError, match="#RGB or #RRGGBB"):
            ThemeColors(added="#abcd")

    def test_invalid_hex_chars(self) -> None:
        """ThemeColors rejects non-hex digits."""
        with pytest.raises(ValueError, match="invalid hex color"):
            ThemeColors(moved="#gggggg")

    def test_extra_fields_forbidden(self) -> None:
        """Unknown color names are rejected."""
        with pytest.raises(ValueError):
            ThemeColors(unknown="#ffffff")  # type: ignore[call-arg]


class TestLoadTomlColors:
    """Tests for _load_toml_colors function."""

    def test_loads_valid_toml(self, tmp_path: Path) -> None:
        """Colors are read from the [colors] table."""
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\nadded = "#00ff00"\nremoved = "#ff0000"\n')

        assert _load_toml_colors(path) == {"added": "#00ff00", "removed": "#ff0000"}

    def test_returns_none_for_missing_file(self, tmp_path: Path) -> None:
        """A missing file yields None."""
        assert _load_toml_colors(tmp_path / "missing.toml") is None

    def test_returns_none_for_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML yields None."""
        path = tmp_path / "theme.toml"
        path.write_text("[colors\n")

        assert _load_toml_colors(path) is None

    def test_missing_colors_section(self, tmp_path: Path) -> None:
        """A file without [colors] yields an empty mapping."""
        path = tmp_path / "theme.toml"
        path.write_text("[other]\nkey = 1\n")

        assert _load_toml_colors(path) == {}


class TestLoadTheme:
    """Tests for load_theme function."""

    def test_defaults_without_file(self, tmp_path: Path) -> None:
        """No user file means defaults."""
        assert load_theme(tmp_path / "missing.toml") == ThemeColors()

    def test_partial_overrides(self, tmp_path: Path) -> None:
        """User colors override only what they name."""
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\nadded = "#123456"\n')

        colors = load_theme(path)

        assert colors.added == "#123456"
        assert colors.removed == ThemeColors().removed

    def test_invalid_user_theme_falls_back(self, tmp_path: Path) -> None:
        """An invalid color falls back to defaults."""
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\nadded = "green"\n')

        assert load_theme(path) == ThemeColors()


class TestGetRichTheme:
    """Tests for get_rich_theme function."""

    def test_returns_rich_theme(self) -> None:
        """A Rich Theme is returned."""
        assert isinstance(get_rich_theme(ThemeColors()), Theme)

    def test_includes_action_styles(self) -> None:
        """Styles used by the review and report are defined."""
        theme = get_rich_theme(ThemeColors())
        for name in ("added", "removed", "moved", "skipped", "section", "prompt", "header"):
            assert name in theme.styles

    def test_uses_provided_colors(self) -> None:
        """Styles are built from the given colors."""
        theme = get_rich_theme(ThemeColors(added="#00ff00"))
        assert theme.styles["added"].color is not None
        assert theme.styles["added"].color.triplet.hex == "#00ff00"


class TestGetTheme:
    """Tests for get_theme function."""

    def test_caches_theme(self) -> None:
        """The theme is built once."""
        with patch.object(theme_module, "_cached_theme", None):
            first = get_theme()
            second = get_theme()
        assert first is second
