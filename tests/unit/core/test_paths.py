"""Unit tests for path management."""

import os
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

from brewaudit.core.paths import (
    APP_NAME,
    get_backup_path,
    get_config_dir,
    get_config_path,
    get_manifest_path,
    get_theme_path,
)


class TestConfigPaths:
    """Tests for XDG config paths."""

    def test_default_config_dir(self) -> None:
        """Without XDG_CONFIG_HOME the config lives under ~/.config."""
        env = {k: v for k, v in os.environ.items() if k != "XDG_CONFIG_HOME"}
        with patch.dict(os.environ, env, clear=True):
            assert get_config_dir() == Path.home() / ".config" / APP_NAME

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        """XDG_CONFIG_HOME overrides the default."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            assert get_config_dir() == tmp_path / APP_NAME
            assert get_config_path() == tmp_path / APP_NAME / "config.toml"
            assert get_theme_path() == tmp_path / APP_NAME / "theme.toml"


class TestManifestPaths:
    """Tests for manifest and backup paths."""

    def test_get_manifest_path(self, tmp_path: Path) -> None:
        """The manifest sits at the repository root."""
        assert get_manifest_path(tmp_path) == tmp_path / "brew.sh"
        assert get_manifest_path(tmp_path, "Brewfile.sh") == tmp_path / "Brewfile.sh"

    def test_backup_path_format(self, tmp_path: Path) -> None:
        """Backups carry a second-granularity timestamp."""
        now = datetime(2024, 3, 9, 7, 5, 1)

        backup = get_backup_path(tmp_path / "brew.sh", now)

        assert backup == tmp_path / "brew.sh.backup.20240309_070501"

    def test_same_second_same_name(self, tmp_path: Path) -> None:
        """Two backups in one second share a name."""
        a = get_backup_path(tmp_path / "brew.sh", datetime(2024, 1, 1, 0, 0, 0, 100))
        b = get_backup_path(tmp_path / "brew.sh", datetime(2024, 1, 1, 0, 0, 0, 900000))
        assert a == b
