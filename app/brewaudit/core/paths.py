"""XDG-compliant path management for brewaudit.

This module provides standardized paths following the XDG Base Directory
Specification for configuration, plus the naming rules for the manifest
and its backups.

XDG defaults:
- Config: ~/.config/brewaudit/
"""

import os
from datetime import datetime
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "brewaudit"

# Manifest file expected at the repository root
DEFAULT_MANIFEST_NAME = "brew.sh"

# Backup suffix timestamp, second granularity
BACKUP_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

DEFAULT_APPLICATIONS_DIR = Path("/Applications")


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/brewaudit/ (or XDG_CONFIG_HOME/brewaudit/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the main configuration file path.

    Returns:
        Path to ~/.config/brewaudit/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_theme_path() -> Path:
    """Get the user theme file path.

    Returns:
        Path to ~/.config/brewaudit/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_manifest_path(repo_root: Path, manifest_name: str = DEFAULT_MANIFEST_NAME) -> Path:
    """Get the manifest path inside a repository.

    Args:
        repo_root: Top-level directory of the dotfiles repository.
        manifest_name: File name of the manifest.

    Returns:
        Path to <repo_root>/<manifest_name>.
    """
    return repo_root / manifest_name


def get_backup_path(manifest_path: Path, now: datetime | None = None) -> Path:
    """Get the backup path for a manifest.

    Two runs within the same second map to the same backup name.

    Args:
        manifest_path: The manifest being backed up.
        now: Timestamp to embed. If None, uses the local current time.

    Returns:
        Path to <manifest>.backup.YYYYMMDD_HHMMSS next to the manifest.
    """
    stamp = (now or datetime.now()).strftime(BACKUP_TIMESTAMP_FORMAT)
    return manifest_path.with_name(f"{manifest_path.name}.backup.{stamp}")
