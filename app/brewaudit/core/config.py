"""Audit configuration.

This module provides the configuration model and loader for brewaudit.
Every setting has a default, so the file is optional.

Configuration is stored in ~/.config/brewaudit/config.toml
"""

import tomllib
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from brewaudit.core.paths import (
    DEFAULT_APPLICATIONS_DIR,
    DEFAULT_MANIFEST_NAME,
    get_config_path,
)


class AuditConfig(BaseModel):
    """Configuration for an audit run.

    Attributes:
        manifest_name: File name of the manifest at the repository root.
        known_misclassified: Extra cask tokens treated as known
            misfiled entries when they appear in the packages array.
        query_timeout: Seconds allowed for each brew/mas query.
        applications_dir: Directory scanned by --scan-apps.
    """

    model_config = ConfigDict(extra="forbid")

    manifest_name: Annotated[
        str,
        Field(min_length=1, description="Manifest file name at the repository root"),
    ] = DEFAULT_MANIFEST_NAME
    known_misclassified: Annotated[
        list[str],
        Field(default_factory=list, description="Additional known misfiled casks"),
    ]
    query_timeout: Annotated[
        float,
        Field(ge=1, le=600, description="Per-query timeout in seconds (1-600)"),
    ] = 60.0
    applications_dir: Annotated[
        Path,
        Field(description="Directory scanned for unmanaged .app bundles"),
    ] = DEFAULT_APPLICATIONS_DIR

    @field_validator("manifest_name")
    @classmethod
    def validate_manifest_name(cls, v: str) -> str:
        """Manifest name must be a bare file name."""
        if "/" in v or v in (".", ".."):
            msg = f"manifest_name must be a file name, got {v!r}"
            raise ValueError(msg)
        return v


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> AuditConfig:
    """Load configuration from a TOML file.

    A missing file is not an error; defaults are returned.

    Args:
        path: Path to the config file. If None, uses default config path.

    Returns:
        Validated AuditConfig object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return AuditConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        return AuditConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e
