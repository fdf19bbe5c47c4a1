"""Unit tests for environment validation."""

from pathlib import Path
from unittest.mock import patch

import pytest
from brewaudit.core.environment import EnvironmentCheckError, validate_environment


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """Repository root holding a readable brew.sh."""
    root = tmp_path / "dotfiles"
    root.mkdir()
    (root / "brew.sh").write_text("packages=()\napps=()\napp_store=()\n")
    return root


class TestValidateEnvironment:
    """Tests for validate_environment function."""

    def test_not_in_repository(self) -> None:
        """Outside a git work tree the audit cannot run."""
        with (
            patch("brewaudit.core.environment.find_repo_root", return_value=None),
            pytest.raises(EnvironmentCheckError, match="Not in a git repository"),
        ):
            validate_environment()

    def test_manifest_missing(self, tmp_path: Path) -> None:
        """A repository without brew.sh is rejected."""
        with (
            patch("brewaudit.core.environment.find_repo_root", return_value=tmp_path),
            pytest.raises(EnvironmentCheckError, match="brew.sh not found at"),
        ):
            validate_environment()

    def test_manifest_unreadable(self, repo: Path) -> None:
        """An unreadable manifest is rejected."""
        with (
            patch("brewaudit.core.environment.find_repo_root", return_value=repo),
            patch("brewaudit.core.environment.os.access", return_value=False),
            pytest.raises(EnvironmentCheckError, match="is not readable"),
        ):
            validate_environment()

    def test_brew_missing(self, repo: Path) -> None:
        """Homebrew is required."""
        with (
            patch("brewaudit.core.environment.find_repo_root", return_value=repo),
            patch("brewaudit.core.environment.command_exists", return_value=False),
            pytest.raises(EnvironmentCheckError, match="Homebrew not found in PATH"),
        ):
            validate_environment()

    def test_mas_missing_is_not_fatal(self, repo: Path) -> None:
        """Without mas the environment is still valid."""
        with (
            patch("brewaudit.core.environment.find_repo_root", return_value=repo),
            patch(
                "brewaudit.core.environment.command_exists",
                side_effect=lambda cmd: cmd == "brew",
            ),
            patch(
                "brewaudit.core.environment.first_line",
                return_value="Homebrew 4.2.0",
            ),
        ):
            env = validate_environment()

        assert env.repo_root == repo
        assert env.manifest_path == repo / "brew.sh"
        assert env.brew_version == "Homebrew 4.2.0"
        assert env.mas_available is False
        assert env.mas_version is None

    def test_full_environment(self, repo: Path) -> None:
        """Versions are recorded for both tools."""
        with (
            patch("brewaudit.core.environment.find_repo_root", return_value=repo),
            patch("brewaudit.core.environment.command_exists", return_value=True),
            patch(
                "brewaudit.core.environment.first_line",
                side_effect=["Homebrew 4.2.0", "1.8.6"],
            ),
        ):
            env = validate_environment()

        assert env.mas_available is True
        assert env.mas_version == "1.8.6"

    def test_custom_manifest_name(self, repo: Path) -> None:
        """Other manifest names are looked up at the root."""
        (repo / "packages.sh").write_text("")
        with (
            patch("brewaudit.core.environment.find_repo_root", return_value=repo),
            patch("brewaudit.core.environment.command_exists", return_value=True),
            patch("brewaudit.core.environment.first_line", return_value=None),
        ):
            env = validate_environment("packages.sh")

        assert env.manifest_path == repo / "packages.sh"
