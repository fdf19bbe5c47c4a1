"""Unit tests for git helpers."""

from pathlib import Path
from unittest.mock import MagicMock, patch

from brewaudit.utils.git import diff_file, find_repo_root
from brewaudit.utils.shell import CommandResult


class TestFindRepoRoot:
    """Tests for find_repo_root function."""

    @patch("brewaudit.utils.git.run_command")
    def test_returns_toplevel(self, mock_run: MagicMock) -> None:
        """The toplevel printed by git is returned."""
        mock_run.return_value = CommandResult(
            stdout="/Users/me/dotfiles\n", stderr="", returncode=0
        )

        assert find_repo_root() == Path("/Users/me/dotfiles")
        assert mock_run.call_args.args[0] == ["git", "rev-parse", "--show-toplevel"]

    @patch("brewaudit.utils.git.run_command")
    def test_passes_cwd(self, mock_run: MagicMock, tmp_path: Path) -> None:
        """The starting directory is forwarded to git."""
        mock_run.return_value = CommandResult(stdout=str(tmp_path), stderr="", returncode=0)

        find_repo_root(tmp_path)

        assert mock_run.call_args.kwargs["cwd"] == str(tmp_path)

    @patch("brewaudit.utils.git.run_command")
    def test_outside_repository(self, mock_run: MagicMock) -> None:
        """git failing means no repository."""
        mock_run.return_value = CommandResult(
            stdout="", stderr="fatal: not a git repository", returncode=128
        )
        assert find_repo_root() is None

    @patch("brewaudit.utils.git.run_command")
    def test_git_missing(self, mock_run: MagicMock) -> None:
        """A missing git binary means no repository."""
        mock_run.side_effect = FileNotFoundError("git")
        assert find_repo_root() is None


class TestDiffFile:
    """Tests for diff_file function."""

    @patch("brewaudit.utils.git.run_command")
    def test_colored_diff(self, mock_run: MagicMock, tmp_path: Path) -> None:
        """The diff runs inside the file's directory with color."""
        mock_run.return_value = CommandResult(stdout="+jq\n", stderr="", returncode=0)

        assert diff_file(tmp_path / "brew.sh") == "+jq\n"
        args = mock_run.call_args.args[0]
        assert "--color=always" in args
        assert args[-2:] == ["--", "brew.sh"]
        assert mock_run.call_args.kwargs["cwd"] == str(tmp_path)

    @patch("brewaudit.utils.git.run_command")
    def test_plain_diff(self, mock_run: MagicMock, tmp_path: Path) -> None:
        """Color can be turned off."""
        mock_run.return_value = CommandResult(stdout="", stderr="", returncode=0)

        diff_file(tmp_path / "brew.sh", color=False)

        assert "--color=always" not in mock_run.call_args.args[0]

    @patch("brewaudit.utils.git.run_command")
    def test_failure_is_empty(self, mock_run: MagicMock, tmp_path: Path) -> None:
        """A failing git diff yields an empty string."""
        mock_run.return_value = CommandResult(stdout="", stderr="fatal", returncode=128)
        assert diff_file(tmp_path / "brew.sh") == ""
