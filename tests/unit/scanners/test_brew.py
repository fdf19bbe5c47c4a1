"""Unit tests for the Homebrew scanners and prober."""

import subprocess
from unittest.mock import patch

import pytest
from brewaudit.models.package import PackageKind, ProbeResult
from brewaudit.scanners.brew import (
    BrewCaskScanner,
    BrewFormulaScanner,
    BrewProber,
    _interpret_info,
)
from brewaudit.utils.shell import CommandResult


class TestBrewFormulaScanner:
    """Tests for BrewFormulaScanner class."""

    @pytest.fixture
    def scanner(self) -> BrewFormulaScanner:
        """Create BrewFormulaScanner instance."""
        return BrewFormulaScanner()

    def test_source_is_formula(self, scanner: BrewFormulaScanner) -> None:
        """Scanner returns FORMULA as source."""
        assert scanner.source == PackageKind.FORMULA

    def test_is_available(self, scanner: BrewFormulaScanner) -> None:
        """is_available reflects brew on PATH."""
        with patch("brewaudit.scanners.brew.command_exists", return_value=False):
            assert scanner.is_available() is False
        with patch("brewaudit.scanners.brew.command_exists", return_value=True):
            assert scanner.is_available() is True

    def test_scan_uses_brew_leaves(self, scanner: BrewFormulaScanner) -> None:
        """Formulae come from brew leaves, one per line."""
        with (
            patch("brewaudit.scanners.brew.command_exists", return_value=True),
            patch("brewaudit.scanners.brew.run_command") as mock_run,
        ):
            mock_run.return_value = CommandResult(
                stdout="ripgrep\ngit\n\njq\n", stderr="", returncode=0
            )
            names = scanner.names()

        assert names == ["git", "jq", "ripgrep"]
        assert mock_run.call_args.args[0] == ["brew", "leaves"]

    def test_scan_without_brew_raises(self, scanner: BrewFormulaScanner) -> None:
        """Scanning without brew is an error."""
        with (
            patch("brewaudit.scanners.brew.command_exists", return_value=False),
            pytest.raises(RuntimeError, match="Homebrew is not available"),
        ):
            list(scanner.scan())

    def test_scan_failure_raises(self, scanner: BrewFormulaScanner) -> None:
        """A failing listing carries brew's error text."""
        with (
            patch("brewaudit.scanners.brew.command_exists", return_value=True),
            patch("brewaudit.scanners.brew.run_command") as mock_run,
        ):
            mock_run.return_value = CommandResult(stdout="", stderr="boom\n", returncode=1)
            with pytest.raises(RuntimeError, match="'brew leaves' failed: boom"):
                list(scanner.scan())

    def test_scan_timeout_raises(self) -> None:
        """A timed out listing is reported as an error."""
        scanner = BrewFormulaScanner(timeout=5)
        with (
            patch("brewaudit.scanners.brew.command_exists", return_value=True),
            patch("brewaudit.scanners.brew.run_command") as mock_run,
        ):
            mock_run.side_effect = subprocess.TimeoutExpired(cmd="brew", timeout=5)
            with pytest.raises(RuntimeError, match="timed out after 5s"):
                list(scanner.scan())


class TestBrewCaskScanner:
    """Tests for BrewCaskScanner class."""

    def test_scan_uses_list_cask(self) -> None:
        """Casks come from brew list --cask."""
        scanner = BrewCaskScanner()
        with (
            patch("brewaudit.scanners.brew.command_exists", return_value=True),
            patch("brewaudit.scanners.brew.run_command") as mock_run,
        ):
            mock_run.return_value = CommandResult(
                stdout="obsidian\nfirefox\n", stderr="", returncode=0
            )
            items = list(scanner.scan())

        assert [i.name for i in items] == ["obsidian", "firefox"]
        assert all(i.kind == PackageKind.CASK for i in items)
        assert mock_run.call_args.args[0] == ["brew", "list", "--cask"]


class TestBrewProber:
    """Tests for BrewProber class."""

    @pytest.mark.parametrize(
        ("kind", "flag"),
        [(PackageKind.FORMULA, "--formula"), (PackageKind.CASK, "--cask")],
    )
    def test_probe_found(self, kind: PackageKind, flag: str) -> None:
        """A successful brew info means the name exists as that kind."""
        with patch("brewaudit.scanners.brew.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="==> jq", stderr="", returncode=0)
            assert BrewProber().probe("jq", kind) == ProbeResult.FOUND

        assert mock_run.call_args.args[0] == ["brew", "info", flag, "jq"]

    def test_probe_not_found(self) -> None:
        """A missing name is a negative answer."""
        with patch("brewaudit.scanners.brew.run_command") as mock_run:
            mock_run.return_value = CommandResult(
                stdout="",
                stderr="Error: No available formula with the name \"obsidian\".",
                returncode=1,
            )
            assert BrewProber().probe("obsidian", PackageKind.FORMULA) == ProbeResult.NOT_FOUND

    def test_probe_timeout_is_error(self) -> None:
        """A timed out query is an error, not a negative answer."""
        with patch("brewaudit.scanners.brew.run_command") as mock_run:
            mock_run.side_effect = subprocess.TimeoutExpired(cmd="brew", timeout=60)
            assert BrewProber().probe("git", PackageKind.FORMULA) == ProbeResult.ERROR

    def test_probe_missing_brew_is_error(self) -> None:
        """A brew that cannot be executed is an error."""
        with patch("brewaudit.scanners.brew.run_command") as mock_run:
            mock_run.side_effect = FileNotFoundError("brew")
            assert BrewProber().probe("git", PackageKind.CASK) == ProbeResult.ERROR

    def test_probe_store_kind_rejected(self) -> None:
        """Store ids are never probed with brew."""
        with pytest.raises(ValueError, match="cannot be probed"):
            BrewProber().probe("497799835", PackageKind.MAS)


class TestInterpretInfo:
    """Tests for _interpret_info function."""

    @pytest.mark.parametrize(
        "stderr",
        [
            'Error: No available formula with the name "x".',
            'Error: No Cask with this name exists: "x".',
            "Error: Cask 'x' is unavailable: No Cask with this name exists.",
            'Error: No formulae or casks found for "x".',
        ],
    )
    def test_not_found_messages(self, stderr: str) -> None:
        """Known not-found messages map to NOT_FOUND."""
        result = CommandResult(stdout="", stderr=stderr, returncode=1)
        assert _interpret_info(result) == ProbeResult.NOT_FOUND

    def test_other_failures_are_errors(self) -> None:
        """Unrecognized failures map to ERROR."""
        result = CommandResult(stdout="", stderr="Error: network down", returncode=1)
        assert _interpret_info(result) == ProbeResult.ERROR
