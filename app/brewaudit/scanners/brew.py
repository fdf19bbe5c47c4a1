"""Homebrew scanners and category probe.

Lists explicitly installed formulae with ``brew leaves`` and installed
casks with ``brew list --cask``. BrewProber answers "is this name a
formula / a cask" with ``brew info``.
"""

import logging
import re
import subprocess
from collections.abc import Iterator

from brewaudit.models.package import InstalledItem, PackageKind, ProbeResult
from brewaudit.scanners.base import Scanner
from brewaudit.utils.shell import CommandResult, command_exists, run_command

logger = logging.getLogger(__name__)

BREW = "brew"

# brew info messages for names that do not exist in the requested category
_NOT_FOUND_PATTERN = re.compile(
    r"No available (formula|cask)|No Cask with this name|is unavailable|No formulae or casks found",
    re.IGNORECASE,
)


class _BrewListScanner(Scanner):
    """Shared implementation for brew listing commands."""

    _ARGS: tuple[str, ...] = ()

    def is_available(self) -> bool:
        """Check if brew is on PATH."""
        return command_exists(BREW)

    def scan(self) -> Iterator[InstalledItem]:
        """Yield one item per line of the listing command.

        Raises:
            RuntimeError: If brew is not available or the command fails.
        """
        if not self.is_available():
            msg = "Homebrew is not available on this system"
            raise RuntimeError(msg)

        args = [BREW, *self._ARGS]
        try:
            result = run_command(args, timeout=self._timeout)
        except subprocess.TimeoutExpired as e:
            msg = f"'{' '.join(args)}' timed out after {self._timeout:.0f}s"
            raise RuntimeError(msg) from e

        if not result.success:
            msg = f"'{' '.join(args)}' failed: {result.stderr.strip() or 'unknown error'}"
            raise RuntimeError(msg)

        for name in result.lines():
            yield InstalledItem(name=name, kind=self.source)


class BrewFormulaScanner(_BrewListScanner):
    """Scanner for formulae installed on request.

    ``brew leaves`` omits formulae that were only pulled in as
    dependencies, which is exactly the set a manifest should track.
    """

    _ARGS = ("leaves",)

    @property
    def source(self) -> PackageKind:
        """Return FORMULA as the item kind."""
        return PackageKind.FORMULA


class BrewCaskScanner(_BrewListScanner):
    """Scanner for installed casks."""

    _ARGS = ("list", "--cask")

    @property
    def source(self) -> PackageKind:
        """Return CASK as the item kind."""
        return PackageKind.CASK


class BrewProber:
    """Live category queries against Homebrew.

    Each probe runs ``brew info --formula NAME`` or ``brew info --cask NAME``
    to completion before returning.
    """

    def __init__(self, timeout: float = 60.0) -> None:
        self._timeout = timeout

    def probe(self, name: str, kind: PackageKind) -> ProbeResult:
        """Ask Homebrew whether ``name`` exists as the given kind.

        Args:
            name: Formula or cask name.
            kind: FORMULA or CASK.

        Returns:
            FOUND, NOT_FOUND, or ERROR when brew could not answer.
        """
        if kind is PackageKind.MAS:
            msg = "Store ids cannot be probed with brew"
            raise ValueError(msg)

        flag = "--formula" if kind is PackageKind.FORMULA else "--cask"
        try:
            result = run_command([BREW, "info", flag, name], timeout=self._timeout)
        except subprocess.TimeoutExpired:
            logger.debug("brew info %s %s timed out", flag, name)
            return ProbeResult.ERROR
        except (FileNotFoundError, OSError) as e:
            logger.debug("brew info %s %s could not run: %s", flag, name, e)
            return ProbeResult.ERROR

        outcome = _interpret_info(result)
        logger.debug("brew info %s %s -> %s", flag, name, outcome.value)
        return outcome


def _interpret_info(result: CommandResult) -> ProbeResult:
    """Map a brew info result to a probe outcome."""
    if result.success:
        return ProbeResult.FOUND
    if _NOT_FOUND_PATTERN.search(result.stderr) or _NOT_FOUND_PATTERN.search(result.stdout):
        return ProbeResult.NOT_FOUND
    return ProbeResult.ERROR
