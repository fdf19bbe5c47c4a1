"""Mac App Store scanner.

Lists installed store apps using the ``mas`` CLI.
"""

import logging
import re
import subprocess
from collections.abc import Iterator

from brewaudit.models.package import InstalledItem, PackageKind
from brewaudit.scanners.base import Scanner
from brewaudit.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)

MAS = "mas"

# "497799835  Xcode  (15.0)" -> id, name, version
_MAS_LINE = re.compile(r"^\s*(?P<id>\d+)\s+(?P<name>.*?)\s*(?:\((?P<version>[^()]*)\))?\s*$")


class MasScanner(Scanner):
    """Scanner for Mac App Store apps.

    Uses ``mas list`` which prints one app per line: the numeric id,
    the display name and the installed version in parentheses.
    """

    @property
    def source(self) -> PackageKind:
        """Return MAS as the item kind."""
        return PackageKind.MAS

    def is_available(self) -> bool:
        """Check if mas is on PATH."""
        return command_exists(MAS)

    def scan(self) -> Iterator[InstalledItem]:
        """Scan all installed store apps.

        Yields:
            InstalledItem for each app, with display_name set.

        Raises:
            RuntimeError: If mas is not available or ``mas list`` fails.
        """
        if not self.is_available():
            msg = "mas is not available on this system"
            raise RuntimeError(msg)

        try:
            result = run_command([MAS, "list"], timeout=self._timeout)
        except subprocess.TimeoutExpired as e:
            msg = f"'mas list' timed out after {self._timeout:.0f}s"
            raise RuntimeError(msg) from e

        if not result.success:
            msg = f"'mas list' failed: {result.stderr.strip() or 'unknown error'}"
            raise RuntimeError(msg)

        for line in result.lines():
            item = self._parse_line(line)
            if item is not None:
                yield item

    def apps(self) -> dict[str, str]:
        """Return installed store apps as id -> display name, sorted by name."""
        found = {item.name: item.display_name or "Unknown" for item in self.scan()}
        return dict(sorted(found.items(), key=lambda kv: (kv[1].casefold(), kv[0])))

    def _parse_line(self, line: str) -> InstalledItem | None:
        """Parse a single line of ``mas list`` output.

        Args:
            line: One output line.

        Returns:
            InstalledItem if parsing succeeds, None otherwise.
        """
        match = _MAS_LINE.match(line)
        if match is None:
            logger.debug("Skipping malformed mas line: %r", line[:100])
            return None

        return InstalledItem(
            name=match.group("id"),
            kind=PackageKind.MAS,
            display_name=match.group("name") or None,
            version=match.group("version") or None,
        )
