"""Application bundle scanner.

Finds ``.app`` bundles in /Applications that no installed cask or
store app accounts for. Used by ``--scan-apps``; the result is
informational and never turned into manifest actions.
"""

import logging
import re
from pathlib import Path

from brewaudit.core.paths import DEFAULT_APPLICATIONS_DIR
from brewaudit.models.installed import InstalledState

logger = logging.getLogger(__name__)

_NON_TOKEN = re.compile(r"[^a-z0-9]+")


def _normalize(name: str) -> str:
    """Reduce a bundle or cask name to a comparable token.

    "Visual Studio Code" and "visual-studio-code" both become
    "visualstudiocode".
    """
    return _NON_TOKEN.sub("", name.casefold())


class ApplicationScanner:
    """Scans an applications directory for unmanaged bundles.

    Args:
        applications_dir: Directory holding .app bundles.
    """

    def __init__(self, applications_dir: Path = DEFAULT_APPLICATIONS_DIR) -> None:
        self._applications_dir = applications_dir

    @property
    def applications_dir(self) -> Path:
        """Directory being scanned."""
        return self._applications_dir

    def is_available(self) -> bool:
        """Check if the applications directory exists."""
        return self._applications_dir.is_dir()

    def bundles(self) -> list[str]:
        """Return the sorted bundle names (without ``.app``) found at the top level."""
        if not self.is_available():
            return []
        try:
            entries = list(self._applications_dir.iterdir())
        except OSError as e:
            logger.debug("Cannot list %s: %s", self._applications_dir, e)
            return []
        return sorted(p.stem for p in entries if p.suffix == ".app")

    def find_unmanaged(self, installed: InstalledState) -> list[str]:
        """Return bundles not matched by any installed cask or store app.

        Args:
            installed: Current installed state.

        Returns:
            Bundle names in sorted order.
        """
        known = {_normalize(c) for c in installed.casks}
        known |= {_normalize(n) for n in installed.mas_apps.values()}

        bundles = self.bundles()
        unmanaged = [b for b in bundles if _normalize(b) not in known]
        logger.debug(
            "%d bundle(s) in %s, %d unmanaged",
            len(bundles),
            self._applications_dir,
            len(unmanaged),
        )
        return unmanaged
