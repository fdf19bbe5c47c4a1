"""Abstract base class for installed-state scanners.

This module defines the Scanner interface that all package source
scanners must implement.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator

from brewaudit.models.package import InstalledItem, PackageKind


class Scanner(ABC):
    """Abstract base class for all installed-state scanners.

    Scanners are responsible for querying a package manager
    and yielding the items it reports as installed.

    Example:
        >>> scanner = BrewFormulaScanner()
        >>> if scanner.is_available():
        ...     for item in scanner.scan():
        ...         print(item.name)
    """

    def __init__(self, timeout: float = 60.0) -> None:
        """Initialize the scanner.

        Args:
            timeout: Seconds allowed for the listing command.
        """
        self._timeout = timeout

    @property
    @abstractmethod
    def source(self) -> PackageKind:
        """Return the item kind this scanner reports.

        Returns:
            PackageKind enum value (FORMULA, CASK, or MAS)
        """

    @abstractmethod
    def scan(self) -> Iterator[InstalledItem]:
        """Scan and yield all installed items of this kind.

        Yields:
            InstalledItem instances for each installed item.

        Raises:
            RuntimeError: If the package manager is not available or fails.
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this package manager is available on the system.

        Returns:
            True if the package manager can be used, False otherwise.
        """

    def names(self) -> list[str]:
        """Return the sorted names of all installed items."""
        return sorted({item.name for item in self.scan()})
