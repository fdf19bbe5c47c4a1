"""Manifest models for the brew.sh arrays.

This module defines the immutable structures produced by parsing
brew.sh: the three managed lists, the line spans they occupy, and the
original text needed to rebuild the file around them.
"""

from dataclasses import dataclass, field
from pathlib import Path

from brewaudit.models.package import ListName


@dataclass(frozen=True, slots=True)
class AppStoreEntry:
    """A store id from the app_store array with its inline comment.

    Attributes:
        app_id: Numeric Mac App Store identifier.
        name: Comment text, usually the app's display name.
    """

    app_id: str
    name: str

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.app_id.isdigit():
            msg = f"App Store id must be numeric, got {self.app_id!r}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class ManagedList:
    """An array parsed from brew.sh.

    Attributes:
        name: Which array this is.
        entries: Entries in file order (str, or AppStoreEntry for app_store).
        start_line: 0-based index of the opener line (``name=(``).
        end_line: 0-based index one past the closer line, so the block
            occupies ``lines[start_line:end_line]``.
    """

    name: ListName
    entries: tuple[str, ...] | tuple[AppStoreEntry, ...]
    start_line: int
    end_line: int

    def __post_init__(self) -> None:
        """Validate the span after initialization."""
        if self.start_line < 0 or self.end_line <= self.start_line:
            msg = f"Invalid span for {self.name.value}: [{self.start_line}, {self.end_line})"
            raise ValueError(msg)

    @property
    def names(self) -> tuple[str, ...]:
        """Entry identifiers (store ids for app_store)."""
        return tuple(e.app_id if isinstance(e, AppStoreEntry) else e for e in self.entries)

    def __contains__(self, item: object) -> bool:
        return item in self.names

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True, slots=True)
class ManifestLists:
    """Working contents of the three arrays, detached from any file span.

    Attributes:
        packages: Formula names.
        apps: Cask tokens.
        app_store: Store entries.
    """

    packages: tuple[str, ...] = field(default=())
    apps: tuple[str, ...] = field(default=())
    app_store: tuple[AppStoreEntry, ...] = field(default=())


@dataclass(frozen=True, slots=True)
class Manifest:
    """A parsed brew.sh.

    Attributes:
        path: File the manifest was read from (None for in-memory text).
        lines: Original text split into lines, line endings kept.
        packages: The ``packages`` array.
        apps: The ``apps`` array.
        app_store: The ``app_store`` array.
    """

    path: Path | None
    lines: tuple[str, ...]
    packages: ManagedList
    apps: ManagedList
    app_store: ManagedList

    def __post_init__(self) -> None:
        """Validate that the three blocks do not overlap."""
        blocks = self.blocks
        for previous, current in zip(blocks, blocks[1:], strict=False):
            if current.start_line < previous.end_line:
                msg = f"Arrays {previous.name.value} and {current.name.value} overlap"
                raise ValueError(msg)

    @property
    def text(self) -> str:
        """The original file content."""
        return "".join(self.lines)

    @property
    def blocks(self) -> tuple[ManagedList, ...]:
        """The three arrays ordered by position in the file."""
        return tuple(
            sorted((self.packages, self.apps, self.app_store), key=lambda b: b.start_line)
        )

    @property
    def comments(self) -> dict[str, str]:
        """Map of store id to its inline comment."""
        return {
            entry.app_id: entry.name
            for entry in self.app_store.entries
            if isinstance(entry, AppStoreEntry)
        }

    def get_list(self, name: ListName) -> ManagedList:
        """Return the array with the given name."""
        if name is ListName.PACKAGES:
            return self.packages
        if name is ListName.APPS:
            return self.apps
        return self.app_store

    def to_lists(self) -> ManifestLists:
        """Detach the array contents for mutation."""
        return ManifestLists(
            packages=tuple(str(e) for e in self.packages.entries),
            apps=tuple(str(e) for e in self.apps.entries),
            app_store=tuple(e for e in self.app_store.entries if isinstance(e, AppStoreEntry)),
        )
