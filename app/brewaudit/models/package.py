"""Package models for installed-state collection and classification.

This module defines the core data structures for representing items
managed by Homebrew (formulae and casks) and the Mac App Store (mas).
"""

from dataclasses import dataclass, field
from enum import Enum


class PackageKind(Enum):
    """Enumeration of supported item kinds."""

    FORMULA = "formula"
    CASK = "cask"
    MAS = "mas"


class ListName(Enum):
    """Names of the three arrays managed inside brew.sh."""

    PACKAGES = "packages"
    APPS = "apps"
    APP_STORE = "app_store"

    @property
    def kind(self) -> PackageKind:
        """Return the item kind that belongs in this list."""
        return _LIST_KINDS[self]


_LIST_KINDS: dict[ListName, PackageKind] = {
    ListName.PACKAGES: PackageKind.FORMULA,
    ListName.APPS: PackageKind.CASK,
    ListName.APP_STORE: PackageKind.MAS,
}


def list_for_kind(kind: PackageKind) -> ListName:
    """Return the manifest list that holds items of the given kind.

    Args:
        kind: The item kind.

    Returns:
        ListName owning that kind.
    """
    for name, list_kind in _LIST_KINDS.items():
        if list_kind is kind:
            return name
    msg = f"No manifest list for kind: {kind}"
    raise ValueError(msg)


class Classification(Enum):
    """True category of a manifest entry as reported by Homebrew.

    Attributes:
        FORMULA: Entry resolves as a command-line formula.
        CASK: Entry resolves as a GUI application cask.
        UNRESOLVABLE: Entry resolves as neither (or the query failed).
    """

    FORMULA = "formula"
    CASK = "cask"
    UNRESOLVABLE = "unresolvable"


class ProbeResult(Enum):
    """Outcome of a single live category query.

    NOT_FOUND means the tool answered "no such item"; ERROR means the
    tool could not answer at all (missing binary, timeout, crash).
    """

    FOUND = "found"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class InstalledItem:
    """Represents an item discovered during installed-state collection.

    Attributes:
        name: Formula name, cask token, or numeric store id.
        kind: Which package manager category reported this item.
        display_name: Human-readable name (store apps only).
        version: Installed version string (if reported).
    """

    name: str
    kind: PackageKind
    display_name: str | None = field(default=None)
    version: str | None = field(default=None)

    def __post_init__(self) -> None:
        """Validate item data after initialization."""
        if not self.name:
            msg = "Item name cannot be empty"
            raise ValueError(msg)
        if self.kind is PackageKind.MAS and not self.name.isdigit():
            msg = f"App Store id must be numeric, got {self.name!r}"
            raise ValueError(msg)

    @property
    def label(self) -> str:
        """Return the name shown to users."""
        if self.display_name:
            return f"{self.name} # {self.display_name}"
        return self.name
