"""Manifest entry classification.

This module decides for every entry of the ``packages`` and ``apps``
arrays whether Homebrew knows it as a formula, a cask, or neither, and
collects the entries that sit in the wrong array as move candidates.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from brewaudit.models.package import Classification, ListName, PackageKind, ProbeResult

if TYPE_CHECKING:
    from brewaudit.models.manifest import Manifest

logger = logging.getLogger(__name__)

# Casks that have historically been filed under packages. Listed entries
# are moved to apps without asking brew.
KNOWN_MISCLASSIFIED_CASKS: frozenset[str] = frozenset(
    {
        "obsidian",
        "grammarly-desktop",
        "bruno",
        "little-snitch",
    }
)


class Prober(Protocol):
    """Anything that can answer a category query (see BrewProber)."""

    def probe(self, name: str, kind: PackageKind) -> ProbeResult: ...


@dataclass(frozen=True, slots=True)
class Misclassification:
    """An entry filed in the wrong array.

    Attributes:
        name: Entry identifier.
        source: Array the entry currently sits in.
        target: Array the entry belongs in.
    """

    name: str
    source: ListName
    target: ListName

    @property
    def direction(self) -> str:
        """Return 'packages->apps' style direction."""
        return f"{self.source.value}->{self.target.value}"


@dataclass(frozen=True, slots=True)
class UnresolvedEntry:
    """An entry brew did not recognize as either kind.

    Attributes:
        name: Entry identifier.
        list_name: Array the entry sits in.
        reason: Short explanation for the warning.
    """

    name: str
    list_name: ListName
    reason: str


@dataclass(frozen=True, slots=True)
class ClassificationResult:
    """Outcome of classifying the two name arrays.

    Attributes:
        packages: Entry -> classification for the packages array.
        apps: Entry -> classification for the apps array.
        misclassified: Move candidates in discovery order.
        unresolved: Entries that could not be classified.
    """

    packages: dict[str, Classification]
    apps: dict[str, Classification]
    misclassified: tuple[Misclassification, ...] = ()
    unresolved: tuple[UnresolvedEntry, ...] = ()

    def get(self, list_name: ListName, name: str) -> Classification | None:
        """Return the classification of an entry, or None if unknown."""
        if list_name is ListName.PACKAGES:
            return self.packages.get(name)
        if list_name is ListName.APPS:
            return self.apps.get(name)
        return None

    @property
    def warnings(self) -> tuple[str, ...]:
        """Human readable warnings for unresolved entries."""
        return tuple(
            f"'{u.name}' in {u.list_name.value} is neither a formula nor a cask ({u.reason})"
            for u in self.unresolved
        )


def _unique(entries: Iterable[str]) -> list[str]:
    """Keep the first occurrence of each entry, in order."""
    return list(dict.fromkeys(entries))


class Classifier:
    """Classifies manifest entries with a static list plus live probes.

    Example:
        >>> classifier = Classifier(BrewProber())
        >>> result = classifier.run(manifest)
        >>> for move in result.misclassified:
        ...     print(move.name, move.direction)
    """

    def __init__(self, prober: Prober, known: Iterable[str] = KNOWN_MISCLASSIFIED_CASKS) -> None:
        """Initialize the classifier.

        Args:
            prober: Category query backend.
            known: Cask tokens that are always moved out of packages.
        """
        self._prober = prober
        self._known = frozenset(known)

    def run(self, manifest: Manifest) -> ClassificationResult:
        """Classify every entry of the packages and apps arrays.

        Args:
            manifest: Parsed manifest.

        Returns:
            ClassificationResult with per-entry tags and move candidates.
        """
        misclassified: list[Misclassification] = []
        unresolved: list[UnresolvedEntry] = []

        packages: dict[str, Classification] = {}
        for name in _unique(str(e) for e in manifest.packages.entries):
            tag, reason = self._classify(name, ListName.PACKAGES)
            packages[name] = tag
            if tag is Classification.CASK:
                misclassified.append(Misclassification(name, ListName.PACKAGES, ListName.APPS))
            elif tag is Classification.UNRESOLVABLE:
                unresolved.append(UnresolvedEntry(name, ListName.PACKAGES, reason))

        apps: dict[str, Classification] = {}
        for name in _unique(str(e) for e in manifest.apps.entries):
            tag, reason = self._classify(name, ListName.APPS)
            apps[name] = tag
            if tag is Classification.FORMULA:
                misclassified.append(Misclassification(name, ListName.APPS, ListName.PACKAGES))
            elif tag is Classification.UNRESOLVABLE:
                unresolved.append(UnresolvedEntry(name, ListName.APPS, reason))

        logger.debug(
            "Classified %d packages and %d apps: %d misclassified, %d unresolved",
            len(packages),
            len(apps),
            len(misclassified),
            len(unresolved),
        )
        return ClassificationResult(
            packages=packages,
            apps=apps,
            misclassified=tuple(misclassified),
            unresolved=tuple(unresolved),
        )

    def _classify(self, name: str, list_name: ListName) -> tuple[Classification, str]:
        """Classify a single entry.

        Returns:
            Classification and, for unresolvable entries, the reason.
        """
        if list_name is ListName.PACKAGES and name in self._known:
            logger.debug("'%s' is a known misclassified cask", name)
            return Classification.CASK, ""

        if list_name is ListName.PACKAGES:
            order = (PackageKind.FORMULA, PackageKind.CASK)
        else:
            order = (PackageKind.CASK, PackageKind.FORMULA)

        results: list[ProbeResult] = []
        for kind in order:
            result = self._prober.probe(name, kind)
            if result is ProbeResult.FOUND:
                tag = Classification.FORMULA if kind is PackageKind.FORMULA else Classification.CASK
                return tag, ""
            results.append(result)

        if ProbeResult.ERROR in results:
            reason = "brew query failed"
        else:
            reason = "not found by brew"
        return Classification.UNRESOLVABLE, reason
