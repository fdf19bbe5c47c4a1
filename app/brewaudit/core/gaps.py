"""Gap analysis between the manifest and the installed state.

This module provides the GapAnalyzer that computes, per category, the
items installed but not tracked ("missing") and the items tracked but
not installed ("extra").
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from brewaudit.models.manifest import AppStoreEntry
from brewaudit.models.package import Classification

if TYPE_CHECKING:
    from brewaudit.core.classifier import ClassificationResult
    from brewaudit.models.installed import InstalledState
    from brewaudit.models.manifest import Manifest

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GapResult:
    """Missing and extra items per category.

    Attributes:
        missing_formulae: Installed formulae absent from packages.
        missing_casks: Installed casks absent from apps.
        missing_mas: Installed store apps absent from app_store
            (named after ``mas list``).
        extra_formulae: packages entries that are not installed.
        extra_casks: apps entries that are not installed.
        extra_mas: app_store entries that are not installed
            (named after the manifest comment).
    """

    missing_formulae: tuple[str, ...] = ()
    missing_casks: tuple[str, ...] = ()
    missing_mas: tuple[AppStoreEntry, ...] = ()
    extra_formulae: tuple[str, ...] = ()
    extra_casks: tuple[str, ...] = ()
    extra_mas: tuple[AppStoreEntry, ...] = ()

    @property
    def total_missing(self) -> int:
        """Number of missing items across categories."""
        return len(self.missing_formulae) + len(self.missing_casks) + len(self.missing_mas)

    @property
    def total_extra(self) -> int:
        """Number of extra items across categories."""
        return len(self.extra_formulae) + len(self.extra_casks) + len(self.extra_mas)

    @property
    def total(self) -> int:
        """Number of gaps found."""
        return self.total_missing + self.total_extra

    @property
    def is_in_sync(self) -> bool:
        """Check if manifest and installed state agree.

        Returns:
            True if there are no gaps, False otherwise.
        """
        return self.total == 0


def _extras(
    entries: tuple[str, ...],
    installed: set[str],
    classifications: dict[str, Classification],
    excluded: Classification,
) -> tuple[str, ...]:
    """Entries not installed, skipping those handled by a move."""
    extras: list[str] = []
    for name in dict.fromkeys(entries):
        if classifications.get(name) is excluded:
            continue
        if name not in installed:
            extras.append(name)
    return tuple(extras)


class GapAnalyzer:
    """Computes missing and extra items.

    Example:
        >>> gaps = GapAnalyzer().run(manifest, installed, classification)
        >>> if gaps.is_in_sync:
        ...     print("Nothing to do")
    """

    def run(
        self,
        manifest: Manifest,
        installed: InstalledState,
        classification: ClassificationResult,
    ) -> GapResult:
        """Compare the manifest with the installed state.

        Entries classified as the opposite kind are left out of the
        extras; they are resolved by a move instead. Unresolvable
        entries stay in, since an entry that is neither identifiable
        nor installed is still worth offering for removal.

        Args:
            manifest: Parsed manifest.
            installed: Current installed state.
            classification: Classifier output for the manifest.

        Returns:
            GapResult for all three categories.
        """
        packages = tuple(str(e) for e in manifest.packages.entries)
        apps = tuple(str(e) for e in manifest.apps.entries)

        tracked_packages = set(packages)
        tracked_apps = set(apps)

        missing_formulae = tuple(f for f in installed.formulae if f not in tracked_packages)
        missing_casks = tuple(c for c in installed.casks if c not in tracked_apps)
        extra_formulae = _extras(
            packages, set(installed.formulae), classification.packages, Classification.CASK
        )
        extra_casks = _extras(
            apps, set(installed.casks), classification.apps, Classification.FORMULA
        )

        missing_mas: tuple[AppStoreEntry, ...] = ()
        extra_mas: tuple[AppStoreEntry, ...] = ()
        if installed.mas_available:
            tracked_ids = set(manifest.app_store.names)
            missing_mas = tuple(
                AppStoreEntry(app_id=app_id, name=name)
                for app_id, name in installed.mas_apps.items()
                if app_id not in tracked_ids
            )
            seen: set[str] = set()
            extras: list[AppStoreEntry] = []
            for entry in manifest.app_store.entries:
                if not isinstance(entry, AppStoreEntry) or entry.app_id in seen:
                    continue
                seen.add(entry.app_id)
                if entry.app_id not in installed.mas_apps:
                    extras.append(entry)
            extra_mas = tuple(extras)
        else:
            logger.debug("Store apps skipped: mas not available")

        result = GapResult(
            missing_formulae=missing_formulae,
            missing_casks=missing_casks,
            missing_mas=missing_mas,
            extra_formulae=extra_formulae,
            extra_casks=extra_casks,
            extra_mas=extra_mas,
        )
        logger.debug("Gap analysis: %d missing, %d extra", result.total_missing, result.total_extra)
        return result
