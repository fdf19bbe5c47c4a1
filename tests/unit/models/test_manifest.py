"""Unit tests for manifest models.

Tests for AppStoreEntry, ManagedList and Manifest.
"""

import pytest
from brewaudit.models.manifest import AppStoreEntry, ManagedList, Manifest, ManifestLists
from brewaudit.models.package import ListName


def _block(name: ListName, start: int, end: int, entries: tuple = ()) -> ManagedList:
    return ManagedList(name=name, entries=entries, start_line=start, end_line=end)


class TestAppStoreEntry:
    """Tests for AppStoreEntry dataclass."""

    def test_numeric_id_required(self) -> None:
        """Non-numeric ids are rejected."""
        with pytest.raises(ValueError, match="must be numeric"):
            AppStoreEntry(app_id="xcode", name="Xcode")


class TestManagedList:
    """Tests for ManagedList dataclass."""

    def test_names_and_membership(self) -> None:
        """names exposes ids for store entries."""
        block = _block(
            ListName.APP_STORE, 0, 3, (AppStoreEntry("1", "One"), AppStoreEntry("2", "Two"))
        )

        assert block.names == ("1", "2")
        assert "2" in block
        assert len(block) == 2

    def test_invalid_span(self) -> None:
        """A block must span at least one line."""
        with pytest.raises(ValueError, match="Invalid span"):
            _block(ListName.PACKAGES, 4, 4)


class TestManifest:
    """Tests for Manifest dataclass."""

    def test_overlapping_blocks_rejected(self) -> None:
        """Blocks cannot share lines."""
        with pytest.raises(ValueError, match="overlap"):
            Manifest(
                path=None,
                lines=("x\n",) * 6,
                packages=_block(ListName.PACKAGES, 0, 3),
                apps=_block(ListName.APPS, 2, 4),
                app_store=_block(ListName.APP_STORE, 4, 5),
            )

    def test_get_list_and_to_lists(self) -> None:
        """get_list returns arrays by name and to_lists detaches them."""
        manifest = Manifest(
            path=None,
            lines=("x\n",) * 3,
            packages=_block(ListName.PACKAGES, 0, 1, ("git",)),
            apps=_block(ListName.APPS, 1, 2, ("bruno",)),
            app_store=_block(ListName.APP_STORE, 2, 3, (AppStoreEntry("1", "One"),)),
        )

        assert manifest.get_list(ListName.APPS).entries == ("bruno",)
        assert manifest.to_lists() == ManifestLists(
            packages=("git",), apps=("bruno",), app_store=(AppStoreEntry("1", "One"),)
        )
