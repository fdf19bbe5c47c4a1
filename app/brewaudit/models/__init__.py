"""Data models for brewaudit.

This module exports the value objects passed between the parser,
collector, classifier, gap analyzer, review engine and mutator.
"""

from brewaudit.models.action import (
    Action,
    ActionType,
    create_add_action,
    create_move_action,
    create_remove_action,
)
from brewaudit.models.installed import InstalledState
from brewaudit.models.manifest import AppStoreEntry, ManagedList, Manifest, ManifestLists
from brewaudit.models.package import (
    Classification,
    InstalledItem,
    ListName,
    PackageKind,
    ProbeResult,
    list_for_kind,
)

__all__ = [
    "Action",
    "ActionType",
    "AppStoreEntry",
    "Classification",
    "InstalledItem",
    "InstalledState",
    "ListName",
    "ManagedList",
    "Manifest",
    "ManifestLists",
    "PackageKind",
    "ProbeResult",
    "create_add_action",
    "create_move_action",
    "create_remove_action",
    "list_for_kind",
]
