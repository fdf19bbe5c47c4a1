"""Application of reviewed actions to the manifest arrays.

Pure business logic: takes the current array contents and the approved
actions and produces the new, deduplicated and canonically sorted
contents. Writing the result is left to core.manifest.
"""

import logging
from collections import Counter
from collections.abc import Iterable
from typing import cast

from brewaudit.models.action import Action, ActionType
from brewaudit.models.manifest import AppStoreEntry, ManifestLists
from brewaudit.models.package import ListName

logger = logging.getLogger(__name__)

UNKNOWN_APP_NAME = "Unknown"


def _without(entries: list[str], name: str) -> list[str]:
    return [e for e in entries if e != name]


def sort_lists(lists: ManifestLists) -> ManifestLists:
    """Deduplicate and sort each array in its canonical order.

    Name arrays are sorted by code point (the order of ``LC_ALL=C
    sort``). Store entries are sorted by display name ignoring case,
    with the id as tie-break; for a repeated id the last name wins.

    Args:
        lists: Array contents in any order.

    Returns:
        New ManifestLists in canonical order.
    """
    store: dict[str, str] = {}
    for entry in lists.app_store:
        store[entry.app_id] = entry.name

    return ManifestLists(
        packages=tuple(sorted(set(lists.packages))),
        apps=tuple(sorted(set(lists.apps))),
        app_store=tuple(
            AppStoreEntry(app_id=app_id, name=name)
            for app_id, name in sorted(store.items(), key=lambda kv: (kv[1].casefold(), kv[0]))
        ),
    )


def apply_actions(lists: ManifestLists, actions: Iterable[Action]) -> ManifestLists:
    """Apply actions to the array contents.

    - MOVE: drop every occurrence from the source array, append to the target.
    - ADD: append (store ids keep their display name).
    - REMOVE: drop every occurrence.

    The result is passed through sort_lists(), so the order of actions
    does not affect the outcome.

    Args:
        lists: Current array contents.
        actions: Approved actions.

    Returns:
        New, canonically sorted ManifestLists.
    """
    names: dict[ListName, list[str]] = {
        ListName.PACKAGES: list(lists.packages),
        ListName.APPS: list(lists.apps),
    }
    store: dict[str, str] = {e.app_id: e.name for e in lists.app_store}

    for action in actions:
        if action.list_name is ListName.APP_STORE:
            if action.is_add:
                store[action.name] = action.comment or UNKNOWN_APP_NAME
            elif action.is_remove:
                store.pop(action.name, None)
            logger.debug("Applied %s", action.describe())
            continue

        if action.is_move:
            source = cast(ListName, action.source_list)
            names[source] = _without(names[source], action.name)
            names[action.list_name].append(action.name)
        elif action.is_add:
            names[action.list_name].append(action.name)
        else:
            names[action.list_name] = _without(names[action.list_name], action.name)
        logger.debug("Applied %s", action.describe())

    return sort_lists(
        ManifestLists(
            packages=tuple(names[ListName.PACKAGES]),
            apps=tuple(names[ListName.APPS]),
            app_store=tuple(AppStoreEntry(app_id=k, name=v) for k, v in store.items()),
        )
    )


def count_actions(actions: Iterable[Action]) -> Counter[ActionType]:
    """Count actions per type."""
    return Counter(action.action_type for action in actions)
