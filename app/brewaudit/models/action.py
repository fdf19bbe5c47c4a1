"""Action models for manifest changes.

This module defines data structures for representing the pending
changes (move, add, remove) that the review produces and the
mutator applies to brew.sh.
"""

from dataclasses import dataclass
from enum import Enum

from brewaudit.models.package import ListName, PackageKind


class ActionType(Enum):
    """Type of manifest change.

    Attributes:
        MOVE: Move an entry from one name list to the other.
        ADD: Add an installed item that the manifest does not track.
        REMOVE: Drop an entry that is not installed.
    """

    MOVE = "move"
    ADD = "add"
    REMOVE = "remove"


@dataclass(frozen=True, slots=True)
class Action:
    """Represents a single pending change to the manifest.

    Attributes:
        action_type: The type of change (move, add, or remove).
        name: Entry identifier (formula, cask token, or store id).
        list_name: Destination list for move/add, owning list for remove.
        source_list: List the entry is moved out of (move only).
        comment: Display name written next to a store id (add only).
    """

    action_type: ActionType
    name: str
    list_name: ListName
    source_list: ListName | None = None
    comment: str | None = None

    def __post_init__(self) -> None:
        """Validate action data after initialization."""
        if not self.name:
            msg = "Entry name cannot be empty"
            raise ValueError(msg)
        if self.action_type is ActionType.MOVE:
            if self.source_list is None:
                msg = f"Move of {self.name!r} needs a source list"
                raise ValueError(msg)
            if self.source_list is self.list_name:
                msg = f"Move of {self.name!r} must change lists"
                raise ValueError(msg)
            if ListName.APP_STORE in (self.source_list, self.list_name):
                msg = "Store ids cannot be moved between lists"
                raise ValueError(msg)

    @property
    def is_move(self) -> bool:
        """Check if this is a move action."""
        return self.action_type == ActionType.MOVE

    @property
    def is_add(self) -> bool:
        """Check if this is an add action."""
        return self.action_type == ActionType.ADD

    @property
    def is_remove(self) -> bool:
        """Check if this is a remove action."""
        return self.action_type == ActionType.REMOVE

    @property
    def kind(self) -> PackageKind:
        """Item kind of the list this action targets."""
        return self.list_name.kind

    @property
    def direction(self) -> str:
        """Return 'packages->apps' style direction for moves."""
        if self.source_list is None:
            return self.list_name.value
        return f"{self.source_list.value}->{self.list_name.value}"

    def describe(self) -> str:
        """Return a one-line human readable description."""
        if self.is_move:
            return f"Move '{self.name}' from {self.direction}"
        label = f"{self.name} # {self.comment}" if self.comment else self.name
        if self.is_add:
            return f"Add {self.kind.value} '{label}' to {self.list_name.value}"
        return f"Remove {self.kind.value} '{label}' from {self.list_name.value}"


def create_move_action(name: str, source: ListName, target: ListName) -> Action:
    """Create a move action between the two name lists.

    Args:
        name: Entry to move.
        source: List the entry currently sits in.
        target: List the entry belongs in.

    Returns:
        Action configured for a move.
    """
    return Action(
        action_type=ActionType.MOVE,
        name=name,
        list_name=target,
        source_list=source,
    )


def create_add_action(name: str, list_name: ListName, comment: str | None = None) -> Action:
    """Create an add action.

    Args:
        name: Entry to add.
        list_name: List to add it to.
        comment: Display name for store ids.

    Returns:
        Action configured for an addition.
    """
    return Action(
        action_type=ActionType.ADD,
        name=name,
        list_name=list_name,
        comment=comment,
    )


def create_remove_action(name: str, list_name: ListName, comment: str | None = None) -> Action:
    """Create a remove action.

    Args:
        name: Entry to remove.
        list_name: List to remove it from.
        comment: Display name for store ids (informational).

    Returns:
        Action configured for a removal.
    """
    return Action(
        action_type=ActionType.REMOVE,
        name=name,
        list_name=list_name,
        comment=comment,
    )
