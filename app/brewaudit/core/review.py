"""Interactive review of audit findings.

The ReviewEngine walks the findings in three sections (misclassified
entries, missing items, extra items) and asks a Responder for a decision
on each one. Output is reported through a ReviewListener so the engine
itself never touches the terminal, and tests can drive it with a
ScriptedResponder.

Per section the engine runs a small state machine: ``a`` approves the
current item and every remaining item of the section without asking,
``s`` ends the section, and ``q`` aborts the whole review. Any other key
skips only the current item.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from brewaudit.models.action import (
    Action,
    create_add_action,
    create_move_action,
    create_remove_action,
)
from brewaudit.models.package import ListName, PackageKind

if TYPE_CHECKING:
    from brewaudit.core.classifier import ClassificationResult
    from brewaudit.core.gaps import GapResult

logger = logging.getLogger(__name__)


class ReviewSection(Enum):
    """Sections of the review, in the order they are presented."""

    MISCLASSIFIED = 1
    MISSING = 2
    EXTRA = 3

    @property
    def title(self) -> str:
        """Heading shown when the section starts."""
        return _SECTION_TITLES[self]


_SECTION_TITLES: dict[ReviewSection, str] = {
    ReviewSection.MISCLASSIFIED: "Misclassified Items",
    ReviewSection.MISSING: "Add Installed Items Missing from the Manifest",
    ReviewSection.EXTRA: "Remove Items from the Manifest (not installed)",
}


class Decision(Enum):
    """Answer to a single review prompt.

    Attributes:
        APPROVE: Take this action.
        REJECT: Skip this action only.
        APPROVE_REST: Take this action and every remaining one in the section.
        REJECT_REST: Skip this action and the rest of the section.
        ABORT: Stop the review and discard every action.
    """

    APPROVE = "approve"
    REJECT = "reject"
    APPROVE_REST = "approve_rest"
    REJECT_REST = "reject_rest"
    ABORT = "abort"


_KEY_DECISIONS: dict[str, Decision] = {
    "y": Decision.APPROVE,
    "a": Decision.APPROVE_REST,
    "s": Decision.REJECT_REST,
    "q": Decision.ABORT,
}

KEY_HELP: tuple[tuple[str, str], ...] = (
    ("y", "Yes, apply this change"),
    ("n", "No, skip this change (default)"),
    ("a", "Accept all remaining in this section"),
    ("s", "Skip all remaining in this section"),
    ("q", "Quit without making any changes"),
)


def decision_from_key(key: str) -> Decision:
    """Map a single key press to a Decision.

    ``y``, ``a``, ``s`` and ``q`` (either case) have their own meaning;
    every other key, including Enter, skips the current item.

    Args:
        key: The pressed key.

    Returns:
        The matching Decision.
    """
    return _KEY_DECISIONS.get(key.strip().lower(), Decision.REJECT)


class ReviewAborted(Exception):
    """Raised when the user quits the review; no action is kept."""


class ReviewCancelled(Exception):
    """Raised when the user declines the final confirmation."""


class Responder(Protocol):
    """Source of review decisions."""

    def ask(self, section: ReviewSection, prompt: str) -> Decision:
        """Ask about one finding."""
        ...

    def confirm(self, prompt: str) -> bool:
        """Ask the final yes/no question before writing."""
        ...


class ReviewListener(Protocol):
    """Receives progress of a review for display."""

    def review_started(self, total: int) -> None: ...

    def section_started(self, section: ReviewSection, count: int) -> None: ...

    def item_resolved(self, action: Action, decision: Decision, message: str) -> None: ...

    def plan_ready(self, actions: tuple[Action, ...]) -> None: ...


class NullListener:
    """ReviewListener that ignores every event."""

    def review_started(self, total: int) -> None:
        pass

    def section_started(self, section: ReviewSection, count: int) -> None:
        pass

    def item_resolved(self, action: Action, decision: Decision, message: str) -> None:
        pass

    def plan_ready(self, actions: tuple[Action, ...]) -> None:
        pass


class ScriptedResponder:
    """Responder that replays a fixed sequence of keys.

    Once the keys run out every further prompt is skipped, as if the
    user kept pressing Enter.

    Args:
        keys: Keys to answer the prompts with, in order.
        confirm: Answer to the final confirmation.
    """

    def __init__(self, keys: Iterable[str] = (), confirm: bool = True) -> None:
        self._keys: Iterator[str] = iter(keys)
        self._confirm = confirm
        self.prompts: list[str] = []
        self.confirmations: list[str] = []

    def ask(self, section: ReviewSection, prompt: str) -> Decision:
        self.prompts.append(prompt)
        return decision_from_key(next(self._keys, ""))

    def confirm(self, prompt: str) -> bool:
        self.confirmations.append(prompt)
        return self._confirm


@dataclass(frozen=True, slots=True)
class ReviewOutcome:
    """Result of a completed review.

    Attributes:
        actions: Approved actions in the order they were approved.
        no_changes: True when there was nothing to review at all.
    """

    actions: tuple[Action, ...] = field(default=())
    no_changes: bool = False


# =============================================================================
# Prompt and feedback texts
# =============================================================================


def _label(action: Action) -> str:
    if action.comment is not None:
        return f"{action.name} # {action.comment}"
    return action.name


def _noun(action: Action) -> str:
    if action.kind is PackageKind.MAS:
        return "MAS app"
    return action.kind.value


def prompt_for(action: Action) -> str:
    """Question asked for an action."""
    if action.is_move:
        return f"Move '{action.name}' from {action.direction}?"
    if action.is_add:
        return f"Add {_noun(action)} '{_label(action)}' to {action.list_name.value} array?"
    return f"Remove {_noun(action)} '{_label(action)}' from {action.list_name.value} array?"


def _summary(action: Action) -> str:
    if action.is_move:
        return f"Move '{action.name}' from {action.direction}"
    verb = "Add" if action.is_add else "Remove"
    return f"{verb} {_noun(action)} '{_label(action)}'"


def _approved(action: Action) -> str:
    if action.is_move:
        return f"Will move '{action.name}'"
    if action.is_add:
        return f"Will add '{_label(action)}'"
    return f"Will remove '{action.name}'"


# =============================================================================
# Engine
# =============================================================================


def _section_actions(
    classification: ClassificationResult,
    gaps: GapResult,
) -> list[tuple[ReviewSection, list[Action]]]:
    """Turn findings into candidate actions, grouped by section."""
    moves = [
        create_move_action(m.name, m.source, m.target) for m in classification.misclassified
    ]
    adds = [
        *(create_add_action(n, ListName.PACKAGES) for n in gaps.missing_formulae),
        *(create_add_action(n, ListName.APPS) for n in gaps.missing_casks),
        *(
            create_add_action(e.app_id, ListName.APP_STORE, comment=e.name or "Unknown")
            for e in gaps.missing_mas
        ),
    ]
    removes = [
        *(create_remove_action(n, ListName.PACKAGES) for n in gaps.extra_formulae),
        *(create_remove_action(n, ListName.APPS) for n in gaps.extra_casks),
        *(
            create_remove_action(e.app_id, ListName.APP_STORE, comment=e.name or "Unknown")
            for e in gaps.extra_mas
        ),
    ]
    return [
        (ReviewSection.MISCLASSIFIED, moves),
        (ReviewSection.MISSING, adds),
        (ReviewSection.EXTRA, removes),
    ]


class ReviewEngine:
    """Runs the interactive review.

    Example:
        >>> engine = ReviewEngine(ScriptedResponder(["y", "a"]))
        >>> outcome = engine.run(classification, gaps, apply=False)
        >>> len(outcome.actions)
        3
    """

    def __init__(
        self,
        responder: Responder,
        listener: ReviewListener | None = None,
        manifest_name: str = "brew.sh",
    ) -> None:
        """Initialize the engine.

        Args:
            responder: Source of decisions.
            listener: Receiver of progress events (default: ignore them).
            manifest_name: File name used in the final confirmation.
        """
        self._responder = responder
        self._listener: ReviewListener = listener or NullListener()
        self._manifest_name = manifest_name

    def run(
        self,
        classification: ClassificationResult,
        gaps: GapResult,
        *,
        apply: bool = False,
    ) -> ReviewOutcome:
        """Review every finding and return the approved actions.

        Args:
            classification: Classifier output (move candidates).
            gaps: Gap analyzer output (add and remove candidates).
            apply: When True, ask for a final confirmation.

        Returns:
            ReviewOutcome with the approved actions.

        Raises:
            ReviewAborted: If the user quits at any prompt.
            ReviewCancelled: If the user declines the final confirmation.
        """
        sections = _section_actions(classification, gaps)
        total = sum(len(candidates) for _, candidates in sections)
        if total == 0:
            logger.debug("Nothing to review")
            return ReviewOutcome(no_changes=True)

        self._listener.review_started(total)

        actions: list[Action] = []
        for section, candidates in sections:
            if candidates:
                actions.extend(self._review_section(section, candidates))

        if not actions:
            return ReviewOutcome()

        approved = tuple(actions)
        self._listener.plan_ready(approved)

        if apply and not self._responder.confirm(f"Apply these changes to {self._manifest_name}?"):
            raise ReviewCancelled("Cancelled by user")

        logger.debug("Review approved %d of %d action(s)", len(approved), total)
        return ReviewOutcome(actions=approved)

    def _review_section(self, section: ReviewSection, candidates: list[Action]) -> list[Action]:
        """Run one section; accept-all and skip-all do not leak past it."""
        self._listener.section_started(section, len(candidates))

        approved: list[Action] = []
        accept_rest = False

        for action in candidates:
            if accept_rest:
                approved.append(action)
                self._listener.item_resolved(
                    action, Decision.APPROVE, f"{_summary(action)} (auto-accepted)"
                )
                continue

            decision = self._responder.ask(section, prompt_for(action))
            logger.debug("%s -> %s", prompt_for(action), decision.value)

            if decision is Decision.ABORT:
                raise ReviewAborted("Aborting...")
            if decision is Decision.APPROVE:
                approved.append(action)
                self._listener.item_resolved(action, decision, _approved(action))
            elif decision is Decision.APPROVE_REST:
                accept_rest = True
                approved.append(action)
                self._listener.item_resolved(action, decision, "Accepting all in this section...")
            elif decision is Decision.REJECT_REST:
                self._listener.item_resolved(action, decision, "Skipping all in this section...")
                break
            else:
                self._listener.item_resolved(action, decision, "Skipped")

        return approved
