"""Terminal side of the interactive review.

TerminalResponder reads single key presses for the ReviewEngine and
renders its progress events with the shared Rich console.
"""

import typer
from rich.markup import escape

from brewaudit.cli.display import create_actions_table
from brewaudit.core.review import KEY_HELP, Decision, ReviewSection, decision_from_key
from brewaudit.models.action import Action
from brewaudit.utils.formatting import console, print_info, print_section

_APPROVING = (Decision.APPROVE, Decision.APPROVE_REST)


def _read_key() -> str:
    """Read one key press without waiting for Enter."""
    key = typer.getchar(echo=False)
    console.print(escape(key) if key.isprintable() else "")
    return key


class TerminalResponder:
    """Responder and listener backed by the terminal.

    Args:
        dry_run: Whether the run will leave the manifest untouched.
        manifest_name: File name shown in messages.
    """

    def __init__(self, dry_run: bool = True, manifest_name: str = "brew.sh") -> None:
        self._dry_run = dry_run
        self._manifest_name = manifest_name

    # Responder

    def ask(self, section: ReviewSection, prompt: str) -> Decision:
        console.print(f"[prompt]{escape(prompt)}[/prompt] ", end="")
        return decision_from_key(_read_key())

    def confirm(self, prompt: str) -> bool:
        console.print(f"[prompt]{escape(prompt + ' [y/N]')}[/prompt] ", end="")
        return _read_key() in ("y", "Y")

    # ReviewListener

    def review_started(self, total: int) -> None:
        print_section("Interactive Review")
        console.print(f"[bold]Found {total} potential change(s).[/bold]")
        console.print()
        console.print("For each item, you can:")
        for key, meaning in KEY_HELP:
            console.print(f"  {escape(f'[{key}]')} {meaning}")

    def section_started(self, section: ReviewSection, count: int) -> None:
        print_section(f"Section {section.value}: {section.title} ({count} item(s))")

    def item_resolved(self, action: Action, decision: Decision, message: str) -> None:
        if decision in _APPROVING:
            console.print(f"[success]✓[/success] {escape(message)}")
        else:
            console.print(f"[skipped]⊘[/skipped] {escape(message)}")
        console.print()

    def plan_ready(self, actions: tuple[Action, ...]) -> None:
        print_section(f"Summary: {len(actions)} change(s) selected")
        console.print(create_actions_table(actions, dry_run=self._dry_run))
        if self._dry_run:
            print_info(f"DRY RUN MODE: No changes will be made to {self._manifest_name}")
            print_info("Run with --apply to make these changes")
