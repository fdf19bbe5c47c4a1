"""Shared Rich display functions for findings, plans and reports.

Provides the table builders and summary printers used by the audit
command: the findings overview, the reviewed action plan, the list of
unmanaged application bundles and the final report.
"""

from pathlib import Path

from rich.table import Table
from rich.text import Text

from brewaudit.core.actions import count_actions
from brewaudit.core.classifier import ClassificationResult
from brewaudit.core.environment import Environment
from brewaudit.core.gaps import GapResult
from brewaudit.models.action import Action, ActionType
from brewaudit.models.installed import InstalledState
from brewaudit.models.manifest import Manifest
from brewaudit.models.package import ListName
from brewaudit.utils.formatting import console, print_info, print_section, print_success
from brewaudit.utils.git import diff_file


def print_environment(env: Environment) -> None:
    """Print the validated environment."""
    console.print(f"[muted]Repository:[/] {env.repo_root}")
    console.print(f"[muted]Manifest:[/]   {env.manifest_path}")
    console.print(f"[muted]Homebrew:[/]   {env.brew_version or 'unknown version'}")
    if env.mas_available:
        console.print(f"[muted]mas:[/]        {env.mas_version or 'unknown version'}")


def create_findings_table(
    manifest: Manifest,
    installed: InstalledState,
    classification: ClassificationResult,
    gaps: GapResult,
) -> Table:
    """Create a Rich table summarizing the audit per category.

    Args:
        manifest: Parsed manifest.
        installed: Current installed state.
        classification: Classifier output.
        gaps: Gap analyzer output.

    Returns:
        Rich Table with one row per category.
    """
    table = Table(
        title="Audit Findings",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Category")
    table.add_column("Manifest", justify="right")
    table.add_column("Installed", justify="right")
    table.add_column("Missing", justify="right")
    table.add_column("Extra", justify="right")
    table.add_column("Misfiled", justify="right")

    moves = classification.misclassified
    misfiled_packages = sum(1 for m in moves if m.source is ListName.PACKAGES)
    misfiled_apps = len(moves) - misfiled_packages

    def count(n: int, style: str) -> str:
        return f"[{style}]{n}[/{style}]" if n else "[muted]0[/muted]"

    table.add_row(
        "Formulae (packages)",
        str(len(manifest.packages)),
        str(len(installed.formulae)),
        count(len(gaps.missing_formulae), "added"),
        count(len(gaps.extra_formulae), "removed"),
        count(misfiled_packages, "moved"),
    )
    table.add_row(
        "Casks (apps)",
        str(len(manifest.apps)),
        str(len(installed.casks)),
        count(len(gaps.missing_casks), "added"),
        count(len(gaps.extra_casks), "removed"),
        count(misfiled_apps, "moved"),
    )
    if installed.mas_available:
        table.add_row(
            "Store apps (app_store)",
            str(len(manifest.app_store)),
            str(len(installed.mas_apps)),
            count(len(gaps.missing_mas), "added"),
            count(len(gaps.extra_mas), "removed"),
            "[muted]-[/muted]",
        )
    else:
        table.add_row(
            "Store apps (app_store)",
            str(len(manifest.app_store)),
            "[muted]skipped[/muted]",
            "[muted]-[/muted]",
            "[muted]-[/muted]",
            "[muted]-[/muted]",
        )

    return table


def create_actions_table(actions: tuple[Action, ...], dry_run: bool = False) -> Table:
    """Create a Rich table displaying the reviewed actions.

    Args:
        actions: Approved actions.
        dry_run: Whether this is a dry-run (changes table title).

    Returns:
        Rich Table configured for action display.
    """
    title = "Selected Changes (Dry Run)" if dry_run else "Selected Changes"

    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Action", width=8, justify="center")
    table.add_column("List", width=18)
    table.add_column("Entry", no_wrap=True)

    # grouped by move, add, remove
    order = (ActionType.MOVE, ActionType.ADD, ActionType.REMOVE)
    for action in sorted(actions, key=lambda a: order.index(a.action_type)):
        if action.is_move:
            action_text = "[moved]->move[/moved]"
            style = "moved"
        elif action.is_add:
            action_text = "[added]+add[/added]"
            style = "added"
        else:
            action_text = "[removed]-remove[/removed]"
            style = "removed"

        entry = f"{action.name} # {action.comment}" if action.comment else action.name
        table.add_row(action_text, action.direction, f"[{style}]{entry}[/{style}]")

    return table


def create_unmanaged_table(bundles: list[str], applications_dir: Path) -> Table:
    """Create a Rich table of application bundles no manager accounts for.

    Args:
        bundles: Bundle names without the .app suffix.
        applications_dir: Directory that was scanned.

    Returns:
        Rich Table with one row per bundle.
    """
    table = Table(
        title=f"Unmanaged Applications in {applications_dir}",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Application", no_wrap=True)
    for bundle in bundles:
        table.add_row(f"{bundle}.app")
    return table


def print_report(actions: tuple[Action, ...], dry_run: bool, manifest_path: Path) -> None:
    """Print the final summary of a run.

    Shows the number of added, removed and moved entries. After an
    apply the git diff of the manifest and next steps follow; after a
    dry-run, the command to apply the changes.

    Args:
        actions: Approved actions.
        dry_run: Whether the manifest was left untouched.
        manifest_path: The manifest file.
    """
    print_section("Summary")

    name = manifest_path.name
    if not actions:
        print_success(f"No changes made. {name} is in sync!")
        return

    if dry_run:
        print_info("DRY RUN: The following changes would be made:")
    else:
        print_success(f"Applied {len(actions)} change(s) to {name}")

    counts = count_actions(actions)
    console.print()
    console.print(f"  [added]+[/added] Added: {counts[ActionType.ADD]}")
    console.print(f"  [removed]-[/removed] Removed: {counts[ActionType.REMOVE]}")
    console.print(f"  [moved]->[/moved] Moved: {counts[ActionType.MOVE]}")
    console.print()

    if dry_run:
        print_info("No file was modified.")
        console.print("[bold]To apply these changes, run:[/bold]")
        console.print("  brewaudit --apply")
        return

    print_info(f"Showing git diff of {name}:")
    diff = diff_file(manifest_path)
    if diff:
        console.print(Text.from_ansi(diff))
    else:
        console.print("[muted](no diff against the last commit)[/muted]")

    console.print("[bold]Next steps:[/bold]")
    console.print("  1. Review the changes above")
    console.print(f"  2. Test by running: ./{name} (on a test system if possible)")
    console.print(f"  3. Commit the changes: git add {name} && git commit -m 'Update {name}'")
