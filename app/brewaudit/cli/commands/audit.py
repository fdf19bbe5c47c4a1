"""Audit command implementation.

Reconciles the manifest with what Homebrew and mas report as installed:
validate the environment, parse the manifest, collect the installed
state, classify entries, compute gaps, review them interactively and,
in apply mode, rewrite the manifest.
"""

import logging

import typer
from rich.markup import escape

from brewaudit.cli.display import (
    create_findings_table,
    create_unmanaged_table,
    print_environment,
    print_report,
)
from brewaudit.cli.prompt import TerminalResponder
from brewaudit.core.actions import apply_actions
from brewaudit.core.classifier import KNOWN_MISCLASSIFIED_CASKS, ClassificationResult, Classifier
from brewaudit.core.collector import collect_installed_state
from brewaudit.core.config import AuditConfig, ConfigError, load_config
from brewaudit.core.environment import Environment, EnvironmentCheckError, validate_environment
from brewaudit.core.gaps import GapAnalyzer
from brewaudit.core.manifest import ManifestError, load_manifest, save_manifest
from brewaudit.core.review import ReviewAborted, ReviewCancelled, ReviewEngine
from brewaudit.models.action import Action
from brewaudit.models.installed import InstalledState
from brewaudit.models.manifest import Manifest
from brewaudit.scanners.applications import ApplicationScanner
from brewaudit.scanners.brew import BrewProber
from brewaudit.utils.formatting import (
    console,
    print_error,
    print_info,
    print_section,
    print_success,
    print_warning,
)

logger = logging.getLogger(__name__)


def _load_config() -> AuditConfig:
    """Load the user configuration or exit."""
    try:
        return load_config()
    except ConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e


def _validate(manifest_name: str) -> Environment:
    """Check preconditions or exit."""
    print_info("Validating environment...")
    try:
        env = validate_environment(manifest_name)
    except EnvironmentCheckError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    print_environment(env)
    if not env.mas_available:
        print_warning("mas not found in PATH; Mac App Store apps will be skipped")
    return env


def _load(env: Environment) -> Manifest:
    """Parse the manifest or exit."""
    print_info(f"Parsing {env.manifest_path.name}...")
    try:
        manifest = load_manifest(env.manifest_path)
    except ManifestError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    print_success(
        f"Found {len(manifest.packages)} packages, {len(manifest.apps)} apps "
        f"and {len(manifest.app_store)} App Store entries"
    )
    return manifest


def _collect(config: AuditConfig) -> InstalledState:
    """Query installed formulae, casks and store apps or exit."""
    print_info("Collecting installed state...")
    try:
        with console.status("Querying Homebrew and mas..."):
            installed = collect_installed_state(timeout=config.query_timeout)
    except RuntimeError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    print_success(
        f"Found {len(installed.formulae)} formulae, {len(installed.casks)} casks "
        f"and {len(installed.mas_apps)} App Store apps installed"
    )
    return installed


def _classify(manifest: Manifest, config: AuditConfig) -> ClassificationResult:
    """Classify manifest entries and print warnings for unresolved ones."""
    print_info("Classifying manifest entries...")
    known = KNOWN_MISCLASSIFIED_CASKS | set(config.known_misclassified)
    classifier = Classifier(BrewProber(timeout=config.query_timeout), known=known)

    with console.status("Asking Homebrew about each entry..."):
        classification = classifier.run(manifest)

    for move in classification.misclassified:
        print_warning(f"Misclassification detected: '{move.name}' belongs in {move.target.value}")
    for warning in classification.warnings:
        print_warning(warning)
    return classification


def _scan_applications(config: AuditConfig, installed: InstalledState) -> None:
    """Print application bundles no cask or store app accounts for."""
    scanner = ApplicationScanner(config.applications_dir)
    if not scanner.is_available():
        print_warning(f"{scanner.applications_dir} not found; skipping application scan")
        return

    unmanaged = scanner.find_unmanaged(installed)
    if not unmanaged:
        print_success(f"Every application in {scanner.applications_dir} is managed")
        return
    console.print(create_unmanaged_table(unmanaged, scanner.applications_dir))
    print_info(f"{len(unmanaged)} application(s) not managed by Homebrew or mas")


def _commit(manifest: Manifest, actions: tuple[Action, ...]) -> None:
    """Back up and rewrite the manifest or exit."""
    print_section("Applying Changes")
    lists = apply_actions(manifest.to_lists(), actions)
    try:
        backup_path = save_manifest(manifest, lists)
    except ManifestError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    print_success(f"Created backup: {backup_path}")
    print_success(f"Updated {manifest.path.name if manifest.path else 'manifest'}")


def run_audit(
    *,
    apply: bool = False,
    scan_apps: bool = False,
    manifest_name: str | None = None,
) -> None:
    """Run a complete audit.

    Args:
        apply: Write the approved changes (otherwise dry-run).
        scan_apps: Also list unmanaged application bundles.
        manifest_name: Override of the configured manifest file name.

    Raises:
        typer.Exit: With code 1 on a failed precondition or fatal error.
    """
    config = _load_config()
    name = manifest_name or config.manifest_name

    print_section(f"Homebrew/MAS Audit & Sync for {name}")
    if apply:
        print_warning(f"Running in APPLY mode ({name} will be modified)")
    else:
        print_info("Running in DRY RUN mode (no modifications will be made)")

    env = _validate(name)
    manifest = _load(env)
    installed = _collect(config)
    classification = _classify(manifest, config)
    gaps = GapAnalyzer().run(manifest, installed, classification)

    console.print()
    console.print(create_findings_table(manifest, installed, classification, gaps))

    if scan_apps:
        _scan_applications(config, installed)

    responder = TerminalResponder(dry_run=not apply, manifest_name=name)
    engine = ReviewEngine(responder, listener=responder, manifest_name=name)
    try:
        outcome = engine.run(classification, gaps, apply=apply)
    except ReviewAborted:
        print_warning("Aborting...")
        return
    except ReviewCancelled:
        print_warning("Cancelled by user")
        return

    if outcome.no_changes:
        print_success(f"No changes needed! {name} is in sync with installed packages.")
        return
    if not outcome.actions:
        print_warning("No changes selected.")
        return

    if apply:
        _commit(manifest, outcome.actions)

    print_report(outcome.actions, dry_run=not apply, manifest_path=env.manifest_path)
    print_success("Audit complete!")
