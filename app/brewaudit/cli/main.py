"""Main CLI application entry point.

Defines the Typer application and its options.
"""

from typing import Annotated

import typer

from brewaudit import __version__
from brewaudit.cli.commands.audit import run_audit
from brewaudit.utils.formatting import configure_logging, print_error, print_warning
from brewaudit.utils.tempfiles import install_cleanup_hooks

app = typer.Typer(
    name="brewaudit",
    help="Audit brew.sh against installed Homebrew and Mac App Store apps.",
    rich_markup_mode="rich",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"brewaudit version {__version__}")
        raise typer.Exit()


@app.command(
    context_settings={
        "help_option_names": ["-h", "--help"],
        "ignore_unknown_options": True,
        "allow_extra_args": True,
    }
)
def main(
    ctx: typer.Context,
    apply: Annotated[
        bool,
        typer.Option(
            "--apply/--dry-run",
            help="Write the selected changes (default: dry run, preview only).",
        ),
    ] = False,
    scan_apps: Annotated[
        bool,
        typer.Option(
            "--scan-apps",
            help="Also list application bundles not managed by Homebrew or mas.",
        ),
    ] = False,
    manifest_name: Annotated[
        str | None,
        typer.Option(
            "--manifest-name",
            help="Manifest file name at the repository root (default: brew.sh).",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """brewaudit - keep brew.sh in sync with what is installed.

    Compares the packages, apps and app_store arrays of brew.sh with
    Homebrew and mas, then walks through every difference:

      [y] apply  [n] skip  [a] accept rest of section
      [s] skip rest of section  [q] quit without changes

    Examples:
        brewaudit                 # Preview changes (dry run)
        brewaudit --apply         # Review and write changes
        brewaudit --scan-apps -v  # Include unmanaged .app bundles
    """
    if ctx.args:
        print_error(f"Unknown option: {ctx.args[0]}")
        raise typer.Exit(code=1)

    configure_logging(verbose)
    install_cleanup_hooks()

    try:
        run_audit(apply=apply, scan_apps=scan_apps, manifest_name=manifest_name)
    except KeyboardInterrupt:
        print_warning("Interrupted")
        raise typer.Exit(code=130) from None


if __name__ == "__main__":
    app()
