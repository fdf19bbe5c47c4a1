"""CLI package for brewaudit.

This package contains the Typer application and the audit command.
"""

from brewaudit.cli.main import app

__all__ = ["app"]
