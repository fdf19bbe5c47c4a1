"""CLI commands for brewaudit.

This package contains the command implementations.
"""

from brewaudit.cli.commands import audit

__all__ = ["audit"]
