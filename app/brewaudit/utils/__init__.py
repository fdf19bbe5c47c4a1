"""Utility modules for brewaudit.

This module exports commonly used utility functions.
"""

from brewaudit.utils.formatting import (
    configure_logging,
    console,
    err_console,
    print_error,
    print_info,
    print_section,
    print_success,
    print_warning,
)
from brewaudit.utils.shell import CommandResult, command_exists, run_command

__all__ = [
    "CommandResult",
    "command_exists",
    "configure_logging",
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_section",
    "print_success",
    "print_warning",
    "run_command",
]
