"""Process-wide registry of temporary files.

Temporary files created while rewriting brew.sh are registered here and
removed on every exit path: normal interpreter exit (atexit), SIGINT
and SIGTERM.
"""

import atexit
import logging
import signal
import sys
from pathlib import Path
from types import FrameType

logger = logging.getLogger(__name__)

_temp_files: list[Path] = []
_hooks_installed = False


def register_temp_file(path: Path) -> Path:
    """Track a temporary file for cleanup.

    Args:
        path: Temporary file path.

    Returns:
        The same path, for chaining.
    """
    if path not in _temp_files:
        _temp_files.append(path)
    return path


def unregister_temp_file(path: Path) -> None:
    """Stop tracking a temporary file (e.g. after it was renamed into place)."""
    if path in _temp_files:
        _temp_files.remove(path)


def registered_temp_files() -> tuple[Path, ...]:
    """Return the currently tracked paths."""
    return tuple(_temp_files)


def cleanup_temp_files() -> None:
    """Delete every tracked temporary file that still exists."""
    while _temp_files:
        path = _temp_files.pop()
        try:
            path.unlink(missing_ok=True)
            logger.debug("Removed temporary file %s", path)
        except OSError as e:
            logger.debug("Could not remove temporary file %s: %s", path, e)


def _handle_signal(signum: int, _frame: FrameType | None) -> None:
    cleanup_temp_files()
    if signum == signal.SIGINT:
        raise KeyboardInterrupt
    sys.exit(128 + signum)


def install_cleanup_hooks() -> None:
    """Register the atexit hook and SIGINT/SIGTERM handlers once per process."""
    global _hooks_installed
    if _hooks_installed:
        return
    atexit.register(cleanup_temp_files)
    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            signal.signal(signum, _handle_signal)
        except ValueError:
            # signal handlers can only be set from the main thread
            logger.debug("Cannot install handler for signal %d outside main thread", signum)
    _hooks_installed = True
