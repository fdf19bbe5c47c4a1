"""Git helpers.

Only two things are needed from version control: the repository root
that holds brew.sh, and a diff of the manifest after it was rewritten.
"""

import logging
import subprocess
from pathlib import Path

from brewaudit.utils.shell import run_command

logger = logging.getLogger(__name__)


def find_repo_root(cwd: Path | None = None) -> Path | None:
    """Return the top-level directory of the enclosing git work tree.

    Args:
        cwd: Directory to start from. If None, uses the current directory.

    Returns:
        Repository root, or None if not inside a repository (or git is missing).
    """
    try:
        result = run_command(
            ["git", "rev-parse", "--show-toplevel"],
            timeout=10.0,
            cwd=str(cwd) if cwd else None,
        )
    except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
        logger.debug("git rev-parse failed: %s", e)
        return None

    if not result.success:
        logger.debug("git rev-parse returned %d: %s", result.returncode, result.stderr.strip())
        return None

    top = result.stdout.strip()
    return Path(top) if top else None


def diff_file(path: Path, *, color: bool = True) -> str:
    """Return the working-tree diff for a single file.

    Args:
        path: File to diff.
        color: Ask git for ANSI colored output.

    Returns:
        Diff text (empty when unchanged or when git fails).
    """
    args = ["git", "--no-pager", "diff"]
    if color:
        args.append("--color=always")
    args += ["--", path.name]

    try:
        result = run_command(args, timeout=30.0, cwd=str(path.parent))
    except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
        logger.debug("git diff failed: %s", e)
        return ""

    if not result.success:
        logger.debug("git diff returned %d: %s", result.returncode, result.stderr.strip())
        return ""
    return result.stdout
