"""Environment validation.

Checks the preconditions of an audit run before anything is collected:
a git work tree, a readable manifest at its root, and Homebrew on PATH.
A missing mas is recorded but not fatal.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from brewaudit.core.paths import DEFAULT_MANIFEST_NAME, get_manifest_path
from brewaudit.scanners.brew import BREW
from brewaudit.scanners.mas import MAS
from brewaudit.utils.git import find_repo_root
from brewaudit.utils.shell import command_exists, first_line

logger = logging.getLogger(__name__)


class EnvironmentCheckError(Exception):
    """Raised when a precondition of the audit is not met."""


@dataclass(frozen=True, slots=True)
class Environment:
    """Validated context of an audit run.

    Attributes:
        repo_root: Top-level directory of the git work tree.
        manifest_path: Manifest file at the repository root.
        brew_version: First line of ``brew --version``, if available.
        mas_available: Whether mas is on PATH.
        mas_version: Output of ``mas version``, if available.
    """

    repo_root: Path
    manifest_path: Path
    brew_version: str | None = None
    mas_available: bool = False
    mas_version: str | None = None


def validate_environment(
    manifest_name: str = DEFAULT_MANIFEST_NAME,
    cwd: Path | None = None,
) -> Environment:
    """Check every precondition and describe the environment.

    Args:
        manifest_name: File name of the manifest at the repository root.
        cwd: Directory to start from. If None, uses the current directory.

    Returns:
        Environment for the run.

    Raises:
        EnvironmentCheckError: On the first failed precondition.
    """
    repo_root = find_repo_root(cwd)
    if repo_root is None:
        raise EnvironmentCheckError("Not in a git repository")
    logger.debug("Repository root: %s", repo_root)

    manifest_path = get_manifest_path(repo_root, manifest_name)
    if not manifest_path.is_file():
        raise EnvironmentCheckError(f"{manifest_name} not found at: {manifest_path}")
    if not os.access(manifest_path, os.R_OK):
        raise EnvironmentCheckError(f"{manifest_name} is not readable: {manifest_path}")
    logger.debug("Manifest: %s", manifest_path)

    if not command_exists(BREW):
        raise EnvironmentCheckError("Homebrew not found in PATH")
    brew_version = first_line([BREW, "--version"])
    logger.debug("Homebrew: %s", brew_version or "unknown version")

    mas_available = command_exists(MAS)
    mas_version = first_line([MAS, "version"]) if mas_available else None
    if mas_available:
        logger.debug("mas: %s", mas_version or "unknown version")
    else:
        logger.debug("mas not found in PATH")

    return Environment(
        repo_root=repo_root,
        manifest_path=manifest_path,
        brew_version=brew_version,
        mas_available=mas_available,
        mas_version=mas_version,
    )
