"""Manifest file I/O operations.

This module reads the three shell arrays (``packages``, ``apps`` and
``app_store``) out of brew.sh and writes them back. Rewriting rebuilds
the file from the untouched spans around the arrays plus freshly
rendered array blocks, so every byte outside the arrays survives.
"""

import logging
import os
import re
import shlex
import shutil
from datetime import datetime
from pathlib import Path
from tempfile import NamedTemporaryFile

from brewaudit.core.paths import get_backup_path
from brewaudit.models.manifest import AppStoreEntry, ManagedList, Manifest, ManifestLists
from brewaudit.models.package import ListName
from brewaudit.utils.tempfiles import register_temp_file, unregister_temp_file

logger = logging.getLogger(__name__)

INDENT = "    "

_OPENERS: dict[ListName, str] = {
    ListName.PACKAGES: "packages=(",
    ListName.APPS: "apps=(",
    ListName.APP_STORE: "app_store=(",
}

# "497799835" # Xcode
_APP_STORE_ENTRY = re.compile(r'"(\d+)"\s*#\s*(.+)')


class ManifestError(Exception):
    """Base exception for manifest-related errors."""


class ManifestNotFoundError(ManifestError):
    """Raised when manifest file is not found."""


class ManifestReadError(ManifestError):
    """Raised when manifest file exists but cannot be read."""


class ManifestParseError(ManifestError):
    """Raised when one of the arrays is missing or never closed."""


class ManifestWriteError(ManifestError):
    """Raised when the backup or the rewritten manifest cannot be written."""


# =============================================================================
# Parsing
# =============================================================================


def _match_opener(line: str) -> ListName | None:
    for name, opener in _OPENERS.items():
        if line.startswith(opener):
            return name
    return None


def _is_closer(line: str) -> bool:
    return line.lstrip().startswith(")")


def _strip_comment(text: str) -> str:
    """Drop an unquoted ``#`` comment the way the shell reads one."""
    quote = ""
    for i, ch in enumerate(text):
        if quote:
            if ch == quote:
                quote = ""
        elif ch in "\"'":
            quote = ch
        elif ch == "#" and (i == 0 or text[i - 1].isspace()):
            return text[:i]
    return text


def _split_words(text: str) -> list[str]:
    """Split shell words, dropping quotes and ``#`` comments."""
    try:
        words = shlex.split(text, comments=True)
    except ValueError:
        # unbalanced quotes: fall back to the plain normalization
        value = text.split("#", 1)[0].strip().strip("\"'").strip()
        words = [value] if value else []
    return [w for w in words if w]


def _parse_app_store_entry(text: str) -> AppStoreEntry | None:
    match = _APP_STORE_ENTRY.search(text)
    if match is None:
        return None
    comment = match.group(2).strip()
    if not comment:
        return None
    return AppStoreEntry(app_id=match.group(1), name=comment)


def _parse_entries(name: ListName, text: str) -> list[str] | list[AppStoreEntry]:
    if name is ListName.APP_STORE:
        entry = _parse_app_store_entry(text)
        if entry is None:
            if text.strip():
                logger.debug("Ignoring app_store line without id and comment: %r", text[:100])
            return []
        return [entry]
    return _split_words(text)


def parse_manifest(text: str, path: Path | None = None) -> Manifest:
    """Parse brew.sh content into its three managed arrays.

    Only the first declaration of each array is honored; a repeated
    ``name=(`` after the array was already read is skipped.

    Args:
        text: Full file content.
        path: File the content came from (for messages).

    Returns:
        Parsed Manifest.

    Raises:
        ManifestParseError: If an array is missing or never closed.
    """
    lines = tuple(text.splitlines(keepends=True))
    label = str(path) if path else "manifest"

    entries: dict[ListName, list[str] | list[AppStoreEntry]] = {n: [] for n in ListName}
    starts: dict[ListName, int] = {}
    ends: dict[ListName, int] = {}
    current: ListName | None = None

    for index, raw in enumerate(lines):
        line = raw.rstrip("\r\n")

        if current is None:
            name = _match_opener(line)
            if name is None:
                continue
            if name in starts:
                logger.debug(
                    "Ignoring repeated %s declaration at line %d of %s",
                    name.value,
                    index + 1,
                    label,
                )
                continue

            starts[name] = index
            logger.debug("Found %s array start at line %d", name.value, index + 1)
            rest = line[len(_OPENERS[name]) :]
            code = _strip_comment(rest).rstrip()
            if code.endswith(")"):
                # single-line array: packages=("git" "tree")
                entries[name].extend(_parse_entries(name, code[:-1]))  # type: ignore[arg-type]
                ends[name] = index + 1
                continue
            current = name
            continue

        if _is_closer(line):
            ends[current] = index + 1
            logger.debug("Found %s array end at line %d", current.value, index + 1)
            current = None
            continue

        entries[current].extend(_parse_entries(current, line))  # type: ignore[arg-type]

    if current is not None:
        start = starts[current] + 1
        msg = f"Array '{current.value}' in {label} starting at line {start} is never closed"
        raise ManifestParseError(msg)

    for name in ListName:
        if name not in starts:
            msg = f"Array '{_OPENERS[name]}' not found in {label}"
            raise ManifestParseError(msg)

    def managed(name: ListName) -> ManagedList:
        return ManagedList(
            name=name,
            entries=tuple(entries[name]),  # type: ignore[arg-type]
            start_line=starts[name],
            end_line=ends[name],
        )

    try:
        return Manifest(
            path=path,
            lines=lines,
            packages=managed(ListName.PACKAGES),
            apps=managed(ListName.APPS),
            app_store=managed(ListName.APP_STORE),
        )
    except ValueError as e:
        raise ManifestParseError(f"Invalid array layout in {label}: {e}") from e


def load_manifest(path: Path) -> Manifest:
    """Read and parse a manifest file.

    Args:
        path: Path to brew.sh.

    Returns:
        Parsed Manifest.

    Raises:
        ManifestNotFoundError: If the file doesn't exist.
        ManifestReadError: If the file cannot be read or decoded.
        ManifestParseError: If the arrays cannot be located.
    """
    if not path.is_file():
        raise ManifestNotFoundError(f"{path.name} not found at: {path}")

    try:
        # newline="" keeps CRLF line endings intact for byte-exact rewrites
        with open(path, encoding="utf-8", newline="") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestReadError(f"{path.name} is not readable: {path} ({e})") from e

    manifest = parse_manifest(text, path)
    logger.debug(
        "Parsed %s: %d packages, %d apps, %d app_store",
        path,
        len(manifest.packages),
        len(manifest.apps),
        len(manifest.app_store),
    )
    return manifest


# =============================================================================
# Rendering
# =============================================================================


def _block_lines(name: ListName, lists: ManifestLists) -> list[str]:
    if name is ListName.PACKAGES:
        return ["packages=(", *(f'{INDENT}"{p}"' for p in lists.packages), "", ")"]
    if name is ListName.APPS:
        return ["apps=(", *(f'{INDENT}"{a}"' for a in lists.apps), ")"]
    return [
        "app_store=(",
        *(f'{INDENT}"{e.app_id}" # {e.name}' for e in lists.app_store),
        " )",
    ]


def render_manifest(manifest: Manifest, lists: ManifestLists) -> str:
    """Rebuild the manifest text with new array contents.

    The result is the ordered concatenation of the unmanaged spans
    (before, between and after the arrays) copied verbatim and the
    three freshly rendered array blocks.

    Args:
        manifest: Parsed original manifest.
        lists: New contents of the arrays.

    Returns:
        Complete new file content.
    """
    parts: list[str] = []
    cursor = 0

    for block in manifest.blocks:
        parts.extend(manifest.lines[cursor : block.start_line])

        closer = manifest.lines[block.end_line - 1]
        newline = "\r\n" if closer.endswith("\r\n") else "\n"
        rendered = newline.join(_block_lines(block.name, lists))
        if closer.endswith("\n"):
            rendered += newline
        parts.append(rendered)

        cursor = block.end_line

    parts.extend(manifest.lines[cursor:])
    return "".join(parts)


# =============================================================================
# Writing
# =============================================================================


def backup_manifest(path: Path, now: datetime | None = None) -> Path:
    """Copy the manifest to ``<name>.backup.YYYYMMDD_HHMMSS``.

    Args:
        path: Manifest to back up.
        now: Timestamp for the backup name. If None, uses the current time.

    Returns:
        Path of the backup copy.

    Raises:
        ManifestWriteError: If the copy fails.
    """
    backup_path = get_backup_path(path, now)
    try:
        shutil.copy2(path, backup_path)
    except OSError as e:
        raise ManifestWriteError(f"Failed to create backup {backup_path}: {e}") from e
    logger.debug("Created backup %s", backup_path)
    return backup_path


def write_manifest(path: Path, text: str) -> Path:
    """Replace the manifest content atomically.

    The new content goes to a temporary file in the same directory,
    which is then renamed over the manifest with os.replace(). The
    temporary file is tracked for cleanup until the rename succeeds.

    Args:
        path: Manifest to overwrite.
        text: New content.

    Returns:
        Path where the manifest was saved.

    Raises:
        ManifestWriteError: If the file cannot be written.
    """
    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            newline="",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_path = register_temp_file(Path(f.name))
            f.write(text)
        # keep the executable bit of brew.sh
        shutil.copymode(path, tmp_path)
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise ManifestWriteError(f"Failed to write manifest {path}: {e}") from e
    finally:
        if tmp_path is not None:
            unregister_temp_file(tmp_path)

    return path


def save_manifest(
    manifest: Manifest,
    lists: ManifestLists,
    *,
    now: datetime | None = None,
) -> Path:
    """Back up the manifest, then rewrite it with new array contents.

    Args:
        manifest: Parsed manifest (its line spans must still match the file).
        lists: Final, sorted array contents.
        now: Timestamp for the backup name.

    Returns:
        Path of the backup copy.

    Raises:
        ManifestError: If the manifest has no path.
        ManifestWriteError: If the backup or rewrite fails; the original
            file is left untouched.
    """
    if manifest.path is None:
        raise ManifestError("Cannot save a manifest that was not loaded from a file")

    backup_path = backup_manifest(manifest.path, now)
    write_manifest(manifest.path, render_manifest(manifest, lists))
    logger.debug("Rewrote %s", manifest.path)
    return backup_path
