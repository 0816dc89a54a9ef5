"""Config archive unpacking.

Reads the ZIP bundle returned by a node and writes its members into the
working tree, each entry exactly once, in archive order.

Execution Context:
    Library module - imported by sesamdiff_core.differ

Dependencies:
    - zipfile: Archive parsing

Metadata:
    Version: 0.1.0
    Author: SesamDiff Team
"""
from __future__ import annotations

import io
import logging
import os
import posixpath
import re
import zipfile
from pathlib import Path

from sesamdiff_core.errors import ArchiveError
from sesamdiff_core.errors import OutputError
from sesamdiff_core.models import ArchiveEntry

logger = logging.getLogger(__name__)


# ---- Constants ----------------------------------------------------------------------------------------------


FILE_MODE = 0o644
GIT_DIR = ".git"
DRIVE_PATTERN = re.compile(r"^[A-Za-z]:")


# ---- Reading ------------------------------------------------------------------------------------------------


def read_archive(
        payload: bytes,
) -> list[ArchiveEntry]:
    """Parse a ZIP payload into entries.

    Args:
        payload: Raw archive bytes.

    Returns:
        Entries in archive order.

    Raises:
        ArchiveError: If the payload is not a readable ZIP archive.
    """
    try:
        with zipfile.ZipFile(io.BytesIO(payload)) as bundle:
            return [
                ArchiveEntry(name=info.filename, is_dir=True)
                if info.is_dir()
                else ArchiveEntry(name=info.filename, data=bundle.read(info))
                for info in bundle.infolist()
            ]
    except (zipfile.BadZipFile, zipfile.LargeZipFile, EOFError, NotImplementedError, RuntimeError, ValueError) as zip_error:
        msg = f"Malformed config archive: {zip_error}"
        raise ArchiveError(msg) from zip_error


# ---- Writing ------------------------------------------------------------------------------------------------


def safe_target(
        root: Path,
        name: str,
) -> Path:
    """Resolve an entry name to a path inside root.

    Symbolic links already present in the working tree are followed, so an
    entry that would be written through a link to somewhere else is refused.

    Args:
        root: Working tree root.
        name: Relative path stored in the archive.

    Returns:
        Cleaned target path under root.

    Raises:
        ArchiveError: If the entry is absolute, escapes root, points into .git,
            or would be written through a symbolic link.
    """
    cleaned = posixpath.normpath(name.replace("\\", "/"))
    parts = cleaned.split("/")
    if cleaned.startswith("/") or parts[0] == ".." or DRIVE_PATTERN.match(cleaned):
        msg = f"Archive entry {name!r} points outside the working tree"
        raise ArchiveError(msg)
    if parts[0] == GIT_DIR:
        msg = f"Archive entry {name!r} points into the git directory"
        raise ArchiveError(msg)
    if cleaned == ".":
        return root

    target = root.joinpath(*parts)
    resolved_root = root.resolve()
    resolved = target.resolve()
    if not resolved.is_relative_to(resolved_root):
        msg = f"Archive entry {name!r} points outside the working tree"
        raise ArchiveError(msg)
    if resolved.relative_to(resolved_root).parts[:1] == (GIT_DIR,):
        msg = f"Archive entry {name!r} points into the git directory"
        raise ArchiveError(msg)
    if target.is_symlink():
        msg = f"Archive entry {name!r} would be written through a symbolic link"
        raise ArchiveError(msg)
    return target


def extract_entries(
        entries: list[ArchiveEntry],
        root: Path,
) -> list[Path]:
    """Write archive entries into the working tree.

    Every entry is validated before anything is written.

    Args:
        entries: Entries from read_archive.
        root: Working tree root.

    Returns:
        Paths of the written files.

    Raises:
        ArchiveError: If any entry path is unsafe.
        OutputError: If a file cannot be written.
    """
    targets = [(entry, safe_target(root, entry.name)) for entry in entries]

    written: list[Path] = []
    for entry, target in targets:
        try:
            if entry.is_dir:
                target.mkdir(parents=True, exist_ok=True)
                continue
            logger.info("Reading file: %s", entry.name)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(entry.data)
            os.chmod(target, FILE_MODE)
        except OSError as write_error:
            msg = f"Failed to write {entry.name!r}: {write_error}"
            raise OutputError(msg) from write_error
        written.append(target)
    return written
