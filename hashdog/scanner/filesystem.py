"""Filesystem listing utilities for traversal."""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)

PERMISSIVE_MODE = 0o755


class EntryType(Enum):
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"


@dataclass
class DirectoryEntry:
    path: Path
    name: str
    entry_type: EntryType
    size: int = 0
    error: str | None = None


def list_directory(directory: Path) -> list[DirectoryEntry]:
    """List a directory in filesystem order.

    The listing is fully read before the caller acts on it, since
    extracting an archive replaces the archive file with a directory of
    the same name.
    """
    with os.scandir(directory) as entries:
        return [_classify_entry(entry) for entry in entries]


def _classify_entry(entry: os.DirEntry) -> DirectoryEntry:
    path = Path(entry.path)
    try:
        if entry.is_symlink():
            return DirectoryEntry(path, entry.name, EntryType.SYMLINK)
        if entry.is_dir(follow_symlinks=False):
            return DirectoryEntry(path, entry.name, EntryType.DIRECTORY)
        if entry.is_file(follow_symlinks=False):
            size = entry.stat(follow_symlinks=False).st_size
            return DirectoryEntry(path, entry.name, EntryType.FILE, size=size)
        return DirectoryEntry(path, entry.name, EntryType.OTHER, error="unsupported entry type")
    except OSError as e:
        return DirectoryEntry(path, entry.name, EntryType.OTHER, error=str(e))


def make_permissive(root: Path) -> None:
    """chmod 0755 everything below root so later steps can read it."""
    _chmod(root)
    for dirpath, dirnames, filenames in os.walk(root):
        for name in dirnames + filenames:
            _chmod(Path(dirpath) / name)


def _chmod(path: Path) -> None:
    try:
        if path.is_symlink():
            return
        os.chmod(path, PERMISSIVE_MODE)
    except OSError as e:
        logger.warning("cannot chmod %s: %s", path, e)
