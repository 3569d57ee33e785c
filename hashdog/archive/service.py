"""Archive classification and extraction interface."""

from pathlib import Path
from typing import Protocol


class ArchiveService(Protocol):
    """Protocol for archive inspection backends."""

    def classify(self, path: Path) -> str | None:
        """Return the archive type label, or None if the file is not an archive."""

    def extract(self, path: Path, target: Path) -> int:
        """Unpack an archive into target and return the tool's exit status."""


def should_skip(archive_type: str, skip_list: tuple[str, ...]) -> bool:
    """Case-insensitive exact match of an archive type against the skip-list."""
    wanted = archive_type.casefold()
    return any(label.casefold() == wanted for label in skip_list)
