"""Archive detection and extraction."""

from hashdog.archive.service import ArchiveService, should_skip
from hashdog.archive.sevenzip import (
    ArchiveToolNotFoundError,
    SevenZipArchiveService,
    SevenZipRunner,
    parse_archive_type,
    parse_version,
)

__all__ = [
    "ArchiveService",
    "should_skip",
    "ArchiveToolNotFoundError",
    "SevenZipArchiveService",
    "SevenZipRunner",
    "parse_archive_type",
    "parse_version",
]
