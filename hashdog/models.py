"""Data models shared by the traversal pipeline."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class RootKind(Enum):
    """Origin of a processing root."""

    SINGLE_FILE = "main_single"
    DIRECTORY = "main_multi"
    EXTRACTED = "extracted"


@dataclass(frozen=True)
class ProcessingRoot:
    """A traversal origin.

    `strip_prefix` is the path removed from file paths to derive logical
    paths: the input root for directories, the workspace root for
    extracted archives.
    """

    path: Path
    kind: RootKind
    strip_prefix: Path | None = None


@dataclass
class FileEntry:
    """A regular file under consideration."""

    path: Path
    logical_path: str
    short_name: str
    size: int
    root: ProcessingRoot

    @property
    def extracted(self) -> bool:
        return self.root.kind is RootKind.EXTRACTED


@dataclass
class ExtractionJob:
    """One unpack operation."""

    source: FileEntry
    archive_type: str
    archive_path: Path
    target: Path
    relocated: bool = False
    exit_status: int | None = None

    @property
    def succeeded(self) -> bool:
        return self.exit_status == 0


@dataclass
class HashRecord:
    """One output line for one file in one sink."""

    name: str
    size: int
    digests: dict[str, str] = field(default_factory=dict)
