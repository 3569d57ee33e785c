"""Configuration module for hashdog."""

import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

DEFAULT_ARCHIVE_BIN = "7z"
DEFAULT_MIN_FILESIZE = 1


class SinkKind(Enum):
    MD5SUM = "md5sum"
    SHA1SUM = "sha1sum"
    RDS = "rds"


@dataclass
class SinkConfig:
    kind: SinkKind
    path: Path
    fullpath: bool = False


@dataclass
class RunConfig:
    inputs: list[Path] = field(default_factory=list)
    sinks: list[SinkConfig] = field(default_factory=list)
    archive_bin: str = DEFAULT_ARCHIVE_BIN
    archive_skip: tuple[str, ...] = ()
    min_filesize: int = DEFAULT_MIN_FILESIZE
    tmp_root: Path = field(default_factory=lambda: Path(tempfile.gettempdir()))
    verbose: bool = False
    debug: bool = False


def split_skip_list(values: tuple[str, ...] | list[str]) -> tuple[str, ...]:
    """Flatten repeated, comma separated archive type options."""
    labels: list[str] = []
    for value in values:
        labels.extend(item.strip() for item in value.split(","))
    return tuple(label for label in labels if label)
