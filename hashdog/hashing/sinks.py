"""Hash database writers."""

import logging
from contextlib import ExitStack
from pathlib import Path
from typing import Self, TextIO

from hashdog.config import SinkConfig, SinkKind
from hashdog.errors import HashdogError
from hashdog.hashing.digest import Algorithm, DigestCache
from hashdog.models import FileEntry, HashRecord

logger = logging.getLogger(__name__)

RDS_HEADER = (
    '"SHA-1","MD5","CRC32","FileName","FileSize","ProductCode","OpSystemCode","SpecialCode"'
)


class SinkError(HashdogError):
    """Raised when an output file cannot be opened or written."""


class HashSink:
    """Append-only writer for one hash database file."""

    algorithms: tuple[Algorithm, ...] = ()

    def __init__(self, path: Path, fullpath: bool = False) -> None:
        self.path = path
        self.fullpath = fullpath
        self._fh: TextIO | None = None

    def open(self) -> None:
        try:
            # surrogateescape keeps undecodable filename bytes intact
            self._fh = open(
                self.path, "w", encoding="utf-8", errors="surrogateescape", newline="\n"
            )
        except OSError as e:
            raise SinkError(f"could not open {self.path}: {e}") from e
        self.write_header()

    def close(self) -> None:
        if self._fh:
            self._fh.close()
            self._fh = None

    def write_header(self) -> None:
        pass

    def build_record(self, entry: FileEntry, digests: DigestCache) -> HashRecord:
        name = entry.logical_path if self.fullpath else entry.short_name
        return HashRecord(
            name=name,
            size=entry.size,
            digests={a.value: digests.get(a) for a in self.algorithms},
        )

    def format_record(self, record: HashRecord) -> str:
        raise NotImplementedError

    def write(self, record: HashRecord) -> None:
        self._write_line(self.format_record(record))

    def _write_line(self, line: str) -> None:
        if self._fh is None:
            raise SinkError(f"{self.path} is not open")
        try:
            self._fh.write(line + "\n")
        except OSError as e:
            raise SinkError(f"could not write to {self.path}: {e}") from e

    def __enter__(self) -> Self:
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class _DigestListSink(HashSink):
    def format_record(self, record: HashRecord) -> str:
        return f"{record.digests[self.algorithms[0].value]}  {record.name}"


class Md5SumSink(_DigestListSink):
    """md5sum compatible list."""

    algorithms = (Algorithm.MD5,)


class Sha1SumSink(_DigestListSink):
    """sha1sum compatible list."""

    algorithms = (Algorithm.SHA1,)


class RdsSink(HashSink):
    """NSRL reference data set style CSV."""

    algorithms = (Algorithm.SHA1, Algorithm.MD5, Algorithm.CRC32)

    def write_header(self) -> None:
        self._write_line(RDS_HEADER)

    def format_record(self, record: HashRecord) -> str:
        sha1 = record.digests[Algorithm.SHA1.value]
        md5 = record.digests[Algorithm.MD5.value]
        crc32 = record.digests[Algorithm.CRC32.value]
        return f'"{sha1}","{md5}","{crc32}","{record.name}",{record.size},0,"WIN",""'


SINK_TYPES: dict[SinkKind, type[HashSink]] = {
    SinkKind.MD5SUM: Md5SumSink,
    SinkKind.SHA1SUM: Sha1SumSink,
    SinkKind.RDS: RdsSink,
}


def create_sink(config: SinkConfig) -> HashSink:
    return SINK_TYPES[config.kind](config.path, fullpath=config.fullpath)


class SinkSet:
    """The output sinks of one run, opened together and closed together."""

    def __init__(self, sinks: list[HashSink]) -> None:
        self.sinks = sinks
        self._stack: ExitStack | None = None

    def open(self) -> None:
        with ExitStack() as stack:
            for sink in self.sinks:
                stack.enter_context(sink)
                logger.info("writing %s", sink.path)
            self._stack = stack.pop_all()

    def close(self) -> None:
        if self._stack is not None:
            self._stack.close()
            self._stack = None

    def write_entry(self, entry: FileEntry) -> DigestCache:
        """Hash one file and write a record to every sink."""
        digests = DigestCache(entry.path)
        for sink in self.sinks:
            sink.write(sink.build_record(entry, digests))
        return digests

    def __len__(self) -> int:
        return len(self.sinks)

    def __iter__(self):
        return iter(self.sinks)

    def __enter__(self) -> Self:
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def open_sinks(configs: list[SinkConfig]) -> SinkSet:
    """Build the sink set for a run; use it as a context manager to open it."""
    return SinkSet([create_sink(config) for config in configs])
