"""Recursive, archive-aware traversal and hashing."""

import logging
from pathlib import Path

from hashdog.archive.service import ArchiveService, should_skip
from hashdog.config import RunConfig
from hashdog.errors import HashdogError
from hashdog.hashing.sinks import SinkSet
from hashdog.models import ExtractionJob, FileEntry, ProcessingRoot, RootKind
from hashdog.scanner.filesystem import EntryType, list_directory, make_permissive
from hashdog.scanner.paths import logical_path, short_name
from hashdog.scanner.progress import Reporter, RunStats
from hashdog.workspace import Workspace

logger = logging.getLogger(__name__)


class InputPathError(HashdogError):
    """Raised when an input is neither a regular file nor a directory."""


def root_for_input(input_path: Path) -> ProcessingRoot:
    if input_path.is_symlink() and not input_path.exists():
        raise InputPathError(f"the input file is not a file nor a directory: {input_path}")
    if input_path.is_dir():
        return ProcessingRoot(input_path, RootKind.DIRECTORY, strip_prefix=input_path)
    if input_path.is_file():
        return ProcessingRoot(input_path, RootKind.SINGLE_FILE)
    raise InputPathError(f"the input file is not a file nor a directory: {input_path}")


class TraversalEngine:
    """Walks input roots, hashes files and descends into archives.

    Execution is sequential and depth first. Recoverable conditions
    (unreadable entries, corrupt archives) are reported and skipped;
    anything raised as a HashdogError aborts the run.
    """

    def __init__(
        self,
        config: RunConfig,
        workspace: Workspace,
        archives: ArchiveService,
        sinks: SinkSet,
        reporter: Reporter | None = None,
    ) -> None:
        self.config = config
        self.workspace = workspace
        self.archives = archives
        self.sinks = sinks
        self.reporter = reporter or Reporter()
        self.stats = RunStats()

    def run(self, input_path: Path) -> RunStats:
        """Process one user supplied input."""
        root = root_for_input(input_path)
        self.reporter.report_start(str(input_path), root.kind is RootKind.DIRECTORY)
        self.process(root)
        return self.stats

    def process(self, root: ProcessingRoot) -> None:
        if root.kind is not RootKind.EXTRACTED:
            self.workspace.reset_for_new_root()

        if root.kind is RootKind.SINGLE_FILE:
            try:
                size = root.path.stat().st_size
            except OSError as e:
                raise InputPathError(f"could not read {root.path}: {e}") from e
            self._process_file(root.path, size, root)
        else:
            self._walk(root.path, root)

    def _walk(self, directory: Path, root: ProcessingRoot) -> None:
        try:
            entries = list_directory(directory)
        except OSError as e:
            self._report_error(f"error opening directory '{directory}': {e}")
            return

        for entry in entries:
            if entry.entry_type is EntryType.SYMLINK:
                continue
            if entry.entry_type is EntryType.DIRECTORY:
                if self._is_workspace(entry.path):
                    logger.info("skipping tmp folder: %s", entry.path)
                    continue
                self._walk(entry.path, root)
            elif entry.entry_type is EntryType.FILE:
                self._process_file(entry.path, entry.size, root)
            else:
                self._report_error(f"error: {entry.path} ({entry.error})")

    def _is_workspace(self, directory: Path) -> bool:
        try:
            return directory.resolve() == self.workspace.path
        except OSError:
            return False

    def _process_file(self, path: Path, size: int, root: ProcessingRoot) -> None:
        logical = logical_path(path, root)
        entry = FileEntry(
            path=path,
            logical_path=logical,
            short_name=short_name(logical),
            size=size,
            root=root,
        )
        self.stats.files_processed += 1

        self.reporter.file(entry.logical_path)
        logger.info('path: "%s"', entry.path)
        logger.info("name: %s", entry.short_name)
        logger.info("type: %s", root.kind.value)
        logger.info("size: %d", entry.size)

        if entry.size >= self.config.min_filesize:
            self._hash(entry)
        else:
            logger.info(
                "file (%d bytes) is less than %d bytes", entry.size, self.config.min_filesize
            )

        self._handle_archive(entry)

    def _hash(self, entry: FileEntry) -> None:
        if not len(self.sinks):
            return
        self.sinks.write_entry(entry)
        self.stats.files_hashed += 1
        self.stats.bytes_hashed += entry.size

    def _handle_archive(self, entry: FileEntry) -> None:
        archive_type = self.archives.classify(entry.path)
        if not archive_type:
            logger.info("archive: not an archive")
            return

        if should_skip(archive_type, self.config.archive_skip):
            self.reporter.info(f"skipping archive type: {archive_type}")
            self.stats.archives_skipped += 1
            return

        job = self._prepare_extraction(entry, archive_type)
        self.reporter.info(f"extracting archive: {archive_type}")
        job.exit_status = self.archives.extract(job.archive_path, job.target)

        make_permissive(job.target)
        if job.relocated:
            self.workspace.discard(job.archive_path)

        if not job.succeeded:
            self._report_error(
                f"archive is corrupt or password protected (exit code: {job.exit_status})"
            )
            logger.info("deleting archive output: %s", job.target)
            self.workspace.remove_target(job.target)
            self.stats.archives_failed += 1
            return

        self.stats.archives_extracted += 1
        self.process(
            ProcessingRoot(
                job.target, RootKind.EXTRACTED, strip_prefix=self.workspace.extract_root
            )
        )

    def _prepare_extraction(self, entry: FileEntry, archive_type: str) -> ExtractionJob:
        archive_path = entry.path
        relocated = False
        # An extracted archive sits where its own extraction directory will be created.
        if entry.extracted:
            archive_path = self.workspace.stage(entry.path)
            relocated = True

        target = self.workspace.extraction_target(entry.logical_path)
        return ExtractionJob(
            source=entry,
            archive_type=archive_type,
            archive_path=archive_path,
            target=target,
            relocated=relocated,
        )

    def _report_error(self, message: str) -> None:
        self.stats.errors += 1
        self.reporter.error(message)
