"""Scratch workspace used to stage archive extractions."""

import logging
import random
import shutil
import signal
import threading
from pathlib import Path
from typing import Self

from hashdog.errors import HashdogError

logger = logging.getLogger(__name__)

WORKSPACE_PREFIX = "hd"
STAGING_FILENAME = "tmp_folder_file.tmp"
# extracted trees live below this child; the staging file sits beside it
EXTRACT_DIRNAME = "extracted"
MAX_NAME_ATTEMPTS = 100

_CLEANUP_SIGNALS = tuple(
    getattr(signal, name) for name in ("SIGTERM", "SIGHUP") if hasattr(signal, name)
)


class WorkspaceError(HashdogError):
    """Raised when the scratch workspace cannot be created or modified."""


class Workspace:
    """Owns one ephemeral scratch directory for the duration of a run.

    Use as a context manager: the directory is created on enter and removed
    on exit, whether the run succeeds or fails. While active, termination
    signals are turned into ``SystemExit`` so cleanup still happens.
    """

    def __init__(self, parent: Path, rng: random.Random | None = None) -> None:
        self.parent = parent
        self._rng = rng or random.Random()
        self._path: Path | None = None
        self.generation = 0
        self._previous_handlers: dict[int, object] = {}
        self._created_parents: dict[Path, list[Path]] = {}

    @property
    def path(self) -> Path:
        if self._path is None:
            raise WorkspaceError("workspace has not been initialised")
        return self._path

    @property
    def extract_root(self) -> Path:
        """Directory that mirrors logical paths of extracted archives."""
        return self.path / EXTRACT_DIRNAME

    def _make_extract_root(self) -> None:
        try:
            self.extract_root.mkdir(exist_ok=True)
        except OSError as e:
            raise WorkspaceError(f"could not create {self.extract_root}: {e}") from e

    def init(self) -> Path:
        """Create the scratch directory under a randomised unique name."""
        parent = self.parent.resolve()
        for _ in range(MAX_NAME_ATTEMPTS):
            candidate = parent / f"{WORKSPACE_PREFIX}{self._rng.randint(100000, 1099999)}"
            try:
                candidate.mkdir(parents=True)
            except FileExistsError:
                logger.debug("Scratch path already exists, retrying: %s", candidate)
                continue
            except OSError as e:
                raise WorkspaceError(f"could not create tmp folder {candidate}: {e}") from e
            self._path = candidate
            self._make_extract_root()
            return candidate
        raise WorkspaceError(f"could not find an unused tmp folder name under {parent}")

    def reset_for_new_root(self) -> None:
        """Clear the workspace contents before a new top-level root is processed."""
        for child in list(self.path.iterdir()):
            try:
                if child.is_dir() and not child.is_symlink():
                    shutil.rmtree(child)
                else:
                    child.unlink()
            except OSError as e:
                raise WorkspaceError(f"could not clear tmp folder entry {child}: {e}") from e
        self._make_extract_root()
        self._created_parents.clear()
        self.generation += 1
        logger.debug("Workspace generation %d: %s", self.generation, self.path)

    def extraction_target(self, logical_path: str) -> Path:
        """Create and return the directory that will hold an archive's contents."""
        target = self.extract_root / logical_path
        missing = [
            p for p in target.parents if p.is_relative_to(self.extract_root) and not p.exists()
        ]
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WorkspaceError(f"could not create extraction directory {target}: {e}") from e
        self._created_parents[target] = missing
        return target

    def stage(self, source: Path) -> Path:
        """Move a previously extracted archive to the fixed staging location."""
        staged = self.path / STAGING_FILENAME
        logger.info("moving %s to %s", source, staged)
        try:
            shutil.move(source, staged)
        except OSError as e:
            raise WorkspaceError(f"could not move file {source}: {e}") from e
        return staged

    def discard(self, staged: Path) -> None:
        try:
            staged.unlink()
        except OSError as e:
            raise WorkspaceError(f"could not delete {staged}: {e}") from e

    def remove_target(self, target: Path) -> None:
        """Delete a (partial) extraction directory and the parents made for it."""
        shutil.rmtree(target, ignore_errors=True)
        # parents() yields deepest first
        for parent in self._created_parents.pop(target, []):
            try:
                parent.rmdir()
            except OSError:
                break

    def dispose(self) -> None:
        """Remove the whole scratch directory."""
        if self._path is None:
            return
        shutil.rmtree(self._path, ignore_errors=True)
        if self._path.exists():
            logger.warning("Could not fully remove tmp folder: %s", self._path)
        self._path = None

    def __enter__(self) -> Self:
        self.init()
        self._install_signal_handlers()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        try:
            self.dispose()
        finally:
            self._restore_signal_handlers()

    def _install_signal_handlers(self) -> None:
        if threading.current_thread() is not threading.main_thread():
            return
        for signum in _CLEANUP_SIGNALS:
            self._previous_handlers[signum] = signal.signal(signum, _exit_on_signal)

    def _restore_signal_handlers(self) -> None:
        for signum, handler in self._previous_handlers.items():
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)
        self._previous_handlers.clear()


def _exit_on_signal(signum, frame) -> None:
    raise SystemExit(128 + signum)
