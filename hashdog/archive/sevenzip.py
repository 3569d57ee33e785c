"""7-Zip wrapper for archive classification and extraction."""

import logging
import re
import shlex
import subprocess
from pathlib import Path

from hashdog.errors import HashdogError

logger = logging.getLogger(__name__)

VERSION_PATTERN = re.compile(r"^7-Zip\s.*")
TYPE_PATTERN = re.compile(r"^Type\s=\s(.*)")

# overwrite all, empty password, assume yes: the tool must never prompt
EXTRACT_ARGS = ["-aoa", "-p", "-y"]


class ArchiveToolNotFoundError(HashdogError):
    """Raised when the archive tool cannot be run or does not identify itself."""


def parse_version(output: str) -> str | None:
    """Return the first 7-Zip banner line of the tool's output."""
    for line in output.splitlines():
        line = line.rstrip()
        if VERSION_PATTERN.match(line):
            return line
    return None


def parse_archive_type(output: str) -> str | None:
    """Extract the archive type from ``7z l`` output.

    Every ``Type = ...`` line contributes, concatenated in order, so two
    indicator lines yield one joined label. Skip-list matching is done
    against this exact string.
    """
    archive_type = ""
    for line in output.splitlines():
        match = TYPE_PATTERN.match(line.rstrip("\r\n"))
        if match:
            archive_type += match.group(1)
    return archive_type or None


class SevenZipRunner:
    """Wrapper for 7-Zip command execution."""

    def __init__(self, archive_bin: str = "7z") -> None:
        self.command = shlex.split(archive_bin)
        if not self.command:
            raise ArchiveToolNotFoundError("no archive binary given")
        self.version = self._check_version()

    def _check_version(self) -> str:
        result = self.run([])
        version = parse_version(result.stdout)
        if not version:
            raise ArchiveToolNotFoundError("could not find version information for 7-Zip")
        return version

    def run(self, args: list[str]) -> subprocess.CompletedProcess:
        cmd = self.command + args
        logger.debug("7-Zip cmd: %s", shlex.join(cmd))
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                stdin=subprocess.DEVNULL,
                text=True,
                errors="surrogateescape",
                check=False,
            )
        except OSError as e:
            raise ArchiveToolNotFoundError(
                f"could not run archive binary '{shlex.join(self.command)}': {e}"
            ) from e
        for line in result.stdout.splitlines():
            logger.debug(line)
        for line in result.stderr.splitlines():
            logger.debug(line)
        return result


class SevenZipArchiveService:
    """ArchiveService backed by the 7-Zip command line tool."""

    def __init__(self, runner: SevenZipRunner) -> None:
        self.runner = runner

    @property
    def version(self) -> str:
        return self.runner.version

    def classify(self, path: Path) -> str | None:
        result = self.runner.run(["l", "--", str(path)])
        return parse_archive_type(result.stdout)

    def extract(self, path: Path, target: Path) -> int:
        cmd = ["x", f"-o{target}", *EXTRACT_ARGS, "--", str(path)]
        logger.info("executing command: %s", shlex.join(self.runner.command + cmd))
        result = self.runner.run(cmd)
        return result.returncode
