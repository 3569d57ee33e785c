"""Shared fixtures for hashdog tests."""

# pylint: disable=redefined-outer-name

import zipfile
from pathlib import Path

import pytest

from hashdog.config import RunConfig, SinkConfig, SinkKind
from hashdog.hashing import open_sinks
from hashdog.scanner import TraversalEngine
from hashdog.workspace import Workspace


class ZipArchiveService:
    """ArchiveService stand-in: .zip names and zip content are archives, unpacked with zipfile."""

    version = "7-Zip (zipfile stand-in)"

    def __init__(self, archive_type: str = "zip") -> None:
        self.archive_type = archive_type
        self.classified: list[Path] = []
        self.extracted: list[tuple[Path, Path]] = []

    def classify(self, path: Path) -> str | None:
        self.classified.append(path)
        if path.name.endswith(".zip") or zipfile.is_zipfile(path):
            return self.archive_type
        return None

    def extract(self, path: Path, target: Path) -> int:
        self.extracted.append((path, target))
        try:
            with zipfile.ZipFile(path) as zf:
                zf.extractall(target)
        except zipfile.BadZipFile:
            (target / "partial.bin").write_bytes(b"x")
            return 2
        return 0


def make_zip(path: Path, members: dict[str, bytes]) -> Path:
    with zipfile.ZipFile(path, "w") as zf:
        for name, data in members.items():
            zf.writestr(name, data)
    return path


@pytest.fixture
def archives() -> ZipArchiveService:
    return ZipArchiveService()


@pytest.fixture
def scratch(tmp_path: Path) -> Path:
    path = tmp_path / "scratch"
    path.mkdir()
    return path


@pytest.fixture
def run_engine(tmp_path: Path, scratch: Path, archives: ZipArchiveService):
    """Run the engine over inputs and return the written output files."""

    def _run(*inputs: Path, fullpath: bool = False, **options) -> dict[str, Path]:
        outputs = {
            "md5": tmp_path / "out.md5",
            "sha1": tmp_path / "out.sha1",
            "rds": tmp_path / "out.rds",
        }
        config = RunConfig(
            inputs=list(inputs),
            sinks=[
                SinkConfig(SinkKind.MD5SUM, outputs["md5"], fullpath),
                SinkConfig(SinkKind.SHA1SUM, outputs["sha1"], fullpath),
                SinkConfig(SinkKind.RDS, outputs["rds"], fullpath),
            ],
            tmp_root=scratch,
            **options,
        )
        with Workspace(scratch) as workspace, open_sinks(config.sinks) as sinks:
            engine = TraversalEngine(config, workspace, archives, sinks)
            for input_path in inputs:
                engine.run(input_path)
        return outputs

    return _run


def read_names(path: Path) -> list[str]:
    """Names from an md5sum/sha1sum style file."""
    return [line.split("  ", 1)[1] for line in path.read_text().splitlines()]
