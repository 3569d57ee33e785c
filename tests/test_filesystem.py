"""Tests for filesystem utilities."""

import os
import stat
from pathlib import Path

from hashdog.scanner.filesystem import EntryType, list_directory, make_permissive


class TestListDirectory:
    """Tests for list_directory function."""

    def test_classifies_entries(self, tmp_path: Path):
        (tmp_path / "file.txt").write_text("hello")
        (tmp_path / "subdir").mkdir()
        (tmp_path / "link.txt").symlink_to(tmp_path / "file.txt")

        entries = {e.name: e for e in list_directory(tmp_path)}

        assert entries["file.txt"].entry_type is EntryType.FILE
        assert entries["file.txt"].size == 5
        assert entries["subdir"].entry_type is EntryType.DIRECTORY
        assert entries["link.txt"].entry_type is EntryType.SYMLINK

    def test_no_dot_entries(self, tmp_path: Path):
        (tmp_path / ".hidden").write_text("x")
        names = {e.name for e in list_directory(tmp_path)}
        assert names == {".hidden"}

    def test_fifo_is_other(self, tmp_path: Path):
        os.mkfifo(tmp_path / "pipe")
        entries = list_directory(tmp_path)
        assert entries[0].entry_type is EntryType.OTHER
        assert entries[0].error


class TestMakePermissive:
    """Tests for make_permissive function."""

    def test_sets_mode_recursively(self, tmp_path: Path):
        root = tmp_path / "extracted"
        nested = root / "nested"
        nested.mkdir(parents=True)
        secret = nested / "secret.txt"
        secret.write_text("x")
        secret.chmod(0o000)
        nested.chmod(0o100)

        make_permissive(root)

        assert stat.S_IMODE(nested.stat().st_mode) == 0o755
        assert stat.S_IMODE(secret.stat().st_mode) == 0o755
        assert secret.read_text() == "x"
