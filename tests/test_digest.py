"""Tests for digest computation."""

from pathlib import Path
from unittest.mock import patch

import pytest

from hashdog.hashing.digest import Algorithm, DigestCache, DigestError, compute_digest


class TestComputeDigest:
    """Tests for compute_digest function."""

    def test_md5(self, tmp_path: Path):
        path = tmp_path / "hello.txt"
        path.write_bytes(b"hello")
        assert compute_digest(path, Algorithm.MD5) == "5d41402abc4b2a76b9719d911017c592"

    def test_sha1(self, tmp_path: Path):
        path = tmp_path / "hello.txt"
        path.write_bytes(b"hello")
        assert compute_digest(path, Algorithm.SHA1) == "aaf4c61ddcc5e8a2dabede0f3b482cd9aea9434d"

    def test_crc32(self, tmp_path: Path):
        path = tmp_path / "hello.txt"
        path.write_bytes(b"hello")
        assert compute_digest(path, Algorithm.CRC32) == "3610a686"

    def test_crc32_is_zero_padded(self, tmp_path: Path):
        path = tmp_path / "empty"
        path.write_bytes(b"")
        assert compute_digest(path, Algorithm.CRC32) == "00000000"

    def test_hex_lengths(self, tmp_path: Path):
        path = tmp_path / "data.bin"
        path.write_bytes(bytes(range(256)) * 10)
        for algorithm in Algorithm:
            digest = compute_digest(path, algorithm)
            assert len(digest) == algorithm.hex_length
            assert digest == digest.lower()

    def test_truncated_digest_is_fatal(self, tmp_path: Path):
        path = tmp_path / "hello.txt"
        path.write_bytes(b"hello")
        with patch("hashdog.hashing.digest.hashlib.new") as new:
            new.return_value.hexdigest.return_value = ""
            with pytest.raises(DigestError, match="md5"):
                compute_digest(path, Algorithm.MD5)

    def test_missing_file_is_fatal(self, tmp_path: Path):
        with pytest.raises(DigestError):
            compute_digest(tmp_path / "missing", Algorithm.MD5)


class TestDigestCache:
    """Tests for DigestCache class."""

    def test_computes_each_algorithm_once(self, tmp_path: Path):
        path = tmp_path / "hello.txt"
        path.write_bytes(b"hello")
        cache = DigestCache(path)

        with patch("hashdog.hashing.digest.compute_digest", return_value="abc") as mock:
            assert cache.get(Algorithm.MD5) == "abc"
            assert cache.get(Algorithm.MD5) == "abc"
            cache.get(Algorithm.SHA1)

        assert mock.call_count == 2
        assert cache.computed == {Algorithm.MD5, Algorithm.SHA1}
