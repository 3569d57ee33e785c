"""File digest computation."""

import hashlib
import logging
import zlib
from enum import Enum
from pathlib import Path

from hashdog.errors import HashdogError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


class DigestError(HashdogError):
    """Raised when a digest cannot be produced for a file."""


class Algorithm(Enum):
    MD5 = "md5"
    SHA1 = "sha1"
    CRC32 = "crc32"

    @property
    def hex_length(self) -> int:
        return _HEX_LENGTHS[self]


_HEX_LENGTHS = {Algorithm.MD5: 32, Algorithm.SHA1: 40, Algorithm.CRC32: 8}


def compute_digest(path: Path, algorithm: Algorithm) -> str:
    """Stream a file once and return its lowercase hex digest."""
    try:
        with open(path, "rb") as f:
            if algorithm is Algorithm.CRC32:
                crc = 0
                while chunk := f.read(CHUNK_SIZE):
                    crc = zlib.crc32(chunk, crc)
                digest = f"{crc & 0xFFFFFFFF:08x}"
            else:
                hasher = hashlib.new(algorithm.value)
                while chunk := f.read(CHUNK_SIZE):
                    hasher.update(chunk)
                digest = hasher.hexdigest()
    except OSError as e:
        raise DigestError(f"failed to produce {algorithm.value} digest for {path}: {e}") from e

    if len(digest) != algorithm.hex_length:
        raise DigestError(f"failed to produce {algorithm.value} digest for {path}")

    logger.info("%s: %s", algorithm.value, digest)
    return digest


class DigestCache:
    """Digests of a single file, each computed at most once.

    One cache lives for one file's hashing step, shared by every sink
    that needs the same algorithm.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._digests: dict[Algorithm, str] = {}

    def get(self, algorithm: Algorithm) -> str:
        if algorithm not in self._digests:
            self._digests[algorithm] = compute_digest(self.path, algorithm)
        return self._digests[algorithm]

    @property
    def computed(self) -> set[Algorithm]:
        return set(self._digests)
