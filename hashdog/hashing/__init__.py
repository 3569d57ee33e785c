"""Digest computation and hash database output."""

from hashdog.hashing.digest import Algorithm, DigestCache, DigestError, compute_digest
from hashdog.hashing.sinks import (
    RDS_HEADER,
    HashSink,
    Md5SumSink,
    RdsSink,
    Sha1SumSink,
    SinkError,
    SinkSet,
    open_sinks,
)

__all__ = [
    "Algorithm",
    "DigestCache",
    "DigestError",
    "compute_digest",
    "RDS_HEADER",
    "HashSink",
    "Md5SumSink",
    "Sha1SumSink",
    "RdsSink",
    "SinkError",
    "SinkSet",
    "open_sinks",
]
