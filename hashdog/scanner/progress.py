"""Operator-facing output for a hashing run."""

import time
from dataclasses import dataclass, field


@dataclass
class RunStats:
    """Counters for one run."""

    files_processed: int = 0
    files_hashed: int = 0
    bytes_hashed: int = 0
    archives_extracted: int = 0
    archives_failed: int = 0
    archives_skipped: int = 0
    errors: int = 0
    start_time: float = field(default_factory=time.time)

    @property
    def elapsed_seconds(self) -> float:
        return time.time() - self.start_time


class Reporter:
    """Prints progress and recoverable conditions to the operator."""

    def file(self, logical_path: str) -> None:
        print(f"[+] {logical_path}")

    def info(self, message: str) -> None:
        print(f"[-] {message}")

    def error(self, message: str) -> None:
        print(f"[!] {message}")

    def report_start(self, path: str, is_directory: bool) -> None:
        if is_directory:
            print(f"[+] processing files recursively from: {path}")
        else:
            print(f"[+] processing file: {path}")

    def report_completion(self, stats: RunStats) -> None:
        print(f"[+] done, finished in: {_format_duration(stats.elapsed_seconds)}")
        print(
            f"[-] {stats.files_processed:,} files processed, "
            f"{stats.files_hashed:,} hashed ({stats.bytes_hashed:,} bytes), "
            f"{stats.archives_extracted:,} archives extracted, "
            f"{stats.archives_failed:,} failed, "
            f"{stats.archives_skipped:,} skipped, "
            f"{stats.errors:,} errors"
        )


def _format_duration(seconds: float) -> str:
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours} hours, {minutes} minutes and {secs} seconds"
