"""Logical path derivation for files inside input trees and extracted archives."""

import os
from pathlib import Path

from hashdog.models import ProcessingRoot, RootKind

_SEPARATORS = ("/", "\\")


def escape_control_chars(text: str) -> str:
    """Replace every character below 0x20 with its ``\\xNN`` escape."""
    return "".join(f"\\x{ord(char):02x}" if ord(char) < 0x20 else char for char in text)


def logical_path(path: Path | str, root: ProcessingRoot) -> str:
    escaped = escape_control_chars(str(path))

    if root.kind is RootKind.SINGLE_FILE:
        logical = os.path.basename(escaped)
    elif root.kind is RootKind.DIRECTORY:
        logical = _strip_prefix(escaped, _prefix_of(root), ignore_case=True)
    else:
        logical = _strip_prefix(escaped, _prefix_of(root), ignore_case=False)

    if logical.startswith(_SEPARATORS):
        logical = logical[1:]
    return logical


def short_name(logical: str) -> str:
    """Final component of a logical path."""
    return os.path.basename(logical)


def _prefix_of(root: ProcessingRoot) -> str:
    prefix = root.strip_prefix if root.strip_prefix is not None else root.path
    return escape_control_chars(str(prefix))


def _strip_prefix(text: str, prefix: str, ignore_case: bool) -> str:
    head = text[: len(prefix)]
    if ignore_case:
        matches = head.lower() == prefix.lower()
    else:
        matches = head == prefix
    return text[len(prefix) :] if matches else text
