"""Scanner module for archive-aware traversal."""

from .filesystem import list_directory, make_permissive
from .paths import escape_control_chars, logical_path, short_name
from .progress import Reporter, RunStats
from .traversal import InputPathError, TraversalEngine, root_for_input

__all__ = [
    "TraversalEngine",
    "InputPathError",
    "root_for_input",
    "list_directory",
    "make_permissive",
    "escape_control_chars",
    "logical_path",
    "short_name",
    "Reporter",
    "RunStats",
]
