"""hashdog - Build hash databases from file trees, descending into archives."""

__version__ = "0.8.0"

from hashdog.config import RunConfig, SinkConfig, SinkKind
from hashdog.scanner import TraversalEngine
from hashdog.workspace import Workspace

__all__ = ["RunConfig", "SinkConfig", "SinkKind", "TraversalEngine", "Workspace"]
