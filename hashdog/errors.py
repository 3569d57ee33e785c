"""Base exception for fatal hashdog errors."""


class HashdogError(Exception):
    """Raised for conditions that abort the whole run."""
