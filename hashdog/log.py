"""Logging utilities for hashdog."""

import logging
import sys

_LOGGER_NAME = "hashdog"


class _SeverityFormatter(logging.Formatter):
    """Prefix warnings and errors with ``[!]``, everything else with ``[-]``."""

    def format(self, record: logging.LogRecord) -> str:
        prefix = "[!]" if record.levelno >= logging.WARNING else "[-]"
        return f"{prefix} {super().format(record)}"


def configure_logging(*, verbose: bool = False, debug: bool = False) -> logging.Logger:
    """Configure the hashdog logger hierarchy for console output."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers so repeated invocations in one process do not duplicate output.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(_SeverityFormatter("%(message)s"))
    logger.addHandler(handler)
    return logger
