"""
Logging utility built on loguru.

Library code logs through the shared loguru ``logger``. The CLI calls
``configure_logging`` once so that diagnostics go to STDERR and never mix
with lint output on STDOUT.

Debug output is enabled with ``--debug`` or ``KANON_DEBUG=true``.
"""

import os
import sys

from loguru import logger as loguru_logger


def is_debug_enabled() -> bool:
    """Check if debug mode is enabled."""
    return os.environ.get("KANON_DEBUG", "").lower() == "true"


def configure_logging(debug: bool = False) -> None:
    """
    Route loguru output to STDERR at the requested verbosity.

    Args:
        debug: Log at DEBUG level instead of WARNING
    """
    level = "DEBUG" if debug or is_debug_enabled() else "WARNING"
    loguru_logger.remove()
    loguru_logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{line} - {message}",
    )


# Export loguru logger for direct use
logger = loguru_logger
