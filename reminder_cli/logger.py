"""Logging setup for the reminder CLI.

Call setup_logging once at startup, then use ``from loguru import logger``.
"""

import sys

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level:<8}</level> | "
    "<cyan>{name}</cyan> - "
    "<level>{message}</level>"
)


def setup_logging(level: str = "WARNING") -> None:
    """Route diagnostics to a colorized stderr sink at the given level."""
    logger.configure(
        handlers=[
            {
                "sink": sys.stderr,
                "level": level.upper(),
                "format": CONSOLE_FORMAT,
                "colorize": True,
            },
        ]
    )


__all__ = ["setup_logging", "logger"]
