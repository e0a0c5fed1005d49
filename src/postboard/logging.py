"""Logging setup for the postboard command line.

The library itself never logs; the CLI configures a Rich handler on the
``postboard`` logger once per process.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


LOGGER_NAME = "postboard"


def configure_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """Attach a Rich handler writing to stderr to the postboard logger.

    Calling this again only updates the level.

    Args:
        level: Logging level name or number.

    Returns:
        The configured ``postboard`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
