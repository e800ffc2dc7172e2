"""
Log output for island runs.

Terrain generation, placement warnings and headless tick summaries all log
under the ``island_sim`` logger tree. The entry point calls
``setup_logging`` once; everything else only asks for a named logger.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Send log records at ``level`` and above to stdout.

    Replaces any handlers already on the root logger, so calling it again
    just changes the level.

    Returns:
        The ``island_sim`` package logger
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"unknown log level: {level!r}")

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    return logging.getLogger("island_sim")
