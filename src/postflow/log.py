"""Logging setup for the command line."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(verbose: bool = False, logger_name: str = "postflow") -> logging.Logger:
    """Attach a rich stderr handler to the package logger.

    WARNING and above by default; DEBUG with ``verbose``.  Calling it again
    only adjusts the level.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=verbose,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)
    return logger
