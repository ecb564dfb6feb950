"""Logging configuration for taskman.

User-facing output goes through the rich Console; logging carries diagnostics
(saves, loads, rejected files) and is quiet unless --verbose is given.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "taskman"


def setup_logging(verbose: bool = False) -> None:
    """Attach a rich stderr handler to the taskman logger.

    Safe to call more than once: the handler installed by a previous call is
    replaced.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    for handler in list(logger.handlers):
        if getattr(handler, "_taskman", False):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler._taskman = True  # type: ignore[attr-defined]
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
