"""Logging setup for issue-git."""

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "issue_git"
DEBUG_ENV = "ISSUE_GIT_DEBUG"


def get_logger(namespace: str) -> logging.Logger:
    """Get the logger for a namespace such as ``git`` or ``config``."""
    return logging.getLogger(f"{ROOT_LOGGER}.{namespace}")


def debug_enabled(flag: bool = False) -> bool:
    """Debug is on when requested explicitly or through the environment."""
    return flag or os.getenv(DEBUG_ENV, "0").lower() not in {"", "0", "false", "off"}


def configure_logging(debug: bool = False, console: Optional[Console] = None) -> logging.Logger:
    """Attach a rich handler to the package logger.

    Safe to call more than once; the previous handler is replaced.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("[%(name)s] %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug_enabled(debug) else logging.WARNING)
    logger.propagate = False
    return logger
