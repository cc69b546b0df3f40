"""Logging setup for the colortty command line."""

import logging

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "colortty"


def configure_logging(verbose: bool = False, console: Console = None) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    Args:
        verbose: Log debug messages
        console: Console to log to; defaults to a stderr console
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if logger.handlers:
        return logger

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=verbose,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
