"""Logging configuration for the Prometheus CLI."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "promcli"


def setup_logging(debug: bool = False, console: Optional[Console] = None) -> logging.Logger:
    """Send package log records to stderr through Rich.

    Warnings and errors are always shown; ``debug`` lowers the level to
    DEBUG. Calling this again replaces the previous handler.

    Args:
        debug: Whether to enable debug output
        console: Console to log to. Defaults to a stderr console.

    Returns:
        The package logger
    """
    level = logging.DEBUG if debug else logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=debug,
        show_path=debug,
        rich_tracebacks=debug,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(LOGGER_NAME)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    return logger
