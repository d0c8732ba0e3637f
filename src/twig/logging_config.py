"""Logging configuration for twig."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging for the application.

    Args:
        verbose: If True, show INFO level messages
        debug: If True, show DEBUG level messages with timestamps and source paths
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Logs go to stderr so they never mix with command output
    handler = RichHandler(
        console=Console(stderr=True),
        level=level,
        show_time=debug,
        show_path=debug,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("[%(name)s] %(message)s"))
    root_logger.addHandler(handler)
