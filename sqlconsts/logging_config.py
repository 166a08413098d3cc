"""Logging configuration for sqlconsts.

Modules obtain their logger with ``get_logger(__name__)``. The CLI calls
``setup_logging`` once to route records to a rich stderr console.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "sqlconsts"

_installed_handler: logging.Handler | None = None


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__).

    Returns:
        logging.Logger: Logger instance.
    """
    return logging.getLogger(name)


def setup_logging(level: str = "WARNING", console: Console | None = None) -> None:
    """Attach a rich handler to the package logger.

    Only the ``sqlconsts`` logger is touched so embedding applications keep
    their own root configuration. Calling this again replaces the handler
    installed by the previous call.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        console: Console to write to. Defaults to a stderr console so that
            generated code on stdout stays clean.
    """
    global _installed_handler

    log_level = getattr(logging, level.upper(), logging.WARNING)
    package_logger = logging.getLogger(PACKAGE_LOGGER)

    if _installed_handler is not None:
        package_logger.removeHandler(_installed_handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=level.upper() == "DEBUG",
        markup=False,
        rich_tracebacks=True,
    )
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    package_logger.setLevel(log_level)
    package_logger.addHandler(handler)
    _installed_handler = handler
