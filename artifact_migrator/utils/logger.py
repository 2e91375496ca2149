"""
Logging configuration for artifact-migrator.

Verbosity follows the ``-d`` counter of the CLI. httpx and httpcore log every
request at INFO level, so they are kept at WARNING unless the maximum
verbosity is requested.
"""

import logging
import textwrap
from typing import Optional

# Default width for log message wrapping
DEFAULT_LOG_WIDTH = 120

# Format shared by every handler installed here
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

# Third-party loggers that are silenced below maximum verbosity
HTTP_LOGGERS = ("httpx", "httpcore")


class WrappingFormatter(logging.Formatter):
    """
    Formatter that wraps long log lines at a fixed width.

    Migration reports log one line per artifact with full repository paths,
    which easily exceeds a terminal line.
    """

    def __init__(
        self, fmt: Optional[str] = None, datefmt: Optional[str] = None, width: int = DEFAULT_LOG_WIDTH
    ) -> None:
        """
        Initialize the wrapping formatter.

        Args:
            fmt: Format string for log messages
            datefmt: Date format string
            width: Maximum width of a formatted line
        """
        super().__init__(fmt, datefmt)
        self.width = width

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        if len(formatted) <= self.width:
            return formatted
        return "\n".join(
            textwrap.wrap(formatted, width=self.width, break_long_words=False, break_on_hyphens=False)
        )


def verbosity_to_level(verbosity: int) -> int:
    """Map the ``-d`` counter to a logging level."""
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def setup_logging(verbosity: int = 0, use_wrapping: bool = False) -> None:
    """
    Setup logging configuration with multi-level verbosity.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG, 3+=DEBUG with HTTP logs)
        use_wrapping: If True, use wrapping formatter for long messages

    Verbosity Levels:
        0 (default): WARNING - Migration summary, failures and the progress bar
        1 (-d):      INFO - Listing, indexing and filtering steps
        2 (-dd):     DEBUG - Per-artifact URLs and pagination details
        3+ (-ddd):   DEBUG - Maximum verbosity including HTTP request logs
    """
    level = verbosity_to_level(verbosity)

    if use_wrapping:
        handler = logging.StreamHandler()
        handler.setFormatter(WrappingFormatter(fmt=LOG_FORMAT, width=DEFAULT_LOG_WIDTH))

        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.addHandler(handler)
        root_logger.setLevel(level)
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT)

    http_level = logging.DEBUG if verbosity >= 3 else logging.WARNING
    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Args:
        name: Name for the logger (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


__all__ = [
    "WrappingFormatter",
    "setup_logging",
    "verbosity_to_level",
    "get_logger",
]
