"""
Logging utilities for consistent operation and report logging.

This module provides standardized logging helpers used by the migration
service and the report renderer.
"""

import logging
from typing import Iterable, Optional


def log_operation_start(operation: str, **details) -> None:
    """
    Log the start of an operation with standardized format.

    Args:
        operation: Description of the operation
        **details: Additional details to log as key=value pairs
    """
    if details:
        detail_str = ", ".join(f"{k}={v}" for k, v in details.items())
        logging.info("Starting %s (%s)", operation, detail_str)
    else:
        logging.info("Starting %s", operation)


def log_operation_complete(operation: str, **details) -> None:
    """
    Log the completion of an operation with standardized format.

    Args:
        operation: Description of the operation
        **details: Additional details to log as key=value pairs
    """
    if details:
        detail_str = ", ".join(f"{k}={v}" for k, v in details.items())
        logging.info("Completed %s (%s)", operation, detail_str)
    else:
        logging.info("Completed %s", operation)


def format_count_with_unit(count: int, unit: str, *, plural: Optional[str] = None) -> str:
    """
    Format a count with proper pluralization.

    Examples:
        >>> format_count_with_unit(1, "artifact")
        '1 artifact'
        >>> format_count_with_unit(3, "artifact")
        '3 artifacts'
        >>> format_count_with_unit(2, "entry", plural="entries")
        '2 entries'
    """
    if count == 1:
        return f"{count} {unit}"
    return f"{count} {plural or unit + 's'}"


def format_duration(seconds: float) -> str:
    """
    Format a wall-clock duration.

    Examples:
        >>> format_duration(4.2)
        '4.2s'
        >>> format_duration(3725)
        '1h 2m 5s'
    """
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, secs = divmod(int(round(seconds)), 60)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours}h {minutes}m {secs}s"
    return f"{minutes}m {secs}s"


def log_summary_separator(title: Optional[str] = None, width: int = 80, level: int = logging.INFO) -> None:
    """
    Log a visual separator line with optional title.

    Args:
        title: Optional title to display in separator
        width: Width of separator line
        level: Logging level to use
    """
    logging.log(level, "=" * width)
    if title:
        logging.log(level, title)
        logging.log(level, "=" * width)


def log_list_items(items: Iterable[str], prefix: str = "  - ", level: int = logging.INFO) -> None:
    """
    Log a list of items with consistent formatting.

    Args:
        items: Items to log
        prefix: Prefix for each item
        level: Logging level to use
    """
    for item in items:
        logging.log(level, "%s%s", prefix, item)


__all__ = [
    "log_operation_start",
    "log_operation_complete",
    "format_count_with_unit",
    "format_duration",
    "log_summary_separator",
    "log_list_items",
]
