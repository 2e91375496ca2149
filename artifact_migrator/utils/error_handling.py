"""
Error handling utilities for standardized error logging and handling.

The CLI funnels every fatal error of a migration run through these helpers
so that users get the same wording whatever component failed.
"""

import logging
import sys
import traceback
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

import httpx

from ..exceptions import (
    ConfigurationError,
    EmptySourceError,
    ExistenceIndexError,
    ListError,
    MigrationError,
    NotAuthenticatedError,
    TransferFailure,
)
from .constants import (
    EXIT_GENERAL_ERROR,
    HTTP_STATUS_FORBIDDEN,
    HTTP_STATUS_NOT_FOUND,
    HTTP_STATUS_UNAUTHORIZED,
)

# Type variable for generic function decorators
F = TypeVar("F", bound=Callable[..., Any])


def _status_code_of(error: httpx.HTTPError) -> Optional[int]:
    """Extract the HTTP status of an error, if it carries a response."""
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    for code in (HTTP_STATUS_UNAUTHORIZED, HTTP_STATUS_FORBIDDEN, HTTP_STATUS_NOT_FOUND):
        if str(code) in str(error):
            return code
    return None


def handle_http_error(error: httpx.HTTPError, operation: str, *, log_traceback: bool = True) -> None:
    """
    Handle HTTP errors with standardized logging.

    Args:
        error: The HTTP error to handle
        operation: Description of the operation that failed
        log_traceback: Whether to log the full traceback
    """
    status = _status_code_of(error)

    if status == HTTP_STATUS_FORBIDDEN:
        logging.error(
            "Authentication failed during %s: You don't have permission to access this resource. "
            "Please check the repository permissions of your account.",
            operation,
        )
    elif status == HTTP_STATUS_UNAUTHORIZED:
        logging.error(
            "Authentication failed during %s: Invalid credentials. Please log in again.",
            operation,
        )
    elif status == HTTP_STATUS_NOT_FOUND:
        logging.error("Resource not found during %s: %s", operation, error)
    elif isinstance(error, httpx.TimeoutException):
        logging.error("Request timed out during %s: %s", operation, error)
    elif isinstance(error, httpx.TransportError):
        logging.error("Connection error during %s: %s", operation, error)
    else:
        logging.error("HTTP error during %s: %s", operation, error)

    if log_traceback:
        logging.debug("Traceback: %s", traceback.format_exc())


def handle_migration_error(error: MigrationError, operation: str, *, log_traceback: bool = True) -> None:
    """
    Handle a migration abort with a message matching its kind.

    Args:
        error: The migration error to handle
        operation: Description of the operation that failed
        log_traceback: Whether to log the full traceback
    """
    if isinstance(error, NotAuthenticatedError):
        logging.error("%s", error)
    elif isinstance(error, ConfigurationError):
        logging.error("Invalid configuration for %s: %s", operation, error)
    elif isinstance(error, ListError):
        logging.error("Failed to list source artifacts during %s: %s", operation, error)
    elif isinstance(error, ExistenceIndexError):
        logging.error("Failed to find existing destination artifacts during %s: %s", operation, error)
    elif isinstance(error, EmptySourceError):
        logging.error("%s", error)
    elif isinstance(error, TransferFailure):
        logging.error("Aborted %s (fail-fast): %s", operation, error)
    else:
        logging.error("%s aborted: %s", operation.capitalize(), error)

    cause = error.__cause__
    if cause is not None:
        logging.error("  Caused by: %s", cause)

    if log_traceback:
        logging.debug("Traceback: %s", traceback.format_exc())


def handle_generic_error(error: Exception, operation: str, *, log_traceback: bool = True) -> None:
    """
    Handle generic errors with standardized logging.

    Args:
        error: The exception to handle
        operation: Description of the operation that failed
        log_traceback: Whether to log the full traceback
    """
    logging.error("Unexpected error during %s: %s", operation, error)

    if log_traceback:
        logging.error("Traceback: %s", traceback.format_exc())


def with_error_handling(
    operation: str, *, exit_on_error: bool = False, exit_code: int = EXIT_GENERAL_ERROR, reraise: bool = True
) -> Callable[[F], F]:
    """
    Decorator to wrap functions with consistent error handling.

    Args:
        operation: Description of the operation for logging
        exit_on_error: If True, call sys.exit on error
        exit_code: Exit code to use if exit_on_error is True
        reraise: If True, reraise the exception after logging (unless exiting)

    Returns:
        Decorator function

    Example:
        @with_error_handling("store credentials", exit_on_error=True)
        def login():
            ...
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except MigrationError as e:
                handle_migration_error(e, operation)
                if exit_on_error:
                    sys.exit(exit_code)
                if reraise:
                    raise
            except httpx.HTTPError as e:
                handle_http_error(e, operation)
                if exit_on_error:
                    sys.exit(exit_code)
                if reraise:
                    raise
            except Exception as e:
                handle_generic_error(e, operation)
                if exit_on_error:
                    sys.exit(exit_code)
                if reraise:
                    raise

        return wrapper  # type: ignore[return-value]

    return decorator


def log_and_exit(message: str, exit_code: int = EXIT_GENERAL_ERROR) -> None:
    """
    Log an error message and exit the program.

    Args:
        message: Error message to log
        exit_code: Exit code (default: 1)
    """
    logging.error(message)
    sys.exit(exit_code)


__all__ = [
    "handle_http_error",
    "handle_migration_error",
    "handle_generic_error",
    "with_error_handling",
    "log_and_exit",
]
