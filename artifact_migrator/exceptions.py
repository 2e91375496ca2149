"""
Exceptions raised by the migration engine.

Fatal errors (configuration, listing, indexing, empty source) abort a run
before or between transfers. TransferFailure is a per-item error that only
aborts a run in fail-fast mode. Conflicts are not exceptions: they are
recorded as skipped outcomes in the report.
"""

from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from .models.artifacts import ArtifactRef
    from .models.results import MigrationReport


class MigrationError(Exception):
    """Base exception class for artifact-migrator errors."""

    def __init__(self, message: str, code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        self.report: Optional["MigrationReport"] = None


class ConfigurationError(MigrationError):
    """Raised for bad URLs, unsupported kinds or missing settings, before any network call."""


class NotAuthenticatedError(ConfigurationError):
    """Raised when no credentials are stored for a destination host."""

    def __init__(self, host: str):
        super().__init__(
            f"Unauthorized: authentication required for {host}. Maybe you haven't logged in before.",
            details={"host": host},
        )
        self.host = host


class ListError(MigrationError):
    """Raised when the source registry cannot be enumerated."""


class ExistenceIndexError(MigrationError):
    """Raised when the destination existence scan fails. No partial index is ever returned."""


class EmptySourceError(MigrationError):
    """Raised when the source listing produced no artifacts at all."""


class TransferFailure(MigrationError):
    """A single artifact failed to transfer."""

    def __init__(self, ref: "ArtifactRef", reason: str, report: Optional["MigrationReport"] = None):
        super().__init__(
            f"failed to migrate {ref.source_path}: {reason}",
            details={"source_path": ref.source_path},
        )
        self.ref = ref
        self.reason = reason
        self.report = report


class MigrationCancelled(MigrationError):
    """Raised when the cancellation token was set between two transfers."""


__all__ = [
    "MigrationError",
    "ConfigurationError",
    "NotAuthenticatedError",
    "ListError",
    "ExistenceIndexError",
    "EmptySourceError",
    "TransferFailure",
    "MigrationCancelled",
]
