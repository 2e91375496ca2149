"""
Artifact Migrator - migrate artifacts into CODING artifact repositories.

This package lists artifacts in a source registry (Nexus, JFrog or a generic
HTTP host), skips the ones already present at the destination and streams the
rest into the destination repository.
"""

from ._version import __version__
from .api import CodingClient, OpenApiError, SourceClient
from .exceptions import (
    ConfigurationError,
    EmptySourceError,
    ExistenceIndexError,
    ListError,
    MigrationCancelled,
    MigrationError,
    NotAuthenticatedError,
    TransferFailure,
)
from .models import ArtifactRef, MigrationContext, MigrationReport, MigrationResult
from .services import MigrationService

__all__ = [
    "__version__",
    "CodingClient",
    "OpenApiError",
    "SourceClient",
    "ConfigurationError",
    "EmptySourceError",
    "ExistenceIndexError",
    "ListError",
    "MigrationCancelled",
    "MigrationError",
    "NotAuthenticatedError",
    "TransferFailure",
    "ArtifactRef",
    "MigrationContext",
    "MigrationReport",
    "MigrationResult",
    "MigrationService",
]
