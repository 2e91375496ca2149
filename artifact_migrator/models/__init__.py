"""
Pydantic models for artifact-migrator.

This package contains all Pydantic models used in the application:
- coding_api: Models for the destination open API
- source_api: Models for source registry listings
- base, artifacts, context, results: Domain models
"""

# Open API Models
from .coding_api import (
    OpenApiEnvelope,
    OpenApiRequest,
    DescribeTeamArtifactsRequest,
    DescribeTeamArtifactsData,
    DescribeRepositoryFileListRequest,
    DescribeRepositoryFileListData,
    CreateArtifactPropertiesRequest,
    CreateArtifactPropertiesData,
)

# Source API Models
from .source_api import NexusAssetPage, JfrogFileList, GenericListingPage

# Domain Models
from .base import MigratorBaseModel
from .artifacts import (
    ArtifactRef,
    ArtifactSet,
    ExistenceIndex,
    IndexDiscipline,
    RepositoryType,
    SourceKind,
)
from .context import Credentials, MigrationContext
from .results import (
    MigrationReport,
    MigrationResult,
    MigrationState,
    ReportEntry,
    TransferOutcome,
    TransferStatus,
)

__all__ = [
    # Open API Models
    "OpenApiEnvelope",
    "OpenApiRequest",
    "DescribeTeamArtifactsRequest",
    "DescribeTeamArtifactsData",
    "DescribeRepositoryFileListRequest",
    "DescribeRepositoryFileListData",
    "CreateArtifactPropertiesRequest",
    "CreateArtifactPropertiesData",
    # Source API Models
    "NexusAssetPage",
    "JfrogFileList",
    "GenericListingPage",
    # Domain Models
    "MigratorBaseModel",
    "ArtifactRef",
    "ArtifactSet",
    "ExistenceIndex",
    "IndexDiscipline",
    "RepositoryType",
    "SourceKind",
    "Credentials",
    "MigrationContext",
    "MigrationReport",
    "MigrationResult",
    "MigrationState",
    "ReportEntry",
    "TransferOutcome",
    "TransferStatus",
]
