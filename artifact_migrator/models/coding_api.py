"""
Pydantic models for the destination CODING open API.

Every call is a POST carrying an ``Action`` discriminator and returns the
shared envelope ``{"Response": {"Error": ..., "Data": ..., "RequestId": ...}}``.
Each action has one request model and one data model; the envelope is decoded
once by ``CodingClient.execute``.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_pascal

from ..utils.constants import (
    ACTION_CREATE_ARTIFACT_PROPERTIES,
    ACTION_DESCRIBE_REPOSITORY_FILE_LIST,
    ACTION_DESCRIBE_TEAM_ARTIFACTS,
)

# ============================================================================
# Base Models
# ============================================================================


class OpenApiModel(BaseModel):
    """Base model for open API responses (PascalCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True, extra="allow")


class OpenApiRequest(BaseModel):
    """Base model for open API requests."""

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True, extra="forbid")

    action: str

    def to_payload(self) -> Dict[str, Any]:
        """Serialize the request to the JSON body expected by the API."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ============================================================================
# Envelope
# ============================================================================


class OpenApiErrorDetail(OpenApiModel):
    """Query-level error reported inside the envelope."""

    code: str = ""
    message: str = ""


class OpenApiResponseBody(OpenApiModel):
    """Content of the ``Response`` key."""

    error: Optional[OpenApiErrorDetail] = None
    data: Optional[Dict[str, Any]] = None
    request_id: Optional[str] = None


class OpenApiEnvelope(OpenApiModel):
    """Top-level envelope shared by all actions."""

    response: OpenApiResponseBody


# ============================================================================
# DescribeTeamArtifacts
# ============================================================================


class DescribeTeamArtifactsRule(BaseModel):
    """Filter rule for DescribeTeamArtifacts."""

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True, extra="forbid")

    project_name: List[str] = Field(default_factory=list)
    repository: List[str] = Field(default_factory=list)


class DescribeTeamArtifactsRequest(OpenApiRequest):
    """Numbered page of package versions in a team's repositories."""

    action: Literal["DescribeTeamArtifacts"] = ACTION_DESCRIBE_TEAM_ARTIFACTS
    page_number: int = Field(default=1, ge=1)
    page_size: int = Field(ge=1)
    rule: DescribeTeamArtifactsRule


class TeamArtifact(OpenApiModel):
    """One package version stored at the destination."""

    package: str
    package_version: str


class DescribeTeamArtifactsData(OpenApiModel):
    """Data of a DescribeTeamArtifacts page."""

    instance_set: List[TeamArtifact] = Field(default_factory=list)
    total_count: int = 0
    page_number: Optional[int] = None
    page_size: Optional[int] = None


# ============================================================================
# DescribeArtifactRepositoryFileList
# ============================================================================


class DescribeRepositoryFileListRequest(OpenApiRequest):
    """Continuation-token page of files stored in one repository."""

    action: Literal["DescribeArtifactRepositoryFileList"] = ACTION_DESCRIBE_REPOSITORY_FILE_LIST
    project: str
    repository: str
    page_size: int = Field(ge=1)
    continuation_token: str = ""


class RepositoryFile(OpenApiModel):
    """One file stored at the destination."""

    path: str


class DescribeRepositoryFileListData(OpenApiModel):
    """Data of a DescribeArtifactRepositoryFileList page."""

    instance_set: List[RepositoryFile] = Field(default_factory=list)
    continuation_token: Optional[str] = None


# ============================================================================
# CreateArtifactProperties
# ============================================================================


class ArtifactProperty(OpenApiModel):
    """Name/value property attached to a package version."""

    name: str
    value: str


class CreateArtifactPropertiesRequest(OpenApiRequest):
    """Attach properties to a package version."""

    action: Literal["CreateArtifactProperties"] = ACTION_CREATE_ARTIFACT_PROPERTIES
    project_name: str
    repository: str
    package: str
    package_version: str
    property_set: List[ArtifactProperty] = Field(min_length=1)


class CreateArtifactPropertiesData(OpenApiModel):
    """Data of a CreateArtifactProperties call (unused fields allowed)."""


__all__ = [
    "OpenApiModel",
    "OpenApiRequest",
    "OpenApiErrorDetail",
    "OpenApiResponseBody",
    "OpenApiEnvelope",
    "DescribeTeamArtifactsRule",
    "DescribeTeamArtifactsRequest",
    "TeamArtifact",
    "DescribeTeamArtifactsData",
    "DescribeRepositoryFileListRequest",
    "RepositoryFile",
    "DescribeRepositoryFileListData",
    "ArtifactProperty",
    "CreateArtifactPropertiesRequest",
    "CreateArtifactPropertiesData",
]
