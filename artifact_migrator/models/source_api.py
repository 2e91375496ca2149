"""
Pydantic models for source registry listing responses.

Only the fields needed to derive an artifact path and package identity are
declared; everything else returned by the registries is kept as extra data.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SourceBaseModel(BaseModel):
    """Base model for source API responses (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


# ============================================================================
# Nexus
# ============================================================================


class NexusMaven2(SourceBaseModel):
    """Maven coordinates attached to a Nexus asset."""

    extension: Optional[str] = None
    group_id: Optional[str] = None
    artifact_id: Optional[str] = None
    version: Optional[str] = None


class NexusAsset(SourceBaseModel):
    """One asset returned by the Nexus search API."""

    path: str
    download_url: Optional[str] = None
    id: Optional[str] = None
    repository: Optional[str] = None
    format: Optional[str] = None
    content_type: Optional[str] = None
    maven2: Optional[NexusMaven2] = None


class NexusAssetPage(SourceBaseModel):
    """One page of the Nexus search API."""

    items: List[NexusAsset] = Field(default_factory=list)
    continuation_token: Optional[str] = None


# ============================================================================
# JFrog
# ============================================================================


class JfrogFile(SourceBaseModel):
    """One entry of a JFrog storage API deep listing."""

    uri: str
    size: Optional[int] = None
    last_modified: Optional[str] = None
    folder: bool = False
    sha1: Optional[str] = None

    @property
    def name(self) -> str:
        """File name without directories."""
        return self.uri.rstrip("/").rsplit("/", 1)[-1]


class JfrogFileList(SourceBaseModel):
    """JFrog storage API response for ``?list&deep=1``."""

    uri: Optional[str] = None
    created: Optional[str] = None
    files: List[JfrogFile] = Field(default_factory=list)


# ============================================================================
# Generic HTTP listing
# ============================================================================


class GenericListingItem(SourceBaseModel):
    """One file of a generic JSON listing."""

    path: str
    name: Optional[str] = None
    version: Optional[str] = None


class GenericListingPage(SourceBaseModel):
    """One numbered page of a generic JSON listing."""

    items: List[GenericListingItem] = Field(default_factory=list)
    total_count: int = Field(default=0, ge=0)


__all__ = [
    "SourceBaseModel",
    "NexusMaven2",
    "NexusAsset",
    "NexusAssetPage",
    "JfrogFile",
    "JfrogFileList",
    "GenericListingItem",
    "GenericListingPage",
]
