"""Artifact reference models and the destination existence index."""

from enum import Enum
from typing import FrozenSet, Iterable, Iterator, List, Optional

from pydantic import ConfigDict, Field, field_validator

from .base import MigratorBaseModel


class SourceKind(str, Enum):
    """Kind of source registry, selects the lister implementation."""

    GENERIC = "generic"
    NEXUS = "nexus"
    JFROG = "jfrog"


class RepositoryType(str, Enum):
    """Type of the destination repository."""

    GENERIC = "generic"
    MAVEN = "maven"


class IndexDiscipline(str, Enum):
    """How existence is queried at the destination."""

    PACKAGE = "package"  # DescribeTeamArtifacts, numbered pages, "package:version" keys
    PATH = "path"  # DescribeArtifactRepositoryFileList, continuation tokens, file path keys


# Existence discipline used for each destination repository type
INDEX_DISCIPLINES = {
    RepositoryType.GENERIC: IndexDiscipline.PACKAGE,
    RepositoryType.MAVEN: IndexDiscipline.PATH,
}


class ArtifactRef(MigratorBaseModel):
    """
    One transferable unit produced by a source lister.

    Attributes:
        source_path: Repository-relative path of the artifact (no leading slash)
        display_name: Name used in reports
        version: Optional version the artifact is uploaded under on package-indexed destinations
        package_key: Optional "package:version" identity used by package-indexed destinations;
            listers set it to "{source_path}:{version}", the key the upload creates
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    source_path: str = Field(min_length=1)
    display_name: str
    version: Optional[str] = None
    package_key: Optional[str] = None

    @field_validator("source_path")
    @classmethod
    def strip_leading_slash(cls, v: str) -> str:
        """Store paths relative to the repository root."""
        stripped = v.lstrip("/")
        if not stripped:
            raise ValueError("source_path must not be empty")
        return stripped


# Ordered artifacts for one run, as produced by a lister
ArtifactSet = List[ArtifactRef]


class ExistenceIndex:
    """
    Read-only set of destination keys built from a full scan of the destination.

    Only membership tests are supported. The index is never built incrementally
    by callers: builders collect every page first and construct it once.
    """

    __slots__ = ("_keys",)

    def __init__(self, keys: Iterable[str] = ()) -> None:
        self._keys: FrozenSet[str] = frozenset(keys)

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __repr__(self) -> str:
        return f"ExistenceIndex({len(self._keys)} keys)"


__all__ = [
    "SourceKind",
    "RepositoryType",
    "IndexDiscipline",
    "INDEX_DISCIPLINES",
    "ArtifactRef",
    "ArtifactSet",
    "ExistenceIndex",
]
