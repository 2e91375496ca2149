"""Context and configuration models for migration runs."""

from typing import Optional, Tuple
from urllib.parse import urlparse

from pydantic import ConfigDict, Field, field_validator, model_validator

from ..utils.constants import DEFAULT_CONNECT_RETRIES, DEFAULT_PAGE_SIZE, REMOTE_URL_SCHEMES
from .artifacts import INDEX_DISCIPLINES, IndexDiscipline, RepositoryType, SourceKind
from .base import MigratorBaseModel


class Credentials(MigratorBaseModel):
    """
    Username/password pair for basic authentication.

    The password is excluded from ``repr`` so it never ends up in logs.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    username: str
    password: str = Field(repr=False)

    def as_tuple(self) -> Tuple[str, str]:
        """Return the pair in the form httpx expects for ``auth``."""
        return self.username, self.password


class MigrationContext(MigratorBaseModel):
    """
    Settings for one migration run.

    Attributes:
        src: Source repository URL (e.g. https://nexus.example.com/repository/maven-releases)
        dst: Destination repository URL
        src_type: Kind of source registry
        artifact_type: Type of the destination repository
        prefix: Optional path prefix; only artifacts under it are migrated
        force: Skip the destination existence scan and transfer everything
        fail_fast: Abort the run on the first failed transfer
        debug: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG, 3+=DEBUG with HTTP logs)
        src_username: Optional source username
        src_password: Optional source password
        timeout: Per-call timeout in seconds, None to wait indefinitely
        connect_retries: Connection attempts retried by the transport
        page_size: Page size for numbered pagination
        report_file: Optional path to write the JSON report to
        property_name: Optional property attached to each migrated package version
        property_value: Value of the property
    """

    src: str
    dst: str
    src_type: SourceKind = SourceKind.NEXUS
    artifact_type: RepositoryType = RepositoryType.GENERIC
    prefix: Optional[str] = None
    force: bool = False
    fail_fast: bool = False
    debug: int = Field(default=0, ge=0)
    src_username: Optional[str] = None
    src_password: Optional[str] = Field(default=None, repr=False)
    timeout: Optional[float] = Field(default=None, gt=0)
    connect_retries: int = Field(default=DEFAULT_CONNECT_RETRIES, ge=0)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)
    report_file: Optional[str] = None
    property_name: Optional[str] = None
    property_value: Optional[str] = None

    @field_validator("src", "dst")
    @classmethod
    def validate_remote_url(cls, v: str) -> str:
        """Require an absolute http(s) URL with a host."""
        v = v.strip()
        if not v.startswith(REMOTE_URL_SCHEMES) or not urlparse(v).netloc:
            raise ValueError(f"Invalid URL: {v!r}. Expected an http:// or https:// URL")
        return v

    @field_validator("prefix")
    @classmethod
    def normalize_prefix(cls, v: Optional[str]) -> Optional[str]:
        """Prefixes are matched against repository-relative paths."""
        if v is None:
            return None
        v = v.strip().lstrip("/")
        return v or None

    @model_validator(mode="after")
    def validate_property(self) -> "MigrationContext":
        """A property needs both a name and a value."""
        if (self.property_name is None) != (self.property_value is None):
            raise ValueError("property_name and property_value must be provided together")
        return self

    @property
    def src_credentials(self) -> Optional[Credentials]:
        """Source credentials, when a username was configured."""
        if not self.src_username:
            return None
        return Credentials(username=self.src_username, password=self.src_password or "")

    @property
    def index_discipline(self) -> IndexDiscipline:
        """Existence discipline used for the destination repository type."""
        return INDEX_DISCIPLINES[self.artifact_type]

    @property
    def dst_host(self) -> str:
        """Destination host, the key under which credentials are stored."""
        return urlparse(self.dst).netloc


__all__ = ["Credentials", "MigrationContext"]
