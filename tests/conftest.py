"""
Test fixtures and mock data for artifact-migrator tests.

This module provides common fixtures, mock registries and utilities
for testing the artifact-migrator package.
"""

import json
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest
import respx

from artifact_migrator.api import CodingClient, SourceClient
from artifact_migrator.models import ArtifactRef, Credentials, MigrationContext, TransferOutcome
from artifact_migrator.utils.credentials import CredentialStore

# ============================================================================
# Registry URLs
# ============================================================================

GENERIC_SRC = "https://files.example.com/repo"
NEXUS_SRC = "https://nexus.example.com/repository/raw-hosted"
JFROG_SRC = "https://jfrog.example.com/artifactory/libs-release"
GENERIC_DST = "https://team-generic.pkg.coding.net/project/repo"
MAVEN_DST = "https://team-maven.pkg.coding.net/repository/project/Releases"
OPEN_API_URL = "https://team.coding.net/open-api"
DST_HOST = "team-generic.pkg.coding.net"


# ============================================================================
# Helpers
# ============================================================================


def envelope(data: Optional[Dict[str, Any]] = None, error: Optional[Tuple[str, str]] = None) -> Dict[str, Any]:
    """Build an open API response envelope."""
    body: Dict[str, Any] = {"RequestId": "req-1", "Data": data}
    if error:
        body["Error"] = {"Code": error[0], "Message": error[1]}
        body["Data"] = None
    return {"Response": body}


def open_api_handler(handlers: Dict[str, Callable[[Dict[str, Any]], Dict[str, Any]]]):
    """
    Build a respx side effect dispatching open API calls on their Action.

    Each handler receives the decoded request body and returns the envelope to send.
    """

    def side_effect(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        return httpx.Response(200, json=handlers[payload["Action"]](payload))

    return side_effect


def team_artifacts_pages(artifacts: List[Tuple[str, str]]):
    """Handler serving DescribeTeamArtifacts pages out of a list of (package, version)."""

    def handler(payload: Dict[str, Any]) -> Dict[str, Any]:
        number, size = payload["PageNumber"], payload["PageSize"]
        page = artifacts[(number - 1) * size : number * size]
        return envelope(
            {
                "InstanceSet": [{"Package": package, "PackageVersion": version} for package, version in page],
                "TotalCount": len(artifacts),
                "PageNumber": number,
                "PageSize": size,
            }
        )

    return handler


def generic_listing(items: List[Dict[str, Any]]):
    """respx side effect serving a generic numbered listing."""

    def side_effect(request: httpx.Request) -> httpx.Response:
        number = int(request.url.params["pageNumber"])
        size = int(request.url.params["pageSize"])
        page = items[(number - 1) * size : number * size]
        return httpx.Response(200, json={"items": page, "totalCount": len(items)})

    return side_effect


class RecordingProgress:
    """Progress renderer recording every call."""

    def __init__(self) -> None:
        self.total: Optional[int] = None
        self.advanced: List[Tuple[str, str]] = []
        self.finished = 0

    def start(self, total: int) -> None:
        self.total = total

    def advance(self, ref: ArtifactRef, outcome: TransferOutcome) -> None:
        self.advanced.append((ref.source_path, outcome.status.value))

    def finish(self) -> None:
        self.finished += 1


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def httpx_mock():
    """Provide respx mock for HTTP mocking."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
def credentials():
    """Destination credentials."""
    return Credentials(username="coder", password="s3cret")


@pytest.fixture
def source_client():
    """Unauthenticated source client."""
    with SourceClient() as client:
        yield client


@pytest.fixture
def coding_client(credentials):
    """Destination client."""
    with CodingClient(credentials) as client:
        yield client


@pytest.fixture
def auth_file(tmp_path):
    """Path of an empty credential file."""
    return str(tmp_path / "auth.json")


@pytest.fixture
def credential_store(auth_file, credentials):
    """Credential store already logged in to the generic destination host."""
    store = CredentialStore(auth_file)
    store.add(DST_HOST, credentials)
    return store


@pytest.fixture
def progress():
    """Recording progress renderer."""
    return RecordingProgress()


@pytest.fixture
def make_context():
    """Factory for migration contexts against a generic source and destination."""

    def factory(**overrides: Any) -> MigrationContext:
        values: Dict[str, Any] = {"src": GENERIC_SRC, "dst": GENERIC_DST, "src_type": "generic"}
        values.update(overrides)
        return MigrationContext(**values)

    return factory


@pytest.fixture
def refs():
    """Three artifacts of a generic repository."""
    return [
        ArtifactRef(source_path="libs/a.jar", display_name="a.jar"),
        ArtifactRef(source_path="libs/b.jar", display_name="b.jar"),
        ArtifactRef(source_path="libs/c.jar", display_name="c.jar"),
    ]
