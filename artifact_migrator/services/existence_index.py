"""
Destination existence index.

Before transferring anything, the destination repository is scanned once and
every artifact it already holds is collected into an ``ExistenceIndex``. The
query used depends on the repository type:

- package-indexed repositories (generic) are scanned with
  ``DescribeTeamArtifacts`` in numbered pages, keyed ``package:version``;
- path-indexed repositories (maven) are scanned with
  ``DescribeArtifactRepositoryFileList`` in continuation-token pages, keyed by
  the remote file path.

Any failure aborts the scan; a partial index is never returned, since it would
make the migration upload artifacts that already exist.
"""

import logging
from typing import List, Union

import httpx
from pydantic import ValidationError

from ..api.coding_client import CodingClient, OpenApiError
from ..exceptions import ExistenceIndexError
from ..models.artifacts import INDEX_DISCIPLINES, ArtifactRef, ExistenceIndex, IndexDiscipline, RepositoryType
from ..utils.constants import DEFAULT_PACKAGE_VERSION, DEFAULT_PAGE_SIZE
from ..utils.url import DestinationRef


def existence_key(ref: ArtifactRef, discipline: IndexDiscipline) -> str:
    """
    Derive the key under which an artifact would appear in the index.

    Example:
        >>> ref = ArtifactRef(source_path="tools/cli.tar.gz", display_name="cli.tar.gz")
        >>> existence_key(ref, IndexDiscipline.PACKAGE)
        'tools/cli.tar.gz:latest'
        >>> existence_key(ref, IndexDiscipline.PATH)
        'tools/cli.tar.gz'
    """
    if discipline == IndexDiscipline.PACKAGE:
        return ref.package_key or f"{ref.source_path}:{ref.version or DEFAULT_PACKAGE_VERSION}"
    return ref.source_path


def _scan_packages(client: CodingClient, destination: DestinationRef, page_size: int) -> List[str]:
    keys: List[str] = []
    page_number = 1
    while True:
        data = client.describe_team_artifacts(destination, page_number=page_number, page_size=page_size)
        keys.extend(f"{artifact.package}:{artifact.package_version}" for artifact in data.instance_set)
        logging.debug("DescribeTeamArtifacts page %d: %d entries", page_number, len(data.instance_set))
        if not data.instance_set or page_number * page_size > data.total_count:
            return keys
        page_number += 1


def _scan_paths(client: CodingClient, destination: DestinationRef, page_size: int) -> List[str]:
    keys: List[str] = []
    token = ""
    while True:
        data = client.describe_repository_files(destination, continuation_token=token, page_size=page_size)
        keys.extend(file.path.lstrip("/") for file in data.instance_set)
        logging.debug("DescribeArtifactRepositoryFileList page: %d files", len(data.instance_set))
        token = data.continuation_token or ""
        if not data.instance_set or not token:
            return keys


def build_existence_index(
    client: CodingClient,
    destination: DestinationRef,
    repository_type: Union[RepositoryType, IndexDiscipline],
    page_size: int = DEFAULT_PAGE_SIZE,
) -> ExistenceIndex:
    """
    Scan the destination repository and build its existence index.

    Args:
        client: Authenticated destination client
        destination: Open API endpoint, project and repository of the destination
        repository_type: Destination repository type, or the discipline to use directly
        page_size: Number of entries requested per page

    Returns:
        Index of every artifact present at the destination

    Raises:
        ExistenceIndexError: On a query-level error, a transport error or an
            undecodable response
    """
    if isinstance(repository_type, IndexDiscipline):
        discipline = repository_type
    else:
        discipline = INDEX_DISCIPLINES[RepositoryType(repository_type)]

    logging.info(
        "Scanning destination %s/%s for existing artifacts (%s index)",
        destination.project,
        destination.repository,
        discipline.value,
    )
    try:
        if discipline == IndexDiscipline.PACKAGE:
            keys = _scan_packages(client, destination, page_size)
        else:
            keys = _scan_paths(client, destination, page_size)
    except OpenApiError as e:
        raise ExistenceIndexError(
            f"failed to find artifacts: {e}", code=e.code, details={"action": e.action}
        ) from e
    except httpx.HTTPError as e:
        raise ExistenceIndexError(f"failed to find artifacts: {e}") from e
    except (ValidationError, ValueError) as e:
        raise ExistenceIndexError(f"failed to find artifacts: {e}") from e

    index = ExistenceIndex(keys)
    logging.info("Found %d existing artifacts at the destination", len(index))
    return index


__all__ = ["build_existence_index", "existence_key"]
