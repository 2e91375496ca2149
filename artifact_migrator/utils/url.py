"""
URL utilities for source and destination registries.

This module resolves artifact URLs against repository roots and derives the
API endpoints of each registry from the repository URL given by the user.
"""

import logging
from typing import List, NamedTuple, Tuple
from urllib.parse import urlparse

from ..exceptions import ConfigurationError
from .constants import OPEN_API_PATH, REMOTE_URL_SCHEMES


class DestinationRef(NamedTuple):
    """Open API endpoint, project and repository derived from a destination URL."""

    open_api_url: str
    project: str
    repository: str


def _path_segments(url: str) -> List[str]:
    """Split the path of a URL into non-empty segments."""
    return [segment for segment in urlparse(url).path.split("/") if segment]


def _origin(url: str) -> str:
    """Return scheme://host[:port] of a URL."""
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def is_remote_url(url: str) -> bool:
    """Check that a URL is an absolute http(s) URL with a host."""
    return url.startswith(REMOTE_URL_SCHEMES) and bool(urlparse(url).netloc)


def host_of(url: str) -> str:
    """
    Get the host identifier of a registry URL.

    Credentials are stored per host, including the port when one is given.

    Example:
        >>> host_of("https://team-generic.pkg.coding.net/project/repo")
        'team-generic.pkg.coding.net'
    """
    if not is_remote_url(url):
        raise ConfigurationError(f"Invalid registry URL: {url!r}")
    return urlparse(url).netloc


def resolve_artifact_url(root: str, relative_path: str) -> str:
    """
    Resolve a repository-relative artifact path against a repository root.

    Args:
        root: Repository root URL, with or without a trailing slash
        relative_path: Path of the artifact inside the repository

    Returns:
        Absolute artifact URL

    Example:
        >>> resolve_artifact_url("https://nexus.example.com/repository/raw/", "/libs/a.jar")
        'https://nexus.example.com/repository/raw/libs/a.jar'
    """
    return root.rstrip("/") + "/" + relative_path.strip("/")


def replace_host(registry_host: str, artifact_type: str) -> str:
    """
    Derive the open API host from a registry host.

    Registry hosts come in two forms, ``{team}-{type}.pkg.{domain}`` and
    ``{team}-{type}.{domain}``; both map to ``{team}.{domain}``.
    """
    host = registry_host.replace(".pkg.", ".")
    return host.replace(f"-{artifact_type}", "")


def parse_destination(dst: str, artifact_type: str) -> DestinationRef:
    """
    Parse a destination repository URL.

    Args:
        dst: Destination URL, ``/{project}/{repository}`` or for maven
            ``/repository/{project}/{repository}``
        artifact_type: Destination repository type (generic, maven)

    Returns:
        DestinationRef with the open API URL, project and lower-cased repository

    Raises:
        ConfigurationError: If the URL does not match the expected layout
    """
    if not is_remote_url(dst):
        raise ConfigurationError(f"failed to parse dst url {dst.rstrip('/')}")

    segments = _path_segments(dst)
    if artifact_type.lower() == "maven":
        if len(segments) != 3:
            raise ConfigurationError("dst url path format must match /repository/{project}/{repository}")
        segments = segments[1:]
    elif len(segments) != 2:
        raise ConfigurationError("dst url path format must match /{project}/{repository}")

    parsed = urlparse(dst)
    host = replace_host(parsed.netloc, artifact_type.lower())
    open_api_url = f"{parsed.scheme}://{host}{OPEN_API_PATH}"
    logging.debug("Resolved open API URL %s for destination %s", open_api_url, dst)

    return DestinationRef(open_api_url=open_api_url, project=segments[0], repository=segments[1].lower())


def split_nexus_url(src: str) -> Tuple[str, str]:
    """
    Split a Nexus repository URL into the server base URL and repository name.

    Example:
        >>> split_nexus_url("https://nexus.example.com/nexus/repository/maven-releases/")
        ('https://nexus.example.com/nexus', 'maven-releases')
    """
    segments = _path_segments(src)
    if "repository" not in segments:
        raise ConfigurationError("nexus src url path format must match [/{context}]/repository/{repository}")
    index = segments.index("repository")
    if index + 1 >= len(segments):
        raise ConfigurationError("nexus src url is missing the repository name")
    base = _origin(src) + "".join(f"/{segment}" for segment in segments[:index])
    return base, segments[index + 1]


def split_jfrog_url(src: str) -> Tuple[str, str]:
    """
    Split a JFrog repository URL into the server base URL and repository name.

    Example:
        >>> split_jfrog_url("https://jfrog.example.com/artifactory/libs-release")
        ('https://jfrog.example.com', 'libs-release')
    """
    segments = _path_segments(src)
    if len(segments) < 2 or segments[0] != "artifactory":
        raise ConfigurationError("jfrog src url path format must match /artifactory/{repository}")
    return _origin(src), segments[1]


__all__ = [
    "DestinationRef",
    "is_remote_url",
    "host_of",
    "resolve_artifact_url",
    "replace_host",
    "parse_destination",
    "split_nexus_url",
    "split_jfrog_url",
]
