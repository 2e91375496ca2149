"""
Shared behaviour of source listers.

Every lister turns the responses of one registry into ``ArtifactRef`` items,
in arrival order. Failures of any kind while enumerating are reported as a
single ``ListError`` carrying the original cause.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

import httpx
from pydantic import ValidationError

from ..api.source_client import SourceClient
from ..exceptions import ListError
from ..utils.constants import DEFAULT_PAGE_SIZE


class BaseLister:
    """Base class for source listers bound to one source repository."""

    kind = "source"

    def __init__(self, client: SourceClient, src: str, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self.client = client
        self.src = src.rstrip("/")
        self.page_size = page_size

    @property
    def repository_root(self) -> str:
        """URL that repository-relative artifact paths are resolved against."""
        return self.src

    @contextmanager
    def _listing_errors(self) -> Iterator[None]:
        """Convert transport, status and decoding errors into ListError."""
        try:
            yield
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise ListError(
                f"failed to list {self.kind} repository {self.src}: HTTP {status}",
                details={"status_code": status},
            ) from e
        except httpx.HTTPError as e:
            raise ListError(f"failed to list {self.kind} repository {self.src}: {e}") from e
        except (ValidationError, ValueError) as e:
            logging.debug("Malformed listing from %s: %s", self.src, e)
            raise ListError(f"malformed listing from {self.kind} repository {self.src}") from e


__all__ = ["BaseLister"]
