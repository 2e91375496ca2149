"""
HTTP client for source registries.

The source client owns the connection pool used for listing a source
repository and for streaming artifact downloads out of it. Basic
authentication is applied when source credentials are configured.
"""

# Standard library imports
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

# Third-party imports
import httpx

# Local imports
from ..models.context import Credentials
from ..utils import create_session_with_retry
from ..utils.constants import DEFAULT_CONNECT_RETRIES


class SourceClient:
    """Client for listing and downloading from a source registry."""

    def __init__(
        self,
        credentials: Optional[Credentials] = None,
        timeout: Optional[float] = None,
        retries: int = DEFAULT_CONNECT_RETRIES,
    ) -> None:
        """Initialize the source client.

        Args:
            credentials: Optional basic-auth credentials for the source
            timeout: Per-call timeout in seconds, None to wait indefinitely
            retries: Connection attempts retried by the transport
        """
        self.credentials = credentials
        self.timeout = timeout
        self.session = create_session_with_retry(
            auth=credentials.as_tuple() if credentials else None, timeout=timeout, retries=retries
        )

    def close(self) -> None:
        """Close the session and release all connections."""
        self.session.close()
        logging.debug("SourceClient session closed and connections released")

    def __enter__(self) -> "SourceClient":
        return self

    def __exit__(self, exc_type: Optional[type], exc_val: Optional[BaseException], exc_tb: Optional[Any]) -> None:
        self.close()

    def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Fetch one JSON document from the source.

        Args:
            url: URL of the listing endpoint
            params: Optional query parameters

        Returns:
            Decoded JSON body

        Raises:
            httpx.HTTPStatusError: If the source answered with a 4xx/5xx status
            httpx.HTTPError: On transport errors
            ValueError: If the body is not JSON
        """
        logging.debug("GET %s params=%s", url, params)
        response = self.session.get(url, params=params)
        if not response.is_success:
            logging.debug("Source error for %s: %s - %s", url, response.status_code, response.text[:500])
        response.raise_for_status()
        return response.json()

    @contextmanager
    def stream_download(self, url: str) -> Iterator[httpx.Response]:
        """Open a streaming download; the body is closed when the block exits.

        Artifacts are requested without content encoding so that the streamed
        bytes are exactly the stored file.
        """
        logging.debug("Downloading %s", url)
        with self.session.stream("GET", url, headers={"Accept-Encoding": "identity"}) as response:
            yield response


__all__ = ["SourceClient"]
