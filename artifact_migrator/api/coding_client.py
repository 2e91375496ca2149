"""
Client for the destination CODING artifact registry.

Two surfaces are used:
    - the open API, a single POST endpoint whose JSON body carries an
      ``Action`` discriminator and whose response is always wrapped in the
      ``{"Response": {"Error": ..., "Data": ...}}`` envelope;
    - the registry itself, where artifacts are uploaded with ``PUT``.

Both are authenticated with the basic-auth credentials stored for the
destination host.
"""

# Standard library imports
import json
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, Optional, Type, TypeVar

# Third-party imports
import httpx
from pydantic import BaseModel, ValidationError

# Local imports
from ..models.coding_api import (
    ArtifactProperty,
    CreateArtifactPropertiesData,
    CreateArtifactPropertiesRequest,
    DescribeRepositoryFileListData,
    DescribeRepositoryFileListRequest,
    DescribeTeamArtifactsData,
    DescribeTeamArtifactsRequest,
    DescribeTeamArtifactsRule,
    OpenApiEnvelope,
    OpenApiRequest,
)
from ..models.context import Credentials
from ..utils import DestinationRef, create_session_with_retry
from ..utils.constants import DEFAULT_CONNECT_RETRIES

T = TypeVar("T", bound=BaseModel)

# Headers never written to logs
SENSITIVE_HEADERS = ("authorization", "cookie")


class OpenApiError(Exception):
    """Query-level error reported in the envelope of an open API response."""

    def __init__(self, code: str, message: str, action: Optional[str] = None) -> None:
        detail = f"{code}, {message}" if message else code
        super().__init__(f"{action or 'open api'} failed: {detail}")
        self.code = code
        self.message = message
        self.action = action


class CodingClient:
    """
    A client for the destination registry and its open API.

    Every open API action goes through ``execute``, which posts the typed
    request, decodes the shared envelope once and returns the typed data
    model, or raises ``OpenApiError`` when the envelope carries an error.
    """

    def __init__(
        self,
        credentials: Credentials,
        timeout: Optional[float] = None,
        retries: int = DEFAULT_CONNECT_RETRIES,
    ) -> None:
        """Initialize the destination client.

        Args:
            credentials: Basic-auth credentials stored for the destination host
            timeout: Per-call timeout in seconds, None to wait indefinitely
            retries: Connection attempts retried by the transport
        """
        self.credentials = credentials
        self.timeout = timeout
        self.session = create_session_with_retry(auth=credentials.as_tuple(), timeout=timeout, retries=retries)

    def close(self) -> None:
        """Close the session and release all connections."""
        self.session.close()
        logging.debug("CodingClient session closed and connections released")

    def __enter__(self) -> "CodingClient":
        return self

    def __exit__(self, exc_type: Optional[type], exc_val: Optional[BaseException], exc_tb: Optional[Any]) -> None:
        self.close()

    # ============================================================================
    # Response checking
    # ============================================================================

    def _log_error_response(self, response: httpx.Response, operation: str) -> None:
        """Log details of a failed call with sensitive headers redacted."""
        logging.error("Server error during %s", operation)
        if response.request is not None:
            safe_headers = dict(response.request.headers)
            for key in SENSITIVE_HEADERS:
                if key in safe_headers:
                    safe_headers[key] = "[REDACTED]"
            logging.error("  Request: %s %s", response.request.method, response.url)
            logging.error("  Request Headers: %s", safe_headers)
        logging.error("  Status Code: %s", response.status_code)
        body = response.text
        if len(body) > 500:
            logging.error("  Response Body (truncated): %s...", body[:500])
        else:
            logging.error("  Response Body: %s", body)

    def _check_response(self, response: httpx.Response, operation: str = "request") -> None:
        """Raise httpx.HTTPStatusError for 4xx/5xx responses."""
        if response.is_success:
            return
        if response.status_code >= 500:
            self._log_error_response(response, operation)
        else:
            logging.debug("Client error during %s: %s - %s", operation, response.status_code, response.text)
        response.raise_for_status()

    # ============================================================================
    # Open API
    # ============================================================================

    def execute(self, url: str, request: OpenApiRequest, data_model: Type[T]) -> T:
        """
        Execute one open API action.

        Args:
            url: Open API endpoint
            request: Typed request; its ``action`` selects the operation
            data_model: Model used to decode ``Response.Data``

        Returns:
            Decoded data model

        Raises:
            OpenApiError: If the envelope carries an error
            httpx.HTTPError: On transport errors and 4xx/5xx responses
            ValueError: If the body is not a valid envelope
        """
        logging.debug("Open API %s -> %s", request.action, url)
        response = self.session.post(url, json=request.to_payload())
        self._check_response(response, f"open api {request.action}")

        try:
            envelope = OpenApiEnvelope.model_validate_json(response.content)
        except ValidationError as e:
            logging.debug("Undecodable %s response body: %s", request.action, response.text[:500])
            raise ValueError(f"failed to decode {request.action} response: {e}") from e

        body = envelope.response
        if body.error is not None:
            raise OpenApiError(body.error.code, body.error.message, action=request.action)

        try:
            return data_model.model_validate(body.data or {})
        except ValidationError as e:
            logging.debug("Unexpected %s data: %s", request.action, json.dumps(body.data)[:500])
            raise ValueError(f"failed to decode {request.action} data: {e}") from e

    def describe_team_artifacts(
        self, destination: DestinationRef, page_number: int, page_size: int
    ) -> DescribeTeamArtifactsData:
        """Fetch one numbered page of package versions of the destination repository."""
        request = DescribeTeamArtifactsRequest(
            page_number=page_number,
            page_size=page_size,
            rule=DescribeTeamArtifactsRule(project_name=[destination.project], repository=[destination.repository]),
        )
        return self.execute(destination.open_api_url, request, DescribeTeamArtifactsData)

    def describe_repository_files(
        self, destination: DestinationRef, continuation_token: str, page_size: int
    ) -> DescribeRepositoryFileListData:
        """Fetch one continuation-token page of files of the destination repository."""
        request = DescribeRepositoryFileListRequest(
            project=destination.project,
            repository=destination.repository,
            page_size=page_size,
            continuation_token=continuation_token,
        )
        return self.execute(destination.open_api_url, request, DescribeRepositoryFileListData)

    def create_artifact_properties(
        self, destination: DestinationRef, package: str, version: str, properties: Dict[str, str]
    ) -> CreateArtifactPropertiesData:
        """Attach properties to a package version of the destination repository."""
        request = CreateArtifactPropertiesRequest(
            project_name=destination.project,
            repository=destination.repository,
            package=package,
            package_version=version,
            property_set=[ArtifactProperty(name=name, value=value) for name, value in properties.items()],
        )
        return self.execute(destination.open_api_url, request, CreateArtifactPropertiesData)

    # ============================================================================
    # Registry uploads
    # ============================================================================

    @contextmanager
    def stream_upload(
        self,
        url: str,
        content: Iterable[bytes],
        content_length: Optional[int] = None,
        version: Optional[str] = None,
    ) -> Iterator[httpx.Response]:
        """
        Upload a body with PUT, streaming it from an iterable of chunks.

        The response is closed when the block exits. Redirects are not
        followed: a streamed body can only be sent once.

        Args:
            url: Upload URL in the destination repository
            content: Body chunks, typically a download iterator
            content_length: Size of the body when known, otherwise chunked encoding is used
            version: Version the artifact is stored under, sent as the ``version`` query parameter
        """
        headers = {"Content-Type": "application/octet-stream"}
        if content_length is not None:
            headers["Content-Length"] = str(content_length)
        params = {"version": version} if version else None
        logging.debug("Uploading to %s (version %s)", url, version or "latest")
        with self.session.stream(
            "PUT", url, content=content, headers=headers, params=params, follow_redirects=False
        ) as response:
            yield response


__all__ = ["CodingClient", "OpenApiError"]
