"""
Session utilities for registry operations.

This module provides utilities for creating and configuring HTTP clients
with connection pooling, optional connect retries and basic authentication.
"""

import logging
from typing import Optional, Tuple

import httpx
from httpx import HTTPTransport

from .constants import DEFAULT_CONNECT_RETRIES


def create_session_with_retry(
    auth: Optional[Tuple[str, str]] = None,
    timeout: Optional[float] = None,
    retries: int = DEFAULT_CONNECT_RETRIES,
    max_connections: int = 10,
) -> httpx.Client:
    """
    Create an httpx client with connection pooling and optional connect retries.

    Args:
        auth: Optional (username, password) for basic authentication
        timeout: Per-call timeout in seconds; None blocks until the server responds
        retries: Number of connection attempts retried by the transport.
            Requests that reached the server are never retried.
        max_connections: Maximum number of connections in the pool

    Returns:
        Configured httpx.Client object

    Example:
        >>> client = create_session_with_retry(auth=("user", "secret"))
        >>> response = client.get("https://nexus.example.com/service/rest/v1/status")
    """
    limits = httpx.Limits(
        max_connections=max_connections,
        max_keepalive_connections=max_connections,
    )

    timeout_config = httpx.Timeout(timeout)

    # Try to enable HTTP/2 if available, but don't fail if not
    try:
        import importlib.util  # pylint: disable=import-outside-toplevel

        use_http2 = importlib.util.find_spec("h2") is not None
    except (ImportError, AttributeError):
        use_http2 = False

    if not use_http2:
        logging.debug("HTTP/2 support not available (h2 package not installed)")

    transport = HTTPTransport(limits=limits, retries=retries, http2=use_http2)

    return httpx.Client(
        transport=transport,
        timeout=timeout_config,
        follow_redirects=True,
        auth=auth,
    )


__all__ = ["create_session_with_retry"]
