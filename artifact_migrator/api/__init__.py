"""
Registry API clients.

This package provides clients for the registries taking part in a migration:
- SourceClient for listing and downloading from source registries
- CodingClient for the destination open API and artifact uploads
"""

from .coding_client import CodingClient, OpenApiError
from .source_client import SourceClient

__all__ = ["CodingClient", "OpenApiError", "SourceClient"]
