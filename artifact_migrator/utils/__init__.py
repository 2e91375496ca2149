"""
Utility modules for artifact migration.
"""

from .logger import setup_logging, WrappingFormatter, get_logger
from .session import create_session_with_retry
from .url import (
    DestinationRef,
    host_of,
    parse_destination,
    resolve_artifact_url,
    split_jfrog_url,
    split_nexus_url,
)

from . import constants
from . import config_manager
from . import error_handling
from . import logging_utils

__all__ = [
    "setup_logging",
    "WrappingFormatter",
    "get_logger",
    "create_session_with_retry",
    "DestinationRef",
    "host_of",
    "parse_destination",
    "resolve_artifact_url",
    "split_jfrog_url",
    "split_nexus_url",
    "constants",
    "config_manager",
    "error_handling",
    "logging_utils",
]
