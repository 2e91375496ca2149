"""
Central constants for the artifact-migrator package.

This module consolidates all constants used throughout the codebase
to eliminate magic numbers and strings.
"""

# ============================================================================
# Pagination
# ============================================================================

# Page size used for numbered pagination against the destination and generic sources
DEFAULT_PAGE_SIZE = 1000

# Version used for package keys when the source carries no version
DEFAULT_PACKAGE_VERSION = "latest"

# ============================================================================
# API and Network Constants
# ============================================================================

# Default per-call timeout (seconds). None blocks until the server responds.
DEFAULT_TIMEOUT = None

# Connection-level retries done by the transport. Requests are never retried.
DEFAULT_CONNECT_RETRIES = 0

# Chunk size used when piping a download into an upload
TRANSFER_CHUNK_SIZE = 65536

# Path of the destination open API, relative to the destination host
OPEN_API_PATH = "/open-api"

# Nexus asset search endpoint
NEXUS_ASSETS_PATH = "/service/rest/v1/search/assets"

# JFrog storage API endpoint prefix
JFROG_STORAGE_PATH = "/artifactory/api/storage"

# ============================================================================
# Open API Actions
# ============================================================================

ACTION_DESCRIBE_TEAM_ARTIFACTS = "DescribeTeamArtifacts"
ACTION_DESCRIBE_REPOSITORY_FILE_LIST = "DescribeArtifactRepositoryFileList"
ACTION_CREATE_ARTIFACT_PROPERTIES = "CreateArtifactProperties"

# ============================================================================
# HTTP Status Codes
# ============================================================================

HTTP_STATUS_BAD_REQUEST = 400
HTTP_STATUS_UNAUTHORIZED = 401
HTTP_STATUS_FORBIDDEN = 403
HTTP_STATUS_NOT_FOUND = 404
HTTP_STATUS_CONFLICT = 409

# URL schemes accepted for source and destination
REMOTE_URL_SCHEMES = ("http://", "https://")

# ============================================================================
# Exit Codes
# ============================================================================

EXIT_SUCCESS = 0
EXIT_GENERAL_ERROR = 1
EXIT_USER_INTERRUPT = 130  # User pressed Ctrl+C

# ============================================================================
# Default Paths
# ============================================================================

DEFAULT_CONFIG_PATH = "~/.config/artifact-migrator/config.toml"
DEFAULT_AUTH_PATH = "~/.config/artifact-migrator/auth.json"

# ============================================================================
# Logging and Display Constants
# ============================================================================

# Width for the migration progress bar
PROGRESS_BAR_WIDTH = 80

# Message recorded for skipped artifacts
CONFLICT_MESSAGE = "409 Conflict"

# Message recorded for transferred artifacts
SUCCEEDED_MESSAGE = "Succeeded"


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_PACKAGE_VERSION",
    "DEFAULT_TIMEOUT",
    "DEFAULT_CONNECT_RETRIES",
    "TRANSFER_CHUNK_SIZE",
    "OPEN_API_PATH",
    "NEXUS_ASSETS_PATH",
    "JFROG_STORAGE_PATH",
    "ACTION_DESCRIBE_TEAM_ARTIFACTS",
    "ACTION_DESCRIBE_REPOSITORY_FILE_LIST",
    "ACTION_CREATE_ARTIFACT_PROPERTIES",
    "HTTP_STATUS_BAD_REQUEST",
    "HTTP_STATUS_UNAUTHORIZED",
    "HTTP_STATUS_FORBIDDEN",
    "HTTP_STATUS_NOT_FOUND",
    "HTTP_STATUS_CONFLICT",
    "REMOTE_URL_SCHEMES",
    "EXIT_SUCCESS",
    "EXIT_GENERAL_ERROR",
    "EXIT_USER_INTERRUPT",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_AUTH_PATH",
    "PROGRESS_BAR_WIDTH",
    "CONFLICT_MESSAGE",
    "SUCCEEDED_MESSAGE",
]
