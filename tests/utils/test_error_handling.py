"""Tests for error handling utilities."""

import logging

import httpx
import pytest

from artifact_migrator.exceptions import (
    ConfigurationError,
    EmptySourceError,
    ExistenceIndexError,
    ListError,
    NotAuthenticatedError,
    TransferFailure,
)
from artifact_migrator.models import ArtifactRef
from artifact_migrator.utils.error_handling import (
    handle_generic_error,
    handle_http_error,
    handle_migration_error,
    log_and_exit,
    with_error_handling,
)


def status_error(status: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://nexus.example.com/service/rest/v1/search/assets")
    response = httpx.Response(status, request=request)
    return httpx.HTTPStatusError(f"{status} error", request=request, response=response)


class TestHandleHttpError:
    """Test handle_http_error function."""

    @pytest.mark.parametrize(
        "status,expected",
        [
            (401, "Invalid credentials"),
            (403, "don't have permission"),
            (404, "Resource not found"),
            (500, "HTTP error during"),
        ],
    )
    def test_status_messages(self, caplog, status, expected):
        with caplog.at_level(logging.ERROR):
            handle_http_error(status_error(status), "listing", log_traceback=False)

        assert expected in caplog.text
        assert "listing" in caplog.text

    def test_timeout(self, caplog):
        with caplog.at_level(logging.ERROR):
            handle_http_error(httpx.ReadTimeout("read timed out"), "upload", log_traceback=False)

        assert "Request timed out during upload" in caplog.text

    def test_connection_error(self, caplog):
        with caplog.at_level(logging.ERROR):
            handle_http_error(httpx.ConnectError("refused"), "upload", log_traceback=False)

        assert "Connection error during upload" in caplog.text


class TestHandleMigrationError:
    """Test handle_migration_error function."""

    def test_not_authenticated(self, caplog):
        with caplog.at_level(logging.ERROR):
            handle_migration_error(NotAuthenticatedError("team.coding.net"), "migration", log_traceback=False)

        assert "haven't logged in" in caplog.text

    @pytest.mark.parametrize(
        "error,expected",
        [
            (ConfigurationError("bad dst"), "Invalid configuration for migration: bad dst"),
            (ListError("boom"), "Failed to list source artifacts"),
            (ExistenceIndexError("boom"), "Failed to find existing destination artifacts"),
            (EmptySourceError("artifacts not found in https://x"), "artifacts not found"),
            (
                TransferFailure(ArtifactRef(source_path="a.bin", display_name="a.bin"), "HTTP 500"),
                "Aborted migration (fail-fast): failed to migrate a.bin: HTTP 500",
            ),
        ],
    )
    def test_messages(self, caplog, error, expected):
        with caplog.at_level(logging.ERROR):
            handle_migration_error(error, "migration", log_traceback=False)

        assert expected in caplog.text

    def test_cause_logged(self, caplog):
        try:
            try:
                raise httpx.ConnectError("refused")
            except httpx.ConnectError as e:
                raise ListError("failed to list") from e
        except ListError as error:
            with caplog.at_level(logging.ERROR):
                handle_migration_error(error, "migration", log_traceback=False)

        assert "Caused by: refused" in caplog.text


class TestGenericHelpers:
    """Test the remaining helpers."""

    def test_handle_generic_error(self, caplog):
        with caplog.at_level(logging.ERROR):
            handle_generic_error(RuntimeError("unexpected"), "migration", log_traceback=False)

        assert "Unexpected error during migration: unexpected" in caplog.text

    def test_log_and_exit(self, caplog):
        with caplog.at_level(logging.ERROR), pytest.raises(SystemExit) as exc_info:
            log_and_exit("fatal", exit_code=3)

        assert exc_info.value.code == 3
        assert "fatal" in caplog.text

    def test_with_error_handling_reraises(self, caplog):
        @with_error_handling("login")
        def failing():
            raise ConfigurationError("no host")

        with caplog.at_level(logging.ERROR), pytest.raises(ConfigurationError):
            failing()

        assert "Invalid configuration for login" in caplog.text

    def test_with_error_handling_exits(self):
        @with_error_handling("login", exit_on_error=True)
        def failing():
            raise httpx.ConnectError("refused")

        with pytest.raises(SystemExit) as exc_info:
            failing()

        assert exc_info.value.code == 1

    def test_with_error_handling_passthrough(self):
        @with_error_handling("noop")
        def ok():
            return 42

        assert ok() == 42
