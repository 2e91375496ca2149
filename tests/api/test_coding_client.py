"""Tests for the destination open API client."""

import json

import httpx
import pytest

from artifact_migrator.api import CodingClient, OpenApiError
from artifact_migrator.models.coding_api import DescribeTeamArtifactsData
from artifact_migrator.utils import parse_destination

from conftest import GENERIC_DST, OPEN_API_URL, envelope


@pytest.fixture
def destination():
    return parse_destination(GENERIC_DST, "generic")


class TestCodingClient:
    """Test CodingClient class."""

    def test_init_uses_basic_auth(self, credentials):
        """The session authenticates with the stored credentials."""
        with CodingClient(credentials) as client:
            assert isinstance(client.session.auth, httpx.BasicAuth)
            assert client.timeout is None

    def test_context_manager_closes_session(self, credentials):
        with CodingClient(credentials) as client:
            session = client.session
        assert session.is_closed

    def test_describe_team_artifacts_request_body(self, httpx_mock, coding_client, destination):
        """The request carries the action, paging and the project/repository rule."""
        route = httpx_mock.post(OPEN_API_URL).mock(
            return_value=httpx.Response(
                200,
                json=envelope(
                    {
                        "InstanceSet": [{"Package": "libs/a.jar", "PackageVersion": "latest"}],
                        "TotalCount": 1,
                    }
                ),
            )
        )

        data = coding_client.describe_team_artifacts(destination, page_number=2, page_size=50)

        payload = json.loads(route.calls.last.request.content)
        assert payload == {
            "Action": "DescribeTeamArtifacts",
            "PageNumber": 2,
            "PageSize": 50,
            "Rule": {"ProjectName": ["project"], "Repository": ["repo"]},
        }
        assert route.calls.last.request.headers["Authorization"].startswith("Basic ")
        assert isinstance(data, DescribeTeamArtifactsData)
        assert data.total_count == 1
        assert data.instance_set[0].package == "libs/a.jar"
        assert data.instance_set[0].package_version == "latest"

    def test_describe_repository_files(self, httpx_mock, coding_client):
        """Continuation-token listing of a maven repository."""
        destination = parse_destination("https://team-maven.pkg.coding.net/repository/project/Releases", "maven")
        route = httpx_mock.post(OPEN_API_URL).mock(
            return_value=httpx.Response(
                200,
                json=envelope({"InstanceSet": [{"Path": "com/x/a/1.0/a-1.0.jar"}], "ContinuationToken": "t2"}),
            )
        )

        data = coding_client.describe_repository_files(destination, continuation_token="t1", page_size=1000)

        payload = json.loads(route.calls.last.request.content)
        assert payload["Action"] == "DescribeArtifactRepositoryFileList"
        assert payload["Repository"] == "releases"
        assert payload["ContinuationToken"] == "t1"
        assert data.continuation_token == "t2"
        assert [f.path for f in data.instance_set] == ["com/x/a/1.0/a-1.0.jar"]

    def test_create_artifact_properties(self, httpx_mock, coding_client, destination):
        route = httpx_mock.post(OPEN_API_URL).mock(return_value=httpx.Response(200, json=envelope({})))

        coding_client.create_artifact_properties(destination, "libs/a.jar", "latest", {"origin": "nexus"})

        payload = json.loads(route.calls.last.request.content)
        assert payload["Action"] == "CreateArtifactProperties"
        assert payload["Package"] == "libs/a.jar"
        assert payload["PackageVersion"] == "latest"
        assert payload["PropertySet"] == [{"Name": "origin", "Value": "nexus"}]

    def test_envelope_error_raises_open_api_error(self, httpx_mock, coding_client, destination):
        """A query-level error is raised even though the HTTP status is 200."""
        httpx_mock.post(OPEN_API_URL).mock(
            return_value=httpx.Response(200, json=envelope(error=("ResourceNotFound", "repository not found")))
        )

        with pytest.raises(OpenApiError) as exc_info:
            coding_client.describe_team_artifacts(destination, page_number=1, page_size=1000)

        assert exc_info.value.code == "ResourceNotFound"
        assert exc_info.value.action == "DescribeTeamArtifacts"
        assert "repository not found" in str(exc_info.value)

    def test_http_error_status_raises(self, httpx_mock, coding_client, destination):
        httpx_mock.post(OPEN_API_URL).mock(return_value=httpx.Response(500, text="boom"))

        with pytest.raises(httpx.HTTPStatusError):
            coding_client.describe_team_artifacts(destination, page_number=1, page_size=1000)

    def test_undecodable_body_raises_value_error(self, httpx_mock, coding_client, destination):
        httpx_mock.post(OPEN_API_URL).mock(return_value=httpx.Response(200, text="<html>login</html>"))

        with pytest.raises(ValueError, match="failed to decode DescribeTeamArtifacts"):
            coding_client.describe_team_artifacts(destination, page_number=1, page_size=1000)

    def test_missing_data_decodes_to_defaults(self, httpx_mock, coding_client, destination):
        httpx_mock.post(OPEN_API_URL).mock(return_value=httpx.Response(200, json=envelope(None)))

        data = coding_client.describe_team_artifacts(destination, page_number=1, page_size=1000)

        assert data.instance_set == []
        assert data.total_count == 0

    def test_stream_upload(self, httpx_mock, coding_client):
        """Uploads are PUT requests carrying the streamed body."""
        route = httpx_mock.put(f"{GENERIC_DST}/libs/a.jar").mock(return_value=httpx.Response(201))

        upload_url = f"{GENERIC_DST}/libs/a.jar"
        with coding_client.stream_upload(upload_url, content=iter([b"ab", b"cd"]), content_length=4) as response:
            assert response.status_code == 201

        request = route.calls.last.request
        assert request.method == "PUT"
        assert request.headers["Content-Length"] == "4"
        assert "version" not in request.url.params

    def test_stream_upload_with_version(self, httpx_mock, coding_client):
        route = httpx_mock.put(f"{GENERIC_DST}/libs/a.jar").mock(return_value=httpx.Response(201))

        with coding_client.stream_upload(f"{GENERIC_DST}/libs/a.jar", content=iter([b"ab"]), version="1.0"):
            pass

        assert route.calls.last.request.url.params["version"] == "1.0"

    def test_stream_upload_does_not_follow_redirects(self, httpx_mock, coding_client):
        httpx_mock.put(f"{GENERIC_DST}/libs/a.jar").mock(
            return_value=httpx.Response(307, headers={"Location": f"{GENERIC_DST}/other/a.jar"})
        )
        other = httpx_mock.put(f"{GENERIC_DST}/other/a.jar").mock(return_value=httpx.Response(201))

        with coding_client.stream_upload(f"{GENERIC_DST}/libs/a.jar", content=iter([b"ab"])) as response:
            assert response.status_code == 307

        assert not other.called
