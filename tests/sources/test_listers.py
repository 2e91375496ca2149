"""Tests for source listers."""

import httpx
import pytest

from artifact_migrator.exceptions import ConfigurationError, ListError
from artifact_migrator.models import SourceKind
from artifact_migrator.protocols import SourceListerProtocol
from artifact_migrator.sources import GenericLister, JfrogLister, NexusLister, create_lister

from conftest import GENERIC_SRC, JFROG_SRC, NEXUS_SRC, generic_listing

NEXUS_ASSETS_URL = "https://nexus.example.com/service/rest/v1/search/assets"
JFROG_STORAGE_URL = "https://jfrog.example.com/artifactory/api/storage/libs-release"


class TestGenericLister:
    """Test numbered pagination of generic listings."""

    def test_three_requests_for_2500_items(self, httpx_mock, source_client):
        """2500 items with page size 1000 take exactly three requests."""
        items = [{"path": f"files/{i}.bin"} for i in range(2500)]
        route = httpx_mock.get(GENERIC_SRC).mock(side_effect=generic_listing(items))

        refs = GenericLister(source_client, GENERIC_SRC, page_size=1000).list_artifacts()

        assert route.call_count == 3
        assert len(refs) == 2500
        assert refs[0].source_path == "files/0.bin"
        assert refs[-1].source_path == "files/2499.bin"
        pages = [call.request.url.params["pageNumber"] for call in route.calls]
        assert pages == ["1", "2", "3"]

    def test_stops_on_empty_page(self, httpx_mock, source_client):
        """A server that over-reports totalCount still terminates."""
        route = httpx_mock.get(GENERIC_SRC).mock(
            side_effect=[
                httpx.Response(200, json={"items": [{"path": "a.bin"}], "totalCount": 100}),
                httpx.Response(200, json={"items": [], "totalCount": 100}),
            ]
        )

        refs = GenericLister(source_client, GENERIC_SRC, page_size=1).list_artifacts()

        assert route.call_count == 2
        assert [ref.source_path for ref in refs] == ["a.bin"]

    def test_package_key_from_version(self, httpx_mock, source_client):
        httpx_mock.get(GENERIC_SRC).mock(
            return_value=httpx.Response(
                200,
                json={
                    "items": [
                        {"path": "/tools/cli.tar.gz", "name": "cli", "version": "2.1"},
                        {"path": "tools/readme.txt"},
                    ],
                    "totalCount": 2,
                },
            )
        )

        refs = GenericLister(source_client, GENERIC_SRC).list_artifacts()

        assert refs[0].source_path == "tools/cli.tar.gz"
        assert refs[0].display_name == "cli"
        assert refs[0].version == "2.1"
        assert refs[0].package_key == "tools/cli.tar.gz:2.1"
        assert refs[1].display_name == "readme.txt"
        assert refs[1].version is None
        assert refs[1].package_key is None

    def test_repository_root_is_source_url(self, source_client):
        assert GenericLister(source_client, GENERIC_SRC + "/").repository_root == GENERIC_SRC


class TestNexusLister:
    """Test continuation-token pagination of the Nexus search API."""

    def test_five_requests_for_four_pages(self, httpx_mock, source_client):
        """Four non-empty pages and the terminating page take five requests."""
        pages = [
            httpx.Response(200, json={"items": [{"path": f"p{n}/a.bin"}], "continuationToken": f"t{n}"})
            for n in range(1, 5)
        ]
        pages.append(httpx.Response(200, json={"items": [], "continuationToken": None}))
        route = httpx_mock.get(NEXUS_ASSETS_URL).mock(side_effect=pages)

        refs = NexusLister(source_client, NEXUS_SRC).list_artifacts()

        assert route.call_count == 5
        assert [ref.source_path for ref in refs] == ["p1/a.bin", "p2/a.bin", "p3/a.bin", "p4/a.bin"]
        first = route.calls[0].request.url.params
        assert first["repository"] == "raw-hosted"
        assert "continuationToken" not in first
        assert route.calls[4].request.url.params["continuationToken"] == "t4"

    def test_stops_without_token(self, httpx_mock, source_client):
        route = httpx_mock.get(NEXUS_ASSETS_URL).mock(
            return_value=httpx.Response(200, json={"items": [{"path": "/a.bin"}], "continuationToken": None})
        )

        refs = NexusLister(source_client, NEXUS_SRC).list_artifacts()

        assert route.call_count == 1
        assert refs[0].source_path == "a.bin"

    def test_maven_assets_carry_package_key(self, httpx_mock, source_client):
        httpx_mock.get(NEXUS_ASSETS_URL).mock(
            return_value=httpx.Response(
                200,
                json={
                    "items": [
                        {
                            "path": "com/example/lib/1.0/lib-1.0.jar",
                            "maven2": {"groupId": "com.example", "artifactId": "lib", "version": "1.0"},
                        }
                    ]
                },
            )
        )

        refs = NexusLister(source_client, NEXUS_SRC).list_artifacts()

        assert refs[0].version == "1.0"
        assert refs[0].package_key == "com/example/lib/1.0/lib-1.0.jar:1.0"
        assert refs[0].display_name == "lib-1.0.jar"

    def test_repository_root(self, source_client):
        lister = NexusLister(source_client, "https://nexus.example.com/nexus/repository/maven-releases/")
        assert lister.repository_root == "https://nexus.example.com/nexus/repository/maven-releases"

    def test_missing_repository_is_list_error(self, httpx_mock, source_client):
        httpx_mock.get(NEXUS_ASSETS_URL).mock(return_value=httpx.Response(404, text="Repository not found"))

        with pytest.raises(ListError) as exc_info:
            NexusLister(source_client, NEXUS_SRC).list_artifacts()

        assert exc_info.value.details["status_code"] == 404
        assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)

    def test_malformed_page_is_list_error(self, httpx_mock, source_client):
        httpx_mock.get(NEXUS_ASSETS_URL).mock(return_value=httpx.Response(200, json={"items": [{"id": "x"}]}))

        with pytest.raises(ListError, match="malformed listing"):
            NexusLister(source_client, NEXUS_SRC).list_artifacts()

    def test_transport_error_is_list_error(self, httpx_mock, source_client):
        httpx_mock.get(NEXUS_ASSETS_URL).mock(side_effect=httpx.ConnectError("connection refused"))

        with pytest.raises(ListError, match="connection refused"):
            NexusLister(source_client, NEXUS_SRC).list_artifacts()


class TestJfrogLister:
    """Test the JFrog deep storage listing."""

    def test_single_request_drops_folders(self, httpx_mock, source_client):
        route = httpx_mock.get(JFROG_STORAGE_URL).mock(
            return_value=httpx.Response(
                200,
                json={
                    "uri": JFROG_STORAGE_URL,
                    "files": [
                        {"uri": "/org/app/1.0/app-1.0.jar", "size": 10, "folder": False},
                        {"uri": "/org/app", "folder": True},
                        {"uri": "/org/app/1.0/app-1.0.pom", "size": 2, "folder": False},
                    ],
                },
            )
        )

        refs = JfrogLister(source_client, JFROG_SRC).list_artifacts()

        assert route.call_count == 1
        assert "list" in route.calls.last.request.url.query.decode()
        assert route.calls.last.request.url.params["deep"] == "1"
        assert [ref.source_path for ref in refs] == ["org/app/1.0/app-1.0.jar", "org/app/1.0/app-1.0.pom"]
        assert refs[0].display_name == "app-1.0.jar"

    def test_repository_root(self, source_client):
        assert JfrogLister(source_client, JFROG_SRC).repository_root == JFROG_SRC

    def test_server_error_is_list_error(self, httpx_mock, source_client):
        httpx_mock.get(JFROG_STORAGE_URL).mock(return_value=httpx.Response(500))

        with pytest.raises(ListError, match="HTTP 500"):
            JfrogLister(source_client, JFROG_SRC).list_artifacts()


class TestCreateLister:
    """Test lister selection."""

    @pytest.mark.parametrize(
        "kind,src,expected",
        [
            (SourceKind.GENERIC, GENERIC_SRC, GenericLister),
            (SourceKind.NEXUS, NEXUS_SRC, NexusLister),
            ("jfrog", JFROG_SRC, JfrogLister),
        ],
    )
    def test_selected_by_kind(self, source_client, kind, src, expected):
        lister = create_lister(kind, source_client, src)
        assert isinstance(lister, expected)
        assert isinstance(lister, SourceListerProtocol)

    def test_unsupported_kind(self, source_client):
        with pytest.raises(ConfigurationError, match="unsupported source type"):
            create_lister("artifactory-cloud", source_client, JFROG_SRC)

    def test_source_url_layout_checked_without_network(self, source_client):
        with pytest.raises(ConfigurationError):
            create_lister(SourceKind.NEXUS, source_client, "https://nexus.example.com/raw-hosted")
