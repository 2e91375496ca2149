"""Tests for the credential store."""

import json
import os
import stat

import pytest

from artifact_migrator.exceptions import ConfigurationError, NotAuthenticatedError
from artifact_migrator.models import Credentials
from artifact_migrator.utils.credentials import CredentialStore


class TestCredentialStore:
    """Test CredentialStore class."""

    def test_get_unknown_host(self, auth_file):
        with pytest.raises(NotAuthenticatedError) as exc_info:
            CredentialStore(auth_file).get("team-generic.pkg.coding.net")

        assert exc_info.value.host == "team-generic.pkg.coding.net"
        assert "Maybe you haven't logged in before" in str(exc_info.value)

    def test_add_and_get(self, auth_file, credentials):
        store = CredentialStore(auth_file)
        store.add("team-generic.pkg.coding.net", credentials)

        assert CredentialStore(auth_file).get("team-generic.pkg.coding.net") == credentials
        assert store.hosts() == ["team-generic.pkg.coding.net"]

    def test_file_layout_and_permissions(self, auth_file, credentials):
        CredentialStore(auth_file).add("team-generic.pkg.coding.net", credentials)

        data = json.loads(open(auth_file, encoding="utf-8").read())
        assert data == {"auths": {"team-generic.pkg.coding.net": {"username": "coder", "password": "s3cret"}}}
        if os.name == "posix":
            assert stat.S_IMODE(os.stat(auth_file).st_mode) == 0o600

    def test_add_replaces(self, auth_file, credentials):
        store = CredentialStore(auth_file)
        store.add("host", credentials)
        store.add("host", Credentials(username="other", password="pw"))

        assert store.get("host").username == "other"

    def test_remove(self, auth_file, credentials):
        store = CredentialStore(auth_file)
        store.add("host", credentials)

        store.remove("host")

        assert store.hosts() == []

    def test_remove_unknown_host(self, auth_file):
        with pytest.raises(NotAuthenticatedError):
            CredentialStore(auth_file).remove("host")

    def test_corrupt_file(self, auth_file):
        with open(auth_file, "w", encoding="utf-8") as f:
            f.write("{not json")

        with pytest.raises(ConfigurationError, match="Invalid credential file"):
            CredentialStore(auth_file).get("host")

    def test_password_not_in_repr(self, credentials):
        assert "s3cret" not in repr(credentials)
