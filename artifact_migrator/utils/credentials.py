"""
Stored destination credentials.

Credentials are kept per destination host in a JSON file readable only by
the current user:

    {"auths": {"team-generic.pkg.coding.net": {"username": "...", "password": "..."}}}
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import Field, ValidationError

from ..exceptions import ConfigurationError, NotAuthenticatedError
from ..models.base import MigratorBaseModel
from ..models.context import Credentials
from .constants import DEFAULT_AUTH_PATH


class AuthFile(MigratorBaseModel):
    """On-disk layout of the credential file."""

    auths: Dict[str, Credentials] = Field(default_factory=dict)


class CredentialStore:
    """Read and update credentials stored for destination hosts."""

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = Path(path or DEFAULT_AUTH_PATH).expanduser()

    def _read(self) -> AuthFile:
        if not self.path.exists():
            return AuthFile()
        try:
            return AuthFile.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            raise ConfigurationError(f"Invalid credential file {self.path}: {e}") from e

    def _write(self, auth_file: AuthFile) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Passwords are excluded from repr only, model_dump keeps them
        payload = auth_file.model_dump_json(indent=2)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)

    def get(self, host: str) -> Credentials:
        """
        Get the credentials stored for a host.

        Raises:
            NotAuthenticatedError: If nothing is stored for the host
        """
        credentials = self._read().auths.get(host)
        if credentials is None:
            raise NotAuthenticatedError(host)
        return credentials

    def add(self, host: str, credentials: Credentials) -> None:
        """Store (or replace) the credentials of a host."""
        auth_file = self._read()
        auth_file.auths[host] = credentials
        self._write(auth_file)
        logging.info("Stored credentials for %s in %s", host, self.path)

    def remove(self, host: str) -> None:
        """
        Remove the credentials of a host.

        Raises:
            NotAuthenticatedError: If the host was not logged in
        """
        auth_file = self._read()
        if host not in auth_file.auths:
            raise NotAuthenticatedError(host)
        del auth_file.auths[host]
        self._write(auth_file)
        logging.info("Removed credentials for %s", host)

    def hosts(self) -> List[str]:
        """Hosts with stored credentials."""
        return sorted(self._read().auths)


__all__ = ["AuthFile", "CredentialStore"]
